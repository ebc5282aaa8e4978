from typing import Optional
from pydantic import BaseModel, Field, model_validator


class ChildBase(BaseModel):
    name: str = Field(..., max_length=100)
    grade: Optional[str] = Field(None, max_length=20)


class ChildCreate(ChildBase):
    pass


class ChildReplace(ChildBase):
    pass


class ChildUpdate(BaseModel):
    """Partial update: only fields present in the request body are applied."""

    name: Optional[str] = Field(None, max_length=100)
    grade: Optional[str] = Field(None, max_length=20)
    is_active: Optional[bool] = None

    @model_validator(mode="after")
    def reject_explicit_nulls(self):
        for field in ("name", "is_active"):
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        return self


class ChildResponse(ChildBase):
    model_config = {"from_attributes": True}

    id: str
    is_active: bool
