from typing import Optional
from pydantic import BaseModel, Field, field_validator


class UserCreate(BaseModel):
    email: str = Field(..., max_length=255)
    display_name: Optional[str] = Field(None, max_length=100)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        v = v.strip().lower()
        if "@" not in v or v.startswith("@") or v.endswith("@"):
            raise ValueError("email is not valid")
        return v


class UserUpdate(BaseModel):
    display_name: Optional[str] = Field(None, max_length=100)
    avatar_url: Optional[str] = Field(None, max_length=500)


class UserResponse(BaseModel):
    model_config = {"from_attributes": True}
    id: str
    email: str
    display_name: Optional[str]
    avatar_url: Optional[str]
