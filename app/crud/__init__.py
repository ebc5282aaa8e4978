from app.crud.users import crud_user
from app.crud.children import crud_child
from app.crud.tasks import crud_task
from app.crud.study_logs import crud_study_log

__all__ = [
    "crud_user",
    "crud_child",
    "crud_task",
    "crud_study_log",
]
