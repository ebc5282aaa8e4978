from app.schemas.user import UserCreate, UserUpdate, UserResponse
from app.schemas.child import ChildCreate, ChildUpdate, ChildReplace, ChildResponse
from app.schemas.task import TaskCreate, TaskUpdate, TaskReplace, TaskResponse, TaskOrderRequest
from app.schemas.study_log import (
    DailyLogItem,
    DailyLogReplaceRequest,
    DailyLogReplaceResult,
    DailyLogsResponse,
)
from app.schemas.views import (
    DailyView,
    DailyViewTask,
    CalendarDay,
    CalendarSummary,
    DayMinutes,
    SubjectMinutes,
    TaskMinutes,
    PeriodSummary,
)
