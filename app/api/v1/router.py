"""Aggregates all v1 routers."""
from fastapi import APIRouter
from app.api.v1.users import router as users_router
from app.api.v1.children import router as children_router
from app.api.v1.tasks import router as tasks_router
from app.api.v1.daily import router as daily_router
from app.api.v1.summaries import router as summaries_router

router = APIRouter()
router.include_router(users_router)
router.include_router(children_router)
router.include_router(tasks_router)
router.include_router(daily_router)
router.include_router(summaries_router)
