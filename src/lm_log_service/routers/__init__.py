from fastapi import APIRouter

from lm_log_service.routers.health import router as health_router
from lm_log_service.routers.lm import router as lm_router

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(health_router)
api_router.include_router(lm_router)
