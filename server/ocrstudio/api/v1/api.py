from fastapi import APIRouter

from ocrstudio.api.v1.endpoints import analytics, config, tasks_mongo

api_router = APIRouter()

api_router.include_router(analytics.router, prefix="/task/analytic", tags=["task analytics"])
api_router.include_router(tasks_mongo.router, prefix="/task", tags=["task management"])
api_router.include_router(config.router, prefix="/config", tags=["ocr config"])
