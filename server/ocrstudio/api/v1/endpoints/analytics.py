from fastapi import APIRouter, Depends
from typing import List

from ocrstudio.api.deps import get_task_service
from ocrstudio.schemas.task import StatusCount
from ocrstudio.services.task_service import TaskService

router = APIRouter()


@router.get("/count-by-status", response_model=List[StatusCount])
async def get_count_by_status(service: TaskService = Depends(get_task_service)):
    """Number of tasks per status."""
    return await service.count_by_status()


@router.get("/average-in-documents", response_model=float)
async def get_average_in_documents(service: TaskService = Depends(get_task_service)):
    """Average number of input documents per task."""
    return await service.average_in_documents()
