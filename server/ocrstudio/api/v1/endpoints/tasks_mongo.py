from fastapi import APIRouter, Depends, HTTPException, status, Request, Response, UploadFile, File, Form, Query
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from typing import List, Optional
from uuid import UUID
import logging

from ocrstudio.api.deps import get_task_service
from ocrstudio.models.task_mongo import Task
from ocrstudio.schemas.task import (
    OcrConfigRequest,
    SchedulerConfigRequest,
    TaskAddRequest,
    TaskDraftRequest,
    TaskPage,
    UploadDocumentResponse,
)
from ocrstudio.services.task_service import TaskService

logger = logging.getLogger(__name__)

router = APIRouter()


def _created(request: Request, task: Task) -> Response:
    location = str(request.url_for("find_task_by_id", task_id=task.id))
    return Response(status_code=status.HTTP_201_CREATED, headers={"Location": location})


def _require_match(affected: int) -> Response:
    if affected == 0:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Cannot find task with specified id."
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("", response_model=List[Task], response_model_by_alias=False)
async def find_all_tasks(service: TaskService = Depends(get_task_service)):
    """Get all tasks."""
    return await service.list_tasks()


@router.get("/page", response_model=TaskPage, response_model_by_alias=False)
async def find_page_with_tasks(
    page_number: int = Query(..., ge=0, description="Zero-based page number"),
    page_size: Optional[int] = Query(None, ge=1, description="Page size, defaults to 20"),
    service: TaskService = Depends(get_task_service)
):
    """Get tasks by page."""
    return await service.list_tasks_page(page_number, page_size)


@router.get("/{task_id}", response_model=Task, response_model_by_alias=False, name="find_task_by_id")
async def find_task_by_id(task_id: UUID, service: TaskService = Depends(get_task_service)):
    """Get task by id."""
    task = await service.get_task(str(task_id))
    if task is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Task not found"
        )
    return task


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_task(
    request: Request,
    model: str = Form(..., description="TaskAddRequest as JSON"),
    files: Optional[List[UploadFile]] = File(None),
    service: TaskService = Depends(get_task_service)
):
    """Create a task, optionally with its input files."""
    try:
        task_request = TaskAddRequest.model_validate_json(model)
    except ValidationError as e:
        raise RequestValidationError(e.errors())

    logger.info(f"Create task request: {task_request.name} with {len(files or [])} file(s)")
    task = await service.create_task(task_request.to_entity(), files or None)
    return _created(request, task)


@router.post("/draft", status_code=status.HTTP_201_CREATED)
async def create_draft_task(
    request: Request,
    model: TaskDraftRequest,
    service: TaskService = Depends(get_task_service)
):
    """Create a task with default configuration."""
    logger.info(f"Create draft task request: {model.name}")
    task = await service.create_task(model.to_entity())
    return _created(request, task)


@router.put("/config/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_task_config(
    task_id: UUID,
    ocr_config_request: OcrConfigRequest,
    service: TaskService = Depends(get_task_service)
):
    """Update OCR configuration of a task."""
    return _require_match(await service.update_ocr_config(str(task_id), ocr_config_request.to_entity()))


@router.put("/scheduler/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_task_scheduler(
    task_id: UUID,
    scheduler_config_request: SchedulerConfigRequest,
    service: TaskService = Depends(get_task_service)
):
    """Update scheduler configuration of a task."""
    return _require_match(
        await service.update_scheduler_config(str(task_id), scheduler_config_request.to_entity())
    )


@router.patch("/language/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_task_language(
    task_id: UUID,
    language: str = Query(..., min_length=1),
    service: TaskService = Depends(get_task_service)
):
    """Update the OCR language of a task."""
    return _require_match(await service.update_language(str(task_id), language))


@router.put("/upload/{task_id}", response_model=List[UploadDocumentResponse])
async def upload_files(
    task_id: UUID,
    files: List[UploadFile] = File(..., description="Files to upload"),
    service: TaskService = Depends(get_task_service)
):
    """Upload files and create the task's input documents."""
    logger.info(f"Upload request for task {task_id}: {[f.filename for f in files]}")
    documents = await service.upload_documents(str(task_id), files)
    return [
        UploadDocumentResponse(
            randomized_file_name=document.randomized_file_name,
            original_file_name=document.original_file_name,
        )
        for document in documents
    ]


@router.delete("/file/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_file(
    task_id: UUID,
    original_file_name: Optional[str] = None,
    service: TaskService = Depends(get_task_service)
):
    """Remove one file, or all files when no original file name is given."""
    if original_file_name:
        await service.remove_file(str(task_id), original_file_name)
    else:
        await service.remove_all_files(str(task_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(task_id: UUID, service: TaskService = Depends(get_task_service)):
    """Delete a task and remove all its files."""
    logger.info(f"Delete request for task {task_id}")
    await service.delete_task(str(task_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
