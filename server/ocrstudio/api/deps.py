from typing import Optional

from ocrstudio.core.config import settings
from ocrstudio.services.file_storage import FileStorageService
from ocrstudio.services.task_service import TaskService

_task_service_instance: Optional[TaskService] = None


def get_task_service() -> TaskService:
    """Get the global task service instance."""
    global _task_service_instance
    if _task_service_instance is None:
        _task_service_instance = TaskService(
            file_storage=FileStorageService(settings.OCR_ROOT_PATH),
            default_page_size=settings.DEFAULT_PAGE_SIZE,
            max_file_size=settings.MAX_FILE_SIZE * 1024 * 1024,
        )
    return _task_service_instance
