"""
Task lifecycle service.

Coordinates task records in MongoDB with the files on disk. Destructive file
operations are only allowed while a task is still CREATED; configuration
updates are accepted in any state.
"""
import asyncio
import logging
import math
import uuid
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Dict, List, Optional, Sequence

from fastapi import UploadFile

from ocrstudio.core.exceptions import (
    FileTooLargeError,
    IllegalLifecycleStateError,
    MissingEntityError,
    StorageFaultError,
)
from ocrstudio.crud import task_mongo as task_crud
from ocrstudio.models.ocr_config import OcrConfig
from ocrstudio.models.task_mongo import InDocument, OcrProgress, SchedulerConfig, Status, Task
from ocrstudio.schemas.task import StatusCount, TaskPage
from ocrstudio.services.content_type import ContentTypeDetector, get_content_type_detector
from ocrstudio.services.file_storage import FileStorageService

logger = logging.getLogger(__name__)


class TaskService:
    """
    Task lifecycle operations.

    Mutations of one task are serialized through a per-task lock so that
    concurrent requests cannot overwrite each other's ``in_documents``.
    """

    def __init__(
        self,
        file_storage: FileStorageService,
        detector: Optional[ContentTypeDetector] = None,
        default_page_size: int = 20,
        max_file_size: Optional[int] = None,
    ):
        self.file_storage = file_storage
        self.detector = detector or get_content_type_detector()
        self.default_page_size = default_page_size
        self.max_file_size = max_file_size
        self._locks: Dict[str, asyncio.Lock] = {}
        self._lock_users: Dict[str, int] = {}

    # Queries

    async def get_task(self, task_id: str) -> Optional[Task]:
        return await task_crud.get_task_by_id(task_id)

    async def list_tasks(self) -> List[Task]:
        return await task_crud.get_all_tasks()

    async def list_tasks_page(self, page_number: int, page_size: Optional[int] = None) -> TaskPage:
        """Zero-based page of tasks ordered by id."""
        if page_size is None:
            page_size = self.default_page_size
        if page_number < 0 or page_size < 1:
            raise ValueError("page_number must be >= 0 and page_size >= 1")

        tasks, total = await task_crud.get_tasks_page(page_number, page_size)
        return TaskPage(
            content=tasks,
            page_number=page_number,
            page_size=page_size,
            total_elements=total,
            total_pages=math.ceil(total / page_size),
        )

    async def count_by_status(self) -> List[StatusCount]:
        rows = await task_crud.count_tasks_by_status()
        return [StatusCount(status=row["status"], count=row["count"]) for row in rows]

    async def average_in_documents(self) -> float:
        return await task_crud.average_in_documents()

    # Creation

    async def create_task(self, task: Task, files: Optional[Sequence[UploadFile]] = None) -> Task:
        """
        Insert a new task, create its directory tree and upload ``files`` if given.

        If the directories cannot be created the inserted record is deleted
        again before the StorageFaultError propagates.
        """
        task.id = str(uuid.uuid4())
        task.ocr_progress = OcrProgress(status=Status.CREATED)
        task.replace_in_documents([])

        created = await task_crud.insert_task(task)
        try:
            await self.file_storage.create_directories(created.id)
        except StorageFaultError:
            logger.warning(f"Removing task {created.id} after failed directory creation")
            await task_crud.delete_task(created)
            raise

        logger.info(f"Created task {created.id} ({created.name})")

        if files:
            documents = await self.upload_documents(created.id, files)
            created.replace_in_documents(documents)
        return created

    # Configuration

    async def update_ocr_config(self, task_id: str, ocr_config: OcrConfig) -> int:
        return await task_crud.update_ocr_config_by_id(task_id, ocr_config)

    async def update_scheduler_config(self, task_id: str, scheduler_config: SchedulerConfig) -> int:
        return await task_crud.update_scheduler_config_by_id(task_id, scheduler_config)

    async def update_language(self, task_id: str, language: str) -> int:
        return await task_crud.update_language_by_id(task_id, language)

    # Files

    async def upload_documents(self, task_id: str, files: Sequence[UploadFile]) -> List[InDocument]:
        """
        Store ``files`` under the task's input directory and record them.

        The task is saved once, after every file was written. When a write
        fails, files already written by this call are removed again and the
        record is left unchanged. Files larger than ``max_file_size`` bytes
        are rejected the same way.
        """
        async with self._task_lock(task_id):
            task = await self._get_existing(task_id)

            created_documents: List[InDocument] = []
            try:
                for upload in files:
                    content = await self._read_upload(upload)
                    document = InDocument(
                        original_file_name=upload.filename or "",
                        randomized_file_name=str(uuid.uuid4()),
                        type=self.detector.resolve(upload.content_type, content),
                    )
                    await self.file_storage.store(task_id, document.randomized_file_name, content)
                    created_documents.append(document)
            except (StorageFaultError, FileTooLargeError):
                await self._discard_files(task_id, created_documents)
                raise

            for document in created_documents:
                task.add_in_document(document)
            await task_crud.save_task(task)

        logger.info(f"Uploaded {len(created_documents)} file(s) to task {task_id}")
        return created_documents

    async def remove_file(self, task_id: str, original_file_name: str) -> None:
        """Remove the first input document named ``original_file_name``; unknown names are ignored."""
        async with self._task_lock(task_id):
            task = await self._get_mutable(task_id)

            document = task.find_in_document(original_file_name)
            if document is None:
                logger.debug(f"Task {task_id} has no file named {original_file_name}")
                return

            await self.file_storage.delete_file(
                self.file_storage.get_input_file(task_id, document.randomized_file_name)
            )
            task.in_documents.remove(document)
            await task_crud.save_task(task)

        logger.info(f"Removed file {original_file_name} from task {task_id}")

    async def remove_all_files(self, task_id: str) -> None:
        async with self._task_lock(task_id):
            task = await self._get_mutable(task_id)
            await self._remove_all_files(task)

    async def delete_task(self, task_id: str) -> None:
        """Delete the task's files, its record and its directory tree."""
        async with self._task_lock(task_id):
            task = await self._get_mutable(task_id)
            await self._remove_all_files(task)
            await task_crud.delete_task(task)
            await self.file_storage.remove_task_directory(task_id)
        logger.info(f"Deleted task {task_id}")

    # Helpers

    async def _get_existing(self, task_id: str) -> Task:
        task = await task_crud.get_task_by_id(task_id)
        if task is None:
            raise MissingEntityError()
        return task

    async def _get_mutable(self, task_id: str) -> Task:
        task = await self._get_existing(task_id)
        if not task.is_mutable():
            raise IllegalLifecycleStateError()
        return task

    async def _remove_all_files(self, task: Task) -> None:
        # Entries leave the list only once their file is gone, and whatever
        # was removed is saved even if a later delete fails.
        remaining = list(task.in_documents)
        try:
            while remaining:
                document = remaining[0]
                await self.file_storage.delete_file(
                    self.file_storage.get_input_file(task.id, document.randomized_file_name)
                )
                remaining.pop(0)
        finally:
            if len(remaining) != len(task.in_documents):
                task.replace_in_documents(remaining)
                await task_crud.save_task(task)

    async def _discard_files(self, task_id: str, documents: List[InDocument]) -> None:
        for document in documents:
            path: Path = self.file_storage.get_input_file(task_id, document.randomized_file_name)
            try:
                await self.file_storage.delete_file(path)
            except StorageFaultError as e:
                logger.error(f"Could not discard {path} after failed upload: {e}")

    async def _read_upload(self, upload: UploadFile) -> bytes:
        if self.max_file_size is None:
            return await upload.read()

        if upload.size and upload.size > self.max_file_size:
            raise FileTooLargeError(upload.filename or "", self.max_file_size)
        # One byte past the limit is enough to tell an oversized file apart
        content = await upload.read(self.max_file_size + 1)
        if len(content) > self.max_file_size:
            raise FileTooLargeError(upload.filename or "", self.max_file_size)
        return content

    @asynccontextmanager
    async def _task_lock(self, task_id: str) -> AsyncIterator[None]:
        """Hold the task's lock; the entry is dropped once nobody uses or waits for it."""
        lock = self._locks.setdefault(task_id, asyncio.Lock())
        self._lock_users[task_id] = self._lock_users.get(task_id, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._lock_users[task_id] -= 1
            if not self._lock_users[task_id]:
                del self._lock_users[task_id]
                del self._locks[task_id]
