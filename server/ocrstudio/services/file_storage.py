"""
Filesystem storage for task files.

Layout::

    <root>/<task id>/input/<randomized file name>
    <root>/<task id>/output/<randomized file name>
"""
import logging
import shutil
from pathlib import Path
from typing import Union

import aiofiles
import aiofiles.os
from starlette.concurrency import run_in_threadpool

from ocrstudio.core.exceptions import StorageFaultError

logger = logging.getLogger(__name__)

INPUT_DIRECTORY_NAME = "input"
OUTPUT_DIRECTORY_NAME = "output"


class FileStorageService:
    """Per-task input/output directory tree under a configured root."""

    def __init__(self, root_path: Union[str, Path]):
        self.root_path = Path(root_path)

    def get_task_directory(self, task_id: str) -> Path:
        return self.root_path / str(task_id)

    def get_input_file(self, task_id: str, randomized_file_name: str) -> Path:
        return self.get_task_directory(task_id) / INPUT_DIRECTORY_NAME / randomized_file_name

    def get_output_file(self, task_id: str, randomized_file_name: str) -> Path:
        return self.get_task_directory(task_id) / OUTPUT_DIRECTORY_NAME / randomized_file_name

    async def create_directories(self, task_id: str) -> None:
        """Create ``<id>/input`` and ``<id>/output``. Fails if either already exists."""
        task_directory = self.get_task_directory(task_id)
        try:
            await aiofiles.os.makedirs(task_directory, exist_ok=True)
            await aiofiles.os.mkdir(task_directory / INPUT_DIRECTORY_NAME)
            await aiofiles.os.mkdir(task_directory / OUTPUT_DIRECTORY_NAME)
        except OSError as e:
            logger.error(f"Could not create directories for task {task_id}: {e}")
            raise StorageFaultError(f"Could not create directories for task {task_id}: {e}", path=task_directory) from e

    async def store(self, task_id: str, file_name: str, content: bytes, input: bool = True) -> Path:
        """Write ``content`` into the task's input or output directory, overwriting any existing file."""
        target = self.get_input_file(task_id, file_name) if input else self.get_output_file(task_id, file_name)
        try:
            async with aiofiles.open(target, "wb") as f:
                await f.write(content)
        except OSError as e:
            logger.error(f"Could not store file {target}: {e}")
            raise StorageFaultError(f"Could not store file {file_name} for task {task_id}: {e}", path=target) from e
        return target

    async def delete_file(self, path: Union[str, Path]) -> None:
        try:
            await aiofiles.os.remove(path)
        except OSError as e:
            logger.error(f"Could not delete file {path}: {e}")
            raise StorageFaultError(f"Could not delete file {Path(path).name}: {e}", path=path) from e

    async def remove_task_directory(self, task_id: str) -> None:
        """Recursively remove the whole directory tree of one task."""
        task_directory = self.get_task_directory(task_id)
        if not await aiofiles.os.path.isdir(task_directory):
            logger.warning(f"Directory for task {task_id} does not exist, nothing to remove")
            return
        try:
            await run_in_threadpool(shutil.rmtree, task_directory)
        except OSError as e:
            logger.error(f"Could not remove directory {task_directory}: {e}")
            raise StorageFaultError(f"Could not remove directory of task {task_id}: {e}", path=task_directory) from e
