"""Pytest configuration and fixtures for the task service tests.

MongoDB is replaced by mongomock-motor and the file storage is rooted in a
per-test temporary directory.
"""

from io import BytesIO

import pytest
from mongomock_motor import AsyncMongoMockClient
from starlette.datastructures import Headers, UploadFile

from ocrstudio.core.database_mongo import init_models
from ocrstudio.services.content_type import ContentTypeDetector
from ocrstudio.services.file_storage import FileStorageService
from ocrstudio.services.task_service import TaskService

PDF_BYTES = b"%PDF-1.4\n%\xe2\xe3\xcf\xd3\n1 0 obj\n<< /Type /Catalog >>\nendobj\n"
JPEG_BYTES = b"\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00" + b"\x00" * 64


def make_upload(filename: str, content: bytes, content_type: str = "application/octet-stream") -> UploadFile:
    """Build an UploadFile the way FastAPI hands it to the endpoints."""
    return UploadFile(
        file=BytesIO(content),
        filename=filename,
        headers=Headers({"content-type": content_type}),
    )


@pytest.fixture
async def mongo_db():
    """Fresh in-memory database with the Beanie models registered."""
    client = AsyncMongoMockClient()
    database = client["ocr_studio_test"]
    await init_models(database)
    yield database


@pytest.fixture
def storage_root(tmp_path):
    root = tmp_path / "ocr-data"
    root.mkdir()
    return root


@pytest.fixture
def file_storage(storage_root) -> FileStorageService:
    return FileStorageService(storage_root)


@pytest.fixture
def task_service(mongo_db, file_storage) -> TaskService:
    return TaskService(file_storage=file_storage, detector=ContentTypeDetector(), default_page_size=20)
