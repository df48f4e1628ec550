from beanie import Document
from pydantic import BaseModel, Field
from typing import Optional, List, Iterable
from datetime import datetime, timezone
from enum import Enum

from ocrstudio.models.ocr_config import OcrConfig


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Status(str, Enum):
    CREATED = "CREATED"
    TRIGGERED = "TRIGGERED"
    IN_PROGRESS = "IN_PROGRESS"
    FINISHED = "FINISHED"
    FAILED = "FAILED"


class SchedulerConfig(BaseModel):
    """Scheduling settings; stored with the task, not consumed by this service."""

    start_date_time: Optional[datetime] = None


class OcrProgress(BaseModel):
    status: Status = Status.CREATED
    description: Optional[str] = None


class OutDocument(BaseModel):
    output_file_name: str


class InDocument(BaseModel):
    """An uploaded input file belonging to a task."""

    original_file_name: str
    randomized_file_name: str  # name on disk under <task id>/input
    type: Optional[str] = None  # detected MIME type
    out_document: Optional[OutDocument] = None


class Task(Document):
    """OCR task model for MongoDB."""

    id: Optional[str] = None  # UUID4 string, assigned on insert

    name: str = Field(..., min_length=1)
    ocr_config: OcrConfig = Field(default_factory=OcrConfig)
    scheduler_config: SchedulerConfig = Field(default_factory=SchedulerConfig)
    ocr_progress: OcrProgress = Field(default_factory=OcrProgress)
    in_documents: List[InDocument] = Field(default_factory=list)

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: Optional[datetime] = None

    class Settings:
        name = "ocr_collection"

    def add_in_document(self, document: InDocument) -> None:
        self.in_documents.append(document)

    def replace_in_documents(self, documents: Iterable[InDocument]) -> None:
        """Clear the input documents and refill them from ``documents``."""
        new_documents = list(documents)
        self.in_documents.clear()
        self.in_documents.extend(new_documents)

    def find_in_document(self, original_file_name: str) -> Optional[InDocument]:
        """First input document uploaded under ``original_file_name``."""
        return next(
            (d for d in self.in_documents if d.original_file_name == original_file_name),
            None,
        )

    def is_mutable(self) -> bool:
        return self.ocr_progress.status == Status.CREATED

    def __repr__(self):
        return f"<Task {self.id} {self.name}>"
