from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, List, Optional
from datetime import datetime

from ocrstudio.models.ocr_config import FileFormat, OcrConfig, OcrEngineMode, PageSegmentationMode
from ocrstudio.models.task_mongo import SchedulerConfig, Status, Task


class OcrConfigRequest(BaseModel):
    ocr_engine_mode: OcrEngineMode = OcrEngineMode.DEFAULT
    page_segmentation_mode: PageSegmentationMode = PageSegmentationMode.MODE_3
    language: str = Field("eng", min_length=1)
    tess_variables: Optional[Dict[str, str]] = None
    pre_processing: bool = False
    file_format: FileFormat = FileFormat.TEXT
    merge_documents: bool = False

    def to_entity(self) -> OcrConfig:
        return OcrConfig(**self.model_dump())


class SchedulerConfigRequest(BaseModel):
    start_date_time: Optional[datetime] = None

    def to_entity(self) -> SchedulerConfig:
        return SchedulerConfig(**self.model_dump())


class TaskDraftRequest(BaseModel):
    name: str = Field(..., min_length=1)

    def to_entity(self) -> Task:
        return Task(name=self.name)


class TaskAddRequest(BaseModel):
    name: str = Field(..., min_length=1)
    ocr_config: OcrConfigRequest = Field(default_factory=OcrConfigRequest)
    scheduler_config: SchedulerConfigRequest = Field(default_factory=SchedulerConfigRequest)

    def to_entity(self) -> Task:
        return Task(
            name=self.name,
            ocr_config=self.ocr_config.to_entity(),
            scheduler_config=self.scheduler_config.to_entity(),
        )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "invoice-batch",
                "ocr_config": {
                    "ocr_engine_mode": "LSTM",
                    "page_segmentation_mode": "MODE_7",
                    "language": "eng",
                    "file_format": "PDF",
                },
                "scheduler_config": {"start_date_time": None},
            }
        }
    )


class UploadDocumentResponse(BaseModel):
    randomized_file_name: str
    original_file_name: str


class TaskPage(BaseModel):
    content: List[Task]
    page_number: int
    page_size: int
    total_elements: int
    total_pages: int


class StatusCount(BaseModel):
    status: Status
    count: int


class OcrEngineModeResponse(BaseModel):
    name: str
    description: str


class PageSegmentationModeResponse(BaseModel):
    name: str
    description: str


class FileFormatResponse(BaseModel):
    name: str
    extension: str
