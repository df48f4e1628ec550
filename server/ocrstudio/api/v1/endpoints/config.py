from fastapi import APIRouter
from typing import List

from ocrstudio.models.ocr_config import FileFormat, OcrEngineMode, PageSegmentationMode
from ocrstudio.schemas.task import FileFormatResponse, OcrEngineModeResponse, PageSegmentationModeResponse

router = APIRouter()


@router.get("/engine-mode", response_model=List[OcrEngineModeResponse])
async def find_ocr_engine_modes():
    """Get all OCR engine modes."""
    return [OcrEngineModeResponse(name=mode.name, description=mode.description) for mode in OcrEngineMode]


@router.get("/page-segmentation-mode", response_model=List[PageSegmentationModeResponse])
async def find_page_segmentation_modes():
    """Get all page segmentation modes."""
    return [
        PageSegmentationModeResponse(name=mode.name, description=mode.description)
        for mode in PageSegmentationMode
    ]


@router.get("/file-format", response_model=List[FileFormatResponse])
async def find_file_formats():
    """Get all output file formats."""
    return [FileFormatResponse(name=file_format.name, extension=file_format.extension) for file_format in FileFormat]
