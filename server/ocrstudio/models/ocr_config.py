"""
OCR configuration embedded in a task, with the closed vocabularies callers may choose from.
"""
from enum import Enum
from typing import Dict, Optional, Tuple

from pydantic import BaseModel


class OcrEngineMode(str, Enum):
    LEGACY = "LEGACY"
    LSTM = "LSTM"
    LEGACY_LSTM = "LEGACY_LSTM"
    DEFAULT = "DEFAULT"

    @property
    def tesseract_value(self) -> int:
        return _ENGINE_MODES[self][0]

    @property
    def description(self) -> str:
        return _ENGINE_MODES[self][1]


_ENGINE_MODES: Dict[OcrEngineMode, Tuple[int, str]] = {
    OcrEngineMode.LEGACY: (0, "Legacy engine only."),
    OcrEngineMode.LSTM: (1, "Neural nets LSTM engine only."),
    OcrEngineMode.LEGACY_LSTM: (2, "Legacy + LSTM engines."),
    OcrEngineMode.DEFAULT: (3, "Default, based on what is available."),
}


class PageSegmentationMode(str, Enum):
    MODE_0 = "MODE_0"
    MODE_1 = "MODE_1"
    MODE_2 = "MODE_2"
    MODE_3 = "MODE_3"
    MODE_4 = "MODE_4"
    MODE_5 = "MODE_5"
    MODE_6 = "MODE_6"
    MODE_7 = "MODE_7"
    MODE_8 = "MODE_8"
    MODE_9 = "MODE_9"
    MODE_10 = "MODE_10"
    MODE_11 = "MODE_11"
    MODE_12 = "MODE_12"
    MODE_13 = "MODE_13"

    @property
    def tesseract_value(self) -> int:
        return _PAGE_SEGMENTATION_MODES[self][0]

    @property
    def description(self) -> str:
        return _PAGE_SEGMENTATION_MODES[self][1]


_PAGE_SEGMENTATION_MODES: Dict[PageSegmentationMode, Tuple[int, str]] = {
    PageSegmentationMode.MODE_0: (0, "Orientation and script detection (OSD) only."),
    PageSegmentationMode.MODE_1: (1, "Automatic page segmentation with OSD."),
    PageSegmentationMode.MODE_2: (2, "Automatic page segmentation, but no OSD, or OCR. (not implemented)"),
    PageSegmentationMode.MODE_3: (3, "Fully automatic page segmentation, but no OSD. (Default)"),
    PageSegmentationMode.MODE_4: (4, "Assume a single column of text of variable sizes."),
    PageSegmentationMode.MODE_5: (5, "Assume a single uniform block of vertically aligned text."),
    PageSegmentationMode.MODE_6: (6, "Assume a single uniform block of text."),
    PageSegmentationMode.MODE_7: (7, "Treat the image as a single text line."),
    PageSegmentationMode.MODE_8: (8, "Treat the image as a single word."),
    PageSegmentationMode.MODE_9: (9, "Treat the image as a single word in a circle."),
    PageSegmentationMode.MODE_10: (10, "Treat the image as a single character."),
    PageSegmentationMode.MODE_11: (11, "Sparse text. Find as much text as possible in no particular order."),
    PageSegmentationMode.MODE_12: (12, "Sparse text with OSD."),
    PageSegmentationMode.MODE_13: (
        13,
        "Raw line. Treat the image as a single text line, bypassing hacks that are Tesseract-specific.",
    ),
}


class FileFormat(str, Enum):
    PDF = "PDF"
    HOCR = "HOCR"
    TEXT = "TEXT"

    @property
    def extension(self) -> str:
        return _FILE_FORMAT_EXTENSIONS[self]


_FILE_FORMAT_EXTENSIONS: Dict[FileFormat, str] = {
    FileFormat.PDF: "pdf",
    FileFormat.HOCR: "hocr",
    FileFormat.TEXT: "txt",
}


class OcrConfig(BaseModel):
    """OCR engine settings for a task."""

    language: str = "eng"
    ocr_engine_mode: OcrEngineMode = OcrEngineMode.DEFAULT
    page_segmentation_mode: PageSegmentationMode = PageSegmentationMode.MODE_3
    tess_variables: Optional[Dict[str, str]] = None
    pre_processing: bool = False
    file_format: FileFormat = FileFormat.TEXT
    merge_documents: bool = False

