"""Tests for the OCR configuration vocabularies and the task aggregate."""

from ocrstudio.models.ocr_config import FileFormat, OcrConfig, OcrEngineMode, PageSegmentationMode
from ocrstudio.models.task_mongo import InDocument, Status, Task


def test_engine_modes():
    assert [m.name for m in OcrEngineMode] == ["LEGACY", "LSTM", "LEGACY_LSTM", "DEFAULT"]
    assert [m.tesseract_value for m in OcrEngineMode] == [0, 1, 2, 3]
    assert OcrEngineMode.DEFAULT.description == "Default, based on what is available."


def test_page_segmentation_modes():
    modes = list(PageSegmentationMode)

    assert len(modes) == 14
    assert [m.tesseract_value for m in modes] == list(range(14))
    assert all(m.name == f"MODE_{m.tesseract_value}" for m in modes)
    assert PageSegmentationMode.MODE_7.description == "Treat the image as a single text line."
    assert all(m.description for m in modes)


def test_file_formats():
    assert {f.name: f.extension for f in FileFormat} == {"PDF": "pdf", "HOCR": "hocr", "TEXT": "txt"}


def test_ocr_config_defaults():
    config = OcrConfig()

    assert config.language == "eng"
    assert config.ocr_engine_mode == OcrEngineMode.DEFAULT
    assert config.page_segmentation_mode == PageSegmentationMode.MODE_3
    assert config.file_format == FileFormat.TEXT
    assert config.tess_variables is None
    assert config.pre_processing is False
    assert config.merge_documents is False


def test_enums_parse_from_names():
    config = OcrConfig.model_validate({"page_segmentation_mode": "MODE_7", "file_format": "PDF"})

    assert config.page_segmentation_mode is PageSegmentationMode.MODE_7
    assert config.file_format is FileFormat.PDF


def _document(original: str, randomized: str) -> InDocument:
    return InDocument(original_file_name=original, randomized_file_name=randomized, type="application/pdf")


async def test_replace_in_documents_clears_and_refills(mongo_db):
    task = Task(name="aggregate")
    task.add_in_document(_document("a.pdf", "r1"))
    documents = task.in_documents

    task.replace_in_documents([_document("b.pdf", "r2"), _document("c.pdf", "r3")])

    assert task.in_documents is documents
    assert [d.original_file_name for d in task.in_documents] == ["b.pdf", "c.pdf"]


async def test_replace_in_documents_accepts_own_list(mongo_db):
    task = Task(name="aggregate")
    task.add_in_document(_document("a.pdf", "r1"))

    task.replace_in_documents(task.in_documents)

    assert [d.randomized_file_name for d in task.in_documents] == ["r1"]


async def test_find_in_document_returns_first_match(mongo_db):
    task = Task(name="aggregate")
    task.add_in_document(_document("dup.pdf", "r1"))
    task.add_in_document(_document("dup.pdf", "r2"))

    assert task.find_in_document("dup.pdf").randomized_file_name == "r1"
    assert task.find_in_document("none.pdf") is None


async def test_new_task_is_mutable(mongo_db):
    task = Task(name="aggregate")

    assert task.ocr_progress.status == Status.CREATED
    assert task.is_mutable()

    task.ocr_progress.status = Status.IN_PROGRESS
    assert not task.is_mutable()
