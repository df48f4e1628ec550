"""Tests for content-type resolution of uploads."""

from conftest import JPEG_BYTES, PDF_BYTES
from ocrstudio.services.content_type import (
    GENERIC_CONTENT_TYPE,
    ContentTypeDetector,
    get_content_type_detector,
)


def test_declared_type_is_kept():
    detector = ContentTypeDetector()

    assert detector.resolve("application/pdf", JPEG_BYTES) == "application/pdf"


def test_generic_type_is_sniffed():
    detector = ContentTypeDetector()

    assert detector.resolve("application/octet-stream", JPEG_BYTES) == "image/jpeg"
    assert detector.resolve("Application/Octet-Stream", PDF_BYTES) == "application/pdf"


def test_missing_type_is_sniffed():
    assert ContentTypeDetector().resolve(None, PDF_BYTES) == "application/pdf"


def test_unknown_content_stays_generic():
    assert ContentTypeDetector().detect(b"plain words, nothing magic") == GENERIC_CONTENT_TYPE
    assert ContentTypeDetector().detect(b"") == GENERIC_CONTENT_TYPE


def test_only_leading_bytes_are_inspected():
    detector = ContentTypeDetector(sniff_bytes=2)

    # Three bytes are needed to recognise a JPEG header
    assert detector.detect(JPEG_BYTES) == GENERIC_CONTENT_TYPE


def test_detector_is_process_wide():
    assert get_content_type_detector() is get_content_type_detector()
