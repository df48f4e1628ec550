"""
Content-type detection for uploaded files.
"""
import logging
from typing import Optional

import filetype

logger = logging.getLogger(__name__)

GENERIC_CONTENT_TYPE = "application/octet-stream"


class ContentTypeDetector:
    """Sniffs MIME types from leading bytes. Stateless, shared by all requests."""

    def __init__(self, sniff_bytes: int = 8192):
        self.sniff_bytes = sniff_bytes

    def detect(self, content: bytes) -> str:
        kind = filetype.guess(content[: self.sniff_bytes])
        if kind is None:
            return GENERIC_CONTENT_TYPE
        return kind.mime

    def resolve(self, declared_type: Optional[str], content: bytes) -> str:
        """Declared type, unless missing or generic, in which case the bytes decide."""
        if declared_type and declared_type.lower() != GENERIC_CONTENT_TYPE:
            return declared_type
        detected = self.detect(content)
        logger.debug(f"Sniffed content type {detected} (declared {declared_type})")
        return detected


_detector_instance: Optional[ContentTypeDetector] = None


def get_content_type_detector() -> ContentTypeDetector:
    """Get the global content-type detector instance."""
    global _detector_instance
    if _detector_instance is None:
        from ocrstudio.core.config import settings

        _detector_instance = ContentTypeDetector(sniff_bytes=settings.SNIFF_BYTES)
    return _detector_instance
