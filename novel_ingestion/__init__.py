"""Chapter text and navigation extraction for novel hosting sites."""

from .models.chapter import ChapterItem, ExtractionResult
from .services.extraction_service import ExtractionService, fetch_chapter

__all__ = ["ChapterItem", "ExtractionResult", "ExtractionService", "fetch_chapter"]

__version__ = "1.0.0"
