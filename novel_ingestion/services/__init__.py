"""Pipeline services."""

from .extraction_service import ExtractionService, fetch_chapter

__all__ = ["ExtractionService", "fetch_chapter"]
