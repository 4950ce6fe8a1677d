"""Core configuration, logging and error types."""

from .config import Settings, get_settings
from .exceptions import (
    ExtractionError,
    HttpError,
    InsufficientContent,
    InvalidUrl,
    NetworkError,
    RenderError,
)
from .logging import ChapterLogger, get_logger, setup_logging

__all__ = [
    "Settings",
    "get_settings",
    "ExtractionError",
    "HttpError",
    "InsufficientContent",
    "InvalidUrl",
    "NetworkError",
    "RenderError",
    "ChapterLogger",
    "get_logger",
    "setup_logging",
]
