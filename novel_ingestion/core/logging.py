"""Logging configuration for the chapter extraction pipeline."""

import logging
import sys
import uuid
from typing import Any

import structlog
from structlog.stdlib import LoggerFactory

from .config import get_settings


def setup_logging() -> None:
    """Setup structured logging configuration."""
    settings = get_settings()
    
    # Configure structlog
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(ensure_ascii=False) if settings.log_format == "json"
            else structlog.dev.ConsoleRenderer(),
        ],
        context_class=dict,
        logger_factory=LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    
    # Configure standard library logging
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, settings.log_level.upper()),
    )
    
    if settings.log_file:
        settings.log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(settings.log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter('%(message)s'))
        logging.getLogger().addHandler(file_handler)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)


class ChapterLogger:
    """Logger bound to a single chapter fetch request."""
    
    def __init__(self, url: str, request_id: str = None):
        self.logger = get_logger("chapter_pipeline")
        self.url = url
        self.request_id = request_id or uuid.uuid4().hex[:8]
        self.context = {
            "request_id": self.request_id,
            "url": url,
        }
    
    def info(self, message: str, **kwargs: Any) -> None:
        self.logger.info(message, **self.context, **kwargs)
    
    def error(self, message: str, **kwargs: Any) -> None:
        self.logger.error(message, **self.context, **kwargs)
    
    def warning(self, message: str, **kwargs: Any) -> None:
        self.logger.warning(message, **self.context, **kwargs)
    
    def debug(self, message: str, **kwargs: Any) -> None:
        self.logger.debug(message, **self.context, **kwargs)
