"""Data models for chapter extraction."""

from .chapter import (
    ChapterItem,
    ExtractionResult,
    FetchMode,
    NavigationLink,
    PipelineAttempt,
    RuleKind,
)

__all__ = [
    "ChapterItem",
    "ExtractionResult",
    "FetchMode",
    "NavigationLink",
    "PipelineAttempt",
    "RuleKind",
]
