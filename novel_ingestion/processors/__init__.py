"""Post-extraction text processing."""

from .content_sanitizer import sanitize_content
from .script_normalizer import ScriptNormalizer, convert_simplified_to_traditional

__all__ = ["sanitize_content", "ScriptNormalizer", "convert_simplified_to_traditional"]
