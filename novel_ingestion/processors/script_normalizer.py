"""Simplified-to-traditional Chinese normalization of extracted chapters."""

from functools import lru_cache
from typing import Callable, Optional

from opencc import OpenCC

from ..core.logging import get_logger
from ..models.chapter import ExtractionResult

logger = get_logger(__name__)

# Characters common in simplified text that never appear in traditional text
SIMPLIFIED_PROBE = frozenset(
    "这们说时来对会过还没发现国个为与应该开关长门问间让认记话语读书东车马见觉"
    "学习经实点头脸听边进样从动声气几两无尽爷妈钱难"
)


@lru_cache()
def _converter() -> OpenCC:
    return OpenCC("s2tw")


def convert_simplified_to_traditional(text: str) -> str:
    if not text:
        return text
    return _converter().convert(text)


def count_simplified(text: str) -> int:
    return sum(1 for ch in text or "" if ch in SIMPLIFIED_PROBE)


class ScriptNormalizer:
    """Transliterates simplified-Chinese chapters to traditional script.
    
    Detection is a cheap character probe; short or mixed-script text can
    misfire either way.
    """
    
    def __init__(self, convert: Optional[Callable[[str], str]] = None, min_hits: int = 2):
        self.convert = convert or convert_simplified_to_traditional
        self.min_hits = min_hits
    
    def is_simplified(self, text: str) -> bool:
        return count_simplified(text) >= self.min_hits
    
    def normalize(self, result: ExtractionResult) -> ExtractionResult:
        if not self.is_simplified(result.title + "\n" + result.content):
            return result
        try:
            title = self.convert(result.title)
            content = self.convert(result.content)
        except Exception as e:
            # Untranslated prose is still readable
            logger.warning("Script conversion failed", error=str(e))
            return result
        logger.debug("Converted simplified Chinese to traditional", content_length=len(content))
        return result.model_copy(update={"title": title, "content": content})
