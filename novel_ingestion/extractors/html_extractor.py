"""Chapter content extraction using site-specific extractors."""

from typing import Iterator, List, Optional, Tuple

from bs4 import BeautifulSoup

from ..core.logging import get_logger
from ..models.chapter import ExtractionResult, RuleKind
from .site_extractors import (
    BaseSiteExtractor,
    FanqieExtractor,
    GenericExtractor,
    HjwzwExtractor,
    JjwxcExtractor,
    QidianExtractor,
    TwwordExtractor,
    ZonghengExtractor,
)

logger = get_logger(__name__)


def parse_html(html: str) -> BeautifulSoup:
    return BeautifulSoup(html or "", "lxml")


class HTMLExtractor:
    """Runs site rules in priority order, then the generic fallback chain."""
    
    def __init__(self, extractors: Optional[List[BaseSiteExtractor]] = None):
        self.extractors = extractors if extractors is not None else [
            QidianExtractor(),
            FanqieExtractor(),
            JjwxcExtractor(),
            ZonghengExtractor(),
            HjwzwExtractor(),
            TwwordExtractor(),
        ]
        self.generic = GenericExtractor()
        
        # Sort by priority (highest first)
        self.extractors.sort(key=lambda e: e.get_priority(), reverse=True)
    
    def iter_candidates(
        self, soup: BeautifulSoup, url: str
    ) -> Iterator[Tuple[BaseSiteExtractor, RuleKind, ExtractionResult]]:
        """Yield every accepted candidate, matching site rules first.
        
        A rule that raises is logged and skipped; the caller decides whether
        a candidate is sufficient once it has been sanitized.
        """
        for extractor in self.extractors:
            if not extractor.can_handle(url):
                continue
            result = self._run(extractor, soup, url)
            if result:
                yield extractor, RuleKind.SITE, result
        
        result = self._run(self.generic, soup, url)
        if result:
            yield self.generic, RuleKind.GENERIC, result
    
    def extract(self, soup: BeautifulSoup, url: str) -> Optional[ExtractionResult]:
        """First accepted candidate, or None."""
        for _, _, result in self.iter_candidates(soup, url):
            return result
        return None
    
    def extract_title(self, soup: BeautifulSoup, url: str) -> str:
        for extractor in self.extractors:
            if extractor.can_handle(url):
                return extractor.extract_title(soup)
        return self.generic.extract_title(soup)
    
    def _run(self, extractor: BaseSiteExtractor, soup: BeautifulSoup, url: str) -> Optional[ExtractionResult]:
        try:
            result = extractor.extract(soup, url)
        except Exception as e:
            logger.warning("Extractor failed", extractor=extractor.name, error=str(e))
            return None
        if result:
            logger.info(
                "Extractor produced candidate",
                extractor=extractor.name,
                content_length=len(result.content),
            )
        return result
    
    def add_extractor(self, extractor: BaseSiteExtractor) -> None:
        """Add a new site extractor and re-sort by priority."""
        self.extractors.append(extractor)
        self.extractors.sort(key=lambda e: e.get_priority(), reverse=True)
    
    def get_available_extractors(self) -> List[str]:
        return [extractor.__class__.__name__ for extractor in self.extractors]
