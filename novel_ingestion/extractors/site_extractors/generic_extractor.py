"""Generic chapter content extractor for unknown websites."""

import copy
from typing import List, Optional

from bs4 import BeautifulSoup

from ...core.logging import get_logger
from ...models.chapter import ExtractionResult
from .base_site_extractor import BaseSiteExtractor, element_text

logger = get_logger(__name__)


class GenericExtractor(BaseSiteExtractor):
    """Generic extractor for unknown websites.
    
    Tries common chapter containers first, then scans every paragraph on
    the page as a last resort.
    """
    
    name = "generic"
    title_selectors = ["h1", ".chapter-title", ".title", ".entry-title", ".post-title"]
    content_selectors = [
        ".chapter-content",
        ".content",
        "#chaptercontent",
        ".chapter-body",
        ".read-content",
        "article",
        ".noveltext",
        "#noveltext",
        ".text-content",
        "main",
        ".main-content",
        "#main-content",
        ".post-content",
        ".entry-content",
        "#content",
    ]
    min_length = 200
    min_paragraph_length = 10
    exclude_phrases = [
        "copyright",
        "版權",
        "版权",
        "本章完",
        "下一章",
        "下一页",
        "廣告",
        "广告",
        "advertisement",
    ]
    min_page_paragraphs = 3
    
    def can_handle(self, url: str) -> bool:
        """Can handle any URL as fallback."""
        return True
    
    def get_priority(self) -> int:
        """Lowest priority - fallback only."""
        return 10
    
    def get_removal_selectors(self) -> List[str]:
        return super().get_removal_selectors() + [
            ".ad", ".advertisement", ".ads", ".gadBlock", ".adBlock",
        ]
    
    def extract(self, soup: BeautifulSoup, url: str) -> Optional[ExtractionResult]:
        result = super().extract(soup, url)
        if result:
            return result
        return self._extract_all_paragraphs(soup, url)
    
    def _extract_all_paragraphs(self, soup: BeautifulSoup, url: str) -> Optional[ExtractionResult]:
        """Last resort: every paragraph outside page chrome."""
        page = copy.copy(soup)
        self._remove_elements(page, self.get_removal_selectors() + ["nav", "header", "footer"])
        
        paragraphs = self._filter_paragraphs(
            (element_text(p) for p in page.find_all("p")),
            self.min_line_length,
        )
        content = "\n\n".join(paragraphs)
        logger.debug(
            "Scanned all paragraphs",
            paragraphs=len(paragraphs),
            content_length=len(content),
        )
        if len(paragraphs) > self.min_page_paragraphs and len(content) > self.min_length:
            return ExtractionResult(
                title=self.extract_title(soup),
                content=content,
                source_url=url,
            )
        return None
