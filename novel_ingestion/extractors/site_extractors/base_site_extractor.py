"""Base site extractor interface."""

import copy
from abc import ABC
from typing import Iterable, List, Optional

from bs4 import BeautifulSoup, Tag

from ...core.logging import get_logger
from ...core.exceptions import InvalidUrl
from ...models.chapter import ExtractionResult
from ...utils.url_utils import hostname_of

logger = get_logger(__name__)

DEFAULT_TITLE = "小說章節"


def element_text(element: Tag) -> str:
    return element.get_text().strip()


def is_leaf_block(element: Tag, tags: List[str]) -> bool:
    """True when no descendant is itself one of the collected block tags."""
    return element.find(tags) is None


class BaseSiteExtractor(ABC):
    """Hostname-matched extraction rule for one site family.
    
    Subclasses are mostly data: the selectors, paragraph tags, thresholds and
    boilerplate phrases of their site. ``extract`` walks the content
    selectors in priority order and accepts the first container whose joined
    paragraphs exceed ``min_length``.
    """
    
    name: str = "base"
    domains: List[str] = []
    title_selectors: List[str] = ["h1", ".chapter-title", ".title"]
    content_selectors: List[str] = []
    paragraph_tags: List[str] = ["p"]
    min_length: int = 100
    min_paragraph_length: int = 0
    min_line_length: int = 20
    exclude_phrases: List[str] = []
    
    def can_handle(self, url: str) -> bool:
        """Check if this extractor can handle the given URL."""
        try:
            host = hostname_of(url)
        except InvalidUrl:
            return False
        return any(host == d or host.endswith("." + d) for d in self.domains)
    
    def get_priority(self) -> int:
        """Get extractor priority (higher = more preferred)."""
        return 50
    
    def get_content_selectors(self) -> List[str]:
        return list(self.content_selectors)
    
    def get_title_selectors(self) -> List[str]:
        return list(self.title_selectors)
    
    def get_removal_selectors(self) -> List[str]:
        """Get selectors for elements to remove before extraction."""
        return ["script", "style", "ins", "iframe"]
    
    def extract(self, soup: BeautifulSoup, url: str) -> Optional[ExtractionResult]:
        """Extract title and prose, or None when no selector yields enough."""
        for selector in self.get_content_selectors():
            container = soup.select_one(selector)
            if container is None:
                continue
            content = self._extract_container(container)
            logger.debug(
                "Tried content selector",
                extractor=self.name,
                selector=selector,
                content_length=len(content),
            )
            if len(content) > self.min_length:
                return ExtractionResult(
                    title=self.extract_title(soup),
                    content=content,
                    source_url=url,
                )
        return None
    
    def extract_title(self, soup: BeautifulSoup) -> str:
        """First non-empty title candidate, then the document title."""
        for selector in self.get_title_selectors():
            element = soup.select_one(selector)
            if element is not None:
                text = element_text(element)
                if text:
                    return text
        if soup.title is not None and soup.title.get_text().strip():
            return soup.title.get_text().strip()
        return DEFAULT_TITLE
    
    def is_boilerplate(self, text: str) -> bool:
        lowered = text.lower()
        return any(phrase.lower() in lowered for phrase in self.exclude_phrases)
    
    def _extract_container(self, container: Tag) -> str:
        container = copy.copy(container)
        self._remove_elements(container, self.get_removal_selectors())
        
        blocks = [
            element_text(el)
            for el in container.find_all(self.paragraph_tags)
            if is_leaf_block(el, self.paragraph_tags)
        ]
        paragraphs = self._filter_paragraphs(blocks, self.min_paragraph_length)
        content = "\n\n".join(paragraphs)
        if len(content) > self.min_length:
            return content
        
        # Some sites put prose straight into the container separated by <br>
        lines = [line.strip() for line in container.get_text("\n").split("\n")]
        fallback = "\n\n".join(self._filter_paragraphs(lines, self.min_line_length))
        return fallback if len(fallback) > len(content) else content
    
    def _filter_paragraphs(self, texts: Iterable[str], min_length: int) -> List[str]:
        return [
            text for text in texts
            if text and len(text) > min_length and not self.is_boilerplate(text)
        ]
    
    @staticmethod
    def _remove_elements(root: Tag, selectors: List[str]) -> None:
        """Remove elements matching the given selectors."""
        if not selectors:
            return
        for element in root.select(", ".join(selectors)):
            element.extract()
