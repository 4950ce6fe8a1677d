"""Qidian site extractor."""

from .base_site_extractor import BaseSiteExtractor


class QidianExtractor(BaseSiteExtractor):
    """Extractor for Qidian chapter pages.
    
    URLs are canonicalized onto m.qidian.com before fetching, where the
    prose lives in plain paragraphs under ``main``.
    """
    
    name = "qidian"
    domains = ["qidian.com"]
    title_selectors = ["h1.chapter-title", ".chapter-title", "h1"]
    content_selectors = ["main", ".chapter-content", ".content", ".read-content", ".chapter-body"]
    
    def get_priority(self) -> int:
        return 90
