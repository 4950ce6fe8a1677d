"""Fanqie novel site extractor."""

from .base_site_extractor import BaseSiteExtractor


class FanqieExtractor(BaseSiteExtractor):
    """Extractor for fanqienovel.com chapter pages."""
    
    name = "fanqie"
    domains = ["fanqienovel.com"]
    title_selectors = ["h1.chapter-title", ".chapter-title", "h1"]
    content_selectors = [".chapter-content", ".content", "#chaptercontent", ".chapter-body"]
    paragraph_tags = ["p", "div"]
    
    def get_priority(self) -> int:
        return 80
