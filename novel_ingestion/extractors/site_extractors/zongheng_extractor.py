"""Zongheng site extractor."""

from .base_site_extractor import BaseSiteExtractor


class ZonghengExtractor(BaseSiteExtractor):
    
    name = "zongheng"
    domains = ["zongheng.com"]
    title_selectors = ["h1", ".chapter-title"]
    content_selectors = [".content", ".chapter-content", ".read-content"]
    
    def get_priority(self) -> int:
        return 80
