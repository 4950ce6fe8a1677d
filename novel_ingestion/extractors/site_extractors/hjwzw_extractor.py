"""Huangjinwu (hjwzw.com) site extractor."""

from .base_site_extractor import BaseSiteExtractor


class HjwzwExtractor(BaseSiteExtractor):
    """Extractor for hjwzw.com.
    
    The page has no semantic container; the prose sits in a fixed-width
    div declared through an inline style.
    """
    
    name = "hjwzw"
    domains = ["hjwzw.com"]
    title_selectors = ["h1", ".chapter-title", ".title"]
    content_selectors = ['div[style*="750px"]']
    min_paragraph_length = 5
    exclude_phrases = ["請記住本站域名", "请记住本站域名"]
    
    def get_priority(self) -> int:
        return 80
