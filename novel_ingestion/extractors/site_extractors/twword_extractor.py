"""Twword site extractor."""

from typing import List

from .base_site_extractor import BaseSiteExtractor


class TwwordExtractor(BaseSiteExtractor):
    """Extractor for twword.com chapter pages.
    
    Ad blocks are injected inside the content container, along with a
    rotating membership pitch that has to be filtered paragraph by paragraph.
    """
    
    name = "twword"
    domains = ["twword.com"]
    title_selectors = [".chapter-content h1", "h1"]
    content_selectors = [".chapter-content .content"]
    exclude_phrases = [
        "溫馨提示",
        "應廣大讀者的要求",
        "現推出VIP會員免廣告",
        "VIP會員免廣告功能",
    ]
    
    def get_priority(self) -> int:
        return 80
    
    def get_removal_selectors(self) -> List[str]:
        return super().get_removal_selectors() + [".gadBlock", ".adBlock", "ad"]
