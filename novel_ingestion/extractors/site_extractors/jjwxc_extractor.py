"""JJWXC site extractor."""

from .base_site_extractor import BaseSiteExtractor


class JjwxcExtractor(BaseSiteExtractor):
    """Extractor for jjwxc.net; drops lines that name the site itself."""
    
    name = "jjwxc"
    domains = ["jjwxc.net"]
    title_selectors = ["h1", ".novel-title", ".chapter-title"]
    content_selectors = [".noveltext", ".content", "#noveltext", ".chapter-content"]
    paragraph_tags = ["p", "div"]
    exclude_phrases = ["晉江", "晋江"]
    
    def get_priority(self) -> int:
        return 80
