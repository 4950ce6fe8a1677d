"""Content, navigation and chapter-list extraction."""

from .chapter_list import ChapterListExtractor
from .html_extractor import HTMLExtractor, parse_html
from .navigation import NavigationExtractor

__all__ = ["ChapterListExtractor", "HTMLExtractor", "NavigationExtractor", "parse_html"]
