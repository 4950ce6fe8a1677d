"""Site-specific content extractors."""

from .base_site_extractor import BaseSiteExtractor
from .fanqie_extractor import FanqieExtractor
from .generic_extractor import GenericExtractor
from .hjwzw_extractor import HjwzwExtractor
from .jjwxc_extractor import JjwxcExtractor
from .qidian_extractor import QidianExtractor
from .twword_extractor import TwwordExtractor
from .zongheng_extractor import ZonghengExtractor

__all__ = [
    "BaseSiteExtractor",
    "FanqieExtractor",
    "GenericExtractor",
    "HjwzwExtractor",
    "JjwxcExtractor",
    "QidianExtractor",
    "TwwordExtractor",
    "ZonghengExtractor",
]
