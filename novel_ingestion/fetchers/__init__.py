"""Page fetchers: plain HTTP and headless-browser rendering."""

from .base_fetcher import build_headers
from .dynamic_fetcher import DynamicFetcher
from .static_fetcher import StaticFetcher

__all__ = ["build_headers", "DynamicFetcher", "StaticFetcher"]
