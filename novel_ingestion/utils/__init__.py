"""URL utilities shared by fetchers and extractors."""

from .url_utils import (
    canonicalize_url,
    hostname_of,
    is_mobile_host,
    is_qidian_url,
    origin_of,
    resolve_href,
)

__all__ = [
    "canonicalize_url",
    "hostname_of",
    "is_mobile_host",
    "is_qidian_url",
    "origin_of",
    "resolve_href",
]
