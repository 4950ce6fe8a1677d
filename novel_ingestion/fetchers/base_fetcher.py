"""Shared request header construction for page fetchers."""

from typing import Dict, Optional

from ..core.config import Settings
from ..utils.url_utils import is_mobile_host, origin_of


def select_user_agent(url: str, settings: Settings) -> str:
    """Mobile hosts get a mobile User-Agent so they serve the prose HTML."""
    if is_mobile_host(url):
        return settings.mobile_user_agent
    return settings.desktop_user_agent


def build_headers(
    url: str,
    settings: Settings,
    referer: Optional[str] = None,
    accept_language: Optional[str] = None,
) -> Dict[str, str]:
    """Browser-like header set for a single GET."""
    headers = {
        "User-Agent": select_user_agent(url, settings),
        "Accept": settings.accept_header,
        "Accept-Language": accept_language or settings.accept_language,
    }
    if referer is None and is_mobile_host(url):
        referer = origin_of(url) + "/"
    if referer:
        headers["Referer"] = referer
    return headers
