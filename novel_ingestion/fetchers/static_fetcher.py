"""Static HTML fetcher using a one-shot httpx request."""

import time
from typing import Optional

import httpx
from bs4.dammit import EncodingDetector

from ..core.config import Settings, get_settings
from ..core.exceptions import HttpError, NetworkError
from ..core.logging import get_logger
from .base_fetcher import build_headers

logger = get_logger(__name__)


def decode_html(response: httpx.Response) -> str:
    """Decode a response body, honouring a charset declared in the markup.

    Many novel sites serve GBK/Big5 pages without a charset header.
    """
    if response.charset_encoding:
        return response.text
    declared = EncodingDetector.find_declared_encoding(response.content, is_html=True)
    if declared:
        try:
            return response.content.decode(declared, errors="replace")
        except LookupError:
            pass
    return response.content.decode("utf-8", errors="replace")


class StaticFetcher:
    """Performs a single GET without cookies or retries."""
    
    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings or get_settings()
        self._transport = transport
    
    async def fetch(
        self,
        url: str,
        timeout: Optional[float] = None,
        referer: Optional[str] = None,
        accept_language: Optional[str] = None,
    ) -> str:
        """Fetch raw HTML, raising HttpError or NetworkError on failure."""
        start_time = time.time()
        headers = build_headers(url, self.settings, referer=referer, accept_language=accept_language)
        
        try:
            async with httpx.AsyncClient(
                timeout=timeout or self.settings.request_timeout,
                headers=headers,
                follow_redirects=True,
                transport=self._transport,
            ) as client:
                response = await client.get(url)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning("Static fetch failed", target=url, error=str(e))
            raise NetworkError(f"Network error while fetching {url}: {e}", url=url) from e
        
        if not response.is_success:
            logger.warning("Static fetch returned error status", target=url, status_code=response.status_code)
            raise HttpError(response.status_code, url=url)
        
        html = decode_html(response)
        logger.debug(
            "Fetched page",
            target=url,
            status_code=response.status_code,
            size=len(html),
            fetch_time=round(time.time() - start_time, 3),
        )
        return html
