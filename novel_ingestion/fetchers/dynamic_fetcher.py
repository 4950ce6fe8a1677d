"""Headless-browser fetcher for pages that render their prose with JavaScript."""

import time
from typing import Callable, Optional

from ..core.config import Settings, get_settings
from ..core.exceptions import RenderError
from ..core.logging import get_logger
from .base_fetcher import select_user_agent

logger = get_logger(__name__)


def _default_playwright_factory():
    from playwright.async_api import async_playwright
    return async_playwright()


class DynamicFetcher:
    """Renders a page in an isolated Chromium instance and returns its DOM.
    
    The browser is launched per call and always closed before returning.
    """
    
    def __init__(
        self,
        settings: Optional[Settings] = None,
        playwright_factory: Optional[Callable] = None,
    ):
        self.settings = settings or get_settings()
        self._playwright_factory = playwright_factory or _default_playwright_factory
    
    async def render(self, url: str) -> str:
        """Navigate, wait for network idle plus a settle delay, return the HTML."""
        start_time = time.time()
        logger.info("Rendering page with headless browser", target=url)
        
        try:
            async with self._playwright_factory() as p:
                browser = await p.chromium.launch(headless=True)
                try:
                    context = await browser.new_context(
                        user_agent=select_user_agent(url, self.settings),
                        extra_http_headers={"Accept-Language": self.settings.accept_language},
                    )
                    page = await context.new_page()
                    await page.goto(
                        url,
                        wait_until="networkidle",
                        timeout=self.settings.render_timeout_ms,
                    )
                    # Deferred scripts keep filling the DOM after network idle
                    await page.wait_for_timeout(self.settings.render_settle_ms)
                    html = await page.content()
                finally:
                    await browser.close()
        except Exception as e:
            logger.error("Headless render failed", target=url, error=str(e))
            raise RenderError(f"Headless browser failed for {url}: {e}", url=url) from e
        
        logger.info(
            "Rendered page",
            target=url,
            size=len(html),
            render_time=round(time.time() - start_time, 3),
        )
        return html
