import pytest

from novel_ingestion.core.config import Settings
from novel_ingestion.core.exceptions import HttpError

PROSE_LINE = "月光灑在古老的城牆上，少年握緊手中的長劍。"


def prose(length=400):
    text = PROSE_LINE * (length // len(PROSE_LINE) + 1)
    return text[:length]


def page(body, title="測試小說"):
    return f"<html><head><title>{title}</title></head><body>{body}</body></html>"


class FakeStaticFetcher:
    """Serves canned HTML by URL; unknown URLs answer 404."""

    def __init__(self, pages=None):
        self.pages = pages or {}
        self.calls = []

    async def fetch(self, url, timeout=None, referer=None, accept_language=None):
        self.calls.append(url)
        response = self.pages.get(url)
        if isinstance(response, Exception):
            raise response
        if response is None:
            raise HttpError(404, url=url)
        return response


class FakeDynamicFetcher:

    def __init__(self, pages=None):
        self.pages = pages or {}
        self.calls = []

    async def render(self, url):
        self.calls.append(url)
        response = self.pages.get(url)
        if isinstance(response, Exception):
            raise response
        if response is None:
            raise HttpError(404, url=url)
        return response


@pytest.fixture()
def settings():
    return Settings(
        log_format="console",
        min_content_length=200,
        enable_dynamic_fetch=True,
        dynamic_hosts=["webnovel.com"],
        static_only_hosts=["qidian.com"],
    )
