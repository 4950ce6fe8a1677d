"""Error taxonomy for the extraction pipeline."""

from typing import Optional


class ExtractionError(Exception):
    """Base class for extraction pipeline errors."""

    def __init__(self, message: str, *, url: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.url = url


class InvalidUrl(ExtractionError):
    """URL could not be resolved or canonicalized."""


class NetworkError(ExtractionError):
    """DNS, connection or timeout failure while fetching a page."""


class HttpError(ExtractionError):
    """Server answered with a non-2xx status."""

    def __init__(self, status: int, *, url: Optional[str] = None) -> None:
        super().__init__(f"HTTP error: {status}", url=url)
        self.status = status


class RenderError(ExtractionError):
    """Headless browser failed to launch, navigate or finish in time."""


class InsufficientContent(ExtractionError):
    """Every extraction strategy produced below-threshold prose."""

    def __init__(self, content_length: int = 0, *, url: Optional[str] = None) -> None:
        super().__init__(
            "Could not extract sufficient chapter content "
            f"(only {content_length} characters); the page may be a summary "
            "or an anti-scraping interstitial",
            url=url,
        )
        self.content_length = content_length


TRANSPORT_ERRORS = (NetworkError, HttpError, RenderError)


__all__ = [
    "ExtractionError",
    "InvalidUrl",
    "NetworkError",
    "HttpError",
    "RenderError",
    "InsufficientContent",
    "TRANSPORT_ERRORS",
]
