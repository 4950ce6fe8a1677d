"""Link resolution: absolute chapter URLs and site host canonicalization."""

from urllib.parse import urljoin, urlsplit, urlunsplit

from ..core.exceptions import InvalidUrl

QIDIAN_MOBILE_HOST = "m.qidian.com"


def _split_http(url: str):
    try:
        parts = urlsplit((url or "").strip())
    except ValueError as e:
        raise InvalidUrl(f"Invalid URL: {url!r}", url=url) from e
    if parts.scheme not in ("http", "https") or not parts.netloc:
        raise InvalidUrl(f"Invalid URL: {url!r}", url=url)
    return parts


def origin_of(url: str) -> str:
    """Return ``scheme://host[:port]`` of an absolute http(s) URL."""
    parts = _split_http(url)
    return f"{parts.scheme}://{parts.netloc}"


def hostname_of(url: str) -> str:
    return (_split_http(url).hostname or "").lower()


def resolve_href(href: str, base_origin: str, current_url: str) -> str:
    """Turn a possibly relative href into an absolute http(s) URL.

    Absolute URLs are returned unchanged, protocol-relative ones get
    ``https:``, root-relative ones are anchored at ``base_origin`` and
    anything else is resolved against ``current_url``.
    """
    href = (href or "").strip()
    if not href:
        raise InvalidUrl("Empty href", url=current_url)

    lowered = href.lower()
    if lowered.startswith(("http://", "https://")):
        resolved = href
    elif href.startswith("//"):
        resolved = "https:" + href
    elif href.startswith("/"):
        resolved = base_origin.rstrip("/") + href
    else:
        try:
            resolved = urljoin(current_url, href)
        except ValueError as e:
            raise InvalidUrl(f"Cannot resolve {href!r}", url=current_url) from e

    _split_http(resolved)
    return resolved


def is_qidian_url(url: str) -> bool:
    try:
        host = hostname_of(url)
    except InvalidUrl:
        return False
    return host == "qidian.com" or host.endswith(".qidian.com")


def canonicalize_url(url: str) -> str:
    """Rewrite URLs of site families with unreliable desktop pages.

    Qidian desktop pages answer with anti-bot probe pages, so every Qidian
    URL is moved onto the mobile host with path, query and fragment kept.
    """
    parts = _split_http(url)
    if not is_qidian_url(url):
        return url
    if parts.hostname == QIDIAN_MOBILE_HOST:
        return url
    return urlunsplit(("https", QIDIAN_MOBILE_HOST, parts.path or "/", parts.query, parts.fragment))


def is_mobile_host(url: str) -> bool:
    try:
        host = hostname_of(url)
    except InvalidUrl:
        return False
    return host.startswith("m.")
