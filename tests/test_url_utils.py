import pytest

from novel_ingestion.core.exceptions import InvalidUrl
from novel_ingestion.utils.url_utils import canonicalize_url, is_mobile_host, origin_of, resolve_href

BASE = "https://read.example.com"
CURRENT = "https://read.example.com/book/12/ch1.html"


def test_absolute_href_is_returned_unchanged():
    href = "http://other.example.org/a/b.html?x=1"
    assert resolve_href(href, BASE, CURRENT) == href


def test_protocol_relative_href_gets_https():
    assert resolve_href("//m.qidian.com/chapter/1/2/", BASE, CURRENT) == "https://m.qidian.com/chapter/1/2/"


def test_root_relative_href_uses_base_origin():
    assert resolve_href("/book/12/ch2.html", BASE, CURRENT) == "https://read.example.com/book/12/ch2.html"


def test_relative_href_resolves_against_current_page():
    assert resolve_href("ch2.html", BASE, CURRENT) == "https://read.example.com/book/12/ch2.html"
    assert resolve_href("../13/ch1.html", BASE, CURRENT) == "https://read.example.com/book/13/ch1.html"


@pytest.mark.parametrize("href", ["", "   ", "javascript:void(0)", "mailto:someone@example.com"])
def test_unusable_hrefs_raise_invalid_url(href):
    with pytest.raises(InvalidUrl):
        resolve_href(href, BASE, CURRENT)


def test_resolved_links_are_absolute_http_urls():
    for href in ["a.html", "/a.html", "//cdn.example.com/a.html", "https://x.example/a", "?page=2"]:
        resolved = resolve_href(href, BASE, CURRENT)
        assert resolved.startswith(("http://", "https://"))
        assert origin_of(resolved)


def test_canonicalize_moves_qidian_desktop_to_mobile():
    url = "https://www.qidian.com/chapter/1010868264/405316446/?from=nav#top"
    assert canonicalize_url(url) == "https://m.qidian.com/chapter/1010868264/405316446/?from=nav#top"


def test_canonicalize_keeps_mobile_qidian_and_other_hosts():
    mobile = "https://m.qidian.com/chapter/1/2/"
    other = "https://look.twword.com/0315678038/8096_180.html"
    assert canonicalize_url(mobile) == mobile
    assert canonicalize_url(other) == other


def test_canonicalize_rejects_non_http_urls():
    with pytest.raises(InvalidUrl):
        canonicalize_url("ftp://example.com/file")
    with pytest.raises(InvalidUrl):
        canonicalize_url("not a url")


def test_mobile_host_detection():
    assert is_mobile_host("https://m.qidian.com/chapter/1/2/")
    assert not is_mobile_host("https://www.qidian.com/chapter/1/2/")
