import pytest

from conftest import FakeStaticFetcher, page

from novel_ingestion.extractors.chapter_list import (
    ChapterListExtractor,
    clean_qidian_title,
    clean_zongheng_title,
    sort_by_number,
)
from novel_ingestion.extractors.html_extractor import parse_html
from novel_ingestion.models.chapter import ChapterItem


def test_clean_qidian_title_strips_badges_and_dates():
    assert clean_qidian_title("第1章 開端  免费") == "第1章 開端"
    assert clean_qidian_title("第2章 風起 2023-01-02 VIP") == "第2章 風起"
    assert clean_qidian_title("第3章 雲湧 作家入驻") == "第3章 雲湧"


def test_clean_zongheng_title_drops_volume_prefix():
    assert clean_zongheng_title("第一卷 初入江湖  第12章 山門") == "第12章 山門"
    assert clean_zongheng_title("番外 一") == "番外 一"


def test_sort_by_number_keeps_unnumbered_in_dom_order():
    items = [
        (ChapterItem(title="序", url="https://a.example/0"), None),
        (ChapterItem(title="第2章", url="https://a.example/2"), 2),
        (ChapterItem(title="後記", url="https://a.example/9"), None),
        (ChapterItem(title="第1章", url="https://a.example/1"), 1),
    ]
    assert [item.title for item in sort_by_number(items)] == ["第1章", "第2章", "序", "後記"]


@pytest.mark.asyncio
async def test_qidian_catalog_is_deduplicated_and_cleaned(settings):
    catalog = page(
        '<a href="//m.qidian.com/chapter/1010868264/1/">第1章 開端 免费</a>'
        '<a href="/chapter/1010868264/2/">第2章 風起 2023-01-02 VIP</a>'
        '<a href="/chapter/1010868264/1/">第1章 開端</a>'
        '<a href="/chapter/1010868264/3/">登錄</a>'
        '<a href="/rank/">排行榜</a>'
    )
    fetcher = FakeStaticFetcher({"https://m.qidian.com/book/1010868264/catalog": catalog})
    extractor = ChapterListExtractor(fetcher=fetcher, settings=settings)

    url = "https://m.qidian.com/chapter/1010868264/405316446/"
    chapters = await extractor.list_chapters(parse_html(page("")), url)

    assert [(c.title, c.url) for c in chapters] == [
        ("第1章 開端", "https://m.qidian.com/chapter/1010868264/1/"),
        ("第2章 風起", "https://m.qidian.com/chapter/1010868264/2/"),
    ]


@pytest.mark.asyncio
async def test_zongheng_mobile_catalog_sorted_and_canonical(settings):
    catalog = page(
        '<a href="/chapter/1234567/3.html">第一卷 第3章 三</a>'
        '<a href="/chapter/1234567/1.html">第1章 一</a>'
        '<a href="/chapter/1234567/2">第一卷 第2章 二</a>'
    )
    fetcher = FakeStaticFetcher({"https://m.zongheng.com/chapter/list/1234567": catalog})
    extractor = ChapterListExtractor(fetcher=fetcher, settings=settings)

    chapters = await extractor.list_chapters(
        parse_html(page("")), "https://read.zongheng.com/chapter/1234567/9876.html"
    )

    assert [c.title for c in chapters] == ["第1章 一", "第2章 二", "第3章 三"]
    assert chapters[1].url == "https://read.zongheng.com/chapter/1234567/2.html"
    assert fetcher.calls == ["https://m.zongheng.com/chapter/list/1234567"]


@pytest.mark.asyncio
async def test_zongheng_falls_back_to_desktop_catalog(settings):
    desktop = page(
        '<a href="https://read.zongheng.com/chapter/1234567/5.html">第5章 五</a>'
        '<a href="https://read.zongheng.com/chapter/999/1.html">第1章 別的書</a>'
    )
    fetcher = FakeStaticFetcher({"https://book.zongheng.com/showchapter/1234567.html": desktop})
    extractor = ChapterListExtractor(fetcher=fetcher, settings=settings)

    chapters = await extractor.list_chapters(
        parse_html(page("")), "https://read.zongheng.com/chapter/1234567/9876.html"
    )

    assert [(c.title, c.url) for c in chapters] == [
        ("第5章 五", "https://read.zongheng.com/chapter/1234567/5.html"),
    ]
    assert len(fetcher.calls) == 2


@pytest.mark.asyncio
async def test_hjwzw_catalog_sorted_by_chapter_id(settings):
    catalog = page(
        '<a href="/Book/Read/36117,3">第三章</a>'
        '<a href="/Book/Read/36117,1">第一章</a>'
        '<a href="/Book/Read/999,1">別的書</a>'
    )
    fetcher = FakeStaticFetcher({"https://tw.hjwzw.com/Book/Chapter/36117": catalog})
    extractor = ChapterListExtractor(fetcher=fetcher, settings=settings)

    chapters = await extractor.list_chapters(parse_html(page("")), "https://tw.hjwzw.com/Book/Read/36117,5")

    assert [(c.title, c.url) for c in chapters] == [
        ("第一章", "https://tw.hjwzw.com/Book/Read/36117,1"),
        ("第三章", "https://tw.hjwzw.com/Book/Read/36117,3"),
    ]


@pytest.mark.asyncio
async def test_follows_in_page_catalog_link(settings):
    catalog = page(
        '<a href="/">首頁</a>'
        '<a href="8096_2.html">第2章 雪夜</a>'
        '<a href="/0315678038/8096_1.html">第1章 初見</a>'
        '<a href="/0315678038/8096_3.html">登入</a>'
        '<a href="/0315678038/8096_1.html">第1章 初見</a>'
    )
    fetcher = FakeStaticFetcher({"https://look.twword.com/0315678038/": catalog})
    extractor = ChapterListExtractor(fetcher=fetcher, settings=settings)
    soup = parse_html(page('<a href="/0315678038/">章節目錄</a>'))

    chapters = await extractor.list_chapters(soup, "https://look.twword.com/0315678038/8096_180.html")

    assert [(c.title, c.url) for c in chapters] == [
        ("第1章 初見", "https://look.twword.com/0315678038/8096_1.html"),
        ("第2章 雪夜", "https://look.twword.com/0315678038/8096_2.html"),
    ]


@pytest.mark.asyncio
async def test_derives_catalog_from_numbered_url(settings):
    catalog = page('<a href="6789_1.html">第1章</a>')
    fetcher = FakeStaticFetcher({"https://site.example/12345/": catalog})
    extractor = ChapterListExtractor(fetcher=fetcher, settings=settings)

    chapters = await extractor.list_chapters(parse_html(page("")), "https://site.example/12345/6789_180.html")

    assert fetcher.calls == ["https://site.example/12345/"]
    assert [c.url for c in chapters] == ["https://site.example/12345/6789_1.html"]


@pytest.mark.asyncio
async def test_same_shape_links_on_plain_catalog(settings):
    catalog = page(
        '<a href="/novel/ch2.html">第2章</a>'
        '<a href="/novel/ch1.html">第1章</a>'
        '<a href="/about.html">關於</a>'
        '<a href="/novel/index.html">目錄</a>'
    )
    fetcher = FakeStaticFetcher({"https://blog.example/novel/index.html": catalog})
    extractor = ChapterListExtractor(fetcher=fetcher, settings=settings)
    soup = parse_html(page('<a href="index.html">目錄</a>'))

    chapters = await extractor.list_chapters(soup, "https://blog.example/novel/ch5.html")

    assert [c.url for c in chapters] == [
        "https://blog.example/novel/ch1.html",
        "https://blog.example/novel/ch2.html",
    ]


@pytest.mark.asyncio
async def test_fetch_failure_yields_none(settings):
    fetcher = FakeStaticFetcher({"https://site.example/12345/": RuntimeError("boom")})
    extractor = ChapterListExtractor(fetcher=fetcher, settings=settings)

    assert await extractor.list_chapters(parse_html(page("")), "https://site.example/12345/6789_180.html") is None


@pytest.mark.asyncio
async def test_missing_catalog_yields_none(settings):
    extractor = ChapterListExtractor(fetcher=FakeStaticFetcher(), settings=settings)

    assert await extractor.list_chapters(parse_html(page("")), "https://site.example/12345/6789_180.html") is None


@pytest.mark.asyncio
async def test_unrecognised_page_does_not_fetch(settings):
    fetcher = FakeStaticFetcher()
    extractor = ChapterListExtractor(fetcher=fetcher, settings=settings)

    assert await extractor.list_chapters(parse_html(page("<p>正文</p>")), "https://blog.example/post/hello") is None
    assert fetcher.calls == []


@pytest.mark.asyncio
async def test_fragment_variants_of_a_chapter_are_listed_once(settings):
    catalog = page(
        '<a href="6789_1.html">第1章</a>'
        '<a href="6789_1.html#top">第1章 回到頂部</a>'
        '<a href="6789_2.html?from=toc">第2章</a>'
    )
    fetcher = FakeStaticFetcher({"https://site.example/12345/": catalog})
    extractor = ChapterListExtractor(fetcher=fetcher, settings=settings)

    chapters = await extractor.list_chapters(parse_html(page("")), "https://site.example/12345/6789_180.html")

    assert [(c.title, c.url) for c in chapters] == [
        ("第1章", "https://site.example/12345/6789_1.html"),
        ("第2章", "https://site.example/12345/6789_2.html"),
    ]


@pytest.mark.asyncio
async def test_qidian_query_variants_are_listed_once(settings):
    catalog = page(
        '<a href="/chapter/100/1/">第1章 開端</a>'
        '<a href="/chapter/100/1/?from=catalog">第1章 開端</a>'
        '<a href="/chapter/100/2/#comments">第2章 風起</a>'
    )
    fetcher = FakeStaticFetcher({"https://m.qidian.com/book/100/catalog": catalog})
    extractor = ChapterListExtractor(fetcher=fetcher, settings=settings)

    chapters = await extractor.list_chapters(parse_html(page("")), "https://m.qidian.com/chapter/100/5/")

    assert [c.url for c in chapters] == [
        "https://m.qidian.com/chapter/100/1/",
        "https://m.qidian.com/chapter/100/2/",
    ]


@pytest.mark.asyncio
async def test_hjwzw_fragment_variants_are_listed_once(settings):
    catalog = page(
        '<a href="/Book/Read/36117,1">第一章</a>'
        '<a href="/Book/Read/36117,1#bottom">第一章</a>'
    )
    fetcher = FakeStaticFetcher({"https://tw.hjwzw.com/Book/Chapter/36117": catalog})
    extractor = ChapterListExtractor(fetcher=fetcher, settings=settings)

    chapters = await extractor.list_chapters(parse_html(page("")), "https://tw.hjwzw.com/Book/Read/36117,5")

    assert [c.url for c in chapters] == ["https://tw.hjwzw.com/Book/Read/36117,1"]
