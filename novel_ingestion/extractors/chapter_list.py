"""Table-of-contents discovery and parsing."""

import posixpath
import re
from typing import Callable, Iterable, List, Optional, Tuple
from urllib.parse import urlsplit

from bs4 import BeautifulSoup

from ..core.config import Settings, get_settings
from ..core.exceptions import ExtractionError, InvalidUrl
from ..core.logging import get_logger
from ..fetchers.static_fetcher import StaticFetcher
from ..models.chapter import ChapterItem
from ..utils.url_utils import hostname_of, origin_of, resolve_href
from .navigation import NUMBERED_CHAPTER_RE

logger = get_logger(__name__)

TOC_LINK_MARKERS = ("章節目錄", "章节目录", "章節列表", "章节列表", "目錄", "目录")
NON_CHAPTER_LABELS = (
    "排行榜", "登陸", "登錄", "登入", "登录", "註冊", "注册", "首頁", "首页",
    "home", "ranking", "login", "signin", "signup", "register",
    "關於", "关于", "about", "聯繫", "联系", "contact",
)
CHAPTER_NO_RE = re.compile(r"第\s*(\d+)\s*章")
QIDIAN_BOOK_RES = (
    re.compile(r"/chapter/(\d+)/"),
    re.compile(r"/book/(\d+)"),
)
QIDIAN_TITLE_SUFFIX_RE = re.compile(r"\s*(免费|VIP)\s*$", re.IGNORECASE)
DATE_RE = re.compile(r"\b20\d{2}-\d{2}-\d{2}\b")
ZONGHENG_BOOK_RES = (
    re.compile(r"/chapter/(\d+)/"),
    re.compile(r"/chapter/list/(\d+)"),
    re.compile(r"/showchapter/(\d+)\.html"),
    re.compile(r"/book/(\d+)\.html"),
)
ZONGHENG_CHAPTER_RE = re.compile(r"/chapter/(\d+)/(\d+)(?:\.html)?", re.IGNORECASE)
HJWZW_BOOK_RES = (
    re.compile(r"/Book/Read/(\d+),(\d+)", re.IGNORECASE),
    re.compile(r"/Book/Chapter/(\d+)", re.IGNORECASE),
)
HJWZW_CHAPTER_RE = re.compile(r"/Book/Read/(\d+),(\d+)", re.IGNORECASE)
TRAILING_NUMBER_RE = re.compile(r"(\d+)(?:\.[A-Za-z0-9]+)?/?$")


def collapse_whitespace(text: str) -> str:
    return re.sub(r"\s+", " ", text or "").strip()


def _first_match(patterns: Iterable[re.Pattern], text: str) -> Optional[str]:
    for pattern in patterns:
        match = pattern.search(text)
        if match:
            return match.group(1)
    return None


def _host_in(host: str, domain: str) -> bool:
    return host == domain or host.endswith("." + domain)


def strip_query_and_fragment(url: str) -> str:
    return url.split("#", 1)[0].split("?", 1)[0]


def is_non_chapter_label(title: str) -> bool:
    lowered = title.lower()
    return any(label in lowered for label in NON_CHAPTER_LABELS)


def sort_by_number(items: List[Tuple[ChapterItem, Optional[int]]]) -> List[ChapterItem]:
    """Numbered entries first in ascending order, the rest in DOM order."""
    indexed = [(item, number, i) for i, (item, number) in enumerate(items)]
    indexed.sort(key=lambda entry: (entry[1] is None, entry[1] if entry[1] is not None else 0, entry[2]))
    return [item for item, _, _ in indexed]


def clean_qidian_title(raw: str) -> str:
    title = QIDIAN_TITLE_SUFFIX_RE.sub("", collapse_whitespace(raw)).strip()
    date_match = DATE_RE.search(title)
    if date_match and date_match.start() > 0:
        title = title[:date_match.start()].strip()
    extra = title.find("作家入驻")
    if extra > 0:
        title = title[:extra].strip()
    return title


def clean_zongheng_title(raw: str) -> str:
    """Mobile catalogs prefix the volume name; keep from 第N章 onwards."""
    title = collapse_whitespace(raw)
    match = CHAPTER_NO_RE.search(title)
    if match:
        return title[match.start():].strip()
    return title


class ChapterListExtractor:
    """Best-effort chapter list for the book a chapter page belongs to.
    
    Any failure is logged and turned into ``None``; a missing chapter list
    never fails the chapter request.
    """
    
    def __init__(self, fetcher: Optional[StaticFetcher] = None, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.fetcher = fetcher or StaticFetcher(self.settings)
    
    async def list_chapters(self, soup: BeautifulSoup, url: str) -> Optional[List[ChapterItem]]:
        try:
            host = hostname_of(url)
            if _host_in(host, "qidian.com"):
                chapters = await self._qidian(url)
            elif _host_in(host, "zongheng.com"):
                chapters = await self._zongheng(url)
            elif _host_in(host, "hjwzw.com"):
                chapters = await self._hjwzw(url)
            else:
                chapters = await self._from_toc_page(soup, url)
        except Exception as e:
            logger.warning("Chapter list extraction failed", target=url, error=str(e))
            return None
        
        if chapters:
            logger.info("Extracted chapter list", target=url, chapters=len(chapters))
            return chapters
        return None
    
    async def _fetch_soup(self, catalog_url: str, **kwargs) -> Optional[BeautifulSoup]:
        try:
            html = await self.fetcher.fetch(catalog_url, timeout=self.settings.catalog_timeout, **kwargs)
        except ExtractionError as e:
            logger.info("Catalog page unavailable", target=catalog_url, error=e.message)
            return None
        return BeautifulSoup(html, "lxml")
    
    def _collect(
        self,
        toc: BeautifulSoup,
        selector: str,
        catalog_url: str,
        canonical: Callable[[str], Optional[str]],
        title_of: Callable[[str, str], str],
        number_of: Callable[[str, str], Optional[int]],
    ) -> List[Tuple[ChapterItem, Optional[int]]]:
        """Resolve, filter and deduplicate the anchors of a catalog page."""
        base_origin = origin_of(catalog_url)
        seen = set()
        items = []
        for anchor in toc.select(selector):
            href = (anchor.get("href") or "").strip()
            if not href:
                continue
            try:
                full_url = resolve_href(href, base_origin, catalog_url)
            except InvalidUrl:
                continue
            chapter_url = canonical(full_url)
            if not chapter_url or chapter_url in seen:
                continue
            title = title_of(anchor.get_text(), chapter_url)
            if not title or is_non_chapter_label(title):
                continue
            seen.add(chapter_url)
            items.append((ChapterItem(title=title, url=chapter_url), number_of(title, chapter_url)))
        return items
    
    async def _qidian(self, url: str) -> Optional[List[ChapterItem]]:
        book_id = _first_match(QIDIAN_BOOK_RES, url)
        if not book_id:
            return None
        catalog_url = f"https://m.qidian.com/book/{book_id}/catalog"
        toc = await self._fetch_soup(catalog_url, referer="https://m.qidian.com/")
        if toc is None:
            return None
        
        items = self._collect(
            toc,
            'a[href*="/chapter/"]',
            catalog_url,
            canonical=strip_query_and_fragment,
            title_of=lambda text, _: clean_qidian_title(text),
            number_of=lambda *_: None,
        )
        return [item for item, _ in items]
    
    async def _zongheng(self, url: str) -> Optional[List[ChapterItem]]:
        book_id = _first_match(ZONGHENG_BOOK_RES, url)
        if not book_id:
            return None
        
        def canonical(full_url: str) -> Optional[str]:
            match = ZONGHENG_CHAPTER_RE.search(full_url)
            if not match or match.group(1) != book_id:
                return None
            return f"https://read.zongheng.com/chapter/{book_id}/{match.group(2)}.html"
        
        def number_of(title: str, _: str) -> Optional[int]:
            match = CHAPTER_NO_RE.search(title)
            return int(match.group(1)) if match else None
        
        # The mobile catalog is much lighter than the desktop one
        sources = [
            (
                f"https://m.zongheng.com/chapter/list/{book_id}",
                f'a[href*="/chapter/{book_id}/"]',
                "https://m.zongheng.com/",
            ),
            (
                f"https://book.zongheng.com/showchapter/{book_id}.html",
                'a[href*="/chapter/"]',
                "https://book.zongheng.com/",
            ),
        ]
        for catalog_url, selector, referer in sources:
            toc = await self._fetch_soup(
                catalog_url,
                referer=referer,
                accept_language="zh-CN,zh;q=0.9,en;q=0.8",
            )
            if toc is None:
                continue
            items = self._collect(
                toc,
                selector,
                catalog_url,
                canonical=canonical,
                title_of=lambda text, _: clean_zongheng_title(text),
                number_of=number_of,
            )
            if items:
                return sort_by_number(items)
        return None
    
    async def _hjwzw(self, url: str) -> Optional[List[ChapterItem]]:
        book_id = _first_match(HJWZW_BOOK_RES, url)
        if not book_id:
            return None
        base_origin = origin_of(url)
        catalog_url = f"{base_origin}/Book/Chapter/{book_id}"
        toc = await self._fetch_soup(catalog_url, referer=base_origin + "/")
        if toc is None:
            return None
        
        def canonical(full_url: str) -> Optional[str]:
            match = HJWZW_CHAPTER_RE.search(full_url)
            if not match or match.group(1) != book_id:
                return None
            return strip_query_and_fragment(full_url)
        
        def title_of(text: str, chapter_url: str) -> str:
            return collapse_whitespace(text) or "第 %s 章" % HJWZW_CHAPTER_RE.search(chapter_url).group(2)
        
        items = self._collect(
            toc,
            'a[href*="Book/Read/"]',
            catalog_url,
            canonical=canonical,
            title_of=title_of,
            number_of=lambda _, u: int(HJWZW_CHAPTER_RE.search(u).group(2)),
        )
        return sort_by_number(items)
    
    async def _from_toc_page(self, soup: BeautifulSoup, url: str) -> Optional[List[ChapterItem]]:
        """Follow an in-page catalog link, or derive the book directory."""
        base_origin = origin_of(url)
        toc_url = self._find_toc_link(soup, url, base_origin)
        numbered = NUMBERED_CHAPTER_RE.match(strip_query_and_fragment(url))
        if not toc_url and numbered:
            toc_url = "{head}{book}/".format(head=numbered.group("head"), book=numbered.group("book"))
            logger.debug("Derived catalog URL", target=toc_url)
        if not toc_url:
            return None
        
        toc = await self._fetch_soup(toc_url)
        if toc is None:
            return None
        
        if numbered:
            book_id = numbered.group("book")
            
            def canonical(full_url: str) -> Optional[str]:
                match = NUMBERED_CHAPTER_RE.match(strip_query_and_fragment(full_url))
                if not match or match.group("book") != book_id:
                    return None
                return strip_query_and_fragment(full_url)
            
            def number_of(_: str, chapter_url: str) -> Optional[int]:
                return int(NUMBERED_CHAPTER_RE.match(chapter_url).group("num"))
        else:
            canonical = self._same_shape(url, toc_url)
            
            def number_of(title: str, chapter_url: str) -> Optional[int]:
                match = CHAPTER_NO_RE.search(title) or TRAILING_NUMBER_RE.search(urlsplit(chapter_url).path)
                return int(match.group(1)) if match else None
        
        items = self._collect(
            toc,
            "a[href]",
            toc_url,
            canonical=canonical,
            title_of=lambda text, _: collapse_whitespace(text),
            number_of=number_of,
        )
        return sort_by_number(items)
    
    @staticmethod
    def _find_toc_link(soup: BeautifulSoup, url: str, base_origin: str) -> Optional[str]:
        for anchor in soup.find_all("a", href=True):
            text = anchor.get_text().strip()
            if not any(marker in text for marker in TOC_LINK_MARKERS):
                continue
            try:
                return resolve_href(anchor["href"], base_origin, url)
            except InvalidUrl:
                continue
        return None
    
    @staticmethod
    def _same_shape(url: str, toc_url: str) -> Callable[[str], Optional[str]]:
        """Chapter links share the host, directory and extension of ``url``."""
        current = urlsplit(url)
        directory, filename = posixpath.split(current.path)
        extension = posixpath.splitext(filename)[1]
        toc_path = urlsplit(toc_url).path
        
        def canonical(full_url: str) -> Optional[str]:
            parts = urlsplit(full_url)
            if parts.netloc != current.netloc or parts.path == toc_path:
                return None
            candidate_dir, candidate_name = posixpath.split(parts.path)
            if candidate_dir != directory or not candidate_name:
                return None
            if posixpath.splitext(candidate_name)[1] != extension:
                return None
            return full_url.split("#", 1)[0]
        
        return canonical
