"""Next/previous chapter link discovery."""

import re
from dataclasses import dataclass
from typing import Callable, List, Optional, Pattern, Tuple

from bs4 import BeautifulSoup, Tag

from ..core.exceptions import InvalidUrl
from ..core.logging import get_logger
from ..models.chapter import NavigationLink
from ..utils.url_utils import hostname_of, origin_of, resolve_href

logger = get_logger(__name__)

QIDIAN_CHAPTER_RE = re.compile(r"/chapter/(\d+)/(\d+)")
HJWZW_CHAPTER_RE = re.compile(r"/Book/Read/(\d+),(\d+)", re.IGNORECASE)
NUMBERED_CHAPTER_RE = re.compile(
    r"^(?P<head>.*/)(?P<book>\d+)/(?P<prefix>\d+)_(?P<num>\d+)\.(?P<ext>[A-Za-z0-9]+)$"
)
FIRST_CHAPTER_NUMBER = 1


@dataclass(frozen=True)
class Direction:
    """Everything that differs between looking forward and backward."""
    name: str
    step: int
    markers: Tuple[str, ...]
    english: Pattern
    qidian_id_patterns: Tuple[Pattern, ...]
    qidian_url_patterns: Tuple[Pattern, ...]
    script_var_patterns: Tuple[Pattern, ...]
    class_selectors: Tuple[str, ...]
    class_fragment: str
    button_class: str

    def matches(self, text: str) -> bool:
        if not text:
            return False
        return any(marker in text for marker in self.markers) or bool(self.english.search(text))


def _script_var_patterns(*names: str) -> Tuple[Pattern, ...]:
    patterns = []
    for name in names:
        patterns.extend([
            re.compile(r"var\s+%s\s*=\s*['\"]([^'\"]+)['\"]" % name),
            re.compile(r"\b%s\s*=\s*['\"]([^'\"]+)['\"]" % name),
            re.compile(r"[\"']%s[\"']\s*:\s*[\"']([^\"']+)[\"']" % name),
        ])
    return tuple(patterns)


NEXT = Direction(
    name="next",
    step=1,
    markers=("下一章", "下一頁", "下一页", "下一節", "下一节"),
    english=re.compile(r"\bnext\b", re.IGNORECASE),
    qidian_id_patterns=(
        re.compile(r'"next"\s*:\s*(\d{6,})'),
        re.compile(r"\bnext\s*[:=]\s*(\d{6,})"),
    ),
    qidian_url_patterns=(
        re.compile(r'"nextUrl"\s*:\s*"([^"]+)"'),
        re.compile(r"nextUrl\s*[:=]\s*['\"]([^'\"]+)['\"]"),
    ),
    script_var_patterns=_script_var_patterns("nextUrl"),
    class_selectors=("a.next", "a.next-chapter", ".next-chapter a", ".nextBtn a", "a.nextBtn"),
    class_fragment="next",
    button_class="nextBtn",
)

PREV = Direction(
    name="prev",
    step=-1,
    markers=("上一章", "上一頁", "上一页", "上一節", "上一节"),
    english=re.compile(r"\b(prev|previous)\b", re.IGNORECASE),
    qidian_id_patterns=(
        re.compile(r'"prev"\s*:\s*(\d{6,})'),
        re.compile(r"\bprev\s*[:=]\s*(\d{6,})"),
    ),
    qidian_url_patterns=(
        re.compile(r'"preUrl"\s*:\s*"([^"]+)"'),
        re.compile(r"preUrl\s*[:=]\s*['\"]([^'\"]+)['\"]"),
    ),
    script_var_patterns=_script_var_patterns("prevUrl", "preUrl"),
    class_selectors=("a.prev", "a.prev-chapter", ".prev-chapter a", ".prevBtn a", "a.prevBtn", "a.previous"),
    class_fragment="prev",
    button_class="prevBtn",
)


def _usable_href(href: Optional[str]) -> bool:
    if not href:
        return False
    href = href.strip()
    return bool(href) and not href.startswith("#") and not href.lower().startswith("javascript:")


def scripts_text(soup: BeautifulSoup) -> str:
    return "\n".join(script.string or script.get_text() for script in soup.find_all("script"))


def infer_numbered_sibling(url: str, step: int) -> Optional[str]:
    """Step the chapter number of a ``/<book>/<prefix>_<n>.<ext>`` URL.

    Never yields a chapter number below the first chapter.
    """
    base = url.split("#", 1)[0].split("?", 1)[0]
    match = NUMBERED_CHAPTER_RE.match(base)
    if not match:
        return None
    number = int(match.group("num")) + step
    if number < FIRST_CHAPTER_NUMBER:
        return None
    return "{head}{book}/{prefix}_{num}.{ext}".format(
        head=match.group("head"),
        book=match.group("book"),
        prefix=match.group("prefix"),
        num=number,
        ext=match.group("ext"),
    )


class NavigationExtractor:
    """Locates next/previous chapter links on a chapter page.
    
    Known site families are tried first (script state, footer navigation,
    button classes), then generic anchor-text and CSS-class matching, then
    script variables. Numeric URL inference is the last resort and its
    links are flagged as inferred.
    """
    
    def find_next(self, soup: BeautifulSoup, url: str) -> Optional[NavigationLink]:
        return self.find(soup, url, NEXT)
    
    def find_prev(self, soup: BeautifulSoup, url: str) -> Optional[NavigationLink]:
        return self.find(soup, url, PREV)
    
    def find(self, soup: BeautifulSoup, url: str, direction: Direction) -> Optional[NavigationLink]:
        try:
            host = hostname_of(url)
            base_origin = origin_of(url)
        except InvalidUrl:
            return None
        
        strategies: List[Callable[..., Optional[NavigationLink]]] = []
        if host == "m.qidian.com" and "/chapter/" in url.lower():
            strategies.append(self._from_qidian_script)
        if host == "hjwzw.com" or host.endswith(".hjwzw.com"):
            strategies.append(self._from_hjwzw)
        if host == "twword.com" or host.endswith(".twword.com"):
            strategies.extend([
                self._from_script_variables,
                self._from_foot_nav,
                self._from_buttons,
            ])
        strategies.extend([
            self._from_anchor_text,
            self._from_class_selectors,
            self._from_script_variables,
            self._from_numbered_url,
        ])
        
        for strategy in strategies:
            try:
                link = strategy(soup, url, base_origin, direction)
            except InvalidUrl as e:
                logger.debug("Navigation candidate rejected", direction=direction.name, error=str(e))
                continue
            if link:
                logger.debug(
                    "Found navigation link",
                    direction=direction.name,
                    strategy=link.strategy,
                    target=link.url,
                    inferred=link.inferred,
                )
                return link
        
        logger.debug("No navigation link found", direction=direction.name)
        return None
    
    def _from_qidian_script(self, soup, url, base_origin, direction):
        match = QIDIAN_CHAPTER_RE.search(url)
        if not match:
            return None
        book_id = match.group(1)
        text = scripts_text(soup)
        
        for pattern in direction.qidian_id_patterns:
            found = pattern.search(text)
            if found:
                return NavigationLink(
                    url=f"https://m.qidian.com/chapter/{book_id}/{found.group(1)}/",
                    strategy="script",
                )
        for pattern in direction.qidian_url_patterns:
            found = pattern.search(text)
            if found:
                return NavigationLink(url=resolve_href(found.group(1), base_origin, url), strategy="script")
        return None
    
    def _from_hjwzw(self, soup, url, base_origin, direction):
        match = HJWZW_CHAPTER_RE.search(url)
        if not match:
            return None
        book_id, chapter_id = match.group(1), int(match.group(2))
        target = chapter_id + direction.step
        if target < FIRST_CHAPTER_NUMBER:
            return None
        
        link = self._from_anchor_text(soup, url, base_origin, direction)
        if link:
            return link
        return NavigationLink(
            url=f"{base_origin}/Book/Read/{book_id},{target}",
            inferred=True,
            strategy="inferred",
        )
    
    def _from_script_variables(self, soup, url, base_origin, direction):
        for script in soup.find_all("script"):
            text = script.string or script.get_text()
            for pattern in direction.script_var_patterns:
                found = pattern.search(text)
                if found and _usable_href(found.group(1)):
                    return NavigationLink(url=resolve_href(found.group(1), base_origin, url), strategy="script")
        return None
    
    def _from_foot_nav(self, soup, url, base_origin, direction):
        for anchor in soup.select(".foot-nav a"):
            if direction.matches(anchor.get_text().strip()) and _usable_href(anchor.get("href")):
                return NavigationLink(url=resolve_href(anchor["href"], base_origin, url), strategy="anchor")
        return None
    
    def _from_buttons(self, soup, url, base_origin, direction):
        for button in soup.select("." + direction.button_class):
            anchor = button if button.name == "a" else button.find_parent("a")
            if anchor is not None and _usable_href(anchor.get("href")):
                return NavigationLink(url=resolve_href(anchor["href"], base_origin, url), strategy="class")
        
        for element in soup.select('[class*="%s"]' % direction.class_fragment):
            if not isinstance(element, Tag) or not _usable_href(element.get("href")):
                continue
            if direction.matches(element.get_text().strip()):
                return NavigationLink(url=resolve_href(element["href"], base_origin, url), strategy="class")
        return None
    
    def _from_anchor_text(self, soup, url, base_origin, direction):
        for anchor in soup.find_all("a", href=True):
            if not _usable_href(anchor["href"]):
                continue
            if direction.matches(anchor.get_text().strip()):
                try:
                    return NavigationLink(url=resolve_href(anchor["href"], base_origin, url), strategy="anchor")
                except InvalidUrl:
                    continue
        return None
    
    def _from_class_selectors(self, soup, url, base_origin, direction):
        for selector in direction.class_selectors:
            element = soup.select_one(selector)
            if element is None:
                continue
            href = element.get("href")
            if not href:
                nested = element.find("a", href=True)
                href = nested["href"] if nested else None
            if _usable_href(href):
                return NavigationLink(url=resolve_href(href, base_origin, url), strategy="class")
        return None
    
    def _from_numbered_url(self, soup, url, base_origin, direction):
        inferred = infer_numbered_sibling(url, direction.step)
        if inferred:
            return NavigationLink(url=inferred, inferred=True, strategy="inferred")
        return None
