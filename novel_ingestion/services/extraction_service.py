"""Chapter extraction pipeline orchestration."""

import time
from typing import List, Optional, Tuple

from bs4 import BeautifulSoup

from ..core.config import Settings, get_settings
from ..core.exceptions import TRANSPORT_ERRORS, ExtractionError, InsufficientContent
from ..core.logging import ChapterLogger
from ..extractors.chapter_list import ChapterListExtractor
from ..extractors.html_extractor import HTMLExtractor, parse_html
from ..extractors.navigation import NavigationExtractor
from ..extractors.site_extractors.base_site_extractor import DEFAULT_TITLE
from ..fetchers.dynamic_fetcher import DynamicFetcher
from ..fetchers.static_fetcher import StaticFetcher
from ..models.chapter import ExtractionResult, FetchMode, PipelineAttempt
from ..processors.content_sanitizer import sanitize_content
from ..processors.script_normalizer import ScriptNormalizer
from ..utils.url_utils import canonicalize_url, hostname_of


class ExtractionService:
    """Turns a chapter URL into title, prose and navigation.
    
    Static fetch and site/generic extraction come first; the headless
    browser is used only for hosts known to need it, or when the static
    attempt under-yields on a host that is not known to work statically.
    Each call is independent and keeps no state between requests.
    """
    
    def __init__(
        self,
        settings: Optional[Settings] = None,
        static_fetcher: Optional[StaticFetcher] = None,
        dynamic_fetcher: Optional[DynamicFetcher] = None,
        html_extractor: Optional[HTMLExtractor] = None,
        navigation: Optional[NavigationExtractor] = None,
        chapter_lists: Optional[ChapterListExtractor] = None,
        normalizer: Optional[ScriptNormalizer] = None,
    ):
        self.settings = settings or get_settings()
        self.static_fetcher = static_fetcher or StaticFetcher(self.settings)
        self.dynamic_fetcher = dynamic_fetcher or DynamicFetcher(self.settings)
        self.html_extractor = html_extractor or HTMLExtractor()
        self.navigation = navigation or NavigationExtractor()
        self.chapter_lists = chapter_lists or ChapterListExtractor(self.static_fetcher, self.settings)
        self.normalizer = normalizer or ScriptNormalizer()
    
    async def fetch_chapter(self, url: str, current_title: Optional[str] = None) -> ExtractionResult:
        """Run the whole pipeline for one chapter page."""
        start_time = time.time()
        log = ChapterLogger(url)
        
        canonical_url = canonicalize_url(url)
        if canonical_url != url:
            log.info("Canonicalized chapter URL", canonical_url=canonical_url)
        
        attempts: List[PipelineAttempt] = []
        pages: List[Tuple[FetchMode, BeautifulSoup]] = []
        last_error: Optional[ExtractionError] = None
        
        for mode in self.plan_fetch_modes(canonical_url):
            try:
                html = await self._fetch(mode, canonical_url)
            except TRANSPORT_ERRORS as e:
                attempts.append(PipelineAttempt(fetch_mode=mode, error=e.message))
                log.warning("Fetch failed, trying next strategy", fetch_mode=mode.value, error=e.message)
                last_error = e
                continue
            
            soup = parse_html(html)
            pages.append((mode, soup))
            result = self._extract(soup, canonical_url, mode, attempts, log)
            if result:
                result = await self._complete(result, soup, canonical_url, log)
                log.info(
                    "Chapter extracted",
                    fetch_mode=mode.value,
                    title=result.title,
                    content_length=len(result.content),
                    next_chapter_url=result.next_chapter_url,
                    next_inferred=result.next_chapter_inferred,
                    prev_chapter_url=result.prev_chapter_url,
                    prev_inferred=result.prev_chapter_inferred,
                    chapters=len(result.chapters or []),
                    attempts=len(attempts),
                    duration=round(time.time() - start_time, 3),
                )
                return result
        
        if not pages:
            log.error("All fetch strategies failed", attempts=len(attempts))
            raise last_error
        
        link_only = await self._link_only(pages, canonical_url, current_title, log)
        if link_only:
            return link_only
        
        best = max((a.content_length for a in attempts), default=0)
        log.error("Insufficient content from every strategy", attempts=len(attempts), best_length=best)
        raise InsufficientContent(best, url=url)
    
    def plan_fetch_modes(self, url: str) -> List[FetchMode]:
        """Fetch modes to try, in order."""
        host = hostname_of(url)
        if not self.settings.enable_dynamic_fetch:
            return [FetchMode.STATIC]
        if self.settings.requires_dynamic_fetch(host):
            return [FetchMode.DYNAMIC]
        if self.settings.is_static_only(host):
            return [FetchMode.STATIC]
        return [FetchMode.STATIC, FetchMode.DYNAMIC]
    
    async def _fetch(self, mode: FetchMode, url: str) -> str:
        if mode == FetchMode.DYNAMIC:
            return await self.dynamic_fetcher.render(url)
        return await self.static_fetcher.fetch(url)
    
    def _extract(
        self,
        soup: BeautifulSoup,
        url: str,
        mode: FetchMode,
        attempts: List[PipelineAttempt],
        log: ChapterLogger,
    ) -> Optional[ExtractionResult]:
        """First candidate whose sanitized prose meets the threshold."""
        threshold = self.settings.min_content_length
        for extractor, kind, candidate in self.html_extractor.iter_candidates(soup, url):
            content = sanitize_content(candidate.content, url)
            attempt = PipelineAttempt(
                fetch_mode=mode,
                rule_kind=kind,
                rule_name=extractor.name,
                content_length=len(content),
            )
            attempts.append(attempt)
            if attempt.is_sufficient(threshold):
                return candidate.model_copy(update={"content": content})
            log.info(
                "Candidate below threshold",
                fetch_mode=mode.value,
                extractor=extractor.name,
                content_length=len(content),
            )
        return None
    
    async def _complete(
        self,
        result: ExtractionResult,
        soup: BeautifulSoup,
        url: str,
        log: ChapterLogger,
    ) -> ExtractionResult:
        """Navigation, chapter list and script normalization."""
        result.source_url = url
        result.set_next(self.navigation.find_next(soup, url))
        result.set_prev(self.navigation.find_prev(soup, url))
        result.chapters = await self._chapters(soup, url, log)
        return self.normalizer.normalize(result)
    
    async def _chapters(self, soup: BeautifulSoup, url: str, log: ChapterLogger):
        try:
            return await self.chapter_lists.list_chapters(soup, url)
        except Exception as e:
            log.warning("Chapter list failed, continuing without it", error=str(e))
            return None
    
    async def _link_only(
        self,
        pages: List[Tuple[FetchMode, BeautifulSoup]],
        url: str,
        current_title: Optional[str],
        log: ChapterLogger,
    ) -> Optional[ExtractionResult]:
        """Navigation without prose, so the reader can still move on."""
        # The most recently fetched page is the most complete rendering
        for mode, soup in reversed(pages):
            next_link = self.navigation.find_next(soup, url)
            prev_link = self.navigation.find_prev(soup, url)
            if next_link or prev_link:
                break
        else:
            mode, soup = pages[-1]
        
        title = self.html_extractor.extract_title(soup, url)
        if title == DEFAULT_TITLE and current_title:
            title = current_title
        result = ExtractionResult(title=title, content="", source_url=url)
        result.set_next(next_link)
        result.set_prev(prev_link)
        result.chapters = await self._chapters(soup, url, log)
        if not result.is_link_only:
            return None
        
        log.warning(
            "Returning link-only result",
            fetch_mode=mode.value,
            next_chapter_url=result.next_chapter_url,
            prev_chapter_url=result.prev_chapter_url,
            chapters=len(result.chapters or []),
        )
        return self.normalizer.normalize(result)


async def fetch_chapter(url: str, current_title: Optional[str] = None) -> ExtractionResult:
    """Fetch one chapter with the default pipeline."""
    return await ExtractionService().fetch_chapter(url, current_title=current_title)
