"""Chapter extraction models."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, validator


class FetchMode(str, Enum):
    """How the HTML of a chapter page was obtained."""
    STATIC = "static"
    DYNAMIC = "dynamic"


class RuleKind(str, Enum):
    """Which kind of extraction rule produced a candidate."""
    SITE = "site"
    GENERIC = "generic"


class ChapterItem(BaseModel):
    """One table-of-contents row."""
    title: str
    url: str
    
    @validator('url')
    def validate_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("Chapter url must be absolute")
        return v


class NavigationLink(BaseModel):
    """A resolved next/previous chapter link."""
    url: str
    inferred: bool = False
    strategy: str = "anchor"


class ExtractionResult(BaseModel):
    """Title, prose and navigation extracted from one chapter page.
    
    ``content`` is either sufficient prose (paragraphs separated by blank
    lines) or empty, in which case at least one navigation link is set and
    the result is a link-only partial.
    """
    title: str = ""
    content: str = ""
    source_url: str = Field(..., alias="sourceUrl")
    next_chapter_url: Optional[str] = Field(default=None, alias="nextChapterUrl")
    prev_chapter_url: Optional[str] = Field(default=None, alias="prevChapterUrl")
    next_chapter_inferred: bool = Field(default=False, alias="nextChapterInferred")
    prev_chapter_inferred: bool = Field(default=False, alias="prevChapterInferred")
    chapters: Optional[List[ChapterItem]] = None
    
    class Config:
        populate_by_name = True
    
    @property
    def has_content(self) -> bool:
        return bool(self.content)
    
    @property
    def has_navigation(self) -> bool:
        return bool(self.next_chapter_url or self.prev_chapter_url or self.chapters)
    
    @property
    def is_link_only(self) -> bool:
        """Empty prose but navigation is available."""
        return not self.content and self.has_navigation
    
    def set_next(self, link: Optional[NavigationLink]) -> None:
        if link:
            self.next_chapter_url = link.url
            self.next_chapter_inferred = link.inferred
    
    def set_prev(self, link: Optional[NavigationLink]) -> None:
        if link:
            self.prev_chapter_url = link.url
            self.prev_chapter_inferred = link.inferred
    
    def to_response(self) -> dict:
        """Serialize with the public camelCase field names, omitting unset links."""
        return self.model_dump(by_alias=True, exclude_none=True)


class PipelineAttempt(BaseModel):
    """One fetch + extraction attempt, kept only to decide escalation."""
    fetch_mode: FetchMode
    rule_kind: Optional[RuleKind] = None
    rule_name: Optional[str] = None
    content_length: int = 0
    error: Optional[str] = None
    
    def is_sufficient(self, threshold: int) -> bool:
        return self.content_length >= threshold
