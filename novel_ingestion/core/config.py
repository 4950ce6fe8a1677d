"""Configuration management for the chapter extraction pipeline."""

from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings


DESKTOP_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)
MOBILE_USER_AGENT = (
    "Mozilla/5.0 (iPhone; CPU iPhone OS 17_2 like Mac OS X) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/17.2 Mobile/15E148 Safari/604.1"
)


class Settings(BaseSettings):
    """Application settings."""
    
    # Logging Configuration
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="console")
    log_file: Optional[Path] = Field(default=None)
    
    # HTTP Configuration
    request_timeout: float = Field(default=15.0)
    catalog_timeout: float = Field(default=6.5)
    desktop_user_agent: str = Field(default=DESKTOP_USER_AGENT)
    mobile_user_agent: str = Field(default=MOBILE_USER_AGENT)
    accept_header: str = Field(
        default="text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"
    )
    accept_language: str = Field(default="zh-TW,zh;q=0.9,en;q=0.8")
    
    # Headless Browser Configuration
    enable_dynamic_fetch: bool = Field(default=True)
    render_timeout_ms: int = Field(default=30000)
    render_settle_ms: int = Field(default=2000)
    
    # Extraction Configuration
    min_content_length: int = Field(default=200)
    dynamic_hosts: List[str] = Field(default_factory=lambda: ["webnovel.com"])
    static_only_hosts: List[str] = Field(default_factory=lambda: ["qidian.com"])
    
    # API Configuration
    api_host: str = Field(default="0.0.0.0")
    api_port: int = Field(default=8000)
    api_reload: bool = Field(default=False)
    
    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"
    
    def requires_dynamic_fetch(self, hostname: str) -> bool:
        """Check if a host is known to need JavaScript rendering."""
        return _host_matches(hostname, self.dynamic_hosts)
    
    def is_static_only(self, hostname: str) -> bool:
        """Check if a host is known to work without JavaScript rendering."""
        return _host_matches(hostname, self.static_only_hosts)


def _host_matches(hostname: str, domains: List[str]) -> bool:
    hostname = (hostname or "").lower()
    return any(hostname == d or hostname.endswith("." + d) for d in domains)


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
