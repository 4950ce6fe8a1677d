"""Removes injected non-prose lines from extracted chapter text."""

import re
from typing import List

LOAD_ADV_RE = re.compile(r"^loadadv\(\s*\d+\s*,\s*\d+\s*\)\s*;?$", re.IGNORECASE)
AD_CONTAINER_FRAGMENTS = (".bg-container-", ".bg-ssp-", "z-index: 2147483647")
CSS_LAYOUT_KEYWORDS = (
    "display",
    "flex",
    "z-index",
    "justify-content",
    "align-items",
    "margin-left",
    "margin-right",
)
PROMOTIONAL_PHRASES = (
    "應廣大讀者的要求",
    "现推出VIP会员免广告",
    "現推出VIP會員免廣告",
    "VIP會員免廣告功能",
)
# Hosts that double-emit their ad bootstrap into the prose
AD_BOOTSTRAP_HOSTS = ("ttks.tw",)
MAX_BLANK_RUN = 2


def looks_like_css_rule(line: str) -> bool:
    lowered = line.lower()
    return (
        line.startswith((".", "#", "@"))
        and "{" in line
        and "}" in line
        and any(keyword in lowered for keyword in CSS_LAYOUT_KEYWORDS)
    )


def looks_like_injected_code(line: str, source_url: str = "") -> bool:
    """Ad loader calls, ad container classes and CSS rules emitted as text."""
    if not line:
        return False
    lowered = line.lower()
    if LOAD_ADV_RE.match(line):
        return True
    if any(fragment in lowered for fragment in AD_CONTAINER_FRAGMENTS):
        return True
    if looks_like_css_rule(line):
        return True
    if any(host in source_url.lower() for host in AD_BOOTSTRAP_HOSTS) and "loadAdv(" in line:
        return True
    return False


def is_promotional(line: str) -> bool:
    return any(phrase in line for phrase in PROMOTIONAL_PHRASES)


def sanitize_content(content: str, source_url: str = "") -> str:
    """Clean extracted prose line by line.
    
    Drops injected code and promotional lines, drops a line repeating the
    previous kept line, caps blank runs at two and trims the document.
    Applying it twice gives the same text as applying it once.
    """
    text = (content or "").replace("\r\n", "\n").replace("\r", "\n")
    out: List[str] = []
    previous = None
    blank_run = 0
    
    for raw_line in text.split("\n"):
        line = raw_line.strip()
        if not line:
            blank_run += 1
            if blank_run <= MAX_BLANK_RUN:
                out.append("")
            continue
        
        if looks_like_injected_code(line, source_url) or is_promotional(line):
            continue
        if line == previous:
            continue
        
        out.append(line)
        previous = line
        blank_run = 0
    
    while out and out[0] == "":
        out.pop(0)
    while out and out[-1] == "":
        out.pop()
    
    return "\n".join(out)
