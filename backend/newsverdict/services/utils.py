from __future__ import annotations
from typing import Optional
import math, os
from urllib.parse import urlparse
from bs4 import BeautifulSoup

def normalize_endpoint(url: Optional[str]) -> Optional[str]:
    return (url or None).rstrip('/') if url else url

def get_env_any(*names: str) -> Optional[str]:
    for n in names:
        v = os.getenv(n)
        if v:
            return v
    return None

def domain_of(u: str) -> str:
    try:
        p = urlparse(u)
        return (p.netloc or '').lower()
    except ValueError:
        return ''

def strip_markup(text: Optional[str]) -> str:
    """Plain text of an HTML fragment; search snippets sometimes carry tags."""
    if not text:
        return ""
    if "<" not in text:
        return text.strip()
    soup = BeautifulSoup(text, "html.parser")
    for s in soup(["script", "style", "noscript"]):
        s.extract()
    return soup.get_text(" ", strip=True)

def round_half_up(v: float) -> int:
    return int(math.floor(v + 0.5))

def clamp(v: float, lo: float = 0.0, hi: float = 100.0) -> float:
    return max(lo, min(hi, v))
