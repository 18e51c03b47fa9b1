# Evidence lookup: news search back ends with a degraded placeholder on failure
from __future__ import annotations
from typing import List, Dict, Any, Callable
import logging
import requests
from ddgs import DDGS
from serpapi import GoogleSearch

from .utils import strip_markup, domain_of
from ..core.config import Settings
from ..models.evidence import EvidenceDocument, PLACEHOLDER_URL

logger = logging.getLogger(__name__)

NEWSAPI_URL = "https://newsapi.org/v2/everything"
NO_DESCRIPTION = "No description available."
DEGRADED_SNIPPET = "Unable to fetch real search results. Please check API key."


class SearchError(RuntimeError):
    pass


def build_query(text: str, words: int = 5) -> str:
    return " ".join(text.split()[:words])


def search_newsapi(q: str, cfg: Settings) -> List[Dict[str, Any]]:
    if not cfg.NEWS_API_KEY:
        raise SearchError("NEWS_API_KEY not found in environment variables")
    params = {
        "q": q,
        "apiKey": cfg.NEWS_API_KEY,
        "language": cfg.SEARCH_LANGUAGE,
        "sortBy": "relevancy",
        "pageSize": cfg.SEARCH_MAX_RESULTS,
    }
    r = requests.get(NEWSAPI_URL, params=params, timeout=cfg.SEARCH_TIMEOUT)
    try:
        data = r.json()
    except ValueError:
        r.raise_for_status()
        raise SearchError("NewsAPI returned a non-JSON body")
    if r.status_code >= 400 or data.get("status") != "ok":
        raise SearchError(data.get("message") or f"NewsAPI request failed with status {r.status_code}")
    out = []
    for it in data.get("articles") or []:
        out.append({
            "title": it.get("title") or "",
            "url": it.get("url") or "",
            "snippet": it.get("description") or "",
        })
    return out


def search_serpapi(q: str, cfg: Settings) -> List[Dict[str, Any]]:
    if not cfg.SERPAPI_API_KEY:
        raise SearchError("SERPAPI_API_KEY not found in environment variables")
    params = {"engine": "google", "tbm": "nws", "q": q, "hl": cfg.SEARCH_LANGUAGE,
              "num": cfg.SEARCH_MAX_RESULTS, "api_key": cfg.SERPAPI_API_KEY}
    search = GoogleSearch(params)
    search.timeout = cfg.SEARCH_TIMEOUT
    results = search.get_dict()
    if results.get("error"):
        raise SearchError(results["error"])
    out = []
    for it in results.get("news_results") or results.get("organic_results") or []:
        out.append({
            "title": it.get("title", ""),
            "url": (it.get("link") or "").split("#")[0].strip(),
            "snippet": it.get("snippet", ""),
        })
    return out


def search_ddg(q: str, cfg: Settings) -> List[Dict[str, Any]]:
    out: List[Dict[str, Any]] = []
    with DDGS(timeout=int(cfg.SEARCH_TIMEOUT)) as ddgs:
        for r in ddgs.news(q, max_results=cfg.SEARCH_MAX_RESULTS) or []:
            if not r or not r.get("url"):
                continue
            out.append({
                "title": (r.get("title") or "").strip(),
                "url": (r.get("url") or "").split("#")[0].strip(),
                "snippet": r.get("body") or "",
            })
    return out


PROVIDERS: Dict[str, Callable[[str, Settings], List[Dict[str, Any]]]] = {
    "newsapi": search_newsapi,
    "serpapi": search_serpapi,
    "ddg": search_ddg,
}


def to_document(it: Dict[str, Any]) -> EvidenceDocument:
    return EvidenceDocument(
        title=strip_markup(it.get("title")),
        url=(it.get("url") or "").strip(),
        snippet=strip_markup(it.get("snippet")) or NO_DESCRIPTION,
    )


def degraded_evidence(reason: str) -> List[EvidenceDocument]:
    return [EvidenceDocument(title=f"Search Error: {reason}", url=PLACEHOLDER_URL, snippet=DEGRADED_SNIPPET)]


def fetch_evidence(text: str, cfg: Settings) -> List[EvidenceDocument]:
    """Corroborating documents for ``text``, most relevant first.

    Never raises for provider trouble: any failure yields a single placeholder
    document whose title carries the reason, so callers always see a list.
    """
    provider = PROVIDERS.get(cfg.SEARCH_PROVIDER)
    q = build_query(text, cfg.SEARCH_QUERY_WORDS)
    try:
        if provider is None:
            raise SearchError(f"unknown search provider '{cfg.SEARCH_PROVIDER}'")
        raw = provider(q, cfg)
    except Exception as e:
        logger.warning("Evidence search via %s failed: %s", cfg.SEARCH_PROVIDER, e)
        return degraded_evidence(str(e) or e.__class__.__name__)
    docs = [to_document(it) for it in raw[:cfg.SEARCH_MAX_RESULTS]]
    logger.info("Evidence search via %s returned %d documents (%s)", cfg.SEARCH_PROVIDER, len(docs),
                ", ".join(sorted({domain_of(d.url) for d in docs if d.url})) or "none")
    return docs
