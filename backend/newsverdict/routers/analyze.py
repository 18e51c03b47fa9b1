from functools import lru_cache
from typing import List, Optional
import logging
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from ..core.config import Settings, settings
from ..services import search as search_svc
from ..services import heuristic as heuristic_svc
from ..services.fusion import fuse
from ..services.oracle import OracleAdvisor

logger = logging.getLogger(__name__)

router = APIRouter(tags=["analyze"])

class RequestBody(BaseModel):
    newsText: Optional[str] = None

class SearchResult(BaseModel):
    title: str
    url: str
    snippet: str

class AnalysisResponse(BaseModel):
    result: str
    confidence: int
    hasOfficialSources: bool
    sourcesFound: int
    searchResults: List[SearchResult]
    explanation: str

EMPTY_TEXT_ERROR = "News text is required"

def empty_text_response() -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": EMPTY_TEXT_ERROR})

def get_settings() -> Settings:
    return settings

@lru_cache(maxsize=4)
def get_oracle(cfg: Settings = Depends(get_settings)) -> OracleAdvisor:
    return OracleAdvisor.from_settings(cfg)

@router.post("/analyze", response_model=AnalysisResponse,
             responses={400: {"description": EMPTY_TEXT_ERROR}})
def analyze(req: Optional[RequestBody] = None, cfg: Settings = Depends(get_settings),
            oracle: OracleAdvisor = Depends(get_oracle)):
    text = ((req.newsText if req else None) or "").strip()
    if not text:
        return empty_text_response()
    # 1) evidence (embedded in the oracle prompt, so first)
    evidence = search_svc.fetch_evidence(text, cfg)
    # 2) keyword heuristic
    heuristic = heuristic_svc.score(text, evidence, cfg.heuristics)
    # 3) oracle
    opinion = oracle.advise(text, evidence)
    # 4) fusion
    result = fuse(heuristic, opinion, evidence)
    logger.info("Analyzed %d chars: %s (%d%%) via %s, %d sources, official=%s",
                len(text), result.result.value, result.confidence,
                "heuristic" if opinion.degraded else "oracle",
                result.sources_found, result.has_official_sources)
    return result.to_dict()
