from __future__ import annotations
from typing import Sequence

from .utils import clamp, round_half_up
from ..models.evidence import EvidenceDocument
from ..models.verdict import AnalysisResult, HeuristicOpinion, ScoredOpinion

FALLBACK_EXPLANATION = "AI analysis unavailable, using keyword-based analysis."


def fuse(heuristic: HeuristicOpinion, oracle: ScoredOpinion,
         evidence: Sequence[EvidenceDocument]) -> AnalysisResult:
    """Final result: the oracle when it answered, else the keyword heuristic.

    Official-source flag and evidence always come from the evidence step,
    whichever opinion wins.
    """
    if not oracle.degraded:
        verdict, confidence, explanation = oracle.verdict, oracle.confidence, oracle.explanation or ""
    else:
        h = heuristic.opinion
        verdict, confidence, explanation = h.verdict, h.confidence, FALLBACK_EXPLANATION
    return AnalysisResult(
        result=verdict,
        confidence=round_half_up(clamp(confidence)),
        has_official_sources=heuristic.has_official_sources,
        search_results=tuple(evidence),
        explanation=explanation,
    )
