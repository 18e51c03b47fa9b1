# Keyword/heuristic credibility scoring
from __future__ import annotations
from typing import Iterable
import re

from .utils import clamp, round_half_up
from ..core.config import HeuristicConfig
from ..models.evidence import EvidenceDocument
from ..models.verdict import HeuristicOpinion, ScoredOpinion, Verdict

YEAR_RE = re.compile(r"\b[0-9]{4}\b")


def has_official_sources(evidence: Iterable[EvidenceDocument], cfg: HeuristicConfig) -> bool:
    for d in evidence:
        url = d.url or ""
        if any(m in url for m in cfg.official_url_markers):
            return True
        if cfg.official_title_marker in (d.title or "").lower():
            return True
    return False


def score(text: str, evidence: Iterable[EvidenceDocument], cfg: HeuristicConfig) -> HeuristicOpinion:
    """Score ``text`` on keyword and structural cues.

    Total: any text, including an empty one, yields an opinion. Confidence
    never exceeds ``cfg.confidence_ceiling`` since keyword matches alone are
    not conclusive.
    """
    words = text.lower().split()
    fake_score = 0.0
    real_score = 0.0
    for w in words:
        if w in cfg.fake_keywords:
            fake_score += cfg.keyword_weight
        if w in cfg.real_keywords:
            real_score += cfg.keyword_weight

    if "!" in text or "?" in text:
        fake_score += cfg.punctuation_weight
    if YEAR_RE.search(text):
        real_score += cfg.year_weight
    if len(words) > cfg.long_text_words:
        real_score += cfg.long_text_weight

    official = has_official_sources(evidence, cfg)
    if official:
        real_score += cfg.official_source_weight

    total = fake_score + real_score
    if total > 0:
        confidence = min(abs(fake_score - real_score) / total * 100, cfg.confidence_ceiling)
    else:
        confidence = cfg.neutral_confidence

    if fake_score > real_score:
        verdict = Verdict.FAKE
    elif real_score > fake_score:
        verdict = Verdict.REAL
    else:
        # tie: lean on corroboration, and trust the guess less
        verdict = Verdict.REAL if official else Verdict.FAKE
        confidence = max(confidence - cfg.tie_penalty, cfg.tie_floor)

    opinion = ScoredOpinion(verdict=verdict, confidence=round_half_up(clamp(confidence)))
    return HeuristicOpinion(opinion=opinion, has_official_sources=official,
                            fake_score=fake_score, real_score=real_score)
