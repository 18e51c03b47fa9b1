from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from .evidence import EvidenceDocument


class Verdict(str, Enum):
    REAL = "REAL"
    FAKE = "FAKE"
    UNKNOWN = "UNKNOWN"


@dataclass(frozen=True)
class ScoredOpinion:
    verdict: Verdict
    confidence: float
    explanation: Optional[str] = None

    @property
    def degraded(self) -> bool:
        return self.verdict is Verdict.UNKNOWN


@dataclass(frozen=True)
class HeuristicOpinion:
    opinion: ScoredOpinion
    has_official_sources: bool
    fake_score: float = 0.0
    real_score: float = 0.0


@dataclass(frozen=True)
class AnalysisResult:
    result: Verdict
    confidence: int
    has_official_sources: bool
    search_results: Tuple[EvidenceDocument, ...]
    explanation: str

    def __post_init__(self):
        if self.result is Verdict.UNKNOWN:
            raise ValueError("final result must be REAL or FAKE")
        if not 0 <= self.confidence <= 100:
            raise ValueError(f"confidence out of range: {self.confidence}")

    @property
    def sources_found(self) -> int:
        return len(self.search_results)

    def to_dict(self) -> dict:
        return {
            "result": self.result.value,
            "confidence": self.confidence,
            "hasOfficialSources": self.has_official_sources,
            "sourcesFound": self.sources_found,
            "searchResults": [d.to_dict() for d in self.search_results],
            "explanation": self.explanation,
        }
