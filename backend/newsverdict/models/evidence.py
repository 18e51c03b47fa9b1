from dataclasses import dataclass, asdict
from typing import Dict, List

PLACEHOLDER_URL = "#"

@dataclass(frozen=True)
class EvidenceDocument:
    title: str
    url: str
    snippet: str

    @property
    def is_placeholder(self) -> bool:
        return self.url == PLACEHOLDER_URL

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)

EvidenceSet = List[EvidenceDocument]
