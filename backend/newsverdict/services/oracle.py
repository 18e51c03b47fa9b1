# LLM verdict: prompt building, reply validation, degraded fallback
from __future__ import annotations
from typing import List, Optional, Any
import json, logging, math, re
from langchain_openai import AzureChatOpenAI, ChatOpenAI
from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import SystemMessage, HumanMessage

from .utils import clamp
from ..core.config import Settings
from ..models.evidence import EvidenceDocument
from ..models.verdict import ScoredOpinion, Verdict

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = "You are a fact-checking AI that analyzes news for authenticity."
DEGRADED_EXPLANATION = "oracle unavailable, fallback to heuristic"
DEGRADED = ScoredOpinion(verdict=Verdict.UNKNOWN, confidence=50, explanation=DEGRADED_EXPLANATION)

FENCE_RE = re.compile(r"^```[a-zA-Z]*\s*|\s*```$")
OBJECT_RE = re.compile(r"\{.*\}", re.DOTALL)


class OracleReplyError(ValueError):
    pass


def format_evidence(evidence: List[EvidenceDocument]) -> str:
    return "\n\n".join(f"Title: {d.title}\nSnippet: {d.snippet}\nURL: {d.url}" for d in evidence)


def build_prompt(text: str, evidence: List[EvidenceDocument]) -> str:
    return (
        "Analyze the following news text and determine if it's likely fake or real news. "
        "Use the provided search results as context to verify the claims.\n\n"
        f'News Text: "{text}"\n\n'
        f"Search Results:\n{format_evidence(evidence)}\n\n"
        "Please provide:\n"
        '1. A verdict: "REAL" or "FAKE"\n'
        "2. Confidence level (0-100%)\n"
        "3. A brief explanation of your reasoning\n\n"
        "Format your response as JSON:\n"
        "{\n"
        '  "verdict": "REAL" or "FAKE",\n'
        '  "confidence": 85,\n'
        '  "explanation": "Brief explanation here"\n'
        "}"
    )


def _confidence(v: Any) -> float:
    if isinstance(v, bool):
        raise OracleReplyError("confidence must be a number")
    if isinstance(v, str):
        v = v.strip().rstrip("%")
    try:
        num = float(v)
    except (TypeError, ValueError):
        raise OracleReplyError(f"confidence is not numeric: {v!r}")
    if math.isnan(num):
        raise OracleReplyError("confidence is NaN")
    return clamp(num)


def parse_reply(raw: Any) -> ScoredOpinion:
    """Validate an oracle reply and normalize it into an opinion.

    Raises ``OracleReplyError`` when the reply is unusable.
    """
    if isinstance(raw, str):
        txt = FENCE_RE.sub("", raw.strip())
        try:
            data = json.loads(txt)
        except json.JSONDecodeError:
            m = OBJECT_RE.search(txt)
            if not m:
                raise OracleReplyError("reply is not JSON")
            try:
                data = json.loads(m.group(0))
            except json.JSONDecodeError as e:
                raise OracleReplyError(f"reply is not JSON: {e}")
    else:
        data = raw
    if not isinstance(data, dict):
        raise OracleReplyError("reply is not a JSON object")

    verdict = data.get("verdict")
    if not isinstance(verdict, str) or verdict.strip().upper() not in (Verdict.REAL.value, Verdict.FAKE.value):
        raise OracleReplyError(f"unusable verdict: {verdict!r}")
    if "confidence" not in data:
        raise OracleReplyError("missing confidence")
    explanation = data.get("explanation")
    return ScoredOpinion(
        verdict=Verdict(verdict.strip().upper()),
        confidence=_confidence(data["confidence"]),
        explanation="" if explanation is None else str(explanation),
    )


def build_chat_llm(cfg: Settings) -> Optional[BaseChatModel]:
    """Chat model for the configured credentials, or None when none are set."""
    common = dict(temperature=cfg.ORACLE_TEMPERATURE, max_tokens=cfg.ORACLE_MAX_TOKENS,
                  timeout=cfg.ORACLE_TIMEOUT, max_retries=0)
    if cfg.use_azure:
        return AzureChatOpenAI(
            model=cfg.AZURE_CHAT_DEP,
            api_key=cfg.AZURE_KEY,
            azure_endpoint=cfg.AZURE_ENDPOINT,
            api_version=cfg.AZURE_API_VERSION,
            **common,
        )
    if cfg.OPENAI_API_KEY:
        return ChatOpenAI(model=cfg.OPENAI_MODEL, api_key=cfg.OPENAI_API_KEY, **common)
    logger.warning("No OpenAI or Azure OpenAI credentials configured; oracle verdicts disabled")
    return None


class OracleAdvisor:
    def __init__(self, llm: Optional[BaseChatModel]):
        self.llm = llm

    @classmethod
    def from_settings(cls, cfg: Settings) -> "OracleAdvisor":
        return cls(build_chat_llm(cfg))

    def advise(self, text: str, evidence: List[EvidenceDocument]) -> ScoredOpinion:
        """Oracle opinion on ``text``; ``DEGRADED`` instead of any failure."""
        if self.llm is None:
            logger.warning("Oracle skipped: OPENAI_API_KEY not found in environment variables")
            return DEGRADED
        messages = [SystemMessage(content=SYSTEM_PROMPT), HumanMessage(content=build_prompt(text, evidence))]
        try:
            out = self.llm.invoke(messages).content
        except Exception as e:
            logger.warning("Oracle request failed: %s", e)
            return DEGRADED
        try:
            return parse_reply(out if isinstance(out, str) else str(out))
        except OracleReplyError as e:
            logger.warning("Oracle reply rejected: %s", e)
            return DEGRADED
