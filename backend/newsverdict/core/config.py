import os
from dataclasses import dataclass, field
from dotenv import load_dotenv

from ..services.utils import get_env_any, normalize_endpoint

load_dotenv()

FAKE_KEYWORDS = frozenset({
    "fake", "hoax", "conspiracy", "viral", "shocking", "unbelievable", "secret",
    "exposed", "misinformation", "false", "lie", "fabricated", "scam", "fraud",
    "deception", "rumor", "speculation",
})

REAL_KEYWORDS = frozenset({
    "official", "confirmed", "source", "report", "government", "verified",
    "authentic", "reliable", "fact", "true", "evidence", "proof", "statement",
    "announcement", "declaration",
})

OFFICIAL_URL_MARKERS = ("gov", "official", "factcheck")


@dataclass(frozen=True)
class HeuristicConfig:
    fake_keywords: frozenset = FAKE_KEYWORDS
    real_keywords: frozenset = REAL_KEYWORDS
    official_url_markers: tuple = OFFICIAL_URL_MARKERS
    official_title_marker: str = "official"
    keyword_weight: float = 2.0
    punctuation_weight: float = 0.5
    year_weight: float = 0.5
    long_text_words: int = 100
    long_text_weight: float = 1.0
    official_source_weight: float = 3.0
    confidence_ceiling: float = 95.0
    tie_penalty: float = 10.0
    tie_floor: float = 20.0
    neutral_confidence: float = 50.0


@dataclass(frozen=True)
class Settings:
    NEWS_API_KEY: str | None = None
    SERPAPI_API_KEY: str | None = None
    SEARCH_PROVIDER: str = "newsapi"
    SEARCH_MAX_RESULTS: int = 5
    SEARCH_QUERY_WORDS: int = 5
    SEARCH_TIMEOUT: float = 10.0
    SEARCH_LANGUAGE: str = "en"

    OPENAI_API_KEY: str | None = None
    OPENAI_MODEL: str = "gpt-3.5-turbo"
    AZURE_ENDPOINT: str | None = None
    AZURE_KEY: str | None = None
    AZURE_API_VERSION: str = "2024-06-01"
    AZURE_CHAT_DEP: str | None = None
    ORACLE_TIMEOUT: float = 30.0
    ORACLE_TEMPERATURE: float = 0.3
    ORACLE_MAX_TOKENS: int = 500

    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: tuple = ("*",)
    PORT: int = 3000

    heuristics: HeuristicConfig = field(default_factory=HeuristicConfig)

    @classmethod
    def from_env(cls) -> "Settings":
        origins = os.getenv("CORS_ORIGINS", "*")
        return cls(
            NEWS_API_KEY=os.getenv("NEWS_API_KEY"),
            SERPAPI_API_KEY=os.getenv("SERPAPI_API_KEY"),
            SEARCH_PROVIDER=os.getenv("SEARCH_PROVIDER", "newsapi").strip().lower(),
            SEARCH_MAX_RESULTS=int(os.getenv("SEARCH_MAX_RESULTS", "5")),
            SEARCH_QUERY_WORDS=int(os.getenv("SEARCH_QUERY_WORDS", "5")),
            SEARCH_TIMEOUT=float(os.getenv("SEARCH_TIMEOUT", "10")),
            SEARCH_LANGUAGE=os.getenv("SEARCH_LANGUAGE", "en"),
            OPENAI_API_KEY=os.getenv("OPENAI_API_KEY"),
            OPENAI_MODEL=os.getenv("OPENAI_MODEL", "gpt-3.5-turbo"),
            AZURE_ENDPOINT=normalize_endpoint(os.getenv("AZURE_OPENAI_ENDPOINT")),
            AZURE_KEY=get_env_any("AZURE_OPENAI_API_KEY", "AZURE_OPENAI_KEY"),
            AZURE_API_VERSION=os.getenv("AZURE_OPENAI_API_VERSION", "2024-06-01"),
            AZURE_CHAT_DEP=get_env_any("AZURE_LLM_DEPLOYMENT", "AZURE_OPENAI_CHAT_DEPLOYMENT"),
            ORACLE_TIMEOUT=float(os.getenv("ORACLE_TIMEOUT", "30")),
            ORACLE_TEMPERATURE=float(os.getenv("ORACLE_TEMPERATURE", "0.3")),
            ORACLE_MAX_TOKENS=int(os.getenv("ORACLE_MAX_TOKENS", "500")),
            LOG_LEVEL=os.getenv("LOG_LEVEL", "INFO").upper(),
            CORS_ORIGINS=tuple(o.strip() for o in origins.split(",") if o.strip()) or ("*",),
            PORT=int(os.getenv("PORT", "3000")),
        )

    @property
    def use_azure(self) -> bool:
        return bool(self.AZURE_ENDPOINT and self.AZURE_KEY and self.AZURE_CHAT_DEP)


settings = Settings.from_env()
