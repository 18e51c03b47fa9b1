import pytest
from langchain_openai import ChatOpenAI
from fastapi.testclient import TestClient

from newsverdict.core.config import Settings
from newsverdict.main import app
from newsverdict.models.evidence import EvidenceDocument
from newsverdict.routers.analyze import get_oracle, get_settings
from newsverdict.services import heuristic as heuristic_svc
from newsverdict.services import search as search_svc
from newsverdict.services.fusion import FALLBACK_EXPLANATION
from newsverdict.services.oracle import OracleAdvisor

OFFICIAL = EvidenceDocument("Official statement on rover data", "https://www.nasa.gov/news/ice", "NASA confirms ice.")


@pytest.fixture
def client(offline_settings):
    app.dependency_overrides[get_settings] = lambda: offline_settings
    app.dependency_overrides[get_oracle] = lambda: OracleAdvisor(None)
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()


@pytest.fixture
def evidence_calls(monkeypatch):
    calls = []

    def fake_fetch(text, cfg):
        calls.append(text)
        return [OFFICIAL]

    monkeypatch.setattr(search_svc, "fetch_evidence", fake_fetch)
    return calls


@pytest.fixture
def use_oracle(fake_llm):
    def install(reply=None, error=None):
        llm = fake_llm(reply, error)
        app.dependency_overrides[get_oracle] = lambda: OracleAdvisor(llm)
        return llm
    return install


@pytest.mark.parametrize("body", [{"newsText": ""}, {"newsText": "   "}, {}, {"newsText": None}])
def test_empty_text_rejected_before_any_lookup(client, evidence_calls, use_oracle, body):
    llm = use_oracle('{"verdict": "REAL", "confidence": 90}')
    r = client.post("/analyze", json=body)
    assert r.status_code == 400
    assert r.json() == {"error": "News text is required"}
    assert evidence_calls == []
    assert llm.calls == []


def test_oracle_verdict_is_returned(client, evidence_calls, use_oracle):
    use_oracle('{"verdict": "real", "confidence": 120, "explanation": "ok"}')
    r = client.post("/analyze", json={"newsText": "Rover finds ice on Mars, hoax claims debunked"})
    assert r.status_code == 200
    data = r.json()
    assert data["result"] == "REAL"
    assert data["confidence"] == 100
    assert data["explanation"] == "ok"
    assert data["hasOfficialSources"] is True
    assert data["sourcesFound"] == len(data["searchResults"]) == 1
    assert data["searchResults"][0] == {"title": OFFICIAL.title, "url": OFFICIAL.url, "snippet": OFFICIAL.snippet}
    assert evidence_calls == ["Rover finds ice on Mars, hoax claims debunked"]


def test_unparseable_oracle_reply_falls_back(client, evidence_calls, use_oracle):
    use_oracle("As an AI I believe this is fake.")
    r = client.post("/analyze", json={"newsText": "The government officially confirmed the verified report with evidence."})
    assert r.status_code == 200
    data = r.json()
    assert data["result"] == "REAL"
    assert data["confidence"] == 95
    assert data["explanation"] == FALLBACK_EXPLANATION


def test_oracle_failure_falls_back(client, evidence_calls, use_oracle):
    use_oracle(error=ConnectionError("connection refused"))
    r = client.post("/analyze", json={"newsText": "SHOCKING secret exposed, total hoax!"})
    data = r.json()
    assert r.status_code == 200
    assert data["result"] == "FAKE"
    assert 0 <= data["confidence"] <= 100
    assert data["explanation"] == FALLBACK_EXPLANATION


def test_everything_degraded_still_answers(client):
    # no credentials: evidence placeholder and no oracle
    r = client.post("/analyze", json={"newsText": "Local team wins the cup"})
    assert r.status_code == 200
    data = r.json()
    assert data["result"] in ("REAL", "FAKE")
    assert data["sourcesFound"] == 1
    assert data["searchResults"][0]["url"] == "#"
    assert data["searchResults"][0]["title"].startswith("Search Error:")
    assert data["hasOfficialSources"] is False
    assert data["explanation"] == FALLBACK_EXPLANATION


def test_internal_fault_is_generic_500(client, evidence_calls, monkeypatch):
    def broken(*a, **kw):
        raise RuntimeError("lexicon corrupted")

    monkeypatch.setattr(heuristic_svc, "score", broken)
    r = client.post("/analyze", json={"newsText": "Anything at all"})
    assert r.status_code == 500
    assert r.json() == {"error": "Internal server error"}


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"


@pytest.mark.parametrize("request_kwargs", [
    {},
    {"content": "null", "headers": {"Content-Type": "application/json"}},
    {"content": "{not json", "headers": {"Content-Type": "application/json"}},
    {"json": {"newsText": 123}},
    {"json": {"newsText": ["a", "list"]}},
])
def test_missing_or_unusable_body_rejected(client, evidence_calls, use_oracle, request_kwargs):
    llm = use_oracle('{"verdict": "REAL", "confidence": 90}')
    r = client.post("/analyze", **request_kwargs)
    assert r.status_code == 400
    assert r.json() == {"error": "News text is required"}
    assert evidence_calls == []
    assert llm.calls == []


def test_oracle_follows_injected_settings():
    offline = get_oracle(Settings())
    assert offline.llm is None
    online = get_oracle(Settings(OPENAI_API_KEY="sk-test"))
    assert isinstance(online.llm, ChatOpenAI)
    assert get_oracle(Settings(OPENAI_API_KEY="sk-test")) is online
