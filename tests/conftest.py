from types import SimpleNamespace

import pytest

from newsverdict.core.config import Settings
from newsverdict.models.evidence import EvidenceDocument


class FakeChatModel:
    """Stands in for a LangChain chat model: records prompts, replays a reply."""

    def __init__(self, reply=None, error=None):
        self.reply = reply
        self.error = error
        self.calls = []

    def invoke(self, messages):
        self.calls.append(messages)
        if self.error is not None:
            raise self.error
        return SimpleNamespace(content=self.reply)


@pytest.fixture
def offline_settings():
    """Settings with no credentials at all."""
    return Settings()


@pytest.fixture
def official_doc():
    return EvidenceDocument(
        title="Health agency update",
        url="https://www.cdc.gov/media/releases/update.html",
        snippet="Agency publishes its quarterly figures.",
    )


@pytest.fixture
def plain_doc():
    return EvidenceDocument(
        title="Local paper covers the story",
        url="https://example-news.com/story",
        snippet="A reporter followed up on the claim.",
    )


@pytest.fixture
def fake_llm():
    return FakeChatModel
