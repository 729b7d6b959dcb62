"""
Shared fixtures: settings, LanguageTool payloads, fake upstream clients.
"""
import os
import sys
from types import SimpleNamespace

import httpx
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

# Set test environment BEFORE importing the application
os.environ["EMBEDDING_API_KEY"] = "test-key"
os.environ["ENVIRONMENT"] = "test"
os.environ["LANGUAGETOOL_BASE_URL"] = "http://languagetool.test"
os.environ["PARTIAL_RESULTS"] = "false"

from textinsight.core.config import Settings, get_settings  # noqa: E402
from textinsight.models.match import Match  # noqa: E402
from textinsight.services.embedding_service import EmbeddingService  # noqa: E402
from textinsight.services.grammar_service import GrammarService  # noqa: E402

get_settings.cache_clear()

STORE_TEXT = "Their going to the store."


def languagetool_match(
    offset=0,
    length=5,
    message="Did you mean 'They're'?",
    replacements=("They're",),
    sentence=STORE_TEXT,
    context_text=None,
    rule_id="THEIR_IS",
):
    context_text = context_text if context_text is not None else sentence
    return {
        "message": message,
        "shortMessage": "Grammar",
        "replacements": [{"value": value} for value in replacements],
        "offset": offset,
        "length": length,
        "context": {"text": context_text, "offset": offset, "length": length},
        "sentence": sentence,
        "type": {"typeName": "Other"},
        "rule": {"id": rule_id, "issueType": "grammar", "category": {"id": "GRAMMAR", "name": "Grammar"}},
    }


def languagetool_payload(*matches):
    return {
        "software": {"name": "LanguageTool", "version": "6.5"},
        "language": {
            "name": "English (US)",
            "code": "en-US",
            "detectedLanguage": {"name": "English (US)", "code": "en-US", "confidence": 0.99},
        },
        "matches": list(matches),
    }


def make_match(**overrides) -> Match:
    return Match.model_validate(languagetool_match(**overrides))


class FakeEmbeddings:
    def __init__(self, vector=None, error=None):
        self.vector = vector if vector is not None else [0.1, 0.2, 0.3]
        self.error = error
        self.calls = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return SimpleNamespace(data=[SimpleNamespace(embedding=self.vector, index=0)])


class FakeEmbeddingClient:
    """Stands in for openai.AsyncOpenAI: only ``embeddings.create`` is used."""

    def __init__(self, vector=None, error=None):
        self.embeddings = FakeEmbeddings(vector, error)
        self.closed = False

    async def close(self):
        self.closed = True


class LanguageToolStub:
    """httpx.MockTransport handler recording requests and replaying a canned response."""

    def __init__(self, payload=None, status_code=200, exc=None):
        self.payload = payload if payload is not None else languagetool_payload()
        self.status_code = status_code
        self.exc = exc
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.exc is not None:
            raise self.exc
        if isinstance(self.payload, str):
            return httpx.Response(self.status_code, text=self.payload)
        return httpx.Response(self.status_code, json=self.payload)

    @property
    def last_form(self):
        from urllib.parse import parse_qs
        body = self.requests[-1].content.decode()
        return {key: values[0] for key, values in parse_qs(body).items()}


@pytest.fixture
def settings() -> Settings:
    return Settings(
        embedding_api_key="test-key",
        environment="test",
        languagetool_base_url="http://languagetool.test",
    )


@pytest.fixture
def store_match() -> Match:
    return make_match()


@pytest.fixture
def languagetool_stub() -> LanguageToolStub:
    return LanguageToolStub(languagetool_payload(languagetool_match()))


@pytest.fixture
def grammar_service(settings, languagetool_stub) -> GrammarService:
    client = httpx.AsyncClient(transport=httpx.MockTransport(languagetool_stub))
    return GrammarService(settings, client=client)


@pytest.fixture
def embedding_client() -> FakeEmbeddingClient:
    return FakeEmbeddingClient()


@pytest.fixture
def embedding_service(settings, embedding_client) -> EmbeddingService:
    return EmbeddingService(settings, client=embedding_client)
