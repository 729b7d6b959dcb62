import pytest
from pydantic import ValidationError

from textinsight.core.config import Environment, Settings


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("REQUEST_TIMEOUT", "3.5")
    monkeypatch.setenv("SUPPORTED_LANGUAGES", '["en", "de"]')
    monkeypatch.setenv("PARTIAL_RESULTS", "true")

    settings = Settings()

    assert settings.embedding_api_key == "test-key"
    assert settings.environment == Environment.TEST
    assert settings.request_timeout == 3.5
    assert settings.supported_languages == ["en", "de"]
    assert settings.partial_results is True


def test_embedding_api_key_is_required(monkeypatch):
    monkeypatch.delenv("EMBEDDING_API_KEY")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_default_language_must_be_supported():
    with pytest.raises(ValidationError):
        Settings(embedding_api_key="k", supported_languages=["fr"], default_language="en")


def test_timeout_must_be_positive():
    with pytest.raises(ValidationError):
        Settings(embedding_api_key="k", request_timeout=0)


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("", ["*"]),
        ("http://a.test", ["http://a.test"]),
        ("http://a.test, http://b.test ,", ["http://a.test", "http://b.test"]),
    ],
)
def test_cors_origins(raw, expected):
    assert Settings(embedding_api_key="k", cors_allow_origins=raw).get_cors_origins() == expected


def test_development_flag():
    assert Settings(embedding_api_key="k", environment="development").is_development
    assert not Settings(embedding_api_key="k", environment="production").is_development
