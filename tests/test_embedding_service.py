import httpx
import openai
import pytest
from conftest import FakeEmbeddingClient

from textinsight.core.errors import EmbeddingError
from textinsight.services.embedding_service import EmbeddingService

REQUEST = httpx.Request("POST", "https://api.cohere.ai/compatibility/v1/embeddings")


def _status_error(status_code, body):
    response = httpx.Response(status_code, json=body, request=REQUEST)
    return openai.APIStatusError("upstream rejected the request", response=response, body=body)


@pytest.mark.asyncio
async def test_embed_text_returns_vector(embedding_service, embedding_client, settings):
    vector = await embedding_service.embed_text("Their going to the store.")

    assert vector == [0.1, 0.2, 0.3]
    call = embedding_client.embeddings.calls[0]
    assert call["input"] == ["Their going to the store."]
    assert call["model"] == settings.embedding_model
    assert call["encoding_format"] == "float"


@pytest.mark.asyncio
async def test_status_error_carries_upstream_status(settings):
    client = FakeEmbeddingClient(error=_status_error(401, {"message": "invalid api token"}))

    with pytest.raises(EmbeddingError) as excinfo:
        await EmbeddingService(settings, client=client).embed_text("text")

    assert excinfo.value.status_code == 401
    assert excinfo.value.message == "invalid api token"
    assert excinfo.value.details["service"] == "embedding"


@pytest.mark.asyncio
async def test_openai_style_error_body(settings):
    body = {"error": {"message": "model not found", "type": "invalid_request_error"}}
    client = FakeEmbeddingClient(error=_status_error(404, body))

    with pytest.raises(EmbeddingError) as excinfo:
        await EmbeddingService(settings, client=client).embed_text("text")

    assert excinfo.value.message == "model not found"


@pytest.mark.asyncio
async def test_timeout_maps_to_gateway_timeout(settings):
    client = FakeEmbeddingClient(error=openai.APITimeoutError(request=REQUEST))

    with pytest.raises(EmbeddingError) as excinfo:
        await EmbeddingService(settings, client=client).embed_text("text")

    assert excinfo.value.status_code == 504


@pytest.mark.asyncio
async def test_connection_error_is_bad_gateway(settings):
    client = FakeEmbeddingClient(error=openai.APIConnectionError(request=REQUEST))

    with pytest.raises(EmbeddingError) as excinfo:
        await EmbeddingService(settings, client=client).embed_text("text")

    assert excinfo.value.status_code == 502


@pytest.mark.asyncio
async def test_injected_client_is_not_closed(embedding_service, embedding_client):
    await embedding_service.close()
    assert not embedding_client.closed


def test_default_client_uses_configured_endpoint(settings):
    service = EmbeddingService(settings)
    service._ensure_initialized()

    assert isinstance(service.client, openai.AsyncOpenAI)
    assert str(service.client.base_url).startswith(settings.embedding_base_url)
    assert service.client.timeout == settings.request_timeout
