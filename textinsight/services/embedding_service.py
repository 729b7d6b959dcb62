"""
嵌入服务 - OpenAI兼容的文本嵌入服务
"""
from typing import Any, List, Optional

import openai

from textinsight.core.config import Settings
from textinsight.core.errors import EmbeddingError
from textinsight.core.logging import LogEvent
from textinsight.services.base_service import BaseService


class EmbeddingService(BaseService):
    """OpenAI嵌入服务 - 保持简单"""

    def __init__(self, settings: Optional[Settings] = None, client: Optional[Any] = None):
        super().__init__(settings)
        self.client = client
        self._owns_client = client is None

    def _initialize(self):
        """初始化OpenAI客户端"""
        if self.client is None:
            self.client = openai.AsyncOpenAI(
                api_key=self.settings.embedding_api_key,
                base_url=self.settings.embedding_base_url,
                timeout=self.settings.request_timeout,
            )
        self.model = self.settings.embedding_model

    async def embed_text(self, text: str) -> List[float]:
        """单文本嵌入"""
        self._ensure_initialized()
        self.logger.info(LogEvent.EMBEDDING_STARTED, text_length=len(text), model=self.model)
        try:
            response = await self.client.embeddings.create(
                input=[text],
                model=self.model,
                encoding_format="float",
            )
        except openai.APITimeoutError as e:
            self.logger.error(LogEvent.EMBEDDING_FAILED, error="timeout", timeout=self.settings.request_timeout)
            raise EmbeddingError("Embedding request timed out", status_code=504) from e
        except openai.APIStatusError as e:
            message = _status_error_message(e)
            self.logger.error(LogEvent.EMBEDDING_FAILED, status_code=e.status_code, detail=message)
            raise EmbeddingError(message, upstream_status=e.status_code) from e
        except openai.APIError as e:
            self.logger.error(LogEvent.EMBEDDING_FAILED, error=str(e))
            raise EmbeddingError("Failed to connect to embedding API") from e

        if not response.data:
            self.logger.error(LogEvent.EMBEDDING_FAILED, error="empty response")
            raise EmbeddingError("Embedding API returned no vectors")

        embedding = [float(value) for value in response.data[0].embedding]
        self.logger.info(LogEvent.EMBEDDING_COMPLETED, dimensions=len(embedding))
        return embedding

    async def close(self) -> None:
        if self._owns_client and self.client is not None:
            await self.client.close()
            self.client = None
            self._initialized = False


def _status_error_message(error: "openai.APIStatusError") -> str:
    body = error.body
    if isinstance(body, dict):
        message = body.get("message")
        if not message and isinstance(body.get("error"), dict):
            message = body["error"].get("message")
        if message:
            return str(message)
    return error.message or f"Embedding API responded with {error.status_code}"
