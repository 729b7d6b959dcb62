"""LanguageTool HTTP client."""
from __future__ import annotations

from typing import Any, Dict, List, Optional

import httpx
from pydantic import ValidationError

from textinsight.core.config import Settings
from textinsight.core.errors import GrammarCheckError
from textinsight.core.logging import LogEvent
from textinsight.models.match import GrammarCheckResult
from textinsight.services.base_service import BaseService


class GrammarService(BaseService):
    """Checks text against a LanguageTool server (public API by default)."""

    def __init__(self, settings: Optional[Settings] = None, client: Optional[httpx.AsyncClient] = None):
        super().__init__(settings)
        self._client = client
        self._owns_client = client is None

    def _initialize(self):
        self.base_url = self.settings.languagetool_base_url.rstrip("/")
        self.check_endpoint = f"{self.base_url}/v2/check"
        self.languages_endpoint = f"{self.base_url}/v2/languages"
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=httpx.Timeout(self.settings.request_timeout))

    @property
    def client(self) -> httpx.AsyncClient:
        self._ensure_initialized()
        return self._client

    def _form(self, text: str, language: str) -> Dict[str, str]:
        form = {"text": text, "language": language}
        if self.settings.languagetool_username and self.settings.languagetool_api_key:
            form["username"] = self.settings.languagetool_username
            form["apiKey"] = self.settings.languagetool_api_key
        return form

    async def check(self, text: str, language: str) -> GrammarCheckResult:
        """POST ``text`` to /v2/check and validate the response into a GrammarCheckResult."""
        client = self.client
        self.logger.info(LogEvent.GRAMMAR_CHECK_STARTED, text_length=len(text), language=language)

        try:
            response = await client.post(self.check_endpoint, data=self._form(text, language))
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            message = _upstream_message(e.response)
            self.logger.error(
                LogEvent.GRAMMAR_CHECK_FAILED,
                status_code=e.response.status_code,
                detail=message,
            )
            raise GrammarCheckError(message, upstream_status=e.response.status_code) from e
        except httpx.TimeoutException as e:
            self.logger.error(LogEvent.GRAMMAR_CHECK_FAILED, error="timeout", timeout=self.settings.request_timeout)
            raise GrammarCheckError("LanguageTool request timed out", status_code=504) from e
        except httpx.HTTPError as e:
            self.logger.error(LogEvent.GRAMMAR_CHECK_FAILED, error=str(e))
            raise GrammarCheckError("Failed to connect to LanguageTool") from e

        try:
            result = GrammarCheckResult.model_validate(
                response.json(),
                context={"key_prefix_length": self.settings.match_key_prefix_length},
            )
        except (ValueError, ValidationError) as e:
            self.logger.error(LogEvent.GRAMMAR_CHECK_FAILED, error="malformed response", detail=str(e)[:200])
            raise GrammarCheckError("LanguageTool returned a malformed response") from e

        self.logger.info(
            LogEvent.GRAMMAR_CHECK_COMPLETED,
            matches=len(result.matches),
            language=result.language.code if result.language else None,
        )
        return result

    async def list_languages(self) -> List[Dict[str, Any]]:
        client = self.client
        try:
            response = await client.get(self.languages_endpoint)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise GrammarCheckError(_upstream_message(e.response), upstream_status=e.response.status_code) from e
        except httpx.HTTPError as e:
            raise GrammarCheckError("Failed to connect to LanguageTool") from e
        return response.json()

    async def close(self) -> None:
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None
            self._initialized = False


def _upstream_message(response: httpx.Response) -> str:
    """LanguageTool reports errors as JSON ``{"message": ...}`` or as plain text."""
    try:
        data = response.json()
    except ValueError:
        data = None
    if isinstance(data, dict) and data.get("message"):
        return str(data["message"])
    text = response.text.strip()
    return text[:300] if text else f"LanguageTool responded with {response.status_code}"
