"""
分析服务 - fans a submission out to the embedding and grammar APIs and assembles the result.
"""
from __future__ import annotations

import asyncio
from typing import Dict, List, Optional

from textinsight.core.config import Settings
from textinsight.core.errors import UpstreamError
from textinsight.core.logging import LogEvent
from textinsight.models.analysis import AnalysisResult
from textinsight.models.match import GrammarCheckResult
from textinsight.services.base_service import BaseService
from textinsight.services.embedding_service import EmbeddingService
from textinsight.services.grammar_service import GrammarService
from textinsight.services.match_classifier import classify_matches
from textinsight.services.readability import compute_text_stats

SUCCESS_MESSAGE = "Content analyzed successfully"
PARTIAL_MESSAGE = "Content analyzed with partial results"


class AnalysisService(BaseService):
    """Request proxy behind POST /analyze."""

    def __init__(
        self,
        embedding_service: EmbeddingService,
        grammar_service: GrammarService,
        settings: Optional[Settings] = None,
    ):
        super().__init__(settings)
        self.embedding_service = embedding_service
        self.grammar_service = grammar_service

    def resolve_language(self, language: Optional[str]) -> str:
        """Unsupported or missing codes fall back to the default language."""
        if language in self.settings.supported_languages:
            return language
        if language:
            self.logger.info(LogEvent.LANGUAGE_FALLBACK, requested=language, used=self.settings.default_language)
        return self.settings.default_language

    async def analyze(self, content: str, language: Optional[str] = None) -> AnalysisResult:
        lang = self.resolve_language(language)
        self.logger.info(LogEvent.ANALYSIS_STARTED, text_length=len(content), language=lang)

        # both calls run to completion; a single join point
        embedding, grammar = await asyncio.gather(
            self.embedding_service.embed_text(content),
            self.grammar_service.check(content, lang),
            return_exceptions=True,
        )

        errors: Dict[str, str] = {}
        for name, outcome in (("embedding", embedding), ("grammar", grammar)):
            if isinstance(outcome, BaseException):
                if not self.settings.partial_results or not isinstance(outcome, UpstreamError):
                    self.logger.error(LogEvent.ANALYSIS_FAILED, failed=name, error=str(outcome))
                    raise outcome
                errors[name] = outcome.message

        if len(errors) == 2:
            self.logger.error(LogEvent.ANALYSIS_FAILED, failed="all", errors=errors)
            raise grammar

        return self._build_result(
            content,
            embedding=None if "embedding" in errors else embedding,
            grammar=None if "grammar" in errors else grammar,
            errors=errors,
        )

    def _build_result(
        self,
        content: str,
        embedding: Optional[List[float]],
        grammar: Optional[GrammarCheckResult],
        errors: Dict[str, str],
    ) -> AnalysisResult:
        stats = compute_text_stats(content)
        matches = list(grammar.matches) if grammar is not None else None
        groups = classify_matches(matches).to_model() if matches is not None else None

        self.logger.info(
            LogEvent.ANALYSIS_COMPLETED,
            matches=len(matches) if matches is not None else None,
            readability=stats.readability.score,
            partial=bool(errors),
        )
        return AnalysisResult(
            success=True,
            message=PARTIAL_MESSAGE if errors else SUCCESS_MESSAGE,
            embedding=embedding,
            corrections=matches,
            language=grammar.language if grammar is not None else None,
            stats=stats,
            groups=groups,
            errors=errors or None,
        )


async def analyze_once(content: str, language: Optional[str] = None, settings: Optional[Settings] = None) -> AnalysisResult:
    """Run one analysis with short-lived clients (callers that own their event loop, e.g. the Streamlit tool)."""
    embedding_service = EmbeddingService(settings)
    grammar_service = GrammarService(settings)
    try:
        service = AnalysisService(embedding_service, grammar_service, settings)
        return await service.analyze(content, language)
    finally:
        await embedding_service.close()
        await grammar_service.close()
