from functools import lru_cache
from typing import Callable, Type, TypeVar

from fastapi import Depends, Request
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError

from textinsight.core.config import Settings, get_settings
from textinsight.services import ServiceFactory
from textinsight.services.analysis_service import AnalysisService
from textinsight.services.embedding_service import EmbeddingService
from textinsight.services.grammar_service import GrammarService
from textinsight.services.health_service import HealthService

ModelT = TypeVar("ModelT", bound=BaseModel)


@lru_cache()
def get_embedding_service() -> EmbeddingService:
    """获取嵌入服务单例"""
    return ServiceFactory.get_embedding_service(get_settings())


@lru_cache()
def get_grammar_service() -> GrammarService:
    """获取语法检查服务单例"""
    return ServiceFactory.get_grammar_service(get_settings())


def get_analysis_service(
    embedding_service: EmbeddingService = Depends(get_embedding_service),
    grammar_service: GrammarService = Depends(get_grammar_service),
    settings: Settings = Depends(get_settings),
) -> AnalysisService:
    """组装分析服务"""
    return ServiceFactory.get_analysis_service(embedding_service, grammar_service, settings)


@lru_cache()
def _health_service() -> HealthService:
    return ServiceFactory.get_health_service(get_grammar_service(), get_settings())


def get_health_service() -> HealthService:
    """健康检查服务 - keeps its start time across requests"""
    return _health_service()


async def close_services() -> None:
    """Close the HTTP clients of cached services (application shutdown)."""
    if get_grammar_service.cache_info().currsize:
        await get_grammar_service().close()
    if get_embedding_service.cache_info().currsize:
        await get_embedding_service().close()


def match_body(model: Type[ModelT]) -> Callable:
    """请求体校验 - matches in the body get keys built with the configured prefix length"""
    async def dependency(request: Request, settings: Settings = Depends(get_settings)) -> ModelT:
        try:
            body = await request.json()
        except ValueError:
            raise RequestValidationError(
                [{"type": "json_invalid", "loc": ("body",), "msg": "JSON decode error", "input": None}]
            )
        try:
            return model.model_validate(body, context={"key_prefix_length": settings.match_key_prefix_length})
        except ValidationError as e:
            raise RequestValidationError(
                [{**error, "loc": ("body", *error["loc"])} for error in e.errors(include_url=False)]
            )

    return dependency
