"""
中间件模块 - 请求追踪与全局错误处理
遵循清晰性原则：统一的错误响应格式
"""
import time
from typing import Callable
from uuid import uuid4

from fastapi import Request, Response, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.exceptions import HTTPException

from textinsight.core.config import get_settings
from textinsight.core.errors import BaseApplicationError
from textinsight.core.logging import LogEvent, create_request_logger, get_logger

logger = get_logger(__name__)

GENERIC_FAILURE = "Failed to connect to API"


class RequestContextMiddleware(BaseHTTPMiddleware):
    """请求ID与耗时"""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid4())
        request.state.request_id = request_id
        request_logger = create_request_logger(request_id)

        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Process-Time"] = str(process_time)
        request_logger.info(
            LogEvent.REQUEST_COMPLETED,
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration=round(process_time, 4),
        )
        return response


def _failure(status_code: int, body: dict) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, **body})


async def application_error_handler(request: Request, exc: BaseApplicationError) -> JSONResponse:
    """应用异常 -> 统一失败响应"""
    logger.warning(
        LogEvent.REQUEST_FAILED,
        path=request.url.path,
        error_code=exc.error_code.value,
        error=exc.message,
    )
    return _failure(exc.status_code, exc.to_dict())


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return _failure(
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        {"message": "Invalid input", "errors": jsonable_encoder(exc.errors())},
    )


async def error_handler(request: Request, exc: Exception) -> JSONResponse:
    """全局错误处理"""
    if isinstance(exc, HTTPException):
        return _failure(exc.status_code, {"error": exc.detail})

    logger.error(LogEvent.REQUEST_FAILED, path=request.url.path, error=str(exc), exc_info=exc)
    error_detail = str(exc) if get_settings().is_development else GENERIC_FAILURE
    return _failure(status.HTTP_500_INTERNAL_SERVER_ERROR, {"error": error_detail})
