"""
错误处理模块 - 定义自定义异常类和错误处理逻辑
遵循简单性原则：清晰的错误分类和有意义的错误消息
"""
from enum import Enum
from typing import Optional, Any, Dict
from fastapi import status


class ErrorCode(str, Enum):
    """错误代码枚举"""
    # 客户端错误
    INVALID_INPUT = "INVALID_INPUT"
    STALE_MATCH = "STALE_MATCH"

    # 服务端错误
    INTERNAL_ERROR = "INTERNAL_ERROR"

    # 外部服务错误
    UPSTREAM_ERROR = "UPSTREAM_ERROR"
    EMBEDDING_FAILED = "EMBEDDING_FAILED"
    GRAMMAR_CHECK_FAILED = "GRAMMAR_CHECK_FAILED"


class BaseApplicationError(Exception):
    """应用基础异常类"""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.status_code = status_code
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典格式"""
        return {
            "error": self.message,
            "code": self.error_code.value,
            "details": self.details
        }


# 客户端错误 (4xx)
class InvalidInputError(BaseApplicationError):
    """输入验证错误"""
    def __init__(self, message: str, field: Optional[str] = None, value: Any = None):
        details = {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = str(value)

        super().__init__(
            message=message,
            error_code=ErrorCode.INVALID_INPUT,
            details=details,
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY
        )


class StaleMatchError(BaseApplicationError):
    """The match span no longer lines up with the submitted content."""
    def __init__(self, message: str, offset: int, length: int):
        super().__init__(
            message=message,
            error_code=ErrorCode.STALE_MATCH,
            details={"offset": offset, "length": length},
            status_code=status.HTTP_409_CONFLICT
        )


# 外部服务错误
class UpstreamError(BaseApplicationError):
    """Failure of a third-party API call.

    ``upstream_status`` is the status code reported by the remote service, when
    there was one; it becomes the response status so clients see what the
    upstream said.
    """
    service_name = "upstream"

    def __init__(
        self,
        message: str,
        upstream_status: Optional[int] = None,
        error_code: ErrorCode = ErrorCode.UPSTREAM_ERROR,
        status_code: Optional[int] = None,
    ):
        details: Dict[str, Any] = {"service": self.service_name}
        if upstream_status is not None:
            details["upstream_status"] = upstream_status
        if status_code is None:
            status_code = upstream_status or status.HTTP_502_BAD_GATEWAY
        self.upstream_status = upstream_status
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
            status_code=status_code
        )


class EmbeddingError(UpstreamError):
    """嵌入生成错误"""
    service_name = "embedding"

    def __init__(self, message: str, upstream_status: Optional[int] = None, status_code: Optional[int] = None):
        super().__init__(
            message=message,
            upstream_status=upstream_status,
            error_code=ErrorCode.EMBEDDING_FAILED,
            status_code=status_code,
        )


class GrammarCheckError(UpstreamError):
    """LanguageTool check failure"""
    service_name = "languagetool"

    def __init__(self, message: str, upstream_status: Optional[int] = None, status_code: Optional[int] = None):
        super().__init__(
            message=message,
            upstream_status=upstream_status,
            error_code=ErrorCode.GRAMMAR_CHECK_FAILED,
            status_code=status_code,
        )
