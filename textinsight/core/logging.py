"""
结构化日志配置模块 - 使用structlog
遵循清晰性原则：日志即文档，提供有意义的上下文
"""
import logging
import sys
from typing import Any

import structlog
from structlog.types import FilteringBoundLogger, Processor


def configure_logging(level: str = "INFO", json_logs: bool = True) -> None:
    """
    配置结构化日志系统

    Args:
        level: 日志级别 (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_logs: 是否输出JSON格式日志
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    processors: list[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if json_logs:
        # 生产环境：JSON格式
        processors.append(structlog.processors.JSONRenderer())
    else:
        # 开发环境：彩色控制台输出
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
    )
    logging.getLogger().setLevel(log_level)


def get_logger(name: str, **initial_context: Any) -> FilteringBoundLogger:
    """
    获取结构化日志记录器

    Args:
        name: 日志记录器名称（通常使用模块名）
        **initial_context: 初始上下文数据
    """
    logger = structlog.get_logger(name)
    if initial_context:
        logger = logger.bind(**initial_context)
    return logger


class LogEvent:
    """标准化的日志事件类型"""

    # 应用生命周期
    APP_STARTED = "app_started"
    APP_STOPPED = "app_stopped"

    # API请求
    REQUEST_COMPLETED = "request_completed"
    REQUEST_FAILED = "request_failed"

    # 外部服务
    EMBEDDING_STARTED = "embedding_started"
    EMBEDDING_COMPLETED = "embedding_completed"
    EMBEDDING_FAILED = "embedding_failed"

    GRAMMAR_CHECK_STARTED = "grammar_check_started"
    GRAMMAR_CHECK_COMPLETED = "grammar_check_completed"
    GRAMMAR_CHECK_FAILED = "grammar_check_failed"

    # 业务逻辑
    ANALYSIS_STARTED = "analysis_started"
    ANALYSIS_COMPLETED = "analysis_completed"
    ANALYSIS_FAILED = "analysis_failed"
    LANGUAGE_FALLBACK = "language_fallback"
    REPLACEMENT_APPLIED = "replacement_applied"

    # 健康检查
    READINESS_CHECK_FAILED = "readiness_check_failed"


def create_request_logger(request_id: str) -> FilteringBoundLogger:
    """创建请求级别的日志记录器"""
    return get_logger("request", request_id=request_id)
