from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from prometheus_fastapi_instrumentator import Instrumentator
from starlette.exceptions import HTTPException

from textinsight.api.deps import close_services
from textinsight.api.v1 import analysis, health
from textinsight.core.config import get_settings
from textinsight.core.errors import BaseApplicationError
from textinsight.core.logging import LogEvent, configure_logging, get_logger
from textinsight.core.middleware import (
    RequestContextMiddleware,
    application_error_handler,
    error_handler,
    validation_error_handler,
)

settings = get_settings()
configure_logging(level=settings.log_level, json_logs=settings.json_logs)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """应用生命周期管理"""
    logger.info(
        LogEvent.APP_STARTED,
        version=settings.version,
        environment=settings.environment.value,
        api_prefix=settings.api_v1_prefix,
    )
    try:
        yield
    finally:
        # 关闭时释放 HTTP 客户端
        await close_services()
        logger.info(LogEvent.APP_STOPPED)


app = FastAPI(
    title=settings.project_name,
    version=settings.version,
    openapi_url=f"{settings.api_v1_prefix}/openapi.json",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

# 中间件配置 - 安全的 CORS 设置
origins = settings.get_cors_origins()
# 浏览器规范：当 allow_origins 为 "*" 时，不能允许 credentials
allow_credentials = settings.cors_allow_credentials and origins != ["*"]
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestContextMiddleware)

# 错误处理
app.add_exception_handler(BaseApplicationError, application_error_handler)
app.add_exception_handler(RequestValidationError, validation_error_handler)
app.add_exception_handler(HTTPException, error_handler)
app.add_exception_handler(Exception, error_handler)

# 路由注册
app.include_router(
    health.router,
    prefix=f"{settings.api_v1_prefix}/health",
    tags=["health"]
)
app.include_router(analysis.router)

# Prometheus监控
Instrumentator().instrument(app).expose(app)


@app.get("/")
async def root():
    """根路径"""
    return {
        "name": settings.project_name,
        "version": settings.version,
        "docs": "/docs",
        "api_prefix": settings.api_v1_prefix,
    }


@app.get(f"{settings.api_v1_prefix}")
async def api_root():
    """API根路径"""
    return {
        "version": "v1",
        "endpoints": {
            "health": f"{settings.api_v1_prefix}/health",
            "analyze": f"{settings.api_v1_prefix}/analyze",
            "apply": f"{settings.api_v1_prefix}/apply",
            "classify": f"{settings.api_v1_prefix}/classify",
            "readability": f"{settings.api_v1_prefix}/readability",
        }
    }
