"""
配置管理 - 使用Pydantic Settings实现环境变量管理
All outbound service configuration lives here and is handed to services at construction.
"""
from enum import Enum
from functools import lru_cache
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """运行环境"""
    DEVELOPMENT = "development"
    PRODUCTION = "production"
    TEST = "test"


class Settings(BaseSettings):
    """应用配置类 - 所有配置项通过环境变量管理"""

    # API配置
    api_v1_prefix: str = Field(default="/api/v1", description="API路由前缀")
    project_name: str = Field(default="Text Insight", description="项目名称")
    version: str = Field(default="1.0.0", description="版本号")
    environment: Environment = Field(default=Environment.DEVELOPMENT, description="运行环境")

    # 日志
    log_level: str = Field(default="INFO", description="日志级别")
    json_logs: bool = Field(default=False, description="Render logs as JSON")

    # Embedding (OpenAI-compatible endpoint, Cohere by default)
    embedding_api_key: str = Field(..., description="Embedding API key")
    embedding_base_url: str = Field(
        default="https://api.cohere.ai/compatibility/v1",
        description="OpenAI-compatible embedding endpoint",
    )
    embedding_model: str = Field(default="embed-multilingual-v3.0", description="嵌入模型")

    # LanguageTool
    languagetool_base_url: str = Field(
        default="https://api.languagetool.org",
        description="LanguageTool server base URL",
    )
    languagetool_username: Optional[str] = Field(default=None, description="LanguageTool premium username")
    languagetool_api_key: Optional[str] = Field(default=None, description="LanguageTool premium API key")

    # Outbound calls share one timeout policy
    request_timeout: float = Field(default=10.0, gt=0, description="请求超时时间(秒)")

    # 分析配置
    supported_languages: List[str] = Field(default=["en", "fr", "it", "de", "es"])
    default_language: str = Field(default="en")
    match_key_prefix_length: int = Field(default=20, ge=1, description="Message prefix length used in match keys")
    partial_results: bool = Field(
        default=False,
        description="Report embedding and grammar results independently instead of failing the whole request",
    )

    # CORS 配置
    cors_allow_origins: str = Field(default="http://localhost:8501", description="允许的跨域来源，逗号分隔")
    cors_allow_credentials: bool = Field(default=False, description="是否允许携带凭据")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @field_validator("default_language")
    @classmethod
    def _default_language_supported(cls, value: str, info) -> str:
        supported = info.data.get("supported_languages") or []
        if supported and value not in supported:
            raise ValueError(f"default_language '{value}' is not in supported_languages")
        return value

    @property
    def is_development(self) -> bool:
        return self.environment == Environment.DEVELOPMENT

    def get_cors_origins(self) -> list[str]:
        """返回允许的 CORS 来源列表"""
        raw = (self.cors_allow_origins or "").strip()
        if not raw:
            return ["*"]
        return [o.strip() for o in raw.split(",") if o.strip()]


@lru_cache()
def get_settings() -> Settings:
    """
    获取配置单例
    使用lru_cache确保全局只有一个Settings实例
    """
    return Settings()
