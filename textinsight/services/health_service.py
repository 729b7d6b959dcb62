"""
健康检查服务 - 应用健康状态和就绪状态检查
"""
from datetime import datetime
from typing import Any, Dict, Optional

from textinsight.core.config import Settings
from textinsight.core.errors import UpstreamError
from textinsight.core.logging import LogEvent
from textinsight.services.base_service import BaseService
from textinsight.services.grammar_service import GrammarService


class HealthService(BaseService):
    """健康检查服务 - 监控系统状态"""

    def __init__(self, grammar_service: GrammarService, settings: Optional[Settings] = None):
        super().__init__(settings)
        self.grammar_service = grammar_service

    def _initialize(self):
        """初始化健康检查服务"""
        self.start_time = datetime.now()

    async def check_health(self) -> Dict[str, Any]:
        """基础健康检查 - 应用是否运行"""
        self._ensure_initialized()
        uptime = (datetime.now() - self.start_time).total_seconds()

        return {
            "status": "healthy",
            "timestamp": datetime.now().isoformat(),
            "uptime_seconds": uptime,
            "version": self.settings.version,
            "environment": self.settings.environment.value,
        }

    async def check_readiness(self) -> Dict[str, Any]:
        """就绪检查 - 系统是否准备好接收请求"""
        checks = {
            "api": True,
            "languagetool": False,
            "embedding": bool(self.settings.embedding_api_key),
        }
        errors = []

        try:
            languages = await self.grammar_service.list_languages()
            checks["languagetool"] = bool(languages)
        except UpstreamError as e:
            self.logger.error(LogEvent.READINESS_CHECK_FAILED, service="languagetool", error=e.message)
            errors.append(f"LanguageTool: {e.message}")

        if not checks["embedding"]:
            errors.append("Embedding: API key is not configured")

        ready = all(checks.values())
        result = {
            "ready": ready,
            "checks": checks,
            "timestamp": datetime.now().isoformat(),
        }
        if errors:
            result["errors"] = errors
            result["reason"] = "; ".join(errors)
        return result
