"""
服务工厂 - 统一的服务创建和管理
Following Linus principle: Simple and practical service management
"""
from typing import TYPE_CHECKING, Optional

from textinsight.core.config import Settings

# 避免循环导入，使用TYPE_CHECKING
if TYPE_CHECKING:
    from textinsight.services.analysis_service import AnalysisService
    from textinsight.services.embedding_service import EmbeddingService
    from textinsight.services.grammar_service import GrammarService
    from textinsight.services.health_service import HealthService


class ServiceFactory:
    """
    服务工厂 - 提供统一的服务访问接口

    Every service receives its Settings here; the API layer caches the
    instances it builds (see textinsight.api.deps).
    """

    @staticmethod
    def get_embedding_service(settings: Optional[Settings] = None) -> 'EmbeddingService':
        """获取嵌入服务"""
        from textinsight.services.embedding_service import EmbeddingService
        return EmbeddingService(settings)

    @staticmethod
    def get_grammar_service(settings: Optional[Settings] = None) -> 'GrammarService':
        """获取语法检查服务"""
        from textinsight.services.grammar_service import GrammarService
        return GrammarService(settings)

    @staticmethod
    def get_analysis_service(
        embedding_service: 'EmbeddingService',
        grammar_service: 'GrammarService',
        settings: Optional[Settings] = None,
    ) -> 'AnalysisService':
        """获取分析服务"""
        from textinsight.services.analysis_service import AnalysisService
        return AnalysisService(embedding_service, grammar_service, settings)

    @staticmethod
    def get_health_service(grammar_service: 'GrammarService', settings: Optional[Settings] = None) -> 'HealthService':
        """获取健康检查服务"""
        from textinsight.services.health_service import HealthService
        return HealthService(grammar_service, settings)
