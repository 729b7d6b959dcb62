"""
基础服务类 - 所有服务的公共功能
Following Linus principle: Keep it simple and practical
"""
from typing import Optional

from textinsight.core.config import Settings, get_settings
from textinsight.core.logging import get_logger


class BaseService:
    """
    基础服务类 - 提供所有服务的公共功能

    Features:
    - Automatic logger initialization
    - Explicit settings, falling back to the cached process settings
    - Lazy initialization via _initialize()
    """

    def __init__(self, settings: Optional[Settings] = None):
        """初始化基础服务"""
        self.logger = get_logger(self.__class__.__module__)
        self.settings = settings or get_settings()
        self._initialized = False

    def _ensure_initialized(self):
        """确保服务已初始化 - 子类可以覆盖此方法"""
        if not self._initialized:
            self._initialize()
            self._initialized = True

    def _initialize(self):
        """子类可以覆盖此方法进行特定初始化"""
        pass

    async def close(self) -> None:
        """Release network clients held by the service."""
        pass

    def __repr__(self):
        """Simple representation for debugging"""
        return f"<{self.__class__.__name__} initialized={self._initialized}>"
