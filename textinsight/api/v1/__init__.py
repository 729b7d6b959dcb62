"""Version 1 API routers."""

from . import analysis, health

__all__ = ["analysis", "health"]
