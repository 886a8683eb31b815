"""Insight domain - client preferences, visit patterns and rankings"""

from .router import router
from .service import InsightService

__all__ = ["router", "InsightService"]
