"""Service catalog domain - priced offerings"""

from .router import router
from .service import CatalogService

__all__ = ["router", "CatalogService"]
