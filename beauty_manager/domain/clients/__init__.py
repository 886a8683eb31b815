"""Client domain - client roster"""

from .router import router
from .service import ClientService

__all__ = ["router", "ClientService"]
