"""User domain - accounts, authentication and profile"""

from .router import auth_router, router
from .service import UserService

__all__ = ["auth_router", "router", "UserService"]
