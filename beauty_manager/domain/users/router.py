"""User routers - account registration, login and the /users/me profile"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import User
from .schemas import (
    LoginRequest,
    PasswordUpdate,
    RegisterRequest,
    TokenResponse,
    UserResponse,
    UserUpdate,
    WhatsappMessagesUpdate,
)
from .service import UserService, to_token_response, to_user_response

auth_router = APIRouter(prefix="/auth", tags=["Authentication"])
router = APIRouter(prefix="/users", tags=["Users"])


def get_user_service(db: Session = Depends(get_db)) -> UserService:
    """Dependency injection for UserService"""
    return UserService(db)


@auth_router.post("/register", response_model=TokenResponse, status_code=201)
async def register(data: RegisterRequest, service: UserService = Depends(get_user_service)):
    """Create an account and sign it in"""
    return to_token_response(service.register(data))


@auth_router.post("/login", response_model=TokenResponse)
async def login(data: LoginRequest, service: UserService = Depends(get_user_service)):
    return to_token_response(service.login(data))


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: User = Depends(get_current_user)):
    return to_user_response(current_user)


@router.put("/me", response_model=UserResponse)
async def update_me(
    data: UserUpdate,
    current_user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    return to_user_response(service.update_user(current_user, data))


@router.put("/me/password")
async def update_password(
    data: PasswordUpdate,
    current_user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    return service.update_password(current_user, data)


@router.put("/me/whatsapp-messages", response_model=UserResponse)
async def update_whatsapp_messages(
    data: WhatsappMessagesUpdate,
    current_user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    """Replace any of the confirm, reschedule and cancel templates"""
    return to_user_response(service.update_whatsapp_messages(current_user, data))
