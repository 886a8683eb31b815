"""User service - Registration, login and profile management"""

import logging

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...auth import create_access_token, hash_password, verify_password
from ...models import User
from .repository import UserRepository
from .schemas import (
    LoginRequest,
    PasswordUpdate,
    RegisterRequest,
    TokenResponse,
    UserResponse,
    UserUpdate,
    WhatsappMessages,
    WhatsappMessagesUpdate,
)

logger = logging.getLogger(__name__)

ADMIN_SEED_PHONE = "(00) 00000-0000"
ADMIN_SEED_ADDRESS = {
    "cep": "00000000",
    "state": "SP",
    "city": "São Paulo",
    "street": "Rua Administrador",
    "number": "0",
    "complement": "",
}


def to_user_response(user: User) -> UserResponse:
    """Public view of an account, never carries the password hash"""
    return UserResponse(
        id=user.id,
        email=user.email,
        phone=user.phone,
        address=user.address,
        whatsappMessages=WhatsappMessages(
            confirm=user.whatsapp_confirm,
            reschedule=user.whatsapp_reschedule,
            cancel=user.whatsapp_cancel,
        ),
        created_at=user.created_at,
    )


def to_token_response(user: User) -> TokenResponse:
    return TokenResponse(access_token=create_access_token(user.id), user=to_user_response(user))


class UserService:
    """Service layer for accounts"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = UserRepository()

    def register(self, data: RegisterRequest) -> User:
        if self.repo.get_user_by_email(self.db, data.email):
            raise HTTPException(status_code=409, detail="Email already in use")

        user = self.repo.create_user(
            self.db,
            email=data.email,
            password_hash=hash_password(data.password),
            phone=data.phone,
            address=data.address.model_dump(),
        )
        logger.info(f"Registered user_id: {user.id}")
        return user

    def login(self, data: LoginRequest) -> User:
        user = self.repo.get_user_by_email(self.db, data.email)
        if not user or not verify_password(data.password, user.password_hash):
            logger.warning("Failed login attempt")
            raise HTTPException(status_code=401, detail="Invalid credentials")
        return user

    def update_user(self, user: User, data: UserUpdate) -> User:
        """Partial profile update; a new email must not belong to another account"""
        if data.email and data.email != user.email:
            if self.repo.get_user_by_email(self.db, data.email):
                raise HTTPException(status_code=409, detail="Email already in use")

        address = None
        if data.address is not None:
            address = {**(user.address or {}), **data.address.model_dump(exclude_unset=True)}

        return self.repo.update_user(
            self.db, user, email=data.email, phone=data.phone, address=address
        )

    def update_password(self, user: User, data: PasswordUpdate) -> dict:
        if not verify_password(data.currentPassword, user.password_hash):
            raise HTTPException(status_code=409, detail="Current password is incorrect")

        self.repo.update_user(self.db, user, password_hash=hash_password(data.newPassword))
        logger.info(f"Password updated for user_id: {user.id}")
        return {"message": "Password updated"}

    def update_whatsapp_messages(self, user: User, data: WhatsappMessagesUpdate) -> User:
        """Merge the sent templates over the stored ones"""
        return self.repo.update_user(
            self.db,
            user,
            whatsapp_confirm=data.confirm,
            whatsapp_reschedule=data.reschedule,
            whatsapp_cancel=data.cancel,
        )

    def seed_admin(self, email: str, password: str) -> User:
        """Create the administrator account once; an existing one is left untouched"""
        existing = self.repo.get_user_by_email(self.db, email)
        if existing:
            logger.info("Admin user already exists")
            return existing

        user = self.repo.create_user(
            self.db,
            email=email.strip().lower(),
            password_hash=hash_password(password),
            phone=ADMIN_SEED_PHONE,
            address=ADMIN_SEED_ADDRESS,
        )
        logger.info(f"Admin user created: {user.email}")
        return user
