"""User schemas - Request/response models for accounts and profile"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ...shared.validators import validate_cep, validate_email, validate_phone


class UserAddress(BaseModel):
    cep: str = Field(min_length=1)
    state: str = Field(min_length=1)
    city: str = Field(min_length=1)
    street: str = Field(min_length=1)
    number: str = Field(min_length=1)
    complement: Optional[str] = None

    @field_validator("cep")
    @classmethod
    def validate_cep(cls, v):
        return validate_cep(v)


class UserAddressUpdate(BaseModel):
    cep: Optional[str] = None
    state: Optional[str] = None
    city: Optional[str] = None
    street: Optional[str] = None
    number: Optional[str] = None
    complement: Optional[str] = None

    @field_validator("cep")
    @classmethod
    def validate_cep(cls, v):
        return validate_cep(v) if v else v


class RegisterRequest(BaseModel):
    """Schema for creating an account"""

    email: str
    password: str = Field(min_length=6)
    phone: str
    address: UserAddress

    @field_validator("email")
    @classmethod
    def validate_email(cls, v):
        if not v or not v.strip():
            raise ValueError("Email is required")
        return validate_email(v)

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v):
        if not v or not v.strip():
            raise ValueError("Phone is required")
        return validate_phone(v)


class LoginRequest(BaseModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v):
        return v.strip().lower()


class WhatsappMessages(BaseModel):
    confirm: str
    reschedule: str
    cancel: str


class UserResponse(BaseModel):
    id: int
    email: str
    phone: str
    address: Optional[dict] = None
    whatsappMessages: WhatsappMessages
    created_at: Optional[datetime] = None


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserResponse


class UserUpdate(BaseModel):
    """Schema for a partial profile update"""

    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[UserAddressUpdate] = None

    @field_validator("email")
    @classmethod
    def validate_email(cls, v):
        return validate_email(v)

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v):
        return validate_phone(v) if v else v


class PasswordUpdate(BaseModel):
    currentPassword: str
    newPassword: str = Field(min_length=6)


class WhatsappMessagesUpdate(BaseModel):
    confirm: Optional[str] = None
    reschedule: Optional[str] = None
    cancel: Optional[str] = None
