"""Client domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ...shared.validators import validate_cep, validate_email, validate_phone


class ClientAddress(BaseModel):
    """Client address, every part optional"""

    cep: Optional[str] = None
    state: Optional[str] = None
    city: Optional[str] = None
    street: Optional[str] = None
    number: Optional[str] = None
    complement: Optional[str] = None
    neighborhood: Optional[str] = None

    @field_validator("cep")
    @classmethod
    def validate_cep(cls, v):
        return validate_cep(v)


class ClientCreate(BaseModel):
    """Schema for creating a new client"""

    name: str = Field(min_length=1, max_length=255)
    phone: str
    email: Optional[str] = None
    address: Optional[ClientAddress] = None
    isVip: bool = False
    notes: Optional[str] = None

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v):
        if not v or not v.strip():
            raise ValueError("Phone is required")
        return validate_phone(v)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v):
        return validate_email(v)


class ClientUpdate(BaseModel):
    """Schema for updating an existing client"""

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[ClientAddress] = None
    isVip: Optional[bool] = None
    notes: Optional[str] = None

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v):
        if v:
            return validate_phone(v)
        return v

    @field_validator("email")
    @classmethod
    def validate_email(cls, v):
        return validate_email(v)


class ClientResponse(BaseModel):
    """Schema for client response"""

    id: int
    name: str
    phone: str
    email: Optional[str] = None
    address: Optional[ClientAddress] = None
    isVip: bool = False
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
