"""Service catalog schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class ServiceCreate(BaseModel):
    """Schema for creating a catalog entry"""

    name: str = Field(min_length=1, max_length=255)
    price: float = Field(ge=0)
    notes: Optional[str] = None


class ServiceUpdate(BaseModel):
    """Schema for updating a catalog entry, only the sent fields change"""

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    price: Optional[float] = Field(default=None, ge=0)
    notes: Optional[str] = None


class ServiceResponse(BaseModel):
    id: int
    name: str
    price: float
    notes: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
