"""Insight schemas - Response models for client and business analytics"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from ..clients.schemas import ClientResponse
from ..services.schemas import ServiceResponse
from .analytics import TimeOfDay, VisitPattern


class ServiceUsage(BaseModel):
    service: ServiceResponse
    count: int


class ClientInsightResponse(BaseModel):
    """Preferences drawn from a client's completed appointments"""

    clientId: int
    topServices: list[ServiceUsage]
    preferredTimeOfDay: Optional[TimeOfDay] = None
    preferredHour: Optional[int] = None
    totalAppointments: int


class ClientPatternResponse(BaseModel):
    """A client with a regular rhythm who is overdue for a visit"""

    client: ClientResponse
    pattern: VisitPattern
    avgInterval: int
    daysSinceLast: int
    lastAppointment: datetime


class TopServiceResponse(BaseModel):
    service: ServiceResponse
    total: float
    count: int
    uniqueClients: int


class NeighborhoodResponse(BaseModel):
    neighborhood: str
    total: float


class VipClientResponse(BaseModel):
    clientId: int
    client: Optional[ClientResponse] = None
    spending: float
