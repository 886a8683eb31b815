"""Insight router - FastAPI endpoints for client and business analytics"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import User
from ...shared.periods import InsightPeriod
from .schemas import (
    ClientInsightResponse,
    ClientPatternResponse,
    NeighborhoodResponse,
    TopServiceResponse,
    VipClientResponse,
)
from .service import InsightService

router = APIRouter(prefix="/insights", tags=["Insights"])


def get_insight_service(db: Session = Depends(get_db)) -> InsightService:
    """Dependency injection for InsightService"""
    return InsightService(db)


@router.get("/client/{client_id}", response_model=ClientInsightResponse)
async def get_client_insights(
    client_id: int,
    current_user: User = Depends(get_current_user),
    service: InsightService = Depends(get_insight_service),
):
    """Favourite services and preferred time slot of one client"""
    return service.get_client_insights(client_id, current_user)


@router.get("/patterns", response_model=list[ClientPatternResponse])
async def get_client_patterns(
    current_user: User = Depends(get_current_user),
    service: InsightService = Depends(get_insight_service),
):
    """Regular clients overdue for their next visit"""
    return service.get_client_patterns(current_user)


@router.get("/top-services", response_model=list[TopServiceResponse])
async def get_top_services(
    period: InsightPeriod = Query(InsightPeriod.MONTH),
    current_user: User = Depends(get_current_user),
    service: InsightService = Depends(get_insight_service),
):
    return service.get_top_services(current_user, period)


@router.get("/top-neighborhoods", response_model=list[NeighborhoodResponse])
async def get_top_neighborhoods(
    period: InsightPeriod = Query(InsightPeriod.MONTH),
    current_user: User = Depends(get_current_user),
    service: InsightService = Depends(get_insight_service),
):
    return service.get_top_neighborhoods(current_user, period)


@router.get("/vip-clients", response_model=list[VipClientResponse])
async def get_vip_clients(
    current_user: User = Depends(get_current_user),
    service: InsightService = Depends(get_insight_service),
):
    return service.get_vip_clients(current_user)
