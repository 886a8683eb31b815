"""Finance router - FastAPI endpoints for the income/expense ledger"""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import User
from ...shared.periods import FinancePeriod
from ...shared.validators import to_naive_local
from .schemas import FinanceCreate, FinanceResponse, FinanceSummary, FinanceUpdate
from .service import FinanceService, to_finance_response

router = APIRouter(prefix="/finances", tags=["Finances"])


def get_finance_service(db: Session = Depends(get_db)) -> FinanceService:
    """Dependency injection for FinanceService"""
    return FinanceService(db)


@router.get("", response_model=list[FinanceResponse])
async def get_finances(
    period: Optional[FinancePeriod] = Query(None),
    startDate: Optional[datetime] = Query(None, description="Lower bound, custom period only"),
    endDate: Optional[datetime] = Query(None, description="Upper bound, custom period only"),
    current_user: User = Depends(get_current_user),
    service: FinanceService = Depends(get_finance_service),
):
    """List ledger entries, newest first"""
    finances = service.get_finances(
        current_user, period, to_naive_local(startDate), to_naive_local(endDate)
    )
    return [to_finance_response(f) for f in finances]


@router.get("/summary", response_model=FinanceSummary)
async def get_summary(
    period: Optional[FinancePeriod] = Query(None),
    startDate: Optional[datetime] = Query(None),
    endDate: Optional[datetime] = Query(None),
    current_user: User = Depends(get_current_user),
    service: FinanceService = Depends(get_finance_service),
):
    """Income, expense, balance and breakdowns for the filtered entries"""
    return service.get_summary(
        current_user, period, to_naive_local(startDate), to_naive_local(endDate)
    )


@router.get("/{finance_id}", response_model=FinanceResponse)
async def get_finance(
    finance_id: int,
    current_user: User = Depends(get_current_user),
    service: FinanceService = Depends(get_finance_service),
):
    return to_finance_response(service.get_finance(finance_id, current_user))


@router.post("", response_model=FinanceResponse, status_code=201)
async def create_finance(
    data: FinanceCreate,
    current_user: User = Depends(get_current_user),
    service: FinanceService = Depends(get_finance_service),
):
    return to_finance_response(service.create_finance(data, current_user))


@router.put("/{finance_id}", response_model=FinanceResponse)
async def update_finance(
    finance_id: int,
    data: FinanceUpdate,
    current_user: User = Depends(get_current_user),
    service: FinanceService = Depends(get_finance_service),
):
    return to_finance_response(service.update_finance(finance_id, data, current_user))


@router.delete("/{finance_id}")
async def delete_finance(
    finance_id: int,
    current_user: User = Depends(get_current_user),
    service: FinanceService = Depends(get_finance_service),
):
    return service.delete_finance(finance_id, current_user)
