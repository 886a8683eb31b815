"""Finance service - Business logic for the income/expense ledger"""

import logging
from collections.abc import Iterable
from datetime import datetime
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import ExpenseCategory, Finance, FinanceType, User
from ...shared.periods import FinancePeriod, finance_period_range
from ..services.service import CatalogService
from .repository import FinanceRepository
from .schemas import (
    FinanceCreate,
    FinanceResponse,
    FinanceSummary,
    FinanceUpdate,
    check_entry_kind,
)

logger = logging.getLogger(__name__)


def to_finance_response(finance: Finance) -> FinanceResponse:
    return FinanceResponse(
        id=finance.id,
        type=finance.type,
        name=finance.name,
        amount=finance.amount,
        date=finance.date,
        category=finance.category,
        serviceId=finance.service_id,
        created_at=finance.created_at,
    )


def summarize_finances(finances: Iterable[Finance]) -> FinanceSummary:
    """Totals, balance and breakdowns for an already filtered set of entries"""
    total_income = 0.0
    total_expense = 0.0
    income_by_service: dict[str, float] = {}
    expense_by_category: dict[str, float] = {}

    for finance in finances:
        if finance.type == FinanceType.INCOME.value:
            total_income += finance.amount
            if finance.service_id is not None:
                key = str(finance.service_id)
                income_by_service[key] = income_by_service.get(key, 0) + finance.amount
        elif finance.type == FinanceType.EXPENSE.value:
            total_expense += finance.amount
            if finance.category:
                expense_by_category[finance.category] = (
                    expense_by_category.get(finance.category, 0) + finance.amount
                )

    return FinanceSummary(
        totalIncome=total_income,
        totalExpense=total_expense,
        balance=total_income - total_expense,
        incomeByService=income_by_service,
        expenseByCategory=expense_by_category,
    )


class FinanceService:
    """Service layer for the finance ledger"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = FinanceRepository()
        self.catalog = CatalogService(db)

    def get_finances(
        self,
        user: User,
        period: Optional[FinancePeriod] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        now: Optional[datetime] = None,
    ) -> list[Finance]:
        """
        List ledger entries, newest first.

        Rolling periods run from the first day of their first month up to now.
        ``custom`` applies ``start_date`` and ``end_date`` independently.
        Without a period every entry is returned.
        """
        if period is None:
            return self.repo.get_finances(self.db, user.id)

        start, end = finance_period_range(period, now or datetime.now(), start_date, end_date)
        return self.repo.get_finances(self.db, user.id, start_date=start, end_date=end)

    def get_summary(
        self,
        user: User,
        period: Optional[FinancePeriod] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        now: Optional[datetime] = None,
    ) -> FinanceSummary:
        return summarize_finances(self.get_finances(user, period, start_date, end_date, now))

    def get_finance(self, finance_id: int, user: User) -> Finance:
        finance = self.repo.get_finance_by_id(self.db, finance_id, user.id)
        if not finance:
            raise HTTPException(status_code=404, detail="Finance record not found")
        return finance

    def create_finance(self, data: FinanceCreate, user: User) -> Finance:
        if data.serviceId is not None:
            self.catalog.get_service(data.serviceId, user)

        finance = self.repo.create_finance(
            self.db,
            user.id,
            type=data.type.value,
            name=data.name,
            amount=data.amount,
            date=data.date,
            category=data.category.value if data.category else None,
            service_id=data.serviceId,
        )
        logger.info(f"Finance {finance.id} ({finance.type}) created for user_id: {user.id}")
        return finance

    def update_finance(self, finance_id: int, data: FinanceUpdate, user: User) -> Finance:
        """Merge the sent fields, keeping category/service consistent with the type"""
        finance = self.get_finance(finance_id, user)

        entry_type = data.type or FinanceType(finance.type)
        kind_changed = data.type is not None and data.type.value != finance.type

        # Switching kind drops the reference that belonged to the old one
        category = data.category or (ExpenseCategory(finance.category) if finance.category else None)
        service_id = data.serviceId if data.serviceId is not None else finance.service_id
        if kind_changed and entry_type == FinanceType.INCOME and data.category is None:
            category = None
        if kind_changed and entry_type == FinanceType.EXPENSE and data.serviceId is None:
            service_id = None

        try:
            check_entry_kind(entry_type, category, service_id)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e)) from e

        if data.serviceId is not None:
            self.catalog.get_service(data.serviceId, user)

        if category is None:
            finance.category = None
        if service_id is None:
            finance.service_id = None

        updates = {
            "type": data.type.value if data.type else None,
            "name": data.name,
            "amount": data.amount,
            "date": data.date,
            "category": data.category.value if data.category else None,
            "service_id": data.serviceId,
        }
        return self.repo.update_finance(self.db, finance, **updates)

    def delete_finance(self, finance_id: int, user: User) -> dict:
        finance = self.get_finance(finance_id, user)
        self.repo.delete_finance(self.db, finance)
        logger.info(f"Finance {finance_id} deleted for user_id: {user.id}")
        return {"message": "Finance record deleted"}
