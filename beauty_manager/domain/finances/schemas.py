"""Finance domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from ...models import ExpenseCategory, FinanceType
from ...shared.validators import to_naive_local


def check_entry_kind(
    entry_type: Optional[FinanceType],
    category: Optional[ExpenseCategory],
    service_id: Optional[int],
) -> None:
    """Categories belong to expenses, service references to income"""
    if category is not None and entry_type != FinanceType.EXPENSE:
        raise ValueError("Only expense entries can have a category")
    if service_id is not None and entry_type != FinanceType.INCOME:
        raise ValueError("Only income entries can reference a service")


class FinanceCreate(BaseModel):
    """Schema for a new ledger entry"""

    type: FinanceType
    name: str = Field(min_length=1, max_length=255)
    amount: float = Field(ge=0)
    date: datetime
    category: Optional[ExpenseCategory] = None
    serviceId: Optional[int] = None

    @field_validator("date")
    @classmethod
    def normalize_date(cls, v):
        return to_naive_local(v)

    @model_validator(mode="after")
    def validate_kind(self):
        check_entry_kind(self.type, self.category, self.serviceId)
        return self


class FinanceUpdate(BaseModel):
    """Schema for updating a ledger entry, only the sent fields change"""

    type: Optional[FinanceType] = None
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    amount: Optional[float] = Field(default=None, ge=0)
    date: Optional[datetime] = None
    category: Optional[ExpenseCategory] = None
    serviceId: Optional[int] = None

    @field_validator("date")
    @classmethod
    def normalize_date(cls, v):
        return to_naive_local(v)


class FinanceResponse(BaseModel):
    id: int
    type: FinanceType
    name: str
    amount: float
    date: datetime
    category: Optional[ExpenseCategory] = None
    serviceId: Optional[int] = None
    created_at: Optional[datetime] = None


class FinanceSummary(BaseModel):
    """Totals over the same entries the listing returns"""

    totalIncome: float
    totalExpense: float
    balance: float
    incomeByService: dict[str, float]
    expenseByCategory: dict[str, float]
