"""Finance domain - income/expense ledger and summaries"""

from .router import router
from .service import FinanceService

__all__ = ["router", "FinanceService"]
