"""Finance repository - Database operations for ledger entries"""

from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from ...models import Finance


class FinanceRepository:
    """Repository for finance database operations"""

    @staticmethod
    def get_finances(
        db: Session,
        user_id: int,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        entry_type: Optional[str] = None,
        with_service_only: bool = False,
    ) -> list[Finance]:
        """Get ledger entries for a user, newest first. Both bounds are inclusive."""
        query = db.query(Finance).filter(Finance.user_id == user_id)

        if start_date is not None:
            query = query.filter(Finance.date >= start_date)
        if end_date is not None:
            query = query.filter(Finance.date <= end_date)
        if entry_type is not None:
            query = query.filter(Finance.type == entry_type)
        if with_service_only:
            query = query.filter(Finance.service_id.isnot(None))

        return query.order_by(Finance.date.desc(), Finance.id.desc()).all()

    @staticmethod
    def get_finance_by_id(db: Session, finance_id: int, user_id: int) -> Optional[Finance]:
        return (
            db.query(Finance)
            .filter(Finance.id == finance_id, Finance.user_id == user_id)
            .first()
        )

    @staticmethod
    def create_finance(db: Session, user_id: int, **finance_data) -> Finance:
        finance = Finance(user_id=user_id, **finance_data)
        db.add(finance)
        db.commit()
        db.refresh(finance)
        return finance

    @staticmethod
    def update_finance(db: Session, finance: Finance, **updates) -> Finance:
        """Update a ledger entry with provided fields"""
        for key, value in updates.items():
            if value is not None and hasattr(finance, key):
                setattr(finance, key, value)

        db.commit()
        db.refresh(finance)
        return finance

    @staticmethod
    def delete_finance(db: Session, finance: Finance) -> None:
        db.delete(finance)
        db.commit()
