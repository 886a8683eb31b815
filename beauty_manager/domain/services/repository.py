"""Service catalog repository - Database operations for services"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Service


class ServiceRepository:
    """Repository for service database operations"""

    @staticmethod
    def get_services(db: Session, user_id: int) -> list[Service]:
        """Get all services for a user"""
        return db.query(Service).filter(Service.user_id == user_id).order_by(Service.name).all()

    @staticmethod
    def get_service_by_id(db: Session, service_id: int, user_id: int) -> Optional[Service]:
        """Get a specific service by ID"""
        return (
            db.query(Service)
            .filter(Service.id == service_id, Service.user_id == user_id)
            .first()
        )

    @staticmethod
    def create_service(db: Session, user_id: int, **service_data) -> Service:
        service = Service(user_id=user_id, **service_data)
        db.add(service)
        db.commit()
        db.refresh(service)
        return service

    @staticmethod
    def update_service(db: Session, service: Service, **updates) -> Service:
        """Update a service with provided fields"""
        for key, value in updates.items():
            if value is not None and hasattr(service, key):
                setattr(service, key, value)

        db.commit()
        db.refresh(service)
        return service

    @staticmethod
    def delete_service(db: Session, service: Service) -> None:
        db.delete(service)
        db.commit()
