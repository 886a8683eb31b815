"""Service catalog - Business logic for priced offerings"""

import logging

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import Service, User
from .repository import ServiceRepository
from .schemas import ServiceCreate, ServiceUpdate

logger = logging.getLogger(__name__)


class CatalogService:
    """Service layer for the service catalog"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ServiceRepository()

    def get_services(self, user: User) -> list[Service]:
        return self.repo.get_services(self.db, user.id)

    def get_service(self, service_id: int, user: User) -> Service:
        """Get a specific service"""
        service = self.repo.get_service_by_id(self.db, service_id, user.id)
        if not service:
            raise HTTPException(status_code=404, detail="Service not found")
        return service

    def get_services_by_ids(self, service_ids: list[int], user: User) -> list[Service]:
        """Resolve every id in order, 404 on the first one the user does not own"""
        return [self.get_service(service_id, user) for service_id in service_ids]

    def price_of(self, service_id: int, user: User) -> float:
        return self.get_service(service_id, user).price

    def create_service(self, data: ServiceCreate, user: User) -> Service:
        service = self.repo.create_service(self.db, user.id, **data.model_dump())
        logger.info(f"Service {service.id} created for user_id: {user.id}")
        return service

    def update_service(self, service_id: int, data: ServiceUpdate, user: User) -> Service:
        """Update a service, booked appointments keep their original totals"""
        service = self.get_service(service_id, user)
        return self.repo.update_service(self.db, service, **data.model_dump(exclude_unset=True))

    def delete_service(self, service_id: int, user: User) -> dict:
        service = self.get_service(service_id, user)
        self.repo.delete_service(self.db, service)
        logger.info(f"Service {service_id} deleted for user_id: {user.id}")
        return {"message": "Service deleted"}
