"""Client service - Business logic for client operations"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import Client, User
from .repository import ClientRepository
from .schemas import ClientCreate, ClientResponse, ClientUpdate

logger = logging.getLogger(__name__)


def to_client_response(client: Client) -> ClientResponse:
    return ClientResponse(
        id=client.id,
        name=client.name,
        phone=client.phone,
        email=client.email,
        address=client.address,
        isVip=client.is_vip,
        notes=client.notes,
        created_at=client.created_at,
    )


class ClientService:
    """Service layer for client business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ClientRepository()

    def get_clients(
        self, user: User, search: Optional[str] = None, vip_only: bool = False
    ) -> list[Client]:
        """Get clients for a user"""
        return self.repo.get_clients(self.db, user.id, search=search, vip_only=vip_only)

    def get_client(self, client_id: int, user: User) -> Client:
        """Get a specific client"""
        client = self.repo.get_client_by_id(self.db, client_id, user.id)
        if not client:
            raise HTTPException(status_code=404, detail="Client not found")
        return client

    def address_of(self, client_id: int, user: User) -> Optional[dict]:
        return self.get_client(client_id, user).address

    def phone_of(self, client_id: int, user: User) -> str:
        return self.get_client(client_id, user).phone

    def create_client(self, data: ClientCreate, user: User) -> Client:
        logger.info(f"Creating client for user_id: {user.id}")

        client_data = {
            "name": data.name,
            "phone": data.phone,
            "email": data.email,
            "address": data.address.model_dump() if data.address else None,
            "is_vip": data.isVip,
            "notes": data.notes,
        }

        return self.repo.create_client(self.db, user.id, **client_data)

    def update_client(self, client_id: int, data: ClientUpdate, user: User) -> Client:
        """Update a client"""
        client = self.get_client(client_id, user)

        updates = {}
        if data.name is not None:
            updates["name"] = data.name
        if data.phone is not None:
            updates["phone"] = data.phone
        if data.email is not None:
            updates["email"] = data.email
        if data.address is not None:
            # Address parts merge into what is stored
            merged = dict(client.address or {})
            merged.update(data.address.model_dump(exclude_unset=True))
            updates["address"] = merged
        if data.isVip is not None:
            updates["is_vip"] = data.isVip
        if data.notes is not None:
            updates["notes"] = data.notes

        return self.repo.update_client(self.db, client, **updates)

    def delete_client(self, client_id: int, user: User) -> dict:
        """Delete a client, their appointments stay without a client reference"""
        client = self.get_client(client_id, user)
        self.repo.delete_client(self.db, client)
        logger.info(f"Client {client_id} deleted for user_id: {user.id}")
        return {"message": "Client deleted"}
