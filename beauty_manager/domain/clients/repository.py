"""Client repository - Database operations for clients"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Client


class ClientRepository:
    """Repository for client database operations"""

    @staticmethod
    def get_clients(
        db: Session, user_id: int, search: Optional[str] = None, vip_only: bool = False
    ) -> list[Client]:
        """Get clients for a user ordered by name, optionally matching name, phone or email"""
        query = db.query(Client).filter(Client.user_id == user_id)

        if search:
            term = f"%{search.strip()}%"
            query = query.filter(
                Client.name.ilike(term) | Client.phone.ilike(term) | Client.email.ilike(term)
            )
        if vip_only:
            query = query.filter(Client.is_vip.is_(True))

        return query.order_by(Client.name).all()

    @staticmethod
    def get_client_by_id(db: Session, client_id: int, user_id: int) -> Optional[Client]:
        """Get a specific client by ID"""
        return (
            db.query(Client)
            .filter(Client.id == client_id, Client.user_id == user_id)
            .first()
        )

    @staticmethod
    def create_client(db: Session, user_id: int, **client_data) -> Client:
        """Create a new client"""
        client = Client(user_id=user_id, **client_data)
        db.add(client)
        db.commit()
        db.refresh(client)
        return client

    @staticmethod
    def update_client(db: Session, client: Client, **updates) -> Client:
        """Update a client with provided fields"""
        for key, value in updates.items():
            if value is not None and hasattr(client, key):
                setattr(client, key, value)

        db.commit()
        db.refresh(client)
        return client

    @staticmethod
    def delete_client(db: Session, client: Client) -> None:
        """Delete a client"""
        db.delete(client)
        db.commit()
