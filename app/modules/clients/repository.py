# app/modules/clients/repository.py
from typing import List, Optional
from sqlalchemy.orm import Session

from app.shared.database.models import Client

class ClientsRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_all(self) -> List[Client]:
        return self.db.query(Client).filter(
            Client.is_active == True
        ).order_by(Client.full_name).all()

    def get_by_nit(self, nit: str) -> Optional[Client]:
        """Buscar cliente activo por NIT"""
        return self.db.query(Client).filter(
            Client.nit == nit,
            Client.is_active == True
        ).first()

    def get_any_by_nit(self, nit: str) -> Optional[Client]:
        """Incluye clientes dados de baja (el NIT no se reutiliza)"""
        return self.db.get(Client, nit)

    def create(self, client_data: dict) -> Client:
        client = Client(**client_data)
        self.db.add(client)
        self.db.flush()
        return client

    def update(self, client: Client, changes: dict) -> Client:
        for field, value in changes.items():
            setattr(client, field, value)
        self.db.flush()
        return client

    def deactivate(self, client: Client) -> Client:
        client.is_active = False
        self.db.flush()
        return client
