# app/modules/clients/service.py
import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from app.core.exceptions import InvalidInputError, NotFoundError, ConflictError
from app.shared.database.models import Client
from app.shared.database.unit_of_work import transaction
from .repository import ClientsRepository
from .schemas import ClientCreateRequest, ClientUpdateRequest

logger = logging.getLogger(__name__)

class ClientsService:
    def __init__(self, db: Session, repository: ClientsRepository):
        self.db = db
        self.repository = repository

    def get_clients(self) -> List[Client]:
        return self.repository.get_all()

    def get_client(self, nit: str) -> Optional[Client]:
        if not nit or not nit.strip():
            raise InvalidInputError("NIT no válido")
        return self.repository.get_by_nit(nit.strip())

    def require_client(self, nit: str) -> Client:
        client = self.get_client(nit)
        if not client:
            raise NotFoundError(f"No existe un cliente con el NIT {nit}")
        return client

    def create_client(self, client_data: ClientCreateRequest) -> Client:
        if not client_data.NIT:
            raise InvalidInputError("El NIT es obligatorio")

        if not client_data.NombreCompleto:
            raise InvalidInputError("El nombre completo es obligatorio")

        if not client_data.Telefono:
            raise InvalidInputError("El teléfono es obligatorio")

        if self.repository.get_any_by_nit(client_data.NIT):
            raise ConflictError(f"Ya existe un cliente con el NIT {client_data.NIT}")

        with transaction(self.db):
            client = self.repository.create({
                "nit": client_data.NIT,
                "full_name": client_data.NombreCompleto,
                "phone": client_data.Telefono,
                "email": client_data.CorreoElectronico or None,
            })

        logger.info(f"Cliente {client.nit} registrado")
        return client

    def update_client(self, nit: str, client_data: ClientUpdateRequest) -> Client:
        # El NIT es la identidad del cliente: nunca se modifica
        client = self.require_client(nit)

        changes = {
            "full_name": client_data.NombreCompleto or client.full_name,
            "phone": client_data.Telefono or client.phone,
            "email": client_data.CorreoElectronico or client.email,
        }

        with transaction(self.db):
            self.repository.update(client, changes)

        return client

    def delete_client(self, nit: str) -> None:
        client = self.require_client(nit)

        with transaction(self.db):
            self.repository.deactivate(client)

        logger.info(f"Cliente {nit} dado de baja")
