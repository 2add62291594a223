# app/modules/clients/router.py
from fastapi import APIRouter, Depends, status

from app.core.dependencies import get_clients_service
from app.core.exceptions import NotFoundError
from app.shared.schemas.common import BaseResponse
from .service import ClientsService
from .schemas import (
    ClientCreateRequest, ClientUpdateRequest,
    ClientResponse, ClientDataResponse, ClientListResponse
)

router = APIRouter()

@router.get("", response_model=ClientListResponse)
def get_clients(service: ClientsService = Depends(get_clients_service)):
    clients = service.get_clients()
    return ClientListResponse(data=[ClientResponse.from_model(c) for c in clients])

@router.get("/{nit}", response_model=ClientDataResponse)
def get_client(nit: str, service: ClientsService = Depends(get_clients_service)):
    client = service.get_client(nit)
    if not client:
        raise NotFoundError(f"No se encontró ningún cliente con el NIT {nit}")

    return ClientDataResponse(data=ClientResponse.from_model(client))

@router.post("", response_model=ClientDataResponse, status_code=status.HTTP_201_CREATED)
def create_client(
    client_data: ClientCreateRequest,
    service: ClientsService = Depends(get_clients_service)
):
    client = service.create_client(client_data)
    return ClientDataResponse(
        message="Cliente creado exitosamente",
        data=ClientResponse.from_model(client)
    )

@router.put("/{nit}", response_model=ClientDataResponse)
def update_client(
    nit: str,
    client_data: ClientUpdateRequest,
    service: ClientsService = Depends(get_clients_service)
):
    client = service.update_client(nit, client_data)
    return ClientDataResponse(
        message="Cliente actualizado exitosamente",
        data=ClientResponse.from_model(client)
    )

@router.delete("/{nit}", response_model=BaseResponse)
def delete_client(nit: str, service: ClientsService = Depends(get_clients_service)):
    service.delete_client(nit)
    return BaseResponse(message="Cliente eliminado exitosamente")
