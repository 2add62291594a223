# app/modules/clients/schemas.py
from pydantic import BaseModel, Field, field_validator
from typing import List, Optional
from datetime import datetime

from app.shared.database.models import Client
from app.shared.schemas.common import ApiBaseModel, BaseResponse

class ClientBaseRequest(BaseModel):
    NombreCompleto: Optional[str] = Field(None, description="Nombre completo")
    Telefono: Optional[str] = Field(None, description="Teléfono de contacto")
    CorreoElectronico: Optional[str] = Field(None, description="Correo electrónico")

    @field_validator("NombreCompleto", "Telefono", "CorreoElectronico", mode="before")
    @classmethod
    def strip_text(cls, v):
        if v is None:
            return v
        return str(v).strip()

class ClientCreateRequest(ClientBaseRequest):
    NIT: Optional[str] = Field(None, description="Número de identificación tributaria")

    @field_validator("NIT", mode="before")
    @classmethod
    def strip_nit(cls, v):
        if v is None:
            return v
        return str(v).strip()

class ClientUpdateRequest(ClientBaseRequest):
    pass

class ClientResponse(ApiBaseModel):
    NIT: str
    NombreCompleto: str
    Telefono: str
    CorreoElectronico: Optional[str] = None
    Estado: bool
    FechaCreacion: Optional[datetime] = None

    @classmethod
    def from_model(cls, client: Client) -> "ClientResponse":
        return cls(
            NIT=client.nit,
            NombreCompleto=client.full_name,
            Telefono=client.phone,
            CorreoElectronico=client.email,
            Estado=client.is_active,
            FechaCreacion=client.created_at
        )

class ClientDataResponse(BaseResponse):
    data: ClientResponse

class ClientListResponse(BaseResponse):
    data: List[ClientResponse]
