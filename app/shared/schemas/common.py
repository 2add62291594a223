# app/shared/schemas/common.py
from pydantic import BaseModel, ConfigDict, PlainSerializer
from typing import Annotated, Optional
from decimal import Decimal

# Montos: Decimal internamente, número en el JSON de respuesta
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]

class ApiBaseModel(BaseModel):
    """
    Clase base para los esquemas de respuesta (Pydantic v2).
    """
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

class BaseResponse(ApiBaseModel):
    success: bool = True
    message: Optional[str] = None

class ErrorResponse(BaseModel):
    success: bool = False
    message: str
    error: Optional[str] = None
