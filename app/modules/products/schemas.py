# app/modules/products/schemas.py
from pydantic import BaseModel, Field, field_validator
from typing import List, Optional
from datetime import datetime
from decimal import Decimal

from app.shared.database.models import Product
from app.shared.schemas.common import ApiBaseModel, BaseResponse, Money

# ==================== REQUEST SCHEMAS ====================

class ProductBaseRequest(BaseModel):
    CodigoProducto: Optional[str] = Field(None, description="Código único del producto")
    Nombre: Optional[str] = Field(None, description="Nombre del producto")
    Descripcion: Optional[str] = Field(None, description="Descripción")
    PrecioUnitario: Optional[Decimal] = Field(None, description="Precio unitario")
    UnidadID: Optional[int] = Field(None, description="Unidad de medida")
    Stock: Optional[int] = Field(None, description="Existencias")

    @field_validator("CodigoProducto", "Nombre", "Descripcion")
    @classmethod
    def strip_text(cls, v: Optional[str]):
        return v.strip() if isinstance(v, str) else v

class ProductCreateRequest(ProductBaseRequest):
    pass

class ProductUpdateRequest(ProductBaseRequest):
    pass

class StockAdjustmentRequest(BaseModel):
    cantidad: Optional[int] = Field(None, description="Cantidad a sumar (positiva) o restar (negativa)")

# ==================== RESPONSE SCHEMAS ====================

class ProductResponse(ApiBaseModel):
    ProductoID: int
    CodigoProducto: str
    Nombre: str
    Descripcion: Optional[str] = None
    PrecioUnitario: Money
    UnidadID: Optional[int] = None
    Stock: int
    Estado: bool
    FechaCreacion: Optional[datetime] = None

    @classmethod
    def from_model(cls, product: Product) -> "ProductResponse":
        return cls(
            ProductoID=product.id,
            CodigoProducto=product.code,
            Nombre=product.name,
            Descripcion=product.description,
            PrecioUnitario=product.unit_price,
            UnidadID=product.unit_id,
            Stock=product.stock,
            Estado=product.is_active,
            FechaCreacion=product.created_at
        )

class ProductDataResponse(BaseResponse):
    data: ProductResponse

class ProductListResponse(BaseResponse):
    data: List[ProductResponse]
