# app/modules/discounts/schemas.py
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import date
from decimal import Decimal

from app.shared.database.models import Discount, DiscountType
from app.shared.schemas.common import ApiBaseModel, BaseResponse, Money

class DiscountBaseRequest(BaseModel):
    ProductoID: Optional[int] = Field(None, description="Producto al que aplica")
    TipoDescuentoID: Optional[int] = Field(None, description="1 = porcentaje, 2 = monto fijo")
    Valor: Optional[Decimal] = Field(None, description="Porcentaje o monto por unidad")
    FechaInicio: Optional[str] = Field(None, description="Inicio de vigencia (YYYY-MM-DD)")
    FechaFin: Optional[str] = Field(None, description="Fin de vigencia, inclusive (YYYY-MM-DD)")

class DiscountCreateRequest(DiscountBaseRequest):
    pass

class DiscountUpdateRequest(DiscountBaseRequest):
    pass

class DiscountResponse(ApiBaseModel):
    DescuentoID: int
    ProductoID: int
    TipoDescuentoID: int
    Valor: Money
    FechaInicio: date
    FechaFin: date
    Estado: bool

    @classmethod
    def from_model(cls, discount: Discount) -> "DiscountResponse":
        return cls(
            DescuentoID=discount.id,
            ProductoID=discount.product_id,
            TipoDescuentoID=discount.discount_type_id,
            Valor=discount.value,
            FechaInicio=discount.start_date,
            FechaFin=discount.end_date,
            Estado=discount.is_active
        )

class DiscountTypeResponse(ApiBaseModel):
    TipoDescuentoID: int
    Codigo: str
    Descripcion: str

    @classmethod
    def from_model(cls, discount_type: DiscountType) -> "DiscountTypeResponse":
        return cls(
            TipoDescuentoID=discount_type.id,
            Codigo=discount_type.code,
            Descripcion=discount_type.description
        )

class DiscountDataResponse(BaseResponse):
    data: DiscountResponse

class DiscountListResponse(BaseResponse):
    data: List[DiscountResponse]

class DiscountTypeListResponse(BaseResponse):
    data: List[DiscountTypeResponse]
