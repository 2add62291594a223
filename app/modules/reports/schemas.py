# app/modules/reports/schemas.py
from typing import List, Optional
from datetime import date

from app.shared.schemas.common import ApiBaseModel, BaseResponse, Money

class TopProductResponse(ApiBaseModel):
    Posicion: int
    ProductoID: int
    CodigoProducto: str
    Nombre: str
    CantidadVendida: int
    MontoTotal: Money

class TopClientResponse(ApiBaseModel):
    Posicion: int
    NIT: str
    NombreCompleto: str
    CantidadCompras: int
    MontoTotal: Money

class PeriodSalesResponse(ApiBaseModel):
    Fecha: date
    CantidadVentas: int
    Subtotal: Money
    TotalDescuento: Money
    Total: Money

class PeriodSummary(ApiBaseModel):
    FechaInicio: date
    FechaFin: date
    CantidadVentas: int
    Subtotal: Money
    TotalDescuento: Money
    Total: Money

class TopProductsListResponse(BaseResponse):
    data: List[TopProductResponse]

class TopClientsListResponse(BaseResponse):
    data: List[TopClientResponse]

class PeriodSalesReportResponse(BaseResponse):
    data: List[PeriodSalesResponse]
    resumen: Optional[PeriodSummary] = None
