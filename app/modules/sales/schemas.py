from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime

from app.shared.database.models import Sale, SaleItem, PaymentMethod
from app.shared.schemas.common import ApiBaseModel, BaseResponse, Money
from .pricing import OrderLine

# ==================== REQUEST SCHEMAS ====================
# Los campos son opcionales a propósito: la obligatoriedad la valida el
# servicio para responder con los mensajes de negocio.

class SaleItemRequest(BaseModel):
    ProductoID: Optional[int] = Field(None, description="ID del producto")
    Cantidad: Optional[int] = Field(None, description="Cantidad vendida")

class SaleCreateRequest(BaseModel):
    NIT: Optional[str] = Field(None, description="NIT del cliente")
    MetodoPagoID: Optional[int] = Field(None, description="Método de pago")
    Detalle: Optional[List[SaleItemRequest]] = Field(None, description="Productos de la venta")

    def order_lines(self) -> List[OrderLine]:
        return [
            OrderLine(product_id=item.ProductoID, quantity=item.Cantidad)
            for item in (self.Detalle or [])
        ]

class SaleUpdateRequest(BaseModel):
    NIT: Optional[str] = Field(None, description="NIT del cliente")
    MetodoPagoID: Optional[int] = Field(None, description="Método de pago")

# ==================== RESPONSE SCHEMAS ====================

class SaleItemResponse(ApiBaseModel):
    DetalleID: int
    VentaID: int
    ProductoID: int
    Cantidad: int
    PrecioUnitario: Money
    Subtotal: Money
    MontoDescuento: Money
    Total: Money
    NombreProducto: Optional[str] = None
    CodigoProducto: Optional[str] = None

    @classmethod
    def from_model(cls, item: SaleItem) -> "SaleItemResponse":
        return cls(
            DetalleID=item.id,
            VentaID=item.sale_id,
            ProductoID=item.product_id,
            Cantidad=item.quantity,
            PrecioUnitario=item.unit_price,
            Subtotal=item.subtotal,
            MontoDescuento=item.discount_amount,
            Total=item.total,
            NombreProducto=item.product.name if item.product else None,
            CodigoProducto=item.product.code if item.product else None
        )

class SaleResponse(ApiBaseModel):
    VentaID: int
    CodigoVenta: str
    NIT: str
    FechaVenta: datetime
    MetodoPagoID: int
    Subtotal: Money
    TotalDescuento: Money
    Total: Money
    Estado: bool
    Detalle: List[SaleItemResponse] = []

    @classmethod
    def from_model(cls, sale: Sale) -> "SaleResponse":
        return cls(
            VentaID=sale.id,
            CodigoVenta=sale.code,
            NIT=sale.client_nit,
            FechaVenta=sale.sale_date,
            MetodoPagoID=sale.payment_method_id,
            Subtotal=sale.subtotal,
            TotalDescuento=sale.total_discount,
            Total=sale.total,
            Estado=sale.is_active,
            Detalle=[SaleItemResponse.from_model(item) for item in sale.items]
        )

class PaymentMethodResponse(ApiBaseModel):
    MetodoPagoID: int
    Codigo: str
    Descripcion: str

    @classmethod
    def from_model(cls, method: PaymentMethod) -> "PaymentMethodResponse":
        return cls(
            MetodoPagoID=method.id,
            Codigo=method.code,
            Descripcion=method.description
        )

class SaleDataResponse(BaseResponse):
    data: SaleResponse

class SaleListResponse(BaseResponse):
    data: List[SaleResponse]

class PaymentMethodListResponse(BaseResponse):
    data: List[PaymentMethodResponse]
