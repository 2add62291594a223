# app/modules/sales/router.py
from fastapi import APIRouter, Depends, status
from typing import Optional

from app.core.dependencies import get_sales_service
from app.core.exceptions import InvalidInputError, NotFoundError
from app.shared.validators import parse_date
from .service import SalesService
from .schemas import (
    SaleCreateRequest, SaleUpdateRequest,
    SaleResponse, SaleDataResponse, SaleListResponse,
    PaymentMethodResponse, PaymentMethodListResponse
)

router = APIRouter()

# ==================== CONSULTAS ====================

@router.get("", response_model=SaleListResponse)
def get_sales(
    nit: Optional[str] = None,
    fechaInicio: Optional[str] = None,
    fechaFin: Optional[str] = None,
    service: SalesService = Depends(get_sales_service)
):
    """
    Listar ventas.

    - Con fechaInicio y fechaFin: ventas del rango (días inclusive)
    - Con nit: ventas del cliente
    - Sin filtros: todas las ventas, incluidas las anuladas
    """
    if fechaInicio and fechaFin:
        start_date = parse_date(fechaInicio, "Formato de fecha inválido")
        end_date = parse_date(fechaFin, "Formato de fecha inválido")
        sales = service.get_sales_by_date_range(start_date, end_date)
    elif fechaInicio or fechaFin:
        raise InvalidInputError("Los parámetros fechaInicio y fechaFin son obligatorios")
    elif nit:
        sales = service.get_sales_by_client(nit)
    else:
        sales = service.get_sales()

    return SaleListResponse(data=[SaleResponse.from_model(s) for s in sales])

@router.get("/metodos-pago", response_model=PaymentMethodListResponse)
def get_payment_methods(service: SalesService = Depends(get_sales_service)):
    methods = service.get_payment_methods()
    return PaymentMethodListResponse(data=[PaymentMethodResponse.from_model(m) for m in methods])

@router.get("/codigo/{codigo}", response_model=SaleDataResponse)
def get_sale_by_code(codigo: str, service: SalesService = Depends(get_sales_service)):
    sale = service.get_sale_by_code(codigo)
    if not sale:
        raise NotFoundError(f"No se encontró ninguna venta con el código {codigo}")

    return SaleDataResponse(data=SaleResponse.from_model(sale))

@router.get("/{sale_id}", response_model=SaleDataResponse)
def get_sale(sale_id: int, service: SalesService = Depends(get_sales_service)):
    sale = service.get_sale(sale_id)
    if not sale:
        raise NotFoundError(f"No se encontró ninguna venta con el ID {sale_id}")

    return SaleDataResponse(data=SaleResponse.from_model(sale))

# ==================== REGISTRO DE VENTAS ====================

@router.post("", response_model=SaleDataResponse, status_code=status.HTTP_201_CREATED)
def create_sale(
    sale_data: SaleCreateRequest,
    service: SalesService = Depends(get_sales_service)
):
    """
    Registrar venta completa

    Incluye:
    - Validación de cliente, productos y stock
    - Precio unitario vigente y descuento activo por producto
    - Descuento de inventario en la misma transacción
    """
    try:
        sale = service.create_sale(
            client_nit=sale_data.NIT,
            payment_method_id=sale_data.MetodoPagoID,
            lines=sale_data.order_lines() if sale_data.Detalle else None
        )
    except NotFoundError as e:
        # Cliente, producto o método de pago inexistentes vienen del cuerpo: 400
        raise e.with_status(status.HTTP_400_BAD_REQUEST)

    return SaleDataResponse(
        message="Venta creada exitosamente",
        data=SaleResponse.from_model(sale)
    )

@router.put("/{sale_id}", response_model=SaleDataResponse)
def update_sale(
    sale_id: int,
    sale_data: SaleUpdateRequest,
    service: SalesService = Depends(get_sales_service)
):
    sale = service.update_sale(
        sale_id=sale_id,
        client_nit=sale_data.NIT,
        payment_method_id=sale_data.MetodoPagoID
    )
    return SaleDataResponse(
        message="Venta actualizada exitosamente",
        data=SaleResponse.from_model(sale)
    )

@router.delete("/{sale_id}", response_model=SaleDataResponse)
def cancel_sale(sale_id: int, service: SalesService = Depends(get_sales_service)):
    """
    Anular venta: queda registrada como inactiva y el stock se restaura
    """
    sale = service.cancel_sale(sale_id)
    return SaleDataResponse(
        message="Venta anulada exitosamente y stock de productos restaurado",
        data=SaleResponse.from_model(sale)
    )
