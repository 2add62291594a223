# app/modules/discounts/router.py
from fastapi import APIRouter, Depends, Query, status
from typing import Optional

from app.core.dependencies import get_discounts_service
from app.core.exceptions import NotFoundError
from .service import DiscountsService
from .schemas import (
    DiscountCreateRequest, DiscountUpdateRequest,
    DiscountResponse, DiscountDataResponse, DiscountListResponse,
    DiscountTypeResponse, DiscountTypeListResponse
)

router = APIRouter()

@router.get("", response_model=DiscountListResponse)
def get_discounts(
    producto_id: Optional[int] = Query(None, alias="productoId"),
    estado: Optional[bool] = None,
    service: DiscountsService = Depends(get_discounts_service)
):
    """
    Listar descuentos, opcionalmente filtrados por producto y/o estado
    """
    discounts = service.get_discounts(product_id=producto_id, is_active=estado)
    return DiscountListResponse(data=[DiscountResponse.from_model(d) for d in discounts])

@router.get("/tipos", response_model=DiscountTypeListResponse)
def get_discount_types(service: DiscountsService = Depends(get_discounts_service)):
    types = service.get_discount_types()
    return DiscountTypeListResponse(data=[DiscountTypeResponse.from_model(t) for t in types])

@router.get("/producto/{producto_id}", response_model=DiscountDataResponse)
def get_discount_by_product(
    producto_id: int,
    service: DiscountsService = Depends(get_discounts_service)
):
    discount = service.get_discount_by_product(producto_id)
    if not discount:
        raise NotFoundError(f"No se encontró ningún descuento para el producto con ID {producto_id}")

    return DiscountDataResponse(data=DiscountResponse.from_model(discount))

@router.get("/{discount_id}", response_model=DiscountDataResponse)
def get_discount(
    discount_id: int,
    service: DiscountsService = Depends(get_discounts_service)
):
    discount = service.get_discount(discount_id)
    if not discount:
        raise NotFoundError(f"No se encontró ningún descuento con el ID {discount_id}")

    return DiscountDataResponse(data=DiscountResponse.from_model(discount))

@router.post("", response_model=DiscountDataResponse, status_code=status.HTTP_201_CREATED)
def create_discount(
    discount_data: DiscountCreateRequest,
    service: DiscountsService = Depends(get_discounts_service)
):
    """
    Asignar un descuento a un producto (máximo uno por producto)
    """
    discount = service.create_discount(discount_data)
    return DiscountDataResponse(
        message="Descuento creado exitosamente",
        data=DiscountResponse.from_model(discount)
    )

@router.put("/{discount_id}", response_model=DiscountDataResponse)
def update_discount(
    discount_id: int,
    discount_data: DiscountUpdateRequest,
    service: DiscountsService = Depends(get_discounts_service)
):
    discount = service.update_discount(discount_id, discount_data)
    return DiscountDataResponse(
        message="Descuento actualizado exitosamente",
        data=DiscountResponse.from_model(discount)
    )

@router.put("/{discount_id}/activar", response_model=DiscountDataResponse)
def activate_discount(
    discount_id: int,
    service: DiscountsService = Depends(get_discounts_service)
):
    discount = service.activate_discount(discount_id)
    return DiscountDataResponse(
        message="Descuento activado exitosamente",
        data=DiscountResponse.from_model(discount)
    )

@router.put("/{discount_id}/desactivar", response_model=DiscountDataResponse)
def deactivate_discount(
    discount_id: int,
    service: DiscountsService = Depends(get_discounts_service)
):
    discount = service.deactivate_discount(discount_id)
    return DiscountDataResponse(
        message="Descuento desactivado exitosamente",
        data=DiscountResponse.from_model(discount)
    )
