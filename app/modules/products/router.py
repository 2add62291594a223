# app/modules/products/router.py
from fastapi import APIRouter, Depends, status
from typing import Optional

from app.core.dependencies import get_products_service
from app.core.exceptions import NotFoundError
from app.shared.schemas.common import BaseResponse
from .service import ProductsService
from .schemas import (
    ProductCreateRequest, ProductUpdateRequest, StockAdjustmentRequest,
    ProductResponse, ProductDataResponse, ProductListResponse
)

router = APIRouter()

# ==================== CONSULTAS ====================

@router.get("", response_model=ProductListResponse)
def get_products(
    codigo: Optional[str] = None,
    nombre: Optional[str] = None,
    service: ProductsService = Depends(get_products_service)
):
    """
    Listar productos activos, con filtro opcional por código y/o nombre
    """
    products = service.get_products(code=codigo, name=nombre)
    return ProductListResponse(data=[ProductResponse.from_model(p) for p in products])

@router.get("/codigo/{codigo}", response_model=ProductDataResponse)
def get_product_by_code(
    codigo: str,
    service: ProductsService = Depends(get_products_service)
):
    product = service.get_product_by_code(codigo)
    if not product:
        raise NotFoundError(f"No se encontró ningún producto con el código {codigo}")

    return ProductDataResponse(data=ProductResponse.from_model(product))

@router.get("/{product_id}", response_model=ProductDataResponse)
def get_product(
    product_id: int,
    service: ProductsService = Depends(get_products_service)
):
    product = service.get_product(product_id)
    if not product:
        raise NotFoundError(f"No se encontró ningún producto con el ID {product_id}")

    return ProductDataResponse(data=ProductResponse.from_model(product))

# ==================== ESCRITURA ====================

@router.post("", response_model=ProductDataResponse, status_code=status.HTTP_201_CREATED)
def create_product(
    product_data: ProductCreateRequest,
    service: ProductsService = Depends(get_products_service)
):
    product = service.create_product(product_data)
    return ProductDataResponse(
        message="Producto creado exitosamente",
        data=ProductResponse.from_model(product)
    )

@router.put("/{product_id}", response_model=ProductDataResponse)
def update_product(
    product_id: int,
    product_data: ProductUpdateRequest,
    service: ProductsService = Depends(get_products_service)
):
    product = service.update_product(product_id, product_data)
    return ProductDataResponse(
        message="Producto actualizado exitosamente",
        data=ProductResponse.from_model(product)
    )

@router.delete("/{product_id}", response_model=BaseResponse)
def delete_product(
    product_id: int,
    service: ProductsService = Depends(get_products_service)
):
    service.delete_product(product_id)
    return BaseResponse(message="Producto eliminado exitosamente")

@router.patch("/{product_id}/stock", response_model=ProductDataResponse)
def update_product_stock(
    product_id: int,
    adjustment: StockAdjustmentRequest,
    service: ProductsService = Depends(get_products_service)
):
    """
    Ajuste directo de stock: cantidad positiva suma, negativa resta
    """
    product = service.adjust_stock(product_id, adjustment.cantidad)
    return ProductDataResponse(
        message="Stock del producto actualizado exitosamente",
        data=ProductResponse.from_model(product)
    )
