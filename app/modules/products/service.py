# app/modules/products/service.py
import logging
from decimal import Decimal
from typing import List, Optional

from sqlalchemy.orm import Session

from app.core.exceptions import (
    InvalidInputError, NotFoundError, ConflictError, InsufficientStockError
)
from app.shared.database.models import Product
from app.shared.database.unit_of_work import transaction
from app.shared.validators import MAX_INT, is_positive_int, validate_id
from .repository import ProductsRepository
from .schemas import ProductCreateRequest, ProductUpdateRequest

logger = logging.getLogger(__name__)

class ProductsService:
    """
    Catálogo de productos: CRUD y ajustes directos de stock
    """

    def __init__(self, db: Session, repository: ProductsRepository):
        self.db = db
        self.repository = repository

    # ==================== CONSULTAS ====================

    def get_products(self, code: Optional[str] = None, name: Optional[str] = None) -> List[Product]:
        # Sin filtros se devuelve el catálogo completo
        if not code and not name:
            return self.repository.get_all()

        return self.repository.search(code=code, name=name)

    def get_product(self, product_id: int) -> Optional[Product]:
        validate_id(product_id, "ID de producto no válido")
        return self.repository.get_by_id(product_id)

    def get_product_by_code(self, code: str) -> Optional[Product]:
        if not code or not code.strip():
            raise InvalidInputError("Código de producto no válido")
        return self.repository.get_by_code(code.strip())

    def require_product(self, product_id: int) -> Product:
        product = self.get_product(product_id)
        if not product:
            raise NotFoundError(f"No existe un producto con el ID {product_id}")
        return product

    # ==================== ESCRITURA ====================

    def create_product(self, product_data: ProductCreateRequest) -> Product:
        if not product_data.CodigoProducto:
            raise InvalidInputError("El código del producto es obligatorio")

        if not product_data.Nombre:
            raise InvalidInputError("El nombre del producto es obligatorio")

        if product_data.PrecioUnitario is None or product_data.PrecioUnitario <= 0:
            raise InvalidInputError("El precio unitario debe ser un número positivo")

        if not is_positive_int(product_data.UnidadID):
            raise InvalidInputError("La unidad de medida es obligatoria")

        if product_data.Stock is None or not 0 <= product_data.Stock <= MAX_INT:
            raise InvalidInputError("El stock debe ser un número positivo o cero")

        if self.repository.get_by_code(product_data.CodigoProducto):
            raise ConflictError(
                f"Ya existe un producto con el código {product_data.CodigoProducto}"
            )

        with transaction(self.db):
            product = self.repository.create({
                "code": product_data.CodigoProducto,
                "name": product_data.Nombre,
                "description": product_data.Descripcion,
                "unit_price": Decimal(product_data.PrecioUnitario),
                "unit_id": product_data.UnidadID,
                "stock": product_data.Stock,
            })

        logger.info(f"Producto {product.code} creado con ID {product.id}")
        return product

    def update_product(self, product_id: int, product_data: ProductUpdateRequest) -> Product:
        product = self.require_product(product_id)

        if product_data.CodigoProducto and product_data.CodigoProducto != product.code:
            same_code = self.repository.get_by_code(product_data.CodigoProducto)
            if same_code and same_code.id != product_id:
                raise ConflictError(
                    f"Ya existe otro producto con el código {product_data.CodigoProducto}"
                )

        if product_data.PrecioUnitario is not None and product_data.PrecioUnitario <= 0:
            raise InvalidInputError("El precio unitario debe ser un número positivo")

        if product_data.UnidadID is not None and not is_positive_int(product_data.UnidadID):
            raise InvalidInputError("La unidad de medida es obligatoria")

        if product_data.Stock is not None and not 0 <= product_data.Stock <= MAX_INT:
            raise InvalidInputError("El stock debe ser un número positivo o cero")

        changes = {
            "code": product_data.CodigoProducto or product.code,
            "name": product_data.Nombre or product.name,
            "description": product_data.Descripcion if product_data.Descripcion is not None else product.description,
            "unit_price": product_data.PrecioUnitario or product.unit_price,
            "unit_id": product_data.UnidadID if product_data.UnidadID is not None else product.unit_id,
            "stock": product_data.Stock if product_data.Stock is not None else product.stock,
        }

        with transaction(self.db):
            self.repository.update(product, changes)

        return product

    def delete_product(self, product_id: int) -> None:
        product = self.require_product(product_id)

        with transaction(self.db):
            self.repository.deactivate(product)

        logger.info(f"Producto {product_id} desactivado")

    def adjust_stock(self, product_id: int, quantity: Optional[int]) -> Product:
        """
        Sumar (cantidad positiva) o restar (negativa) existencias.
        Una cantidad de cero no modifica nada.
        """
        if quantity is None or abs(quantity) > MAX_INT:
            raise InvalidInputError("Debe proporcionar una cantidad válida")

        product = self.require_product(product_id)

        if quantity == 0:
            return product

        with transaction(self.db):
            if quantity > 0:
                self.repository.increment_stock(product_id, quantity)
            elif not self.repository.decrement_stock(product_id, -quantity):
                raise InsufficientStockError(
                    f"Stock insuficiente para el producto {product.name}"
                )

        self.db.refresh(product)
        logger.info(f"Stock del producto {product_id} ajustado en {quantity}: ahora {product.stock}")
        return product
