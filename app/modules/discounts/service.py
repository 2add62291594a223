# app/modules/discounts/service.py
import logging
from decimal import Decimal
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import InvalidInputError, NotFoundError, ConflictError, InvalidStateError
from app.modules.products.repository import ProductsRepository
from app.shared.database.models import Discount, DiscountType
from app.shared.database.unit_of_work import transaction
from app.shared.validators import validate_id, parse_date, validate_date_range
from .repository import DiscountsRepository
from .schemas import DiscountCreateRequest, DiscountUpdateRequest

logger = logging.getLogger(__name__)

class DiscountsService:
    def __init__(self, db: Session, repository: DiscountsRepository, products: ProductsRepository):
        self.db = db
        self.repository = repository
        self.products = products

    # ==================== RESOLUCIÓN PARA PRECIOS ====================

    def resolve_active_discount(self, product_id: int) -> Optional[Discount]:
        """
        Descuento asignado al producto, si existe.

        No filtra por estado ni por vigencia: eso lo decide quien calcula
        el precio. Un producto sin descuento devuelve None, no un error.
        """
        validate_id(product_id, "ID de producto no válido")
        return self.repository.get_by_product_id(product_id)

    # ==================== CONSULTAS ====================

    def get_discounts(
        self,
        product_id: Optional[int] = None,
        is_active: Optional[bool] = None
    ) -> List[Discount]:
        if product_id is None and is_active is None:
            return self.repository.get_all()

        if product_id is not None:
            validate_id(product_id, "ID de producto no válido")

        return self.repository.filter(product_id=product_id, is_active=is_active)

    def get_discount(self, discount_id: int) -> Optional[Discount]:
        validate_id(discount_id, "ID de descuento no válido")
        return self.repository.get_by_id(discount_id)

    def get_discount_by_product(self, product_id: int) -> Optional[Discount]:
        validate_id(product_id, "ID de producto no válido")

        if not self.products.get_by_id(product_id):
            raise NotFoundError(f"No existe un producto con el ID {product_id}")

        return self.repository.get_by_product_id(product_id)

    def get_discount_types(self) -> List[DiscountType]:
        return self.repository.get_types()

    # ==================== ESCRITURA ====================

    def create_discount(self, discount_data: DiscountCreateRequest) -> Discount:
        if not discount_data.ProductoID:
            raise InvalidInputError("El ID del producto es obligatorio")
        validate_id(discount_data.ProductoID, "El ID del producto es obligatorio")

        if not discount_data.TipoDescuentoID:
            raise InvalidInputError("El tipo de descuento es obligatorio")
        self._validate_type(discount_data.TipoDescuentoID)

        if discount_data.Valor is None or discount_data.Valor <= 0:
            raise InvalidInputError("El valor del descuento debe ser un número positivo")
        self._validate_value(discount_data.TipoDescuentoID, discount_data.Valor)

        if not discount_data.FechaInicio:
            raise InvalidInputError("La fecha de inicio es obligatoria")

        if not discount_data.FechaFin:
            raise InvalidInputError("La fecha de fin es obligatoria")

        start_date = parse_date(discount_data.FechaInicio, "La fecha de inicio no es válida")
        end_date = parse_date(discount_data.FechaFin, "La fecha de fin no es válida")
        validate_date_range(start_date, end_date)

        if not self.products.get_by_id(discount_data.ProductoID):
            raise NotFoundError(f"No existe un producto con el ID {discount_data.ProductoID}")

        if self.repository.get_by_product_id(discount_data.ProductoID):
            raise self._already_assigned(discount_data.ProductoID)

        try:
            with transaction(self.db):
                discount = self.repository.create({
                    "product_id": discount_data.ProductoID,
                    "discount_type_id": discount_data.TipoDescuentoID,
                    "value": Decimal(discount_data.Valor),
                    "start_date": start_date,
                    "end_date": end_date,
                    "is_active": True,
                })
        except IntegrityError as e:
            # Otro request asignó un descuento al producto entre la verificación y el insert
            raise self._already_assigned(discount_data.ProductoID) from e

        logger.info(f"Descuento {discount.id} asignado al producto {discount.product_id}")
        return discount

    def update_discount(self, discount_id: int, discount_data: DiscountUpdateRequest) -> Discount:
        validate_id(discount_id, "ID de descuento no válido")

        discount = self.repository.get_by_id(discount_id)
        if not discount:
            raise NotFoundError(f"No existe un descuento con el ID {discount_id}")

        product_id = discount_data.ProductoID or discount.product_id
        if product_id != discount.product_id:
            if not self.products.get_by_id(product_id):
                raise NotFoundError(f"No existe un producto con el ID {product_id}")

            other = self.repository.get_by_product_id(product_id)
            if other and other.id != discount_id:
                raise self._already_assigned(product_id)

        type_id = discount_data.TipoDescuentoID or discount.discount_type_id
        self._validate_type(type_id)

        value = discount_data.Valor if discount_data.Valor is not None else discount.value
        if value <= 0:
            raise InvalidInputError("El valor del descuento debe ser un número positivo")
        self._validate_value(type_id, value)

        start_date = discount.start_date
        end_date = discount.end_date
        if discount_data.FechaInicio:
            start_date = parse_date(discount_data.FechaInicio, "La fecha de inicio no es válida")
        if discount_data.FechaFin:
            end_date = parse_date(discount_data.FechaFin, "La fecha de fin no es válida")
        validate_date_range(start_date, end_date)

        try:
            with transaction(self.db):
                self.repository.update(discount, {
                    "product_id": product_id,
                    "discount_type_id": type_id,
                    "value": Decimal(value),
                    "start_date": start_date,
                    "end_date": end_date,
                })
        except IntegrityError as e:
            raise self._already_assigned(product_id) from e

        return discount

    def activate_discount(self, discount_id: int) -> Discount:
        discount = self._require_discount(discount_id)

        if discount.is_active:
            raise InvalidStateError(f"El descuento con ID {discount_id} ya está activado")

        with transaction(self.db):
            self.repository.set_active(discount, True)

        return discount

    def deactivate_discount(self, discount_id: int) -> Discount:
        discount = self._require_discount(discount_id)

        if not discount.is_active:
            raise InvalidStateError(f"El descuento con ID {discount_id} ya está desactivado")

        with transaction(self.db):
            self.repository.set_active(discount, False)

        return discount

    # ==================== AUXILIARES ====================

    def _require_discount(self, discount_id: int) -> Discount:
        validate_id(discount_id, "ID de descuento no válido")

        discount = self.repository.get_by_id(discount_id)
        if not discount:
            raise NotFoundError(f"No existe un descuento con el ID {discount_id}")
        return discount

    def _validate_type(self, type_id: int):
        if not self.repository.get_type(type_id):
            raise InvalidInputError("El tipo de descuento no es válido")

    def _validate_value(self, type_id: int, value: Decimal):
        if type_id == DiscountType.PERCENTAGE and value > 100:
            raise InvalidInputError("El porcentaje de descuento no puede ser mayor a 100")

    def _already_assigned(self, product_id: int) -> ConflictError:
        return ConflictError(f"El producto con ID {product_id} ya tiene un descuento asignado")
