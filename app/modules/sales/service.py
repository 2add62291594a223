# app/modules/sales/service.py
import logging
import random
from datetime import datetime
from typing import Callable, List, Optional, Sequence

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import (
    AppError, InvalidInputError, NotFoundError, InsufficientStockError,
    InvalidStateError, InternalError
)
from app.modules.clients.repository import ClientsRepository
from app.modules.products.repository import ProductsRepository
from app.shared.database.models import Sale, PaymentMethod
from app.shared.database.unit_of_work import transaction
from app.shared.validators import validate_id, validate_date_range
from .pricing import OrderLine, PricedOrder, PricingEngine
from .repository import SalesRepository

logger = logging.getLogger(__name__)

def generate_sale_code(now: datetime) -> str:
    """V{yyyy}{mm}{dd}-{NNN}"""
    return f"V{now:%Y%m%d}-{random.randint(0, 999):03d}"

class SalesService:
    """
    Orquestador de ventas: crea y anula ventas manteniendo el stock
    consistente con el registro de ventas.
    """

    def __init__(
        self,
        db: Session,
        repository: SalesRepository,
        products: ProductsRepository,
        clients: ClientsRepository,
        pricing: PricingEngine,
        code_max_attempts: int = 10,
        code_generator: Callable[[datetime], str] = generate_sale_code,
        clock: Callable[[], datetime] = datetime.now
    ):
        self.db = db
        self.repository = repository
        self.products = products
        self.clients = clients
        self.pricing = pricing
        self.code_max_attempts = code_max_attempts
        self.code_generator = code_generator
        self.clock = clock

    # ==================== CREAR VENTA ====================

    def create_sale(
        self,
        client_nit: Optional[str],
        payment_method_id: Optional[int],
        lines: Optional[Sequence[OrderLine]]
    ) -> Sale:
        """
        Registrar una venta completa.

        1. Validar campos obligatorios (antes de tocar la BD)
        2. Verificar cliente y método de pago
        3. Calcular precios, descuentos y totales
        4. En una sola transacción: encabezado + detalle + descuento de stock
        """
        self.pricing.validate_request(client_nit, payment_method_id, lines)
        client_nit = client_nit.strip()

        if not self.clients.get_by_nit(client_nit):
            raise NotFoundError(f"No existe un cliente con el NIT {client_nit}")

        if not self.repository.get_payment_method(payment_method_id):
            raise NotFoundError(f"No existe un método de pago con el ID {payment_method_id}")

        order = self.pricing.price_order(client_nit, payment_method_id, lines)
        now = self.clock()

        for attempt in range(1, self.code_max_attempts + 1):
            code = self._next_sale_code(now)
            try:
                with transaction(self.db):
                    sale = self.repository.insert(order, code, now)
                    self._consume_stock(order)
                break
            except AppError:
                raise
            except IntegrityError as e:
                # Otra venta tomó el mismo código entre la verificación y el commit
                if attempt < self.code_max_attempts and self.repository.code_exists(code):
                    logger.warning(f"Código de venta {code} ya utilizado, reintentando ({attempt})")
                    continue
                raise InternalError("Error al crear venta") from e
            except SQLAlchemyError as e:
                raise InternalError("Error al crear venta") from e

        logger.info(
            f"Venta {code} registrada - cliente {client_nit} - "
            f"{len(order.lines)} líneas - total {order.total}"
        )
        return self.repository.get_by_id(sale.id)

    def _consume_stock(self, order: PricedOrder):
        # Descuento condicional: si otro request consumió el stock entre el
        # cálculo de precios y este punto, la fila no se actualiza
        for line in order.lines:
            if not self.products.decrement_stock(line.product_id, line.quantity):
                product = self.products.get_by_id(line.product_id)
                available = product.stock if product else 0
                raise InsufficientStockError(
                    f"Stock insuficiente para el producto {line.product_name}. "
                    f"Stock disponible: {available}"
                )

    def _next_sale_code(self, now: datetime) -> str:
        for _ in range(self.code_max_attempts):
            code = self.code_generator(now)
            if not self.repository.code_exists(code):
                return code

        raise InternalError("No fue posible generar un código de venta único")

    # ==================== ANULAR VENTA ====================

    def cancel_sale(self, sale_id: int) -> Sale:
        """
        Anular (baja lógica) una venta y devolver al inventario las
        cantidades de cada línea. Una venta anulada no se puede reactivar.
        """
        validate_id(sale_id, "ID de venta no válido")

        sale = self.repository.get_by_id(sale_id)
        if not sale:
            raise NotFoundError(f"No existe una venta con el ID {sale_id}")

        if not sale.is_active:
            raise InvalidStateError(f"La venta con ID {sale_id} ya está anulada")

        try:
            with transaction(self.db):
                self.repository.set_active(sale, False)
                for item in sale.items:
                    if not self.products.increment_stock(item.product_id, item.quantity):
                        raise InternalError(
                            f"No se pudo restaurar el stock del producto {item.product_id}"
                        )
        except AppError:
            raise
        except SQLAlchemyError as e:
            raise InternalError(f"Error al anular venta con ID {sale_id}") from e

        logger.info(f"Venta {sale.code} anulada - stock restaurado")
        return self.repository.get_by_id(sale_id)

    # ==================== ACTUALIZAR ENCABEZADO ====================

    def update_sale(
        self,
        sale_id: int,
        client_nit: Optional[str],
        payment_method_id: Optional[int]
    ) -> Sale:
        """Solo cliente y método de pago; precios y detalle no se recalculan"""
        validate_id(sale_id, "ID de venta no válido")

        sale = self.repository.get_by_id(sale_id)
        if not sale:
            raise NotFoundError(f"No existe una venta con el ID {sale_id}")

        if not client_nit or not client_nit.strip():
            raise InvalidInputError("El NIT del cliente es obligatorio")

        if payment_method_id is None:
            raise InvalidInputError("El método de pago es obligatorio")
        validate_id(payment_method_id, "El método de pago es obligatorio")

        client_nit = client_nit.strip()
        if not self.clients.get_by_nit(client_nit):
            raise NotFoundError(f"No existe un cliente con el NIT {client_nit}")

        if not self.repository.get_payment_method(payment_method_id):
            raise NotFoundError(f"No existe un método de pago con el ID {payment_method_id}")

        with transaction(self.db):
            self.repository.update_header(sale, client_nit, payment_method_id)

        return self.repository.get_by_id(sale_id)

    # ==================== CONSULTAS ====================

    def get_sales(self) -> List[Sale]:
        return self.repository.get_all()

    def get_sale(self, sale_id: int) -> Optional[Sale]:
        validate_id(sale_id, "ID de venta no válido")
        return self.repository.get_by_id(sale_id)

    def get_sale_by_code(self, code: str) -> Optional[Sale]:
        if not code or not code.strip():
            raise InvalidInputError("Código de venta no válido")
        return self.repository.get_by_code(code.strip())

    def get_sales_by_client(self, client_nit: str) -> List[Sale]:
        if not client_nit or not client_nit.strip():
            raise InvalidInputError("NIT de cliente no válido")

        client_nit = client_nit.strip()
        if not self.clients.get_by_nit(client_nit):
            raise NotFoundError(f"No existe un cliente con el NIT {client_nit}")

        return self.repository.get_by_client(client_nit)

    def get_sales_by_date_range(self, start_date, end_date) -> List[Sale]:
        validate_date_range(start_date, end_date)
        return self.repository.get_between_dates(start_date, end_date)

    def get_payment_methods(self) -> List[PaymentMethod]:
        return self.repository.get_payment_methods()
