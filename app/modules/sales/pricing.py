# app/modules/sales/pricing.py
"""
Motor de precios de ventas.

Dado un cliente, un método de pago y las líneas (producto, cantidad) de un
pedido, valida cada línea, captura el precio unitario vigente, aplica el
descuento del producto cuando está activo y dentro de su vigencia, y
agrega subtotal, descuento y total del pedido.

No escribe nada: el resultado (PricedOrder) queda listo para que el
servicio de ventas lo persista dentro de una única transacción.
"""
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Callable, List, Optional, Sequence, Union

from app.core.exceptions import InvalidInputError, NotFoundError, InsufficientStockError
from app.shared.database.models import Discount, DiscountType, Product
from app.shared.validators import is_positive_int

CENT = Decimal("0.01")
ZERO = Decimal("0.00")

def to_money(value: Union[Decimal, int, float, str]) -> Decimal:
    """Redondear a centavos (precisión de la moneda)"""
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(CENT, rounding=ROUND_HALF_UP)

# ==================== TIPOS ====================

@dataclass(frozen=True)
class OrderLine:
    product_id: int
    quantity: int

@dataclass(frozen=True)
class PricedLine:
    product_id: int
    product_code: str
    product_name: str
    quantity: int
    unit_price: Decimal
    subtotal: Decimal
    discount_amount: Decimal
    total: Decimal

@dataclass(frozen=True)
class PricedOrder:
    client_nit: str
    payment_method_id: int
    lines: List[PricedLine] = field(default_factory=list)
    subtotal: Decimal = ZERO
    total_discount: Decimal = ZERO
    total: Decimal = ZERO

# ==================== REGLAS DE DESCUENTO ====================

def discount_applies(discount: Optional[Discount], at: Union[date, datetime]) -> bool:
    """Un descuento aplica si está activo y `at` cae en [inicio, fin], ambos inclusive"""
    if discount is None or not discount.is_active:
        return False

    day = at.date() if isinstance(at, datetime) else at
    return discount.start_date <= day <= discount.end_date

def compute_line_discount(
    discount: Optional[Discount],
    line_subtotal: Decimal,
    quantity: int,
    at: Union[date, datetime]
) -> Decimal:
    if not discount_applies(discount, at):
        return ZERO

    value = Decimal(discount.value)

    if discount.discount_type_id == DiscountType.PERCENTAGE:
        return to_money(line_subtotal * value / Decimal(100))

    if discount.discount_type_id == DiscountType.FIXED_AMOUNT:
        # Monto fijo por unidad; nunca mayor al subtotal de la línea
        return to_money(min(line_subtotal, value * quantity))

    return ZERO

# ==================== MOTOR ====================

class PricingEngine:
    """
    products: acceso al catálogo, expone get_by_id(id)
    discounts: resolvedor de descuentos, expone resolve_active_discount(product_id)
    """

    def __init__(self, products, discounts, clock: Callable[[], datetime] = datetime.now):
        self.products = products
        self.discounts = discounts
        self.clock = clock

    def price_order(
        self,
        client_nit: Optional[str],
        payment_method_id: Optional[int],
        lines: Optional[Sequence[OrderLine]]
    ) -> PricedOrder:
        self.validate_request(client_nit, payment_method_id, lines)

        now = self.clock()
        priced_lines = [self._price_line(line, now) for line in lines]

        subtotal = sum((line.subtotal for line in priced_lines), ZERO)
        total_discount = sum((line.discount_amount for line in priced_lines), ZERO)

        return PricedOrder(
            client_nit=client_nit.strip(),
            payment_method_id=payment_method_id,
            lines=priced_lines,
            subtotal=subtotal,
            total_discount=total_discount,
            total=subtotal - total_discount
        )

    @staticmethod
    def validate_request(
        client_nit: Optional[str],
        payment_method_id: Optional[int],
        lines: Optional[Sequence[OrderLine]]
    ) -> None:
        """Validaciones de forma, antes de cualquier lectura en BD"""
        if not client_nit or not str(client_nit).strip():
            raise InvalidInputError("El NIT del cliente es obligatorio")

        if not is_positive_int(payment_method_id):
            raise InvalidInputError("El método de pago es obligatorio")

        if not lines:
            raise InvalidInputError("La venta debe tener al menos un producto")

        for line in lines:
            if not is_positive_int(line.product_id):
                raise InvalidInputError("El ID del producto es obligatorio")

            if not is_positive_int(line.quantity):
                raise InvalidInputError("La cantidad debe ser un número positivo")

    def _price_line(self, line: OrderLine, now: datetime) -> PricedLine:
        product: Optional[Product] = self.products.get_by_id(line.product_id)
        if not product:
            raise NotFoundError(f"No existe un producto con el ID {line.product_id}")

        # Se compara contra el stock actual; el descuento real de stock es condicional
        if product.stock < line.quantity:
            raise InsufficientStockError(
                f"Stock insuficiente para el producto {product.name}. "
                f"Stock disponible: {product.stock}"
            )

        unit_price = to_money(product.unit_price)
        line_subtotal = to_money(unit_price * line.quantity)

        discount = self.discounts.resolve_active_discount(line.product_id)
        discount_amount = compute_line_discount(discount, line_subtotal, line.quantity, now)

        return PricedLine(
            product_id=product.id,
            product_code=product.code,
            product_name=product.name,
            quantity=line.quantity,
            unit_price=unit_price,
            subtotal=line_subtotal,
            discount_amount=discount_amount,
            total=line_subtotal - discount_amount
        )
