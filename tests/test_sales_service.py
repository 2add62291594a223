import re
from datetime import date, datetime, timedelta
from decimal import Decimal
from itertools import cycle

import pytest

from app.core.dependencies import build_sales_service
from app.core.exceptions import (
    InvalidInputError, NotFoundError, InsufficientStockError, InvalidStateError, InternalError
)
from app.modules.sales.pricing import OrderLine
from app.modules.sales.service import generate_sale_code
from app.shared.database.models import Client, DiscountType, Product, Sale, SaleItem

def _stock(db_session, product_id):
    db_session.expire_all()
    return db_session.get(Product, product_id).stock

# ==================== CÓDIGO DE VENTA ====================

def test_generate_sale_code_format():
    code = generate_sale_code(datetime(2024, 3, 5, 9, 0))
    assert re.fullmatch(r"V20240305-\d{3}", code)

def test_sale_code_retries_until_unused(db_session, customer, product):
    codes = cycle(["V20240315-001", "V20240315-001", "V20240315-002"])
    service = build_sales_service(db_session)
    service.code_generator = lambda now: next(codes)

    first = service.create_sale("12345678", 1, [OrderLine(product.id, 1)])
    second = service.create_sale("12345678", 1, [OrderLine(product.id, 1)])

    assert first.code == "V20240315-001"
    assert second.code == "V20240315-002"

def test_sale_code_taken_concurrently_is_retried(db_session, customer, product):
    codes = cycle(["V20240315-001", "V20240315-001", "V20240315-002"])
    service = build_sales_service(db_session)
    service.code_generator = lambda now: next(codes)
    service.create_sale("12345678", 1, [OrderLine(product.id, 1)])

    # La primera verificación no ve la venta existente, como si otra
    # transacción la hubiera confirmado justo después
    real_code_exists = service.repository.code_exists
    calls = []

    def stale_code_exists(code):
        calls.append(code)
        return False if len(calls) == 1 else real_code_exists(code)

    service.repository.code_exists = stale_code_exists
    second = service.create_sale("12345678", 1, [OrderLine(product.id, 1)])

    assert second.code == "V20240315-002"
    assert db_session.query(Sale).count() == 2
    assert _stock(db_session, product.id) == 48

def test_sale_code_gives_up_after_max_attempts(db_session, customer, product):
    service = build_sales_service(db_session)
    service.code_generator = lambda now: "V20240315-001"
    service.create_sale("12345678", 1, [OrderLine(product.id, 1)])

    service.code_max_attempts = 3
    with pytest.raises(InternalError):
        service.create_sale("12345678", 1, [OrderLine(product.id, 1)])

    assert _stock(db_session, product.id) == 49

# ==================== CREAR VENTA ====================

def test_create_sale_persists_header_items_and_stock(sales_service, db_session, customer, product, cheap_product):
    sale = sales_service.create_sale("12345678", 2, [
        OrderLine(product.id, 2),
        OrderLine(cheap_product.id, 3),
    ])

    assert re.fullmatch(r"V\d{8}-\d{3}", sale.code)
    assert sale.is_active is True
    assert sale.client_nit == "12345678"
    assert sale.payment_method_id == 2
    assert sale.subtotal == Decimal("260.00")
    assert sale.total_discount == Decimal("0.00")
    assert sale.total == Decimal("260.00")
    assert [item.quantity for item in sale.items] == [2, 3]
    assert sale.items[0].unit_price == Decimal("100.00")

    assert _stock(db_session, product.id) == 48
    assert _stock(db_session, cheap_product.id) == 7

def test_create_sale_captures_discounts(sales_service, customer, product, cheap_product, make_discount):
    make_discount(product, DiscountType.PERCENTAGE, 10)
    make_discount(cheap_product, DiscountType.FIXED_AMOUNT, 15)

    sale = sales_service.create_sale("12345678", 1, [
        OrderLine(product.id, 2),
        OrderLine(cheap_product.id, 3),
    ])

    assert sale.items[0].discount_amount == Decimal("20.00")
    assert sale.items[0].total == Decimal("180.00")
    assert sale.items[1].discount_amount == Decimal("45.00")
    assert sale.items[1].total == Decimal("15.00")
    assert sale.subtotal == Decimal("260.00")
    assert sale.total_discount == Decimal("65.00")
    assert sale.total == Decimal("195.00")

def test_expired_discount_is_ignored(sales_service, customer, product, make_discount):
    past = date.today() - timedelta(days=30)
    make_discount(product, DiscountType.PERCENTAGE, 50, start=past, end=past + timedelta(days=5))

    sale = sales_service.create_sale("12345678", 1, [OrderLine(product.id, 1)])

    assert sale.total_discount == Decimal("0.00")
    assert sale.total == Decimal("100.00")

def test_create_sale_unknown_client(sales_service, db_session, product):
    with pytest.raises(NotFoundError) as exc:
        sales_service.create_sale("999", 1, [OrderLine(product.id, 1)])

    assert exc.value.message == "No existe un cliente con el NIT 999"
    assert db_session.query(Sale).count() == 0

def test_create_sale_unknown_payment_method(sales_service, customer, product):
    with pytest.raises(NotFoundError):
        sales_service.create_sale("12345678", 99, [OrderLine(product.id, 1)])

def test_create_sale_validates_before_lookups(sales_service):
    # Sin cliente registrado: la validación de forma ocurre primero
    with pytest.raises(InvalidInputError) as exc:
        sales_service.create_sale("12345678", 1, [])
    assert exc.value.message == "La venta debe tener al menos un producto"

def test_insufficient_stock_leaves_no_trace(sales_service, db_session, customer, product, cheap_product):
    with pytest.raises(InsufficientStockError):
        sales_service.create_sale("12345678", 1, [
            OrderLine(product.id, 1),
            OrderLine(cheap_product.id, 11),
        ])

    assert db_session.query(Sale).count() == 0
    assert db_session.query(SaleItem).count() == 0
    assert _stock(db_session, product.id) == 50
    assert _stock(db_session, cheap_product.id) == 10

def test_repeated_product_lines_cannot_oversell(sales_service, db_session, customer, cheap_product):
    # Cada línea por separado cabe en el stock, la suma no
    with pytest.raises(InsufficientStockError):
        sales_service.create_sale("12345678", 1, [
            OrderLine(cheap_product.id, 6),
            OrderLine(cheap_product.id, 6),
        ])

    assert db_session.query(Sale).count() == 0
    assert _stock(db_session, cheap_product.id) == 10

def test_sale_can_consume_all_stock(sales_service, db_session, customer, cheap_product):
    sales_service.create_sale("12345678", 1, [OrderLine(cheap_product.id, 10)])
    assert _stock(db_session, cheap_product.id) == 0

    with pytest.raises(InsufficientStockError):
        sales_service.create_sale("12345678", 1, [OrderLine(cheap_product.id, 1)])

# ==================== ANULAR VENTA ====================

def test_cancel_sale_restores_stock(sales_service, db_session, customer, product, cheap_product):
    sale = sales_service.create_sale("12345678", 1, [
        OrderLine(product.id, 5),
        OrderLine(cheap_product.id, 2),
    ])

    cancelled = sales_service.cancel_sale(sale.id)

    assert cancelled.is_active is False
    assert _stock(db_session, product.id) == 50
    assert _stock(db_session, cheap_product.id) == 10
    # La venta anulada sigue consultable
    assert sales_service.get_sale(sale.id) is not None

def test_cancel_sale_twice_is_invalid_state(sales_service, db_session, customer, product):
    sale = sales_service.create_sale("12345678", 1, [OrderLine(product.id, 5)])
    sales_service.cancel_sale(sale.id)

    with pytest.raises(InvalidStateError) as exc:
        sales_service.cancel_sale(sale.id)

    assert exc.value.message == f"La venta con ID {sale.id} ya está anulada"
    assert _stock(db_session, product.id) == 50

def test_cancel_unknown_sale(sales_service, db_session, product):
    with pytest.raises(NotFoundError) as exc:
        sales_service.cancel_sale(12345)
    assert exc.value.message == "No existe una venta con el ID 12345"
    assert _stock(db_session, product.id) == 50

def test_cancel_sale_invalid_id(sales_service):
    with pytest.raises(InvalidInputError):
        sales_service.cancel_sale(0)

# ==================== ACTUALIZAR / CONSULTAS ====================

def test_update_sale_changes_header_only(sales_service, db_session, customer, product):
    db_session.add(Client(nit="87654321", full_name="Luis Gómez", phone="5555-0202"))
    db_session.commit()

    sale = sales_service.create_sale("12345678", 1, [OrderLine(product.id, 2)])
    updated = sales_service.update_sale(sale.id, "87654321", 3)

    assert updated.client_nit == "87654321"
    assert updated.payment_method_id == 3
    assert updated.total == Decimal("200.00")
    assert _stock(db_session, product.id) == 48

def test_update_sale_unknown_client(sales_service, customer, product):
    sale = sales_service.create_sale("12345678", 1, [OrderLine(product.id, 1)])

    with pytest.raises(NotFoundError):
        sales_service.update_sale(sale.id, "000", 1)

def test_sales_by_client_and_code(sales_service, customer, product):
    sale = sales_service.create_sale("12345678", 1, [OrderLine(product.id, 1)])

    assert [s.id for s in sales_service.get_sales_by_client("12345678")] == [sale.id]
    assert sales_service.get_sale_by_code(sale.code).id == sale.id

    with pytest.raises(NotFoundError):
        sales_service.get_sales_by_client("no-existe")

def test_sales_by_date_range_is_inclusive(sales_service, customer, product):
    sale = sales_service.create_sale("12345678", 1, [OrderLine(product.id, 1)])
    today = date.today()

    assert [s.id for s in sales_service.get_sales_by_date_range(today, today)] == [sale.id]
    assert sales_service.get_sales_by_date_range(today + timedelta(days=1), today + timedelta(days=2)) == []

    with pytest.raises(InvalidInputError):
        sales_service.get_sales_by_date_range(today, today - timedelta(days=1))
