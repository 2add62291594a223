from datetime import date, timedelta
from decimal import Decimal

import pytest

from app.core.dependencies import build_reports_service
from app.core.exceptions import InvalidInputError
from app.modules.sales.pricing import OrderLine
from app.shared.database.models import Client

@pytest.fixture
def second_customer(db_session):
    customer = Client(nit="87654321", full_name="Luis Gómez", phone="5555-0202")
    db_session.add(customer)
    db_session.commit()
    return customer

@pytest.fixture
def sales(sales_service, customer, second_customer, product, cheap_product):
    """Cuatro ventas; la última queda anulada y no debe contar"""
    sales_service.create_sale("12345678", 1, [OrderLine(cheap_product.id, 4)])
    sales_service.create_sale("12345678", 1, [OrderLine(cheap_product.id, 2)])
    sales_service.create_sale("87654321", 2, [OrderLine(product.id, 1)])
    cancelled = sales_service.create_sale("87654321", 2, [OrderLine(product.id, 3)])
    sales_service.cancel_sale(cancelled.id)

def test_top_products_by_quantity_and_amount(db_session, sales, product, cheap_product):
    service = build_reports_service(db_session)

    by_quantity = service.get_top_products(limit=10)
    assert [(r.Posicion, r.ProductoID, r.CantidadVendida) for r in by_quantity] == [
        (1, cheap_product.id, 6),
        (2, product.id, 1),
    ]
    assert by_quantity[0].MontoTotal == Decimal("120.00")

    by_amount = service.get_top_products(limit=1, by_amount=True)
    assert [r.ProductoID for r in by_amount] == [cheap_product.id]

def test_top_clients(db_session, sales):
    service = build_reports_service(db_session)

    by_purchases = service.get_top_clients(limit=5)
    assert [(r.NIT, r.CantidadCompras) for r in by_purchases] == [("12345678", 2), ("87654321", 1)]

    by_amount = service.get_top_clients(limit=5, by_transactions=False)
    assert [(r.NIT, r.MontoTotal) for r in by_amount] == [
        ("12345678", Decimal("120.00")),
        ("87654321", Decimal("100.00")),
    ]

def test_sales_by_period(db_session, sales):
    service = build_reports_service(db_session)
    today = date.today()

    days, summary = service.get_sales_by_period(today - timedelta(days=1), today)

    assert len(days) == 1
    assert days[0].Fecha == today
    assert days[0].CantidadVentas == 3
    assert summary.Total == Decimal("220.00")

    empty, empty_summary = service.get_sales_by_period(today + timedelta(days=1), today + timedelta(days=2))
    assert empty == []
    assert empty_summary.CantidadVentas == 0

def test_report_validation(db_session):
    service = build_reports_service(db_session)

    with pytest.raises(InvalidInputError) as exc:
        service.get_top_products(limit=0)
    assert exc.value.message == "El límite debe ser un número positivo"

    with pytest.raises(InvalidInputError):
        service.get_sales_by_period(date(2024, 2, 1), date(2024, 1, 1))
