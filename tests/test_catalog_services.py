from datetime import date, timedelta
from decimal import Decimal

import pytest

from app.core.dependencies import (
    build_clients_service, build_discounts_service, build_products_service
)
from app.core.exceptions import (
    ConflictError, InsufficientStockError, InvalidInputError, InvalidStateError, NotFoundError
)
from app.modules.clients.schemas import ClientCreateRequest, ClientUpdateRequest
from app.modules.discounts.schemas import DiscountCreateRequest, DiscountUpdateRequest
from app.modules.products.schemas import ProductCreateRequest, ProductUpdateRequest
from app.shared.database.models import DiscountType

def _discount_request(product_id, type_id=DiscountType.PERCENTAGE, value="10", start=None, end=None):
    today = date.today()
    return DiscountCreateRequest(
        ProductoID=product_id,
        TipoDescuentoID=type_id,
        Valor=Decimal(value),
        FechaInicio=(start or today).isoformat(),
        FechaFin=(end or today + timedelta(days=10)).isoformat(),
    )

# ==================== PRODUCTOS ====================

def test_create_and_search_products(db_session):
    service = build_products_service(db_session)
    service.create_product(ProductCreateRequest(
        CodigoProducto="CAF-01", Nombre="Café molido", PrecioUnitario=Decimal("45.50"), UnidadID=1, Stock=5
    ))
    service.create_product(ProductCreateRequest(
        CodigoProducto="TE-01", Nombre="Té verde", PrecioUnitario=Decimal("30"), UnidadID=1, Stock=0
    ))

    assert [p.code for p in service.get_products()] == ["CAF-01", "TE-01"]
    assert [p.code for p in service.get_products(name="café")] == ["CAF-01"]
    assert service.get_product_by_code("TE-01").stock == 0

def test_duplicate_product_code_is_conflict(db_session, product):
    service = build_products_service(db_session)

    with pytest.raises(ConflictError):
        service.create_product(ProductCreateRequest(
            CodigoProducto=product.code, Nombre="Otro", PrecioUnitario=Decimal("1"), UnidadID=1, Stock=1
        ))

@pytest.mark.parametrize("payload,message", [
    ({"Nombre": "X", "PrecioUnitario": 1, "Stock": 1}, "El código del producto es obligatorio"),
    ({"CodigoProducto": "X", "PrecioUnitario": 1, "Stock": 1}, "El nombre del producto es obligatorio"),
    ({"CodigoProducto": "X", "Nombre": "X", "PrecioUnitario": 0, "Stock": 1}, "El precio unitario debe ser un número positivo"),
    ({"CodigoProducto": "X", "Nombre": "X", "PrecioUnitario": 1, "Stock": 1}, "La unidad de medida es obligatoria"),
    ({"CodigoProducto": "X", "Nombre": "X", "PrecioUnitario": 1, "UnidadID": 0, "Stock": 1}, "La unidad de medida es obligatoria"),
    ({"CodigoProducto": "X", "Nombre": "X", "PrecioUnitario": 1, "UnidadID": 1, "Stock": -1}, "El stock debe ser un número positivo o cero"),
    ({"CodigoProducto": "X", "Nombre": "X", "PrecioUnitario": 1, "UnidadID": 1, "Stock": 2**63}, "El stock debe ser un número positivo o cero"),
])
def test_create_product_validation(db_session, payload, message):
    service = build_products_service(db_session)

    with pytest.raises(InvalidInputError) as exc:
        service.create_product(ProductCreateRequest(**payload))
    assert exc.value.message == message

def test_update_product_keeps_missing_fields(db_session, product):
    service = build_products_service(db_session)

    updated = service.update_product(product.id, ProductUpdateRequest(PrecioUnitario=Decimal("120")))

    assert updated.unit_price == Decimal("120")
    assert updated.name == "Cuaderno"
    assert updated.stock == 50

def test_update_product_rejects_invalid_unit(db_session, product):
    service = build_products_service(db_session)

    with pytest.raises(InvalidInputError) as exc:
        service.update_product(product.id, ProductUpdateRequest(UnidadID=0))
    assert exc.value.message == "La unidad de medida es obligatoria"

    updated = service.update_product(product.id, ProductUpdateRequest(UnidadID=2))
    assert updated.unit_id == 2

def test_deleted_product_is_hidden(db_session, product):
    service = build_products_service(db_session)
    service.delete_product(product.id)

    assert service.get_product(product.id) is None
    assert service.get_products() == []
    with pytest.raises(NotFoundError):
        service.delete_product(product.id)

def test_adjust_stock(db_session, product):
    service = build_products_service(db_session)

    assert service.adjust_stock(product.id, 5).stock == 55
    assert service.adjust_stock(product.id, -55).stock == 0
    assert service.adjust_stock(product.id, 0).stock == 0

    with pytest.raises(InsufficientStockError):
        service.adjust_stock(product.id, -1)
    with pytest.raises(InvalidInputError):
        service.adjust_stock(product.id, None)
    with pytest.raises(InvalidInputError):
        service.adjust_stock(product.id, 2**63)

# ==================== CLIENTES ====================

def test_client_lifecycle(db_session):
    service = build_clients_service(db_session)

    created = service.create_client(ClientCreateRequest(
        NIT=" 111 ", NombreCompleto="María López", Telefono="5555-0303"
    ))
    assert created.nit == "111"
    assert created.email is None

    updated = service.update_client("111", ClientUpdateRequest(CorreoElectronico="maria@example.com"))
    assert updated.email == "maria@example.com"
    assert updated.full_name == "María López"

    service.delete_client("111")
    assert service.get_client("111") is None
    assert service.get_clients() == []

def test_duplicate_nit_is_conflict_even_if_inactive(db_session, customer):
    service = build_clients_service(db_session)
    service.delete_client(customer.nit)

    with pytest.raises(ConflictError):
        service.create_client(ClientCreateRequest(
            NIT=customer.nit, NombreCompleto="Otra", Telefono="1"
        ))

def test_client_required_fields(db_session):
    service = build_clients_service(db_session)

    with pytest.raises(InvalidInputError) as exc:
        service.create_client(ClientCreateRequest(NIT="222", NombreCompleto="Sin teléfono"))
    assert exc.value.message == "El teléfono es obligatorio"

# ==================== DESCUENTOS ====================

def test_create_discount_and_resolve(db_session, product):
    service = build_discounts_service(db_session)

    discount = service.create_discount(_discount_request(product.id))

    assert discount.is_active is True
    assert service.resolve_active_discount(product.id).id == discount.id
    assert service.get_discount_by_product(product.id).id == discount.id

def test_resolve_without_discount_returns_none(db_session, product):
    service = build_discounts_service(db_session)
    assert service.resolve_active_discount(product.id) is None

def test_resolve_includes_inactive_discount(db_session, product, make_discount):
    # El filtro por estado y vigencia lo hace el motor de precios
    discount = make_discount(product, DiscountType.PERCENTAGE, 10, is_active=False)
    service = build_discounts_service(db_session)

    assert service.resolve_active_discount(product.id).id == discount.id

def test_second_discount_for_product_is_conflict(db_session, product):
    service = build_discounts_service(db_session)
    service.create_discount(_discount_request(product.id))

    with pytest.raises(ConflictError) as exc:
        service.create_discount(_discount_request(product.id, DiscountType.FIXED_AMOUNT, "5"))
    assert exc.value.message == f"El producto con ID {product.id} ya tiene un descuento asignado"

def test_discount_for_unknown_product(db_session):
    service = build_discounts_service(db_session)

    with pytest.raises(NotFoundError):
        service.create_discount(_discount_request(404))

@pytest.mark.parametrize("kwargs,message", [
    ({"type_id": 7}, "El tipo de descuento no es válido"),
    ({"value": "0"}, "El valor del descuento debe ser un número positivo"),
    ({"value": "101"}, "El porcentaje de descuento no puede ser mayor a 100"),
    (
        {"start": date(2024, 5, 10), "end": date(2024, 5, 1)},
        "La fecha de inicio debe ser anterior a la fecha de fin",
    ),
])
def test_create_discount_validation(db_session, product, kwargs, message):
    service = build_discounts_service(db_session)

    with pytest.raises(InvalidInputError) as exc:
        service.create_discount(_discount_request(product.id, **kwargs))
    assert exc.value.message == message

def test_fixed_amount_above_100_is_allowed(db_session, product):
    service = build_discounts_service(db_session)
    discount = service.create_discount(_discount_request(product.id, DiscountType.FIXED_AMOUNT, "250"))
    assert discount.value == Decimal("250")

def test_activate_and_deactivate_discount(db_session, product):
    service = build_discounts_service(db_session)
    discount = service.create_discount(_discount_request(product.id))

    with pytest.raises(InvalidStateError):
        service.activate_discount(discount.id)

    assert service.deactivate_discount(discount.id).is_active is False
    with pytest.raises(InvalidStateError):
        service.deactivate_discount(discount.id)

    assert service.activate_discount(discount.id).is_active is True

def test_update_discount_merges_fields(db_session, product, cheap_product):
    service = build_discounts_service(db_session)
    discount = service.create_discount(_discount_request(product.id))

    updated = service.update_discount(discount.id, DiscountUpdateRequest(Valor=Decimal("25")))
    assert updated.value == Decimal("25")
    assert updated.product_id == product.id

    moved = service.update_discount(discount.id, DiscountUpdateRequest(ProductoID=cheap_product.id))
    assert moved.product_id == cheap_product.id
    assert service.resolve_active_discount(product.id) is None
