"""
Fixtures de pytest: base SQLite en memoria por test, sesión y cliente HTTP.
"""
import os

# La configuración se lee al importar app.config.settings
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("AUTO_CREATE_TABLES", "false")

from datetime import date, timedelta
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.config.database import Base, get_db
from app.core.dependencies import build_sales_service
from app.main import app
from app.shared.database.models import Client, Discount, Product, seed_catalogs

@pytest.fixture(scope="function")
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()

@pytest.fixture(scope="function")
def db_session(engine):
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSession()
    seed_catalogs(session)
    yield session
    session.rollback()
    session.close()

@pytest.fixture(scope="function")
def client(db_session):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()

# ==================== DATOS ====================

@pytest.fixture
def customer(db_session):
    customer = Client(nit="12345678", full_name="Ana Pérez", phone="5555-0101", email="ana@example.com")
    db_session.add(customer)
    db_session.commit()
    return customer

@pytest.fixture
def product(db_session):
    product = Product(code="P-001", name="Cuaderno", unit_price=Decimal("100.00"), stock=50)
    db_session.add(product)
    db_session.commit()
    return product

@pytest.fixture
def cheap_product(db_session):
    product = Product(code="P-002", name="Lápiz", unit_price=Decimal("20.00"), stock=10)
    db_session.add(product)
    db_session.commit()
    return product

@pytest.fixture
def make_discount(db_session):
    """Asignar un descuento vigente hoy (o con las fechas indicadas)"""
    def _make(product, type_id, value, start=None, end=None, is_active=True):
        discount = Discount(
            product_id=product.id,
            discount_type_id=type_id,
            value=Decimal(str(value)),
            start_date=start or date.today() - timedelta(days=1),
            end_date=end or date.today() + timedelta(days=1),
            is_active=is_active,
        )
        db_session.add(discount)
        db_session.commit()
        return discount
    return _make

@pytest.fixture
def sales_service(db_session):
    return build_sales_service(db_session)
