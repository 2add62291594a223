# app/core/dependencies.py
"""
Composición de servicios por request.

Cada request recibe su propia sesión; los repositorios y servicios se
construyen aquí una sola vez y se inyectan explícitamente, en lugar de
que cada servicio instancie sus propias dependencias.
"""
from fastapi import Depends
from sqlalchemy.orm import Session

from app.config.database import get_db
from app.config.settings import settings
from app.modules.clients.repository import ClientsRepository
from app.modules.clients.service import ClientsService
from app.modules.discounts.repository import DiscountsRepository
from app.modules.discounts.service import DiscountsService
from app.modules.products.repository import ProductsRepository
from app.modules.products.service import ProductsService
from app.modules.reports.repository import ReportsRepository
from app.modules.reports.service import ReportsService
from app.modules.sales.pricing import PricingEngine
from app.modules.sales.repository import SalesRepository
from app.modules.sales.service import SalesService

def build_products_service(db: Session) -> ProductsService:
    return ProductsService(db, ProductsRepository(db))

def build_clients_service(db: Session) -> ClientsService:
    return ClientsService(db, ClientsRepository(db))

def build_discounts_service(db: Session) -> DiscountsService:
    return DiscountsService(db, DiscountsRepository(db), ProductsRepository(db))

def build_sales_service(db: Session) -> SalesService:
    products = ProductsRepository(db)
    discounts = build_discounts_service(db)
    return SalesService(
        db=db,
        repository=SalesRepository(db),
        products=products,
        clients=ClientsRepository(db),
        pricing=PricingEngine(products=products, discounts=discounts),
        code_max_attempts=settings.sale_code_max_attempts
    )

def build_reports_service(db: Session) -> ReportsService:
    return ReportsService(ReportsRepository(db))

# ==================== DEPENDENCIAS FASTAPI ====================

def get_products_service(db: Session = Depends(get_db)) -> ProductsService:
    return build_products_service(db)

def get_clients_service(db: Session = Depends(get_db)) -> ClientsService:
    return build_clients_service(db)

def get_discounts_service(db: Session = Depends(get_db)) -> DiscountsService:
    return build_discounts_service(db)

def get_sales_service(db: Session = Depends(get_db)) -> SalesService:
    return build_sales_service(db)

def get_reports_service(db: Session = Depends(get_db)) -> ReportsService:
    return build_reports_service(db)
