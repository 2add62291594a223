# app/api/v1/router.py
from fastapi import APIRouter

from app.config.settings import settings
from app.modules.products.router import router as products_router
from app.modules.clients.router import router as clients_router
from app.modules.discounts.router import router as discounts_router
from app.modules.sales.router import router as sales_router
from app.modules.reports.router import router as reports_router

# Crear router principal de la API
api_router = APIRouter()

# ==================== MÓDULOS ====================

api_router.include_router(products_router, prefix="/productos", tags=["Productos"])
api_router.include_router(clients_router, prefix="/clientes", tags=["Clientes"])
api_router.include_router(discounts_router, prefix="/descuentos", tags=["Descuentos"])
api_router.include_router(sales_router, prefix="/ventas", tags=["Ventas"])
api_router.include_router(reports_router, prefix="/reportes", tags=["Reportes"])

# ==================== ENDPOINTS RAÍZ ====================

@api_router.get("/healthcheck")
def health_check():
    """Health check endpoint"""
    return {
        "status": "OK",
        "service": settings.app_name,
        "version": settings.version,
        "modules": ["productos", "clientes", "descuentos", "ventas", "reportes"]
    }
