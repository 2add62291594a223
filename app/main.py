import logging

from fastapi import FastAPI
from contextlib import asynccontextmanager

from app.config.settings import settings
from app.config.database import init_db
from app.core.middleware import setup_middleware
from app.core.exceptions import register_exception_handlers
from app.api.v1.router import api_router

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
)

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    print("🚀 VentasCatalogo API Starting...")
    print(f"📍 Version: {settings.version}")
    print(f"🌍 Environment: {settings.environment}")

    if settings.auto_create_tables:
        init_db()
        print("🗄️  Tablas y catálogos verificados")

    yield

    # Shutdown
    print("🛑 VentasCatalogo API Shutting down...")

# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=settings.version,
    description="Gestión de productos, clientes, descuentos y ventas con control de inventario",
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
    lifespan=lifespan
)

# Setup middleware
setup_middleware(app)
register_exception_handlers(app)

# Include routers
app.include_router(api_router, prefix="/api")

# Root endpoint
@app.get("/")
def root():
    return {
        "message": "🚀 VentasCatalogo API",
        "version": settings.version,
        "status": "running",
        "docs": "/docs" if settings.debug else "Disabled in production",
        "api": "/api"
    }

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
