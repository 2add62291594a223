from pydantic import Field
from pydantic_settings import BaseSettings
from typing import List

class Settings(BaseSettings):
    # App Info
    app_name: str = "VentasCatalogo API"
    version: str = "1.0.0"
    debug: bool = False
    environment: str = Field(
        default="development",
        description="development | stage | production"
    )
    log_level: str = "INFO"

    # Database
    database_url: str
    db_pool_size: int = 10
    db_max_overflow: int = 0
    db_pool_timeout: int = 30
    db_pool_recycle: int = 300  # Conexiones inactivas se reciclan a los 5 minutos
    auto_create_tables: bool = True

    # CORS
    allowed_origins: List[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
    ]
    allowed_hosts: List[str] = ["*"]

    # Ventas
    sale_code_max_attempts: int = Field(
        default=10,
        description="Intentos para generar un código de venta no repetido"
    )

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    class Config:
        env_file = ".env"
        case_sensitive = False

    @property
    def is_production(self) -> bool:
        return self.environment.lower() in ("production", "prod")

settings = Settings()
