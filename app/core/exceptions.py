"""
Errores de dominio y su traducción a respuestas HTTP.

Los servicios lanzan subclases de AppError con un ErrorKind explícito;
los manejadores registrados en la aplicación eligen el código HTTP a partir
del tipo de error, nunca a partir del texto del mensaje.
"""
import logging
from enum import Enum
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.config.settings import settings
from app.shared.schemas.common import ErrorResponse

logger = logging.getLogger(__name__)

class ErrorKind(str, Enum):
    INVALID_INPUT = "invalid_input"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    INSUFFICIENT_STOCK = "insufficient_stock"
    INVALID_STATE = "invalid_state"
    INTERNAL = "internal"

STATUS_BY_KIND = {
    ErrorKind.INVALID_INPUT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.INSUFFICIENT_STOCK: status.HTTP_400_BAD_REQUEST,
    ErrorKind.INVALID_STATE: status.HTTP_400_BAD_REQUEST,
    ErrorKind.INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

GENERIC_ERROR_MESSAGE = "Ha ocurrido un error interno en el servidor"

class AppError(Exception):
    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def with_status(self, status_code: int) -> "AppError":
        """Forzar un código HTTP distinto al del tipo (contratos por ruta)"""
        self.status_code = status_code
        return self

    @property
    def http_status(self) -> int:
        return self.status_code or STATUS_BY_KIND[self.kind]

class InvalidInputError(AppError):
    kind = ErrorKind.INVALID_INPUT

class NotFoundError(AppError):
    kind = ErrorKind.NOT_FOUND

class ConflictError(AppError):
    kind = ErrorKind.CONFLICT

class InsufficientStockError(AppError):
    kind = ErrorKind.INSUFFICIENT_STOCK

class InvalidStateError(AppError):
    kind = ErrorKind.INVALID_STATE

class InternalError(AppError):
    kind = ErrorKind.INTERNAL

def _expose_error_detail() -> bool:
    return settings.debug or not settings.is_production

def _error_body(message: str, detail: Optional[str] = None) -> dict:
    if not _expose_error_detail():
        detail = None
    return ErrorResponse(message=message, error=detail).model_dump(exclude_none=True)

async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.kind is ErrorKind.INTERNAL:
        logger.error(f"{request.method} {request.url.path} - {exc.message}", exc_info=exc.__cause__)
        body = _error_body(exc.message, str(exc.__cause__) if exc.__cause__ else exc.message)
    else:
        logger.warning(f"{request.method} {request.url.path} - {exc.kind.value}: {exc.message}")
        body = _error_body(exc.message)

    return JSONResponse(status_code=exc.http_status, content=body)

async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{field}: {first.get('msg')}" if field else first.get("msg")
    else:
        message = "Datos de entrada inválidos"

    logger.warning(f"{request.method} {request.url.path} - validación: {message}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"success": False, "message": message}
    )

async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"{request.method} {request.url.path} - error no controlado")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body(GENERIC_ERROR_MESSAGE, str(exc))
    )

def register_exception_handlers(app: FastAPI):
    """Registrar los manejadores de error de la aplicación"""
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
