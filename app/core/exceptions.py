"""
Errores de dominio y handlers globales para respuestas de error consistentes.

Todas las respuestas de error comparten la forma `{"error": "<mensaje>"}`
(más `request_id` cuando existe) y un status en {400, 401, 404, 500}.
"""
import logging
from typing import Any, Dict

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pymongo.errors import AutoReconnect, PyMongoError
from starlette.exceptions import HTTPException as StarletteHTTPException


class AppError(Exception):
    """Base de los errores que la API expone tal cual al cliente."""

    status_code = 500
    message = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)
        if message:
            self.message = message

    def body(self) -> Dict[str, Any]:
        return {"error": self.message}


class UnauthorizedError(AppError):
    status_code = 401
    message = "Unauthorized"


class ValidationError(AppError):
    status_code = 400
    message = "Invalid request"


class ConflictError(ValidationError):
    """Conflicto de unicidad (p. ej. email ya registrado); se reporta como 400."""

    message = "Resource already exists"


class NotFoundError(AppError):
    # Ausente o de otro usuario: ambos casos son indistinguibles para el cliente
    status_code = 404
    message = "Not found"


class InternalError(AppError):
    status_code = 500
    message = "Internal server error"


class StorageUnavailableError(InternalError):
    """Timeout o storage inaccesible. Se marca como reintentable para el cliente."""

    message = "Storage unavailable"

    def body(self) -> Dict[str, Any]:
        return {"error": self.message, "retryable": True}


def _req_id(request: Request) -> str | None:
    return getattr(getattr(request, "state", object()), "request_id", None)


def _respond(request: Request, status_code: int, body: Dict[str, Any]) -> JSONResponse:
    rid = _req_id(request)
    if rid:
        body["request_id"] = rid
    return JSONResponse(status_code=status_code, content=body)


def register_exception_handlers(app: FastAPI) -> None:
    log = logging.getLogger("memo.errors")

    @app.exception_handler(AppError)
    async def _app_error_handler(request: Request, exc: AppError):
        if exc.status_code >= 500:
            log.error("%s request_id=%s: %s", type(exc).__name__, _req_id(request), exc.message)
        return _respond(request, exc.status_code, exc.body())

    @app.exception_handler(StarletteHTTPException)
    async def _http_exc_handler(request: Request, exc: StarletteHTTPException):
        return _respond(request, exc.status_code, {"error": str(exc.detail or "HTTP error")})

    @app.exception_handler(RequestValidationError)
    async def _validation_handler(request: Request, exc: RequestValidationError):
        body: Dict[str, Any] = {
            "error": "Invalid request body",
            "details": [{"loc": list(e.get("loc", ())), "msg": e.get("msg", "")} for e in exc.errors()],
        }
        return _respond(request, 400, body)

    @app.exception_handler(PyMongoError)
    async def _storage_handler(request: Request, exc: PyMongoError):
        log.error("Storage failure request_id=%s: %s", _req_id(request), exc)
        # Timeouts y pérdida de conexión son reintentables; el resto no
        retryable = exc.timeout or isinstance(exc, AutoReconnect)
        err = StorageUnavailableError() if retryable else InternalError()
        return _respond(request, err.status_code, err.body())

    @app.exception_handler(Exception)
    async def _generic_handler(request: Request, exc: Exception):
        log.exception("Unhandled error request_id=%s", _req_id(request))
        return _respond(request, 500, {"error": InternalError.message})
