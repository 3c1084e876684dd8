from enum import Enum
from typing import Optional

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from storefront.core.logging import get_logger

log = get_logger("errors")


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    INSUFFICIENT_STOCK = "insufficient_stock"
    NOT_FOUND = "not_found"
    UNEXPECTED = "unexpected"


# Single source of truth for kind -> HTTP status.
STATUS_BY_KIND = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.INSUFFICIENT_STOCK: 409,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.UNEXPECTED: 500,
}


class ServiceError(Exception):
    """Raised by the service layer; translated to a response by the app handlers."""

    def __init__(self, kind: ErrorKind, message: str = ""):
        super().__init__(message or kind.value)
        self.kind = kind
        self.message = message or kind.value


class NotFound(ServiceError):
    def __init__(self, message: str = "Not found"):
        super().__init__(ErrorKind.NOT_FOUND, message)


def error_response(kind: ErrorKind, message: Optional[str] = None) -> Response:
    status = STATUS_BY_KIND[kind]
    if kind is ErrorKind.NOT_FOUND:
        return Response(status_code=status)
    return JSONResponse(status_code=status, content={"message": message or kind.value})


def _validation_message(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "; ".join(parts) or "Invalid request"


def install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ServiceError)
    async def _service_error(request: Request, exc: ServiceError):
        return error_response(exc.kind, exc.message)

    @app.exception_handler(RequestValidationError)
    async def _validation_error(request: Request, exc: RequestValidationError):
        return error_response(ErrorKind.VALIDATION, _validation_message(exc))

    @app.exception_handler(Exception)
    async def _unexpected(request: Request, exc: Exception):
        log.exception("Unhandled error on %s %s", request.method, request.url.path)
        return error_response(ErrorKind.UNEXPECTED, str(exc))
