import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from services.errors import ServiceError
from utils.db_errors import classify_integrity_error, UNIQUE, FOREIGN_KEY, CHECK

logger = logging.getLogger(__name__)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _validation_message(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path"))
        parts.append(f"{loc}: {err.get('msg')}" if loc else err.get("msg", "invalid"))
    return "; ".join(parts) or "Invalid request"


def add_error_handlers(app: FastAPI):
    @app.exception_handler(ServiceError)
    async def service_error_handler(request: Request, exc: ServiceError):
        return _error(exc.status_code, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return _error(exc.status_code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return _error(400, _validation_message(exc))

    @app.exception_handler(IntegrityError)
    async def integrity_error_handler(request: Request, exc: IntegrityError):
        kind = classify_integrity_error(exc)
        logger.info("integrity violation (%s) on %s %s", kind, request.method, request.url.path)
        if kind == UNIQUE:
            return _error(409, "Duplicate/unique constraint")
        if kind == FOREIGN_KEY:
            # a DELETE that trips a FK means the row is still referenced
            if request.method == "DELETE":
                return _error(409, "Row is still referenced by other records")
            return _error(400, "Referenced record does not exist")
        if kind == CHECK:
            return _error(400, "Value out of allowed range")
        return _error(409, "Constraint violation")

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("unhandled error on %s %s", request.method, request.url.path)
        return _error(500, "Server error")
