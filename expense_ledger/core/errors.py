"""
Application-wide error rendering.

Request validation failures become 400 responses with one entry per
offending field. Every other HTTPException is rendered with the same
envelope so clients only deal with one error shape.
"""
import logging
from typing import Any, Dict, List

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from expense_ledger.shared.schemas.common import ErrorResponse

logger = logging.getLogger(__name__)

ERROR_CODES = {
    400: "BAD_REQUEST",
    401: "UNAUTHORIZED",
    403: "FORBIDDEN",
    404: "NOT_FOUND",
    409: "CONFLICT",
    500: "INTERNAL_ERROR",
    503: "SERVICE_UNAVAILABLE",
}


def format_validation_errors(errors: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Flatten pydantic errors into {field, message, type} entries"""
    details = []
    for error in errors:
        location = [str(part) for part in error.get("loc", ())]
        # "body" / "query" / "path" prefix is transport noise for the client
        if location and location[0] in ("body", "query", "path"):
            location = location[1:]
        details.append({
            "field": ".".join(location) or "body",
            "message": error.get("msg", "Invalid value"),
            "type": error.get("type", "value_error"),
        })
    return details


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    details = format_validation_errors(exc.errors())
    logger.info(f"Validation failed on {request.method} {request.url.path}: {len(details)} error(s)")
    body = ErrorResponse(
        message="Invalid input",
        error_code="VALIDATION_ERROR",
        details=details,
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=jsonable_encoder(body),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    body = ErrorResponse(
        message=str(exc.detail),
        error_code=ERROR_CODES.get(exc.status_code, "ERROR"),
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=jsonable_encoder(body),
        headers=getattr(exc, "headers", None),
    )


def setup_exception_handlers(app: FastAPI):
    """Register the error envelope handlers"""
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
