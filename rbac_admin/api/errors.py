"""
Exception Handlers

Translate the service layer's domain errors into HTTP responses:
- ValidationError -> 400
- EntityNotFoundError -> 404
- BusinessRuleViolationError -> 409
- ExternalServiceError -> 500, with a generic message; the underlying
  error was already logged by the service that raised it
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from rbac_admin.api.schemas import ErrorResponse
from rbac_admin.core.exceptions import (
    BusinessRuleViolationError,
    EntityNotFoundError,
    ExternalServiceError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def _error_response(status_code: int, body: ErrorResponse) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return _error_response(
        status.HTTP_400_BAD_REQUEST,
        ErrorResponse(error="ValidationError", message=exc.message, field=exc.field)
    )


async def not_found_handler(request: Request, exc: EntityNotFoundError) -> JSONResponse:
    return _error_response(
        status.HTTP_404_NOT_FOUND,
        ErrorResponse(error="EntityNotFoundError", message=str(exc))
    )


async def business_rule_handler(request: Request, exc: BusinessRuleViolationError) -> JSONResponse:
    return _error_response(
        status.HTTP_409_CONFLICT,
        ErrorResponse(error="BusinessRuleViolationError", message=exc.message, code=exc.code)
    )


async def external_service_handler(request: Request, exc: ExternalServiceError) -> JSONResponse:
    logger.error(f"{request.method} {request.url.path} failed: {exc}")
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        ErrorResponse(error="ExternalServiceError", message="Internal server error")
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(EntityNotFoundError, not_found_handler)
    app.add_exception_handler(BusinessRuleViolationError, business_rule_handler)
    app.add_exception_handler(ExternalServiceError, external_service_handler)
