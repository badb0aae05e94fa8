"""Translate domain failures into short JSON error responses.

Every error body is ``{"message": ...}``; validation failures add the
field-level ``errors``. Internal details only reach the server log.
"""

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.integrations.fastapi import register_exception_handlers as register_protean_handlers

from storefront.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    PaymentGatewayError,
    WebhookVerificationError,
)
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

_STATUS_BY_ERROR = {
    AuthenticationError: 401,
    AuthorizationError: 403,
    ConflictError: 409,
    PaymentGatewayError: 502,
    WebhookVerificationError: 400,
}


def _first_message(messages) -> str:
    if isinstance(messages, dict):
        for value in messages.values():
            if isinstance(value, list | tuple) and value:
                return str(value[0])
            if value:
                return str(value)
    return "Invalid request"


async def _validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"message": _first_message(exc.messages), "errors": jsonable_encoder(exc.messages)},
    )


async def _request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"message": "Invalid request", "errors": jsonable_encoder(exc.errors())},
    )


async def _not_found(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content={"message": "Not found"})


async def _storefront_error(request: Request, exc) -> JSONResponse:
    status_code = _STATUS_BY_ERROR[type(exc)]
    if status_code >= 500:
        logger.error("Upstream failure", path=request.url.path, error=exc.message)
    headers = {"WWW-Authenticate": "Bearer"} if status_code == 401 else None
    return JSONResponse(status_code=status_code, content={"message": exc.message}, headers=headers)


async def _unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error", path=request.url.path, method=request.method)
    return JSONResponse(status_code=500, content={"message": "Internal server error"})


def register_exception_handlers(app: FastAPI) -> None:
    """Install protean's handlers, then the storefront's renderings on top."""
    register_protean_handlers(app)

    app.add_exception_handler(ValidationError, _validation_error)
    app.add_exception_handler(RequestValidationError, _request_validation_error)
    app.add_exception_handler(ObjectNotFoundError, _not_found)
    for error_cls in _STATUS_BY_ERROR:
        app.add_exception_handler(error_cls, _storefront_error)
    app.add_exception_handler(Exception, _unexpected_error)
