"""Translate domain exceptions into HTTP responses.

Every error body has the same shape: ``{"error": <code>, "messages": {...}}``.
Handlers are looked up by exception class, most specific first, so the
subclasses of ``ValidationError`` keep their own status codes.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import InvalidOperationError, ObjectNotFoundError, ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from ordering.exceptions import EmptyCartError, ForbiddenError, InvalidTransitionError

logger = structlog.get_logger(__name__)


def _error(status_code: int, code: str, messages) -> JSONResponse:
    if not isinstance(messages, dict):
        messages = {"_entity": [str(messages)]}
    return JSONResponse(status_code=status_code, content={"error": code, "messages": messages})


def _messages(exc: Exception):
    """Protean only sets ``messages`` on some exceptions; fall back to the first argument."""
    messages = getattr(exc, "messages", None)
    if messages is None and exc.args:
        messages = exc.args[0]
    return messages if messages is not None else str(exc)


async def not_found_handler(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
    return _error(404, "not_found", _messages(exc))


async def forbidden_handler(request: Request, exc: ForbiddenError) -> JSONResponse:
    logger.warning("Forbidden", path=request.url.path, action=exc.action.value)
    return _error(403, "forbidden", exc.messages)


async def invalid_operation_handler(request: Request, exc: InvalidOperationError) -> JSONResponse:
    return _error(400, "invalid_operation", _messages(exc))


async def invalid_transition_handler(request: Request, exc: InvalidTransitionError) -> JSONResponse:
    return _error(409, "invalid_transition", exc.messages)


async def empty_cart_handler(request: Request, exc: EmptyCartError) -> JSONResponse:
    return _error(400, "empty_cart", exc.messages)


async def validation_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return _error(400, "validation_error", exc.messages)


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    code = "unauthorized" if exc.status_code == 401 else "http_error"
    return _error(exc.status_code, code, {"_entity": [str(exc.detail)]})


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    messages: dict[str, list[str]] = {}
    for error in exc.errors():
        field = str(error["loc"][-1]) if error.get("loc") else "_entity"
        messages.setdefault(field, []).append(error["msg"])
    return _error(400, "validation_error", messages)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ObjectNotFoundError, not_found_handler)
    app.add_exception_handler(ForbiddenError, forbidden_handler)
    app.add_exception_handler(InvalidOperationError, invalid_operation_handler)
    app.add_exception_handler(InvalidTransitionError, invalid_transition_handler)
    app.add_exception_handler(EmptyCartError, empty_cart_handler)
    app.add_exception_handler(ValidationError, validation_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
