"""Maps domain failures onto HTTP responses.

Every failure is answered with the same JSON body (status, error, message,
path). Missing entities become 404; every business-rule violation becomes 400.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.integrations.fastapi import register_exception_handlers as register_protean_handlers

from logiroute.exceptions import InvalidTransition, VehicleOverloaded

logger = structlog.get_logger(__name__)


def _message(exc: Exception) -> str:
    messages = getattr(exc, "messages", None)
    if isinstance(messages, dict):
        return "; ".join(f"{field}: {', '.join(map(str, errors))}" for field, errors in messages.items())
    return str(messages or exc)


def _error(request: Request, status: int, error: str, exc: Exception) -> JSONResponse:
    message = _message(exc)
    logger.error(error, message=message, path=request.url.path)
    return JSONResponse(
        status_code=status,
        content={
            "status": status,
            "error": error,
            "message": message,
            "path": request.url.path,
        },
    )


async def vehicle_overloaded_handler(request: Request, exc: VehicleOverloaded):
    return _error(request, 400, "Vehicle Overload", exc)


async def invalid_transition_handler(request: Request, exc: InvalidTransition):
    return _error(request, 400, "Invalid Status Transition", exc)


async def not_found_handler(request: Request, exc: ObjectNotFoundError):
    return _error(request, 404, "Resource Not Found", exc)


async def validation_error_handler(request: Request, exc: ValidationError):
    return _error(request, 400, "Bad Request", exc)


def register_exception_handlers(app: FastAPI) -> None:
    # Protean's defaults cover the remaining framework errors. Starlette
    # resolves handlers along the exception's MRO, so the ValidationError
    # subclasses below win over the generic one.
    register_protean_handlers(app)
    app.add_exception_handler(VehicleOverloaded, vehicle_overloaded_handler)
    app.add_exception_handler(InvalidTransition, invalid_transition_handler)
    app.add_exception_handler(ObjectNotFoundError, not_found_handler)
    app.add_exception_handler(ValidationError, validation_error_handler)
