"""Translate failures raised while serving a request into JSON error bodies.

Every error leaves the API through one of the handlers registered by
``register_exception_handlers``; routers never catch exceptions themselves.
"""
import logging
from typing import Any, Dict, Tuple, Type, get_args

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .exceptions import InvalidArgumentError, TaskError, TaskNotFoundError
from .schemas.error import ErrorResponse, ValidationErrorResponse

logger = logging.getLogger(__name__)

# Failure kind -> (HTTP status, error label)
TASK_ERROR_STATUS: Dict[Type[TaskError], Tuple[int, str]] = {
    TaskNotFoundError: (status.HTTP_404_NOT_FOUND, "Task Not Found"),
    InvalidArgumentError: (status.HTTP_400_BAD_REQUEST, "Invalid Request"),
}

_PARAMETER_LOCATIONS = ("path", "query")


def _json_error(body: ErrorResponse) -> JSONResponse:
    return JSONResponse(
        status_code=body.status,
        content=body.model_dump(mode="json", by_alias=True),
    )


def _status_for(exc: TaskError) -> Tuple[int, str]:
    for error_type in type(exc).__mro__:
        if error_type in TASK_ERROR_STATUS:
            return TASK_ERROR_STATUS[error_type]
    return status.HTTP_400_BAD_REQUEST, "Invalid Request"


def _expected_type_name(request: Request, parameter: str) -> str:
    """Name of the type a path or query parameter is declared with."""
    route = request.scope.get("route")
    dependant = getattr(route, "dependant", None)
    if dependant is None:
        return "unknown"
    for param in dependant.path_params + dependant.query_params:
        if param.alias != parameter:
            continue
        annotation = param.field_info.annotation
        args = [arg for arg in get_args(annotation) if arg is not type(None)]
        declared = args[0] if args else annotation
        return getattr(declared, "__name__", str(declared))
    return "unknown"


def _field_name(loc: Tuple[Any, ...]) -> str:
    # Malformed JSON is located by character offset, not by field.
    if len(loc) < 2 or not isinstance(loc[1], str):
        return "body"
    return ".".join(str(part) for part in loc[1:])


async def handle_task_error(request: Request, exc: TaskError) -> JSONResponse:
    status_code, label = _status_for(exc)
    if isinstance(exc, TaskNotFoundError):
        logger.error("Task not found: %s", exc.message)
    else:
        logger.error("Invalid argument: %s", exc.message)
    return _json_error(ErrorResponse(message=exc.message, status=status_code, error=label))


async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()

    # A bad path or query parameter is a type mismatch, not a payload problem.
    for err in errors:
        loc = tuple(err.get("loc", ()))
        if loc and loc[0] in _PARAMETER_LOCATIONS and len(loc) > 1:
            parameter = str(loc[1])
            message = "Invalid value '%s' for parameter '%s'. Expected type: %s" % (
                err.get("input"),
                parameter,
                _expected_type_name(request, parameter),
            )
            logger.error("Type mismatch error: %s", message)
            return _json_error(
                ErrorResponse(message=message, status=status.HTTP_400_BAD_REQUEST, error="Type Mismatch")
            )

    field_errors = {}
    for err in errors:
        field_errors.setdefault(_field_name(tuple(err.get("loc", ("body",)))), err.get("msg", "Invalid value"))
    logger.error("Validation error: %s", field_errors)
    return _json_error(
        ValidationErrorResponse(
            message="Validation failed",
            status=status.HTTP_400_BAD_REQUEST,
            error="Validation Error",
            field_errors=field_errors,
        )
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unexpected error occurred: %s", exc)
    return _json_error(
        ErrorResponse(
            message="An unexpected error occurred",
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            error="Internal Server Error",
        )
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(TaskError, handle_task_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
