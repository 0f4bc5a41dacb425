"""
Central error handling for the attendance tracker backend
"""
import logging
import traceback

from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi import HTTPException

from app.core.config import settings

logger = logging.getLogger(__name__)


def _first_validation_message(exc: RequestValidationError) -> str:
    """Return the first validation message without pydantic's 'Value error, ' prefix."""
    errors = exc.errors()
    if not errors:
        return "Invalid request data"
    msg = str(errors[0].get("msg", "Invalid request data"))
    return msg.removeprefix("Value error, ")


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """
    Handle HTTPException (and every AttendanceError) with consistent JSON response format

    Args:
        request: FastAPI request object
        exc: HTTPException instance

    Returns:
        JSONResponse with error details
    """
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": True,
            "status_code": exc.status_code,
            "detail": exc.detail,
            "path": str(request.url.path)
        },
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Handle RequestValidationError as a 400 carrying the first validation message

    Detailed errors are only included outside production.
    """
    content = {
        "error": True,
        "status_code": 400,
        "detail": _first_validation_message(exc),
        "path": str(request.url.path)
    }
    if not settings.is_prod:
        # Sanitize for JSON: e.g. ctx.error ValueError -> str
        errors = []
        for e in exc.errors():
            err = dict(e)
            if "ctx" in err and isinstance(err["ctx"], dict):
                err["ctx"] = {
                    k: (str(v) if not isinstance(v, (str, int, float, bool, type(None))) else v)
                    for k, v in err["ctx"].items()
                }
            errors.append(err)
        content["errors"] = errors
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=content)


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle unexpected exceptions (including store failures) as 500

    Does not leak internal error details in production.
    """
    logger.error("Unhandled exception on %s: %s", request.url.path, exc, exc_info=True)

    if settings.is_prod:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": True,
                "status_code": 500,
                "detail": "Internal server error",
                "path": str(request.url.path)
            }
        )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": True,
            "status_code": 500,
            "detail": str(exc),
            "path": str(request.url.path),
            "traceback": traceback.format_exc() if settings.APP_ENV == "local" else None
        }
    )
