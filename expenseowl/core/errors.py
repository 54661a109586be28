from fastapi import Request
from fastapi.responses import JSONResponse, PlainTextResponse
from fastapi.exceptions import RequestValidationError
from starlette import status
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging

logger = logging.getLogger("expenseowl.errors")

INVALID_BODY = "Invalid request body"


def error_response(status_code: int, message: str, headers=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code, content={"error": message}, headers=headers
    )


def http_error_handler(request: Request, exc: StarletteHTTPException):  # type: ignore
    """Render router and route errors as ``{"error": detail}``.

    405 is the exception: plain text, with the Allow header the router set.
    """
    if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        logger.warning(
            "HTTP ERROR: Method not allowed: %s %s", request.method, request.url.path
        )
        return PlainTextResponse(
            "Method not allowed",
            status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
            headers=getattr(exc, "headers", None),
        )
    return error_response(
        exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None)
    )


def validation_error_handler(request: Request, exc: RequestValidationError):  # type: ignore
    logger.warning("HTTP ERROR: Failed to decode request body: %s", exc.errors())
    return error_response(status.HTTP_400_BAD_REQUEST, INVALID_BODY)


def server_error_handler(request: Request, exc: Exception):  # type: ignore
    logger.exception("unhandled exception")
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, "An unexpected error occurred."
    )
