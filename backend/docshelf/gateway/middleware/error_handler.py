"""
Error Handling

Converts business exceptions into dismissible user notices and catches
anything unexpected so it never surfaces as a raw traceback.
"""
import os
import traceback

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from fastapi import status

from ...api.dto import ErrorResponseDTO, NoticeDTO
from ...api.exceptions import DocShelfError, NoSourceSelected, handle_business_exception
from ...core.logging_config import get_logger

logger = get_logger(__name__)


async def business_exception_handler(request: Request, exc: DocShelfError) -> Response:
    """
    Exception handler for DocShelf business errors.

    NoSourceSelected is a cancelled pick and yields an empty 204; every other
    error becomes a notice naming the failed action.
    """
    if isinstance(exc, NoSourceSelected):
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    http_exception = handle_business_exception(exc)
    logger.warning(
        f"{type(exc).__name__} for {request.method} {request.url.path}: {exc}"
    )
    body = ErrorResponseDTO(
        notice=NoticeDTO(**http_exception.detail),
        status_code=http_exception.status_code,
        path=request.url.path,
        request_id=getattr(request.state, "request_id", None)
    )
    return JSONResponse(status_code=http_exception.status_code, content=body.model_dump())


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """
    Middleware that catches unexpected exceptions.

    Business exceptions are handled by business_exception_handler before they
    get here; whatever still escapes becomes a generic 500 notice, with the
    traceback attached only outside production.
    """

    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as e:
            is_development = os.getenv("ENVIRONMENT", "development") != "production"
            error_traceback = traceback.format_exc() if is_development else None

            logger.error(f"Unexpected error for {request.method} {request.url.path}: {e}", exc_info=True)

            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={
                    "notice": handle_business_exception(e).detail,
                    "status_code": 500,
                    "path": request.url.path,
                    "request_id": getattr(request.state, "request_id", None),
                    "traceback": error_traceback
                }
            )
