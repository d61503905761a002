"""
Request Logging Middleware

Logs catalogue and viewer requests with timing information.
"""
import time
from typing import Callable, List, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from ...core.logging_config import get_logger

logger = get_logger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware that logs HTTP requests and responses.

    Raw file transfers (/files) are logged at debug level only, since a list
    screen full of thumbnails fetches one per row.
    """

    def __init__(self, app, skip_paths: Optional[List[str]] = None, quiet_paths: Optional[List[str]] = None):
        super().__init__(app)
        self.skip_paths = skip_paths or ["/health", "/docs", "/redoc", "/openapi.json"]
        self.quiet_paths = quiet_paths or ["/files/"]

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        path = request.url.path
        if any(path.startswith(skip) for skip in self.skip_paths):
            return await call_next(request)

        request_id = getattr(request.state, "request_id", None)
        request_id_str = f" [{request_id}]" if request_id else ""
        log = logger.debug if any(path.startswith(quiet) for quiet in self.quiet_paths) else logger.info

        start_time = time.time()
        method = request.method
        log(f"→ {method} {path}{request_id_str}")

        try:
            response = await call_next(request)
        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            logger.error(f"❌ {method} {path} → Exception after {duration_ms:.2f}ms{request_id_str}: {e}")
            raise

        duration_ms = (time.time() - start_time) * 1000
        status_code = response.status_code
        status_emoji = "✅" if 200 <= status_code < 300 else "⚠️" if 400 <= status_code < 500 else "❌"
        log(f"{status_emoji} {method} {path} → {status_code} ({duration_ms:.2f}ms){request_id_str}")
        return response
