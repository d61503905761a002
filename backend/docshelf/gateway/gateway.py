"""
API Gateway

Main gateway class that sets up middleware, error handling and routing.
Acts as the single entry point for all API requests.
"""
import os
from typing import List, Optional

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from ..api.exceptions import DocShelfError
from ..core.config import CORS_ORIGINS, RATE_LIMIT_ENABLED, RATE_LIMIT_PER_MINUTE
from ..core.logging_config import get_logger
from .middleware import (
    ErrorHandlingMiddleware,
    RequestIDMiddleware,
    RequestLoggingMiddleware,
    business_exception_handler,
)

logger = get_logger(__name__)


class APIGateway:
    """
    API Gateway that manages routing, middleware and error handling.

    Responsibilities:
    - Initialize FastAPI application
    - Register middleware (CORS, rate limiting, logging, error handling)
    - Turn business exceptions into user notices
    - Register routers
    - Provide health check endpoints
    """

    def __init__(
        self,
        title: str = "DocShelf API",
        description: str = "Private document shelf: import, browse, view, share and export",
        version: str = "1.0.0",
        enable_docs: Optional[bool] = None
    ):
        """
        Initialize API Gateway.

        Args:
            title: API title
            description: API description
            version: API version
            enable_docs: Enable API docs (auto-detected from ENVIRONMENT if None)
        """
        self.title = title
        self.description = description
        self.version = version
        self.enable_docs = enable_docs if enable_docs is not None else (
            os.getenv("ENVIRONMENT") != "production"
        )

        self.app = FastAPI(
            title=self.title,
            description=self.description,
            version=self.version,
            docs_url="/docs" if self.enable_docs else None,
            redoc_url="/redoc" if self.enable_docs else None
        )

        # Rate limiter applied to every route through SlowAPIMiddleware
        self.limiter = Limiter(
            key_func=get_remote_address,
            default_limits=[f"{RATE_LIMIT_PER_MINUTE}/minute"],
            enabled=RATE_LIMIT_ENABLED
        )
        self.app.state.limiter = self.limiter
        self.app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

        # Business errors become dismissible notices
        self.app.add_exception_handler(DocShelfError, business_exception_handler)

        self._routers: List[str] = []
        logger.info("API Gateway initialized")

    def setup_middleware(self):
        """Configure all middleware."""
        logger.info("Setting up middleware...")

        # Error handling (must be first to catch all errors)
        self.app.add_middleware(ErrorHandlingMiddleware)
        logger.debug("  → Error handling middleware added")

        self.app.add_middleware(SlowAPIMiddleware)
        logger.debug("  → Rate limiting middleware added")

        # Request logging
        self.app.add_middleware(RequestLoggingMiddleware)
        logger.debug("  → Request logging middleware added")

        # Request ID (outermost of the three so logging sees it)
        self.app.add_middleware(RequestIDMiddleware)
        logger.debug("  → Request ID middleware added")

        self.app.add_middleware(
            CORSMiddleware,
            allow_origins=CORS_ORIGINS,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )
        logger.debug(f"  → CORS middleware added (origins: {', '.join(CORS_ORIGINS)})")

        logger.info("✅ All middleware configured")

    def register_router(self, router: APIRouter, prefix: str = "", tags: Optional[List[str]] = None):
        """
        Register a router with the gateway.

        Args:
            router: FastAPI router instance
            prefix: URL prefix for the router
            tags: OpenAPI tags for documentation
        """
        self.app.include_router(router, prefix=prefix, tags=tags or [])
        self._routers.extend(tags or [])
        logger.info(f"Registered router {tags or ''} at prefix '{prefix}'")

    def register_health_endpoints(self):
        """Register root and health check endpoints."""

        @self.app.get("/")
        async def root():
            """Root endpoint - API information."""
            return {
                "message": f"{self.title} is running",
                "version": self.version,
                "routers": self._routers
            }

        @self.app.get("/health")
        async def health_check():
            """
            Health check endpoint.

            Returns 503 when the catalogue could not be loaded from storage,
            with the user notice for that failure.
            """
            from ..routers import dependencies

            if dependencies.document_repository is None:
                logger.warning("Health check failed: repository not initialized")
                return JSONResponse(
                    status_code=503,
                    content={"status": "unhealthy", "reason": "Repository not initialized"}
                )

            if dependencies.startup_error is not None:
                return JSONResponse(
                    status_code=503,
                    content={"status": "unhealthy", "notice": dependencies.startup_error.notice()}
                )

            return {
                "status": "healthy",
                "documents": len(dependencies.document_repository.list()),
                "managed_dir": str(dependencies.document_repository.managed_dir)
            }

        logger.info("Health check endpoints registered")

    def get_app(self) -> FastAPI:
        """Get the FastAPI application instance."""
        return self.app
