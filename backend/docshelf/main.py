import os
import sys

from .gateway import APIGateway
from .routers import documents, files, viewer
from .routers.dependencies import initialize_services
from .core import config
from .core.logging_config import setup_logging, get_logger

# Initialize logging
setup_logging()
logger = get_logger(__name__)

# Initialize API Gateway
gateway = APIGateway(
    title="DocShelf API",
    description="Private document shelf: import, browse, view, share and export local files",
    version="1.0.0"
)

# Setup middleware (CORS, rate limiting, logging, error handling)
gateway.setup_middleware()

gateway.register_router(documents.router, tags=["Documents"])
gateway.register_router(viewer.router, tags=["Viewer"])
gateway.register_router(files.router, tags=["Files"])

# Register health check endpoints
gateway.register_health_endpoints()

# Get FastAPI app instance
app = gateway.get_app()


@app.on_event("startup")
async def startup_event():
    """Initialize application on startup."""
    logger.info("=" * 60)
    logger.info("Starting DocShelf Backend...")
    logger.info("=" * 60)

    logger.info("Framework & Server:")
    logger.info(f"  → Python Version: {sys.version.split()[0]}")
    logger.info(f"  → Environment: {os.getenv('ENVIRONMENT', 'development')}")
    logger.info(f"  → Docs URL: {app.docs_url if app.docs_url else 'Disabled (production)'}")

    logger.info("Rate Limiting:")
    logger.info(f"  → Enabled: {config.RATE_LIMIT_ENABLED}")
    if config.RATE_LIMIT_ENABLED:
        logger.info(f"  → Limit: {config.RATE_LIMIT_PER_MINUTE} requests/minute")

    logger.info("CORS Configuration:")
    logger.info(f"  → Allowed Origins: {', '.join(config.CORS_ORIGINS)}")

    logger.info("Storage:")
    logger.info(f"  → Backend: {config.STORAGE_TYPE.upper()}")
    logger.info(f"  → Root: {config.DOCSHELF_ROOT}")

    await initialize_services()

    logger.info("API Endpoints:")
    logger.info("  → Documents: /documents/*")
    logger.info("  → Viewer: /viewer/*")
    logger.info("  → Files: /files/*")

    logger.info("=" * 60)
    logger.info("✅ DocShelf Backend initialized successfully")
    logger.info("=" * 60)


@app.on_event("shutdown")
async def shutdown_event():
    """Cleanup on shutdown."""
    logger.info("DocShelf Backend shutdown complete")
