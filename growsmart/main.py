# 📄 File: growsmart/main.py
#
# 🧭 Purpose (Layman Explanation):
# The main control center that starts Grow Smart AI, connects the farming advisor, the plant
# scanner and the farm records together, and makes sure everything is ready for requests.
#
# 🧪 Purpose (Technical Summary):
# FastAPI application factory and entry point: lifespan registration of provider clients,
# middleware stack, exception handlers, rate limiter wiring and router registration.
#
# 🔗 Dependencies:
# - FastAPI framework, uvicorn, slowapi
# - growsmart.shared.config.settings, growsmart.shared.utils.logging
# - growsmart.api (middleware, v1 routers)
#
# 🔄 Connected Modules / Calls From:
# - uvicorn server startup
# - growsmart console script
# - tests (TestClient)

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded

from growsmart.api.middleware import (
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    get_standard_cors_config,
    growsmart_exception_handler,
    validation_exception_handler,
)
from growsmart.api.v1.health import health_router
from growsmart.api.v1.router import api_v1_router
from growsmart.modules.advisory_chat.infrastructure.external.openrouter_client import OpenRouterClient
from growsmart.modules.plant_identification.infrastructure.external.plant_id_client import PlantIdClient
from growsmart.shared.config.settings import get_settings
from growsmart.shared.config.supabase import cleanup_supabase
from growsmart.shared.core.exceptions import GrowSmartException
from growsmart.shared.core.rate_limiter import limiter, rate_limit_exceeded_handler
from growsmart.shared.infrastructure.external_apis.api_client import (
    cleanup_api_clients,
    register_api_client,
)
from growsmart.shared.utils.logging import (
    get_logger,
    log_shutdown_event,
    log_startup_event,
    setup_logging,
)

settings = get_settings()

setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Registers the shared provider clients on startup and closes them,
    together with the Supabase client, on shutdown.
    """
    log_startup_event(settings.APP_NAME, settings.APP_VERSION, extra={"environment": settings.ENVIRONMENT})

    register_api_client(OpenRouterClient())
    register_api_client(PlantIdClient())
    logger.info("✅ External API clients registered")

    if not settings.openrouter_configured:
        logger.warning("OPENROUTER_API_KEY is not set; chat requires a caller-supplied key")
    if not settings.plant_id_configured:
        logger.warning("PLANT_ID_API_KEY is not set; plant identification is disabled")

    try:
        yield
    finally:
        log_shutdown_event(settings.APP_NAME)
        try:
            await cleanup_api_clients()
        except Exception as e:
            logger.error(f"❌ API client shutdown error: {e}", exc_info=True)
        try:
            await cleanup_supabase()
        except Exception as e:
            logger.error(f"❌ Supabase shutdown error: {e}", exc_info=True)


def create_application() -> FastAPI:
    """
    Application factory function.

    Returns:
        FastAPI: Configured FastAPI application instance
    """
    app = FastAPI(
        title=settings.APP_NAME,
        description=settings.APP_DESCRIPTION,
        version=settings.APP_VERSION,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
        openapi_url="/openapi.json" if settings.DEBUG else None,
        lifespan=lifespan,
    )

    app.state.limiter = limiter

    # =========================================================================
    # MIDDLEWARE CONFIGURATION
    # =========================================================================

    # Error handling middleware (innermost, wraps the routes)
    app.add_middleware(ErrorHandlingMiddleware)

    if settings.ENVIRONMENT != "test":
        app.add_middleware(RequestLoggingMiddleware)

    app.add_middleware(CORSMiddleware, **get_standard_cors_config(settings))

    # =========================================================================
    # EXCEPTION HANDLERS
    # =========================================================================

    app.add_exception_handler(GrowSmartException, growsmart_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

    # =========================================================================
    # ROUTER REGISTRATION
    # =========================================================================

    app.include_router(health_router, tags=["Health Check"])
    app.include_router(api_v1_router, prefix="/api/v1")

    @app.get("/", include_in_schema=False)
    async def root() -> dict:
        """Root endpoint with API information."""
        return {
            "name": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "description": settings.APP_DESCRIPTION,
            "docs_url": "/docs" if settings.DEBUG else None,
            "health_check": "/health",
            "api_base": "/api/v1",
        }

    @app.get("/favicon.ico", include_in_schema=False)
    async def favicon():
        return Response(status_code=204)

    return app


app = create_application()


def main():
    """Run the application with uvicorn (``growsmart`` console script)."""
    uvicorn.run(
        "growsmart.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.RELOAD and settings.is_development,
        log_level=settings.LOG_LEVEL.lower(),
        workers=1 if settings.RELOAD else settings.WORKERS,
    )


if __name__ == "__main__":
    main()
