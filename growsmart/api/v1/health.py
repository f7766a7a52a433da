# 📄 File: growsmart/api/v1/health.py
# 🧭 Purpose (Layman Explanation):
# A quick checkup for Grow Smart AI: tells load balancers the service is up and, on request,
# reports whether the database and the AI providers are reachable.
# 🧪 Purpose (Technical Summary):
# Health endpoints: a static liveness check and a detailed check aggregating the Supabase
# health check, provider configuration and per-client API statistics.
# 🔗 Dependencies:
# FastAPI, growsmart.shared.config (settings, supabase), external_apis.api_client
# 🔄 Connected Modules / Calls From:
# growsmart.main, monitoring systems, load balancers

from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from growsmart.shared.config.settings import get_settings
from growsmart.shared.config.supabase import get_supabase_manager
from growsmart.shared.infrastructure.external_apis.api_client import get_all_client_stats
from growsmart.shared.utils.logging import get_logger

logger = get_logger(__name__)

health_router = APIRouter()

_app_start_time = datetime.now(timezone.utc)


@health_router.get("/health",
                   summary="Basic Health Check",
                   description="Basic health check endpoint for load balancers and monitoring")
async def health_check() -> JSONResponse:
    """Simple OK status for quick health verification."""
    return JSONResponse(
        status_code=200,
        content={
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "service": "growsmart-api",
            "version": get_settings().APP_VERSION,
        },
    )


@health_router.get("/health/detailed",
                   summary="Detailed Health Check",
                   description="Health of the database and external AI providers")
async def detailed_health_check() -> JSONResponse:
    """
    Comprehensive health check for all system components.

    Checks:
    - Supabase database connectivity
    - OpenRouter and Plant.id configuration
    - Request statistics of the registered provider clients

    Returns 200 when healthy or degraded, 503 when unhealthy.
    """
    settings = get_settings()
    overall_status = "healthy"
    components: Dict[str, Any] = {}

    try:
        database = await get_supabase_manager().health_check()
        database["status"] = "healthy" if database["database_service"] else "unhealthy"
        components["database"] = database
        if not database["database_service"]:
            overall_status = "degraded"
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        components["database"] = {"status": "unhealthy", "error": str(e)}
        overall_status = "unhealthy"

    components["external_apis"] = _check_external_apis(settings)
    if components["external_apis"]["status"] != "healthy" and overall_status == "healthy":
        overall_status = "degraded"

    uptime = (datetime.now(timezone.utc) - _app_start_time).total_seconds()

    return JSONResponse(
        status_code=503 if overall_status == "unhealthy" else 200,
        content={
            "status": overall_status,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "service": "growsmart-api",
            "version": settings.APP_VERSION,
            "environment": settings.ENVIRONMENT,
            "uptime_seconds": round(uptime, 1),
            "components": components,
        },
    )


def _check_external_apis(settings) -> Dict[str, Any]:
    """Provider configuration plus the stats of every registered client."""
    providers = {
        "openrouter": {"configured": settings.openrouter_configured},
        "plant_id": {"configured": settings.plant_id_configured},
    }

    for name, stats in get_all_client_stats().items():
        providers.setdefault(name, {"configured": True})["stats"] = stats

    status = "healthy" if all(p["configured"] for p in providers.values()) else "degraded"
    return {"status": status, "providers": providers}
