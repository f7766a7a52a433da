# 📄 File: growsmart/api/v1/router.py
# 🧭 Purpose (Layman Explanation):
# The traffic director for version 1 of the API: chat questions go to the advisor, photos go
# to plant identification, and farm numbers go to analytics.
# 🧪 Purpose (Technical Summary):
# API v1 router aggregation combining the module routers under their route prefixes.
# 🔗 Dependencies:
# FastAPI, growsmart.modules.*.presentation.api.v1
# 🔄 Connected Modules / Calls From:
# growsmart.main (mounted at /api/v1)

from fastapi import APIRouter

from growsmart.modules.advisory_chat.presentation.api.v1.chat import chat_router
from growsmart.modules.farm_analytics.presentation.api.v1.analytics import analytics_router
from growsmart.modules.onboarding.presentation.api.v1.onboarding import onboarding_router
from growsmart.modules.plant_identification.presentation.api.v1.plants import plants_router

ROUTE_PREFIXES = {
    "chat": "/chat",
    "plants": "/plants",
    "analytics": "/analytics",
    "onboarding": "/onboarding",
}

api_v1_router = APIRouter()

api_v1_router.include_router(chat_router, prefix=ROUTE_PREFIXES["chat"], tags=["AI Advisor"])
api_v1_router.include_router(plants_router, prefix=ROUTE_PREFIXES["plants"], tags=["Plant Identification"])
api_v1_router.include_router(analytics_router, prefix=ROUTE_PREFIXES["analytics"], tags=["Farm Analytics"])
api_v1_router.include_router(onboarding_router, prefix=ROUTE_PREFIXES["onboarding"], tags=["Onboarding"])


@api_v1_router.get("/", summary="API v1 Information", tags=["API Info"])
async def api_v1_info() -> dict:
    """List the v1 modules and where they are mounted."""
    return {
        "api_version": "v1",
        "modules": {name: f"/api/v1{prefix}" for name, prefix in ROUTE_PREFIXES.items()},
        "health_check": "/health",
    }
