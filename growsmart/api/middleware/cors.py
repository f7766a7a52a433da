# 📄 File: growsmart/api/middleware/cors.py
# 🧭 Purpose (Layman Explanation):
# Decides which websites are allowed to call Grow Smart AI from a browser.
# 🧪 Purpose (Technical Summary):
# CORS configuration for starlette's CORSMiddleware derived from settings (CORS_ORIGINS,
# CORS_ALLOW_CREDENTIALS), allowing the headers the web and Python clients send.
# 🔗 Dependencies:
# growsmart.shared.config.settings
# 🔄 Connected Modules / Calls From:
# growsmart.main (middleware registration)

from typing import Any, Dict

from growsmart.shared.config.settings import Settings, get_settings


def get_standard_cors_config(settings: Settings = None) -> Dict[str, Any]:
    """
    Get CORS configuration for FastAPI CORSMiddleware.

    Returns:
        CORS configuration dictionary
    """
    settings = settings or get_settings()
    origins = settings.cors_origins_list

    return {
        "allow_origins": origins,
        # Browsers reject credentials with a wildcard origin
        "allow_credentials": settings.CORS_ALLOW_CREDENTIALS and "*" not in origins,
        "allow_methods": ["GET", "POST", "PUT", "OPTIONS"],
        "allow_headers": [
            "Authorization",
            "Content-Type",
            "Accept",
            "Origin",
            "X-Client-Info",
            "apikey",
        ],
        "expose_headers": [
            "X-Request-ID",
            "X-Response-Time",
            "X-Error-Code",
        ],
    }
