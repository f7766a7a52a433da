"""
Supabase client configuration for authentication and table access.
Handles Supabase initialization with proper error handling and connection management.
"""

import logging
from functools import lru_cache
from typing import Any, Dict, Optional

from postgrest import APIError
from supabase import Client, create_client
from supabase.lib.client_options import ClientOptions

from growsmart.shared.core.exceptions import ConfigurationError
from .settings import get_settings

logger = logging.getLogger(__name__)


class SupabaseManager:
    """
    Supabase client manager with lazy connection handling.
    Provides authentication and database services.
    """

    def __init__(self):
        self._client: Optional[Client] = None
        self.settings = get_settings()

    @property
    def client(self) -> Client:
        """Get or create Supabase client with lazy initialization."""
        if self._client is None:
            self._client = self._create_client()
        return self._client

    def _create_client(self) -> Client:
        """Create Supabase client with proper configuration."""
        if not self.settings.supabase_configured:
            raise ConfigurationError(
                "Supabase is not configured",
                setting="SUPABASE_URL/SUPABASE_ANON_KEY"
            )

        try:
            client_options = ClientOptions(
                schema="public",
                headers={
                    "User-Agent": f"GrowSmart-AI/{self.settings.APP_VERSION}",
                },
                auto_refresh_token=False,
                persist_session=False,
            )

            client = create_client(
                supabase_url=self.settings.SUPABASE_URL,
                supabase_key=self.settings.SUPABASE_ANON_KEY,
                options=client_options
            )

            logger.info("Supabase client initialized successfully")
            return client

        except Exception as e:
            logger.error(f"Failed to initialize Supabase client: {e}")
            raise ConnectionError(f"Supabase initialization failed: {e}")

    async def health_check(self) -> Dict[str, Any]:
        """
        Perform health check on the Supabase database.

        Returns:
            dict: Health status of Supabase services
        """
        health_status: Dict[str, Any] = {
            "configured": self.settings.supabase_configured,
            "database_service": False,
            "error": None
        }

        if not self.settings.supabase_configured:
            health_status["error"] = "Supabase is not configured"
            return health_status

        try:
            self.client.table("profiles").select("id").limit(1).execute()
            health_status["database_service"] = True

        except APIError as e:
            error_msg = f"Supabase API error: {e}"
            logger.error(error_msg)
            health_status["error"] = error_msg

        except Exception as e:
            error_msg = f"Supabase health check failed: {e}"
            logger.error(error_msg)
            health_status["error"] = error_msg

        return health_status

    def close(self):
        """Drop the cached Supabase client."""
        if self._client:
            self._client = None
            logger.info("Supabase client connections closed")


@lru_cache()
def get_supabase_manager() -> SupabaseManager:
    """
    Get cached Supabase manager instance.

    Returns:
        SupabaseManager: Singleton Supabase manager
    """
    return SupabaseManager()


def get_supabase_client() -> Client:
    """
    Get Supabase client for direct usage.

    Returns:
        Client: Supabase client instance
    """
    return get_supabase_manager().client


async def cleanup_supabase():
    """Cleanup Supabase connections on application shutdown."""
    get_supabase_manager().close()
    logger.info("Supabase cleanup completed")
