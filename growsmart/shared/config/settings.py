# 📄 File: growsmart/shared/config/settings.py
#
# 🧭 Purpose (Layman Explanation):
# The main configuration center that reads all settings from environment variables
# and hands them to every part of the Grow Smart farming assistant in an organized way.
#
# 🧪 Purpose (Technical Summary):
# Pydantic-based settings management with environment variable loading,
# validation, and type safety for server, provider (OpenRouter, Plant.id),
# Supabase, upload and rate limiting configuration.
#
# 🔗 Dependencies:
# - pydantic-settings for configuration management
# - typing for type hints
#
# 🔄 Connected Modules / Calls From:
# - growsmart.main (application startup)
# - External API clients (OpenRouter, Plant.id)
# - Supabase manager and repositories
# - Rate limiter and middleware

from functools import lru_cache
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Uses Pydantic for validation and type safety. Settings are loaded
    from environment variables with fallback to .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # =========================================================================
    # APPLICATION SETTINGS
    # =========================================================================

    APP_NAME: str = Field(default="Grow Smart AI API", description="Application name")
    APP_VERSION: str = Field(default="1.0.0", description="Application version")
    APP_DESCRIPTION: str = Field(
        default="AI-Powered Farming Advice and Plant Identification",
        description="Application description"
    )
    ENVIRONMENT: str = Field(default="development", description="Runtime environment")
    DEBUG: bool = Field(default=True, description="Debug mode flag")
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    LOG_FORMAT: str = Field(default="json", description="Log output format (json or text)")
    LOG_FILE: Optional[str] = Field(None, description="Optional log file path")

    # =========================================================================
    # SERVER CONFIGURATION
    # =========================================================================

    HOST: str = Field(default="0.0.0.0", description="Server host")
    PORT: int = Field(default=8000, description="Server port")
    RELOAD: bool = Field(default=True, description="Auto-reload on changes")
    WORKERS: int = Field(default=1, description="Number of worker processes")

    # =========================================================================
    # SUPABASE CONFIGURATION
    # =========================================================================

    SUPABASE_URL: Optional[str] = Field(None, description="Supabase project URL")
    SUPABASE_ANON_KEY: Optional[str] = Field(None, description="Supabase anonymous key")

    # CORS Settings
    CORS_ORIGINS: str = Field(default="*", description="CORS allowed origins")
    CORS_ALLOW_CREDENTIALS: bool = Field(default=False, description="CORS allow credentials")

    # =========================================================================
    # OPENROUTER (CHAT COMPLETIONS)
    # =========================================================================

    OPENROUTER_API_KEY: Optional[str] = Field(None, description="Server-side OpenRouter API key")
    OPENROUTER_API_URL: str = Field(
        default="https://openrouter.ai/api/v1",
        description="OpenRouter API base URL"
    )
    OPENROUTER_DEFAULT_MODEL: str = Field(
        default="meta-llama/llama-3.2-3b-instruct:free",
        description="Model used when a chat request names none"
    )
    OPENROUTER_DIRECT_TEST_MODELS: List[str] = Field(
        default=[
            "qwen/qwen-2.5-7b-instruct:free",
            "meta-llama/llama-3.2-1b-instruct:free",
            "google/gemma-2-9b-it:free",
            "huggingface/zephyr-7b-beta:free",
        ],
        description="Models tried in order by the direct-test endpoint"
    )
    OPENROUTER_HTTP_REFERER: str = Field(
        default="https://growsmart-ai.com",
        description="HTTP-Referer header sent to OpenRouter"
    )
    OPENROUTER_APP_TITLE: str = Field(
        default="GrowSmart AI",
        description="X-Title header sent to OpenRouter"
    )
    CHAT_MAX_TOKENS: int = Field(default=1000, description="Max tokens for chat answers")
    CHAT_TEMPERATURE: float = Field(default=0.7, description="Sampling temperature for chat")

    # =========================================================================
    # PLANT IDENTIFICATION
    # =========================================================================

    PLANT_ID_API_KEY: Optional[str] = Field(None, description="Plant.id API key")
    PLANT_ID_API_URL: str = Field(
        default="https://api.plant.id/v3/identification",
        description="Plant.id identification URL"
    )

    # =========================================================================
    # EXTERNAL CALLS & UPLOADS
    # =========================================================================

    EXTERNAL_API_TIMEOUT: int = Field(default=30, description="Provider request timeout (seconds)")
    MAX_IMAGE_SIZE: int = Field(default=10485760, description="Max image size (10MB)")

    # =========================================================================
    # RATE LIMITING
    # =========================================================================

    RATE_LIMIT_ENABLED: bool = Field(default=True, description="Enable inbound rate limiting")
    AI_CHAT_RATE_LIMIT: str = Field(default="20/minute", description="Chat rate limit")
    PLANT_ID_RATE_LIMIT: str = Field(default="10/minute", description="Plant ID rate limit")

    # =========================================================================
    # VALIDATORS
    # =========================================================================

    @field_validator("ENVIRONMENT")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment value."""
        allowed_environments = ["development", "staging", "production", "test"]
        if v.lower() not in allowed_environments:
            raise ValueError(f"Environment must be one of {allowed_environments}")
        return v.lower()

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level value."""
        allowed_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in allowed_levels:
            raise ValueError(f"Log level must be one of {allowed_levels}")
        return v.upper()

    @field_validator("LOG_FORMAT")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Validate log format value."""
        if v.lower() not in ("json", "text"):
            raise ValueError("Log format must be 'json' or 'text'")
        return v.lower()

    @field_validator("CORS_ORIGINS")
    @classmethod
    def validate_cors_origins(cls, v: str) -> str:
        """Validate CORS origins format."""
        origins = [origin.strip() for origin in v.split(",")]
        for origin in origins:
            if not origin.startswith(("http://", "https://", "*")):
                raise ValueError(f"Invalid CORS origin format: {origin}")
        return v

    # =========================================================================
    # COMPUTED PROPERTIES
    # =========================================================================

    @property
    def cors_origins_list(self) -> List[str]:
        """Get CORS origins as a list."""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.ENVIRONMENT == "production"

    @property
    def is_testing(self) -> bool:
        """Check if running in test environment."""
        return self.ENVIRONMENT == "test"

    @property
    def openrouter_configured(self) -> bool:
        return bool(self.OPENROUTER_API_KEY and self.OPENROUTER_API_KEY.strip())

    @property
    def plant_id_configured(self) -> bool:
        return bool(self.PLANT_ID_API_KEY and self.PLANT_ID_API_KEY.strip())

    @property
    def supabase_configured(self) -> bool:
        return bool(self.SUPABASE_URL and self.SUPABASE_ANON_KEY)


# ============================================================================
# SETTINGS FACTORY
# ============================================================================

@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Uses lru_cache to ensure settings are loaded only once
    and reused throughout the application lifecycle.

    Returns:
        Settings: Application settings instance
    """
    return Settings()
