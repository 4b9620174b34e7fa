"""
Configuration module for the ClubFit backend.

Loads environment variables and validates required settings.
"""
import os
from typing import List
from dotenv import load_dotenv

# Load .env file
load_dotenv()


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Settings:
    """Application settings loaded from environment variables."""

    # Supabase Configuration (club catalog + recommendation cache)
    SUPABASE_URL: str = os.getenv("SUPABASE_URL", "")
    # Server-side key: the setup endpoint and enrichment both write rows
    SUPABASE_KEY: str = os.getenv("SUPABASE_KEY", "")

    # Google Gemini API
    GOOGLE_API_KEY: str = os.getenv("GOOGLE_API_KEY", "")
    GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")

    # SerpAPI (Google Images), optional: enrichment and the image proxy
    # fallback are skipped without it
    SERPAPI_API_KEY: str = os.getenv("SERPAPI_API_KEY", "")

    # Recommendation cache
    RECOMMENDATION_CACHE_ENABLED: bool = _env_bool("RECOMMENDATION_CACHE_ENABLED", "true")
    RECOMMENDATION_CACHE_TTL_HOURS: int = int(os.getenv("RECOMMENDATION_CACHE_TTL_HOURS", "24"))

    # Minimum similarity ratio for the fuzzy model-name fallback
    MATCH_SIMILARITY_THRESHOLD: float = float(os.getenv("MATCH_SIMILARITY_THRESHOLD", "0.75"))

    # Application Settings
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # CORS Settings (only used when ENVIRONMENT=production)
    CORS_ALLOWED_ORIGINS: List[str] = [
        origin.strip()
        for origin in os.getenv("CORS_ALLOWED_ORIGINS", "").split(",")
        if origin.strip()
    ]

    def missing_for(self, *names: str) -> List[str]:
        """
        Return the names of the given settings that are empty.

        Handlers call this before touching any external service so a
        misconfigured deployment fails fast with a clear message.
        """
        return [name for name in names if not getattr(self, name, "")]

    def validate(self) -> None:
        """
        Validate that all required settings are configured.

        Raises:
            ValueError: If any required setting is missing.
        """
        missing = self.missing_for(
            "SUPABASE_URL",
            "SUPABASE_KEY",
            "GOOGLE_API_KEY",
        )

        if missing:
            raise ValueError(
                f"Missing required environment variables: {', '.join(missing)}. "
                "Please check your .env file."
            )

    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.ENVIRONMENT.lower() == "production"

    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.ENVIRONMENT.lower() == "development"


# Create a singleton instance
settings = Settings()

# Validate settings on module import (will fail fast if misconfigured)
# Skip validation during tests or when importing for introspection
if os.getenv("VALIDATE_CONFIG", "true").lower() == "true":
    try:
        settings.validate()
    except ValueError as e:
        # In development, warn but don't crash
        if settings.is_development():
            print(f"⚠️  Warning: {e}")
            print("   The app may not work correctly until you configure your .env file.")
        else:
            # In production or staging, fail immediately
            raise
