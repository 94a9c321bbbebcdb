"""
Configuration module for the Prompt Writer backend.

Loads environment variables and validates required settings.
"""
import os
from typing import List
from dotenv import load_dotenv

# Load .env file
load_dotenv()


def _int_env(name: str, default: int) -> int:
    """Read an integer environment variable, falling back to the default."""
    raw = os.getenv(name, "")
    if not raw.strip():
        return default
    return int(raw)


class Settings:
    """Application settings loaded from environment variables."""

    # Supabase Configuration
    SUPABASE_URL: str = os.getenv("SUPABASE_URL", "")
    SUPABASE_PUBLISHABLE_KEY: str = os.getenv("SUPABASE_PUBLISHABLE_KEY", "")

    # JWT Verification (ES256 with JWKS)
    # Format: https://<project-id>.supabase.co/auth/v1/.well-known/jwks.json
    @property
    def SUPABASE_JWKS_URL(self) -> str:
        """Get the JWKS URL for JWT verification."""
        if not self.SUPABASE_URL:
            return ""
        return f"{self.SUPABASE_URL}/auth/v1/.well-known/jwks.json"

    # Application Settings
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # CORS Settings
    CORS_ORIGINS: List[str] = os.getenv(
        "CORS_ORIGINS",
        "http://localhost:3000"
    ).split(",")

    # Template relevance scoring
    # usage_count > POPULAR scores 2, TRENDING < usage_count <= POPULAR scores 1
    TEMPLATE_POPULAR_THRESHOLD: int = _int_env("TEMPLATE_POPULAR_THRESHOLD", 50)
    TEMPLATE_TRENDING_THRESHOLD: int = _int_env("TEMPLATE_TRENDING_THRESHOLD", 10)
    TEMPLATE_RECOMMEND_LIMIT: int = _int_env("TEMPLATE_RECOMMEND_LIMIT", 10)

    # Model recommendation
    FALLBACK_LIMIT: int = _int_env("FALLBACK_LIMIT", 3)

    @classmethod
    def validate(cls) -> None:
        """
        Validate that all required settings are configured.

        Raises:
            ValueError: If any required setting is missing or inconsistent.
        """
        required_settings = {
            "SUPABASE_URL": cls.SUPABASE_URL,
            "SUPABASE_PUBLISHABLE_KEY": cls.SUPABASE_PUBLISHABLE_KEY,
        }

        missing = [key for key, value in required_settings.items() if not value]

        if missing:
            raise ValueError(
                f"Missing required environment variables: {', '.join(missing)}. "
                "Please check your .env file."
            )

        if cls.TEMPLATE_TRENDING_THRESHOLD >= cls.TEMPLATE_POPULAR_THRESHOLD:
            raise ValueError(
                "TEMPLATE_TRENDING_THRESHOLD must be lower than TEMPLATE_POPULAR_THRESHOLD"
            )

    @classmethod
    def is_production(cls) -> bool:
        """Check if running in production environment."""
        return cls.ENVIRONMENT.lower() == "production"

    @classmethod
    def is_development(cls) -> bool:
        """Check if running in development environment."""
        return cls.ENVIRONMENT.lower() == "development"


# Create a singleton instance
settings = Settings()

# Validate settings on module import (fail fast if misconfigured)
# Tests set VALIDATE_CONFIG=false before importing the app
if os.getenv("VALIDATE_CONFIG", "true").lower() == "true":
    try:
        settings.validate()
    except ValueError as e:
        # In development, warn but don't crash
        if settings.is_development():
            print(f"⚠️  Warning: {e}")
            print("   The app may not work correctly until you configure your .env file.")
        else:
            raise
