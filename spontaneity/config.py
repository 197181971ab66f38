"""
Configuration module for the Spontaneity Engine backend.

Loads environment variables and validates required settings.
"""
import os
from typing import List, Optional
from dotenv import load_dotenv

# Load .env file
load_dotenv()


def _is_configured_key(value: str) -> bool:
    """Treat empty values and `.env.example` placeholders as not configured."""
    value = value.strip()
    return bool(value) and not (value.startswith("your_") and value.endswith("_here"))


class Settings:
    """Application settings loaded from environment variables."""

    # Supabase Configuration
    SUPABASE_URL: str = os.getenv("SUPABASE_URL", "")
    SUPABASE_PUBLISHABLE_KEY: str = os.getenv("SUPABASE_PUBLISHABLE_KEY", "")
    # Secret key is only used for system writes (audit logs, request log, UGC)
    SUPABASE_SECRET_KEY: str = os.getenv("SUPABASE_SECRET_KEY", "")

    # JWT Verification - Supabase JWT Signing Keys (ES256 with JWKS)
    @property
    def SUPABASE_JWKS_URL(self) -> str:
        """Get the JWKS URL for JWT verification."""
        if not self.SUPABASE_URL:
            return ""
        return f"{self.SUPABASE_URL}/auth/v1/.well-known/jwks.json"

    # Generative AI providers
    GEMINI_API_KEY: str = os.getenv("GEMINI_API_KEY", "")
    GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
    OPENAI_API_KEY: str = os.getenv("OPENAI_API_KEY", "")
    OPENAI_MODEL: str = os.getenv("OPENAI_MODEL", "gpt-3.5-turbo")

    # Engine
    ENGINE_TIMEOUT_MS: int = int(os.getenv("ENGINE_TIMEOUT_MS", "30000"))
    ENGINE_ENABLE_FALLBACK: bool = os.getenv("ENGINE_ENABLE_FALLBACK", "true").lower() == "true"
    MODEL_VERSION: str = os.getenv("MODEL_VERSION", "engine-v1.0")

    # Trust & Safety
    UGC_ENABLED: bool = os.getenv("UGC_ENABLED", "true").lower() != "false"
    AUDIT_LOG_RETENTION_DAYS: int = int(os.getenv("AUDIT_LOG_RETENTION_DAYS", "90"))

    # Public base URL used for shareable links (no trailing slash)
    BASE_URL: str = os.getenv("BASE_URL", "https://spontaneity-engine.vercel.app").rstrip("/")

    # Application Settings
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # CORS Settings (production only, comma separated)
    CORS_ALLOWED_ORIGINS: List[str] = [
        origin.strip()
        for origin in os.getenv("CORS_ALLOWED_ORIGINS", "").split(",")
        if origin.strip()
    ]

    @classmethod
    def gemini_api_key(cls) -> Optional[str]:
        """Return the Gemini key if it is really configured."""
        return cls.GEMINI_API_KEY if _is_configured_key(cls.GEMINI_API_KEY) else None

    @classmethod
    def openai_api_key(cls) -> Optional[str]:
        """Return the OpenAI key if it is really configured."""
        return cls.OPENAI_API_KEY if _is_configured_key(cls.OPENAI_API_KEY) else None

    @classmethod
    def validate(cls) -> None:
        """
        Validate that all required settings are configured.

        Raises:
            ValueError: If any required setting is missing.
        """
        required_settings = {
            "SUPABASE_URL": cls.SUPABASE_URL,
        }

        missing = [key for key, value in required_settings.items() if not value]

        if not cls.gemini_api_key() and not cls.openai_api_key():
            missing.append("GEMINI_API_KEY or OPENAI_API_KEY")

        if missing:
            raise ValueError(
                f"Missing required environment variables: {', '.join(missing)}. "
                "Please check your .env file."
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
            raise
