"""
Gavel - API Configuration
=========================

Centralized configuration for the FastAPI service.

Author: Gavel contributors
"""

import os
from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class APIConfig:
    """API configuration settings."""

    # Server
    host: str = "0.0.0.0"
    port: int = 3000
    debug: bool = False

    # CORS
    cors_origins: Tuple[str, ...] = ("*",)

    # JWT Auth
    jwt_secret: str = ""
    jwt_algorithm: str = "HS256"
    jwt_expiry_hours: int = 24


def _parse_origins(value: Optional[str]) -> Tuple[str, ...]:
    if not value:
        return ("*",)
    origins = tuple(o.strip() for o in value.split(",") if o.strip())
    return origins or ("*",)


def load_api_config() -> APIConfig:
    """Load API configuration from environment."""
    return APIConfig(
        host=os.getenv("GAVEL_API_HOST", "0.0.0.0"),
        port=int(os.getenv("GAVEL_API_PORT", "3000")),
        debug=os.getenv("GAVEL_API_DEBUG", "false").lower() == "true",
        cors_origins=_parse_origins(os.getenv("GAVEL_CORS_ORIGINS")),
        jwt_secret=os.getenv("GAVEL_JWT_SECRET", ""),
        jwt_expiry_hours=int(os.getenv("GAVEL_JWT_EXPIRY_HOURS", "24")),
    )


# Singleton instance
_config: Optional[APIConfig] = None


def get_api_config() -> APIConfig:
    """Get the API configuration singleton."""
    global _config
    if _config is None:
        _config = load_api_config()
    return _config


__all__ = ["APIConfig", "get_api_config", "load_api_config"]
