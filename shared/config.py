"""
Shared configuration management for the RepHelper identity core.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BaseConfig(BaseSettings):
    """Base configuration class with common settings.

    Every field is read from the environment with the ``REPHELPER_`` prefix,
    e.g. ``REPHELPER_FIREBASE_PROJECT_ID``.
    """

    model_config = SettingsConfigDict(
        env_prefix="REPHELPER_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    # Environment
    env: str = "local"
    log_level: str = "info"

    # Identity provider
    firebase_project_id: str = ""
    jwks_url: str = (
        "https://www.googleapis.com/service_accounts/v1/jwk/"
        "securetoken@system.gserviceaccount.com"
    )
    jwks_cache_ttl_seconds: int = Field(default=3600, gt=0)
    identity_toolkit_url: str = "https://identitytoolkit.googleapis.com"
    identity_toolkit_access_token: Optional[str] = None

    # Applied by the provider clients; the core adds no timeout of its own
    provider_timeout_seconds: float = Field(default=10.0, gt=0)


class ServiceConfig(BaseConfig):
    """Service-specific configuration."""

    service_name: str

    def __init__(self, service_name: str, **kwargs):
        super().__init__(service_name=service_name, **kwargs)


def get_config(service_name: str, **overrides) -> ServiceConfig:
    """Get configuration for a specific service."""
    return ServiceConfig(service_name=service_name, **overrides)
