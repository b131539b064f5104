"""
Pydantic configuration model for the DNS provider.

Validates the provider config once at construction time; the resulting
object is frozen, so project, dry-run flag and worker count stay fixed
for the lifetime of the process.
"""

from __future__ import annotations

import os
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from zonesync.base.exceptions import ConfigError

DEFAULT_BASE_URL = "https://dns.api.stackit.cloud"


class ProviderConfig(BaseModel):
    """Configuration for the STACKIT DNS provider.

    Values are resolved in order:
    1. Explicit values passed in the config dict.
    2. Environment variables (STACKIT_PROJECT_ID, STACKIT_API_TOKEN,
       STACKIT_DNS_BASE_URL).
    3. Field defaults.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    project_id: str = Field(description="Project owning the DNS zones")
    api_token: str | None = Field(default=None, description="Bearer token for the DNS API")
    base_url: str = Field(default=DEFAULT_BASE_URL, description="DNS API base URL")
    workers: int = Field(default=10, ge=1, description="Worker threads per change kind")
    dry_run: bool = Field(default=False, description="Log changes instead of applying them")
    domain_filter: list[str] = Field(
        default_factory=list, description="Only manage zones under these domains"
    )
    zone_cache_ttl: float = Field(
        default=0, ge=0, description="Seconds a zone listing is reused; 0 disables caching"
    )
    request_timeout: float = Field(default=30, gt=0, description="HTTP timeout in seconds")
    page_size: int = Field(default=10000, ge=1, description="Zones requested per page")

    @model_validator(mode="before")
    @classmethod
    def resolve_from_env(cls, values: dict[str, Any]) -> dict[str, Any]:
        """Fall back to environment variables for missing values."""
        env_map = {
            "project_id": "STACKIT_PROJECT_ID",
            "api_token": "STACKIT_API_TOKEN",
            "base_url": "STACKIT_DNS_BASE_URL",
        }
        for field, env_var in env_map.items():
            if not values.get(field) and os.environ.get(env_var):
                values[field] = os.environ[env_var]
        return values

    @field_validator("domain_filter")
    @classmethod
    def strip_domain_filter(cls, value: list[str]) -> list[str]:
        return [d.strip().rstrip(".").lower() for d in value if d.strip()]

    @field_validator("base_url")
    @classmethod
    def strip_base_url(cls, value: str) -> str:
        return value.rstrip("/")


def validate_config(config: dict[str, Any]) -> ProviderConfig:
    """Validate and return a typed provider config.

    Args:
        config: Raw configuration dictionary.

    Returns:
        A frozen :class:`ProviderConfig`.

    Raises:
        ConfigError: If the config is incomplete or invalid.
    """
    try:
        return ProviderConfig(**config)
    except ValidationError as e:
        raise ConfigError(f"Invalid provider configuration: {e}") from e


__all__ = [
    "DEFAULT_BASE_URL",
    "ProviderConfig",
    "validate_config",
]
