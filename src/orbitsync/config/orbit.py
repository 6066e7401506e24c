"""Orbit API configuration values."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .env import env_int, optional_env_var, require_env_vars
from .errors import ConfigurationError
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy
from .storage import get_storage_config

if TYPE_CHECKING:
    from .storage import StorageConfig

ORBIT_BASE_URL = "https://app.orbit.love/api/v1"
ORBIT_TIMEOUT_SECONDS = 30.0
ORBIT_PAGE_SIZE = 100


@dataclass(frozen=True, slots=True)
class OrbitConfig:
    """Holds Orbit workspace credentials and transport settings."""

    workspace_slug: str
    token: str
    resilience: ResilienceConfig
    page_size: int = ORBIT_PAGE_SIZE


def default_orbit_resilience(
    *,
    base_url: str = ORBIT_BASE_URL,
    retries: int = 0,
    cache: CacheConfig | None = None,
) -> ResilienceConfig:
    """Orbit transport defaults: rate limited, no retries, no response cache.

    Member listings change between runs, so caching is opt-in. Retries are opt-in
    as well; a failed page aborts the import and the caller re-runs it.
    """

    return ResilienceConfig(
        name="orbit",
        base_url=base_url,
        timeout_seconds=ORBIT_TIMEOUT_SECONDS,
        retry=RetryPolicy.from_attempts(retries),
        ratelimit=RateLimit(max_calls=2, per_seconds=1.0),
        cache=cache,
        default_headers={"Accept": "application/json"},
    )


def _cache_from_environment(storage: StorageConfig | None) -> CacheConfig | None:
    mode = optional_env_var("ORBIT_HTTP_CACHE", "off") or "off"
    sqlite_path: str | None = None
    if mode.strip().lower() == "sqlite":
        sqlite_path = str((storage or get_storage_config()).http_cache_path())
    try:
        return CacheConfig.from_mode(mode, sqlite_path=sqlite_path)
    except ValueError as exc:
        raise ConfigurationError(f"ORBIT_HTTP_CACHE: {exc}") from exc


def get_orbit_config(
    *,
    resilience: ResilienceConfig | None = None,
    storage: StorageConfig | None = None,
) -> OrbitConfig:
    values = require_env_vars(("ORBIT_WORKSPACE_SLUG", "ORBIT_TOKEN"))
    effective_resilience = resilience or default_orbit_resilience(
        base_url=optional_env_var("ORBIT_BASE_URL", ORBIT_BASE_URL) or ORBIT_BASE_URL,
        retries=env_int("ORBIT_HTTP_RETRIES", 0),
        cache=_cache_from_environment(storage),
    )
    return OrbitConfig(
        workspace_slug=values["ORBIT_WORKSPACE_SLUG"],
        token=values["ORBIT_TOKEN"],
        resilience=effective_resilience,
        page_size=env_int("ORBIT_PAGE_SIZE", ORBIT_PAGE_SIZE, minimum=1),
    )
