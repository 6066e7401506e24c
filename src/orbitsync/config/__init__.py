"""Application configuration helpers."""

from __future__ import annotations

from .env import env_int, optional_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import CACHE_MODES, CacheConfig, RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .options import DEFAULT_VAULT_NAME, ImportOptions, load_import_options
from .orbit import ORBIT_BASE_URL, OrbitConfig, default_orbit_resilience, get_orbit_config
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config

__all__ = [
    "CACHE_MODES",
    "DEFAULT_VAULT_NAME",
    "ORBIT_BASE_URL",
    "CacheConfig",
    "ConfigurationError",
    "DatabaseConfig",
    "ImportOptions",
    "MissingConfigurationError",
    "OrbitConfig",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "StorageConfig",
    "configure_logging",
    "default_orbit_resilience",
    "env_int",
    "get_database_config",
    "get_orbit_config",
    "get_storage_config",
    "load_import_options",
    "optional_env_var",
    "require_env_vars",
]
