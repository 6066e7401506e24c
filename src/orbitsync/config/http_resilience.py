"""Configuration types for resilient HTTP clients."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Literal

import httpx

if TYPE_CHECKING:
    from collections.abc import Mapping

ResponseHook = Callable[[httpx.Response], Awaitable[None] | None]
ShouldCacheHook = Callable[[object], bool]
CacheBackend = Literal["sqlite", "memory"]
CacheMode = Literal["off", "memory", "sqlite"]

CACHE_MODES: tuple[CacheMode, ...] = ("off", "memory", "sqlite")

# Listing reads are idempotent; nothing else is retried.
_IDEMPOTENT_READS = frozenset({"GET", "HEAD"})
_TRANSIENT_STATUSES = frozenset({429, 500, 502, 503, 504})


@dataclass(slots=True, frozen=True)
class RetryPolicy:
    total: int = 3
    backoff_factor: float = 0.5
    max_backoff_wait: float = 60.0
    respect_retry_after_header: bool = True
    allowed_methods: frozenset[str] = _IDEMPOTENT_READS
    status_forcelist: frozenset[int] = _TRANSIENT_STATUSES
    retry_on_exceptions: tuple[type[httpx.HTTPError], ...] = (
        httpx.TimeoutException,
        httpx.NetworkError,
        httpx.RemoteProtocolError,
    )
    backoff_jitter: float = 1.0

    @classmethod
    def from_attempts(cls, attempts: int) -> RetryPolicy | None:
        """Policy retrying up to ``attempts`` times, or ``None`` for zero."""

        if attempts <= 0:
            return None
        return cls(total=attempts)


@dataclass(slots=True, frozen=True)
class RateLimit:
    max_calls: int
    per_seconds: float


@dataclass(slots=True, frozen=True)
class CacheConfig:
    enabled: bool = True
    backend: CacheBackend = "memory"
    sqlite_path: str | None = None
    default_ttl_seconds: float | None = None
    refresh_ttl_on_access: bool = True
    should_cache: ShouldCacheHook | None = None

    @classmethod
    def from_mode(cls, mode: str, *, sqlite_path: str | None = None) -> CacheConfig | None:
        """Build the cache for an ``off``/``memory``/``sqlite`` switch value."""

        normalized = mode.strip().lower()
        if normalized not in CACHE_MODES:
            raise ValueError(f"Cache mode must be one of {', '.join(CACHE_MODES)}, got {mode!r}")
        if normalized == "off":
            return None
        if normalized == "memory":
            return cls(backend="memory")
        return cls(backend="sqlite", sqlite_path=sqlite_path)


@dataclass(slots=True, frozen=True)
class ResilienceConfig:
    """Transport behaviour for one remote API.

    ``retry=None`` disables the retry transport entirely: failures surface on the
    first attempt and the caller decides whether to run again.
    """

    name: str
    base_url: str | None = None
    timeout_seconds: float = 30.0
    retry: RetryPolicy | None = None
    ratelimit: RateLimit | None = None
    cache: CacheConfig | None = None
    response_hooks: tuple[ResponseHook, ...] = field(default_factory=tuple)
    default_headers: Mapping[str, str] | None = None
