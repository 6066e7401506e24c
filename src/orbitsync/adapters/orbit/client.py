"""HTTP client for the Orbit members API."""

from __future__ import annotations

import asyncio
from dataclasses import replace
from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import ValidationError

from orbitsync.adapters.http_resilience import ResilientClient
from orbitsync.domain.errors import FetchError

from .schema import MemberResponse, MembersPage

if TYPE_CHECKING:
    from collections.abc import Callable, Coroutine
    from types import TracebackType

    from orbitsync.config.http_resilience import ResilienceConfig
    from orbitsync.config.orbit import OrbitConfig

log = getLogger(__name__)


def _should_cache_payload(payload: object) -> bool:
    # Error envelopes are never cached.
    return isinstance(payload, dict) and "data" in payload and "errors" not in payload


def _with_cache_filter(resilience: ResilienceConfig) -> ResilienceConfig:
    cache = resilience.cache
    if cache is None or cache.should_cache is not None:
        return resilience
    return replace(resilience, cache=replace(cache, should_cache=_should_cache_payload))


class OrbitClient:
    """Low-level HTTP client for one Orbit workspace.

    Every failure (transport, non-2xx status, malformed envelope) surfaces as
    ``FetchError``; nothing is retried here beyond what the resilience config
    asks for.

    One event loop and one ``ResilientClient`` serve every call until ``close``,
    so the rate limit and the response cache span a whole page walk.
    """

    def __init__(
        self,
        *,
        config: OrbitConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._resilience = _with_cache_filter(config.resilience)
        self._client_factory = client_factory or ResilientClient
        self._runner: asyncio.Runner | None = None
        self._http: ResilientClient | None = None

    def __enter__(self) -> OrbitClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    @property
    def members_path(self) -> str:
        return f"{self._config.workspace_slug}/members"

    def fetch_members_page(self, link: str | None = None) -> MembersPage:
        """Return one listing page; ``link`` is a previous page's ``links.next``."""

        return self._run(self._fetch_members_page_async(link=link))

    def fetch_member(self, member_id: str) -> MemberResponse:
        return self._run(self._fetch_member_async(member_id=member_id))

    def close(self) -> None:
        """Close the HTTP client and its event loop; safe to call twice."""

        runner, self._runner = self._runner, None
        if runner is None:
            return
        try:
            if self._http is not None:
                runner.run(self._http.aclose())
        finally:
            self._http = None
            runner.close()

    def _run[T](self, coro: Coroutine[object, object, T]) -> T:
        if self._runner is None:
            self._runner = asyncio.Runner()
        return self._runner.run(coro)

    def _session(self) -> ResilientClient:
        if self._http is None:
            self._http = self._client_factory(self._resilience)
        return self._http

    async def _fetch_members_page_async(self, *, link: str | None) -> MembersPage:
        if link:
            url, params = link, None
        else:
            url, params = self.members_path, {"items": str(self._config.page_size)}

        payload = await self._perform_request(client=self._session(), url=url, params=params)
        return self._validate(MembersPage, payload, url=url)

    async def _fetch_member_async(self, *, member_id: str) -> MemberResponse:
        url = f"{self.members_path}/{member_id}"
        payload = await self._perform_request(client=self._session(), url=url, params=None)
        return self._validate(MemberResponse, payload, url=url)

    async def _perform_request(
        self,
        *,
        client: ResilientClient,
        url: str,
        params: dict[str, str] | None,
    ) -> object:
        headers = {"Authorization": f"Bearer {self._config.token}"}
        try:
            response = await client.get(url, params=params, headers=headers)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as exc:
            log.error(
                "Orbit API returned %s for %s", exc.response.status_code, exc.request.url
            )
            raise FetchError(str(exc)) from exc
        except httpx.HTTPError as exc:
            log.error("Orbit request to %s failed: %s", url, exc)
            raise FetchError(str(exc)) from exc
        except ValueError as exc:
            log.error("Orbit response from %s is not JSON: %s", url, exc)
            raise FetchError(str(exc)) from exc

    @staticmethod
    def _validate[T: (MembersPage, MemberResponse)](
        model: type[T], payload: object, *, url: str
    ) -> T:
        try:
            return model.model_validate(payload)
        except ValidationError as exc:
            log.error("Unexpected Orbit payload from %s", url)
            raise FetchError(str(exc)) from exc
