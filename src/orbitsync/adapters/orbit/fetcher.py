"""Orbit implementation of the member fetching port."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from orbitsync.config.orbit import get_orbit_config
from orbitsync.domain.ports import FIRST_PAGE, MemberFetcher, MemberPage

from .client import OrbitClient
from .translator import translate_member

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType

    from orbitsync.adapters.http_resilience import ResilientClient
    from orbitsync.config.http_resilience import ResilienceConfig
    from orbitsync.config.orbit import OrbitConfig
    from orbitsync.domain.model import MemberRecord

log = getLogger(__name__)


@dataclass(slots=True)
class OrbitFetcher:
    """``MemberFetcher`` over one long-lived ``OrbitClient``; close it when done."""

    config: OrbitConfig = field(default_factory=get_orbit_config)
    client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None
    _client: OrbitClient = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._client = OrbitClient(config=self.config, client_factory=self.client_factory)

    def __enter__(self) -> OrbitFetcher:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def fetch_page(self, cursor: str = FIRST_PAGE) -> MemberPage:
        page = self._client.fetch_members_page(cursor or None)
        records = [translate_member(member) for member in page.data]
        # An empty page ends the listing even if the API still links onwards.
        next_cursor = page.links.next if records else None
        log.debug(
            "Orbit page %s: %d member(s), next=%s", cursor or "<first>", len(records), next_cursor
        )
        return MemberPage(records=records, next_cursor=next_cursor)

    def fetch_member(self, member_id: str) -> MemberRecord:
        response = self._client.fetch_member(member_id)
        return translate_member(response.data)

    def close(self) -> None:
        self._client.close()


def build_orbit_fetcher(
    *,
    config: OrbitConfig | None = None,
    client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
) -> OrbitFetcher:
    return OrbitFetcher(config=config or get_orbit_config(), client_factory=client_factory)


if TYPE_CHECKING:
    _fetcher_check: MemberFetcher = OrbitFetcher()
