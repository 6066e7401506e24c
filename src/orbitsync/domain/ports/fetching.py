"""Ports for reading members from an external directory."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from orbitsync.domain.model import MemberRecord

FIRST_PAGE = ""


@dataclass(slots=True)
class MemberPage:
    """One page of a member listing.

    ``next_cursor`` is ``None`` on the last page; otherwise it is passed back to
    ``MemberFetcher.fetch_page`` verbatim.
    """

    records: list[MemberRecord] = field(default_factory=list["MemberRecord"])
    next_cursor: str | None = None


@runtime_checkable
class MemberFetcher(Protocol):
    """Paginated and single-record access to a member directory.

    Implementations raise ``FetchError`` for any transport or API failure.
    """

    def fetch_page(self, cursor: str = FIRST_PAGE) -> MemberPage: ...

    def fetch_member(self, member_id: str) -> MemberRecord: ...


__all__ = ["FIRST_PAGE", "MemberFetcher", "MemberPage"]
