"""Port for the note vault the import writes into."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from orbitsync.domain.model import Note, Vault


@runtime_checkable
class NoteStore(Protocol):
    """Create/read/update access to hierarchical notes.

    Every call is atomic on its own; there is no transaction spanning calls.
    ``update`` has update-existing semantics keyed by vault and ``fname``: the
    stored note with that name is replaced (keeping its id and creation time),
    or created when absent.
    """

    def get_by_fname(self, fname: str, vault: Vault) -> Note | None: ...

    def add(self, note: Note) -> None: ...

    def bulk_add(self, notes: Sequence[Note]) -> None: ...

    def update(self, note: Note) -> None: ...

    def children_of(self, fname: str, vault: Vault) -> list[Note]: ...
