"""Port for answering conflict prompts."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from orbitsync.domain.reconciliation.contracts import ConflictEntry, MergeConflictOption


@runtime_checkable
class DecisionSource(Protocol):
    """Blocking request/response channel for one conflict at a time.

    Returns one of ``options`` or ``None`` when no answer was given. May be an
    interactive prompt or a pre-supplied batch of answers.
    """

    def __call__(
        self,
        conflict: ConflictEntry,
        options: Sequence[MergeConflictOption],
    ) -> MergeConflictOption | None: ...
