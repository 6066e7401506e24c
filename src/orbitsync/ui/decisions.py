"""Decision sources answering conflict prompts."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from orbitsync.domain.errors import DecisionValidationError
from orbitsync.domain.ports import DecisionSource
from orbitsync.domain.reconciliation import (
    MergeConflictOption,
    merge_conflict_message,
    option_for_choice,
    validate_merge_conflict_choice,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Sequence

    from orbitsync.domain.reconciliation import ConflictEntry

log = getLogger(__name__)

type ScriptedAnswer = MergeConflictOption | int | None


def _menu(options: Sequence[MergeConflictOption]) -> str:
    return "\n".join(f"  {index}) {option.value}" for index, option in enumerate(options))


@dataclass(slots=True)
class PromptDecisionSource:
    """Ask on the terminal, re-prompting until a valid menu entry is given.

    Accepts the menu index or the option name. End of input counts as no answer.
    """

    input_func: Callable[[str], str] = input
    output: Callable[[str], None] = print

    def __call__(
        self,
        conflict: ConflictEntry,
        options: Sequence[MergeConflictOption],
    ) -> MergeConflictOption | None:
        self.output(merge_conflict_message(conflict))
        self.output(_menu(options))
        while True:
            try:
                raw = self.input_func("Choose an option: ").strip().lower()
            except EOFError:
                log.warning("Input closed while deciding on %s", conflict.conflict_note.fname)
                return None

            by_name = {option.value: option for option in options}
            if raw in by_name:
                return by_name[raw]
            try:
                choice = int(raw)
            except ValueError:
                choice = -1
            verdict = validate_merge_conflict_choice(choice, options)
            if verdict is True:
                return options[choice]
            self.output(str(verdict))


@dataclass(slots=True)
class ScriptedDecisionSource:
    """Answer conflicts from a fixed list, in queue order.

    Integers are menu indices. Once the script runs out every further conflict
    gets ``default``.
    """

    answers: Iterable[ScriptedAnswer] = ()
    default: MergeConflictOption | None = None
    _pending: deque[ScriptedAnswer] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._pending = deque(self.answers)

    @property
    def remaining(self) -> int:
        return len(self._pending)

    def __call__(
        self,
        conflict: ConflictEntry,
        options: Sequence[MergeConflictOption],
    ) -> MergeConflictOption | None:
        answer = self._pending.popleft() if self._pending else self.default
        if answer is None or isinstance(answer, MergeConflictOption):
            if answer is not None and answer not in options:
                raise DecisionValidationError(f"{answer.value} is not offered for this conflict")
            log.debug("Scripted decision for %s: %s", conflict.conflict_note.fname, answer)
            return answer
        return option_for_choice(answer, options)


if TYPE_CHECKING:
    _prompt_check: DecisionSource = PromptDecisionSource()
    _scripted_check: DecisionSource = ScriptedDecisionSource()
