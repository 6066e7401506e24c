from __future__ import annotations

import pytest

from orbitsync.domain.errors import DecisionValidationError
from orbitsync.domain.model import Note, Vault
from orbitsync.domain.ports import DecisionSource
from orbitsync.domain.reconciliation import (
    MERGE_CONFLICT_OPTIONS,
    ConflictEntry,
    MergeConflictOption,
)
from orbitsync.ui.decisions import PromptDecisionSource, ScriptedDecisionSource


@pytest.fixture
def conflict(vault: Vault) -> ConflictEntry:
    return ConflictEntry(
        conflict_note=Note(fname="people.bob", vault=vault, custom={"social": {"github": "old"}}),
        conflict_entry=Note(
            fname="people.orbit.duplicate.2024.03.05.bob",
            vault=vault,
            custom={"social": {"github": "new"}},
        ),
        conflict_data=["github"],
    )


def _prompt(answers: list[str]) -> tuple[PromptDecisionSource, list[str]]:
    printed: list[str] = []
    pending = list(answers)

    def fake_input(_prompt: str) -> str:
        if not pending:
            raise EOFError
        return pending.pop(0)

    return PromptDecisionSource(input_func=fake_input, output=printed.append), printed


def test_prompt_accepts_menu_index(conflict: ConflictEntry) -> None:
    source, printed = _prompt(["0"])

    assert source(conflict, MERGE_CONFLICT_OPTIONS) is MergeConflictOption.OVERWRITE_LOCAL
    assert "remote: new" in printed[0]
    assert "2) skip_all" in printed[1]


def test_prompt_accepts_option_name(conflict: ConflictEntry) -> None:
    source, _ = _prompt(["SKIP_ALL"])

    assert source(conflict, MERGE_CONFLICT_OPTIONS) is MergeConflictOption.SKIP_ALL


def test_prompt_reprompts_on_invalid_choice(conflict: ConflictEntry) -> None:
    source, printed = _prompt(["7", "maybe", "1"])

    assert source(conflict, MERGE_CONFLICT_OPTIONS) is MergeConflictOption.SKIP
    assert printed[-2:] == ["Invalid choice! Choose 0/1/2", "Invalid choice! Choose 0/1/2"]


def test_prompt_returns_none_when_input_closes(conflict: ConflictEntry) -> None:
    source, _ = _prompt([])

    assert source(conflict, MERGE_CONFLICT_OPTIONS) is None


def test_scripted_answers_in_order_then_default(conflict: ConflictEntry) -> None:
    source = ScriptedDecisionSource(
        [MergeConflictOption.SKIP, 0], default=MergeConflictOption.SKIP_ALL
    )

    assert source(conflict, MERGE_CONFLICT_OPTIONS) is MergeConflictOption.SKIP
    assert source(conflict, MERGE_CONFLICT_OPTIONS) is MergeConflictOption.OVERWRITE_LOCAL
    assert source.remaining == 0
    assert source(conflict, MERGE_CONFLICT_OPTIONS) is MergeConflictOption.SKIP_ALL


def test_scripted_out_of_range_index_is_rejected(conflict: ConflictEntry) -> None:
    source = ScriptedDecisionSource([5])

    with pytest.raises(DecisionValidationError, match="Invalid choice"):
        source(conflict, MERGE_CONFLICT_OPTIONS)


def test_scripted_option_outside_menu_is_rejected(conflict: ConflictEntry) -> None:
    source = ScriptedDecisionSource([MergeConflictOption.SKIP_ALL])

    with pytest.raises(DecisionValidationError):
        source(conflict, (MergeConflictOption.OVERWRITE_LOCAL, MergeConflictOption.SKIP))


def test_sources_satisfy_port() -> None:
    assert isinstance(PromptDecisionSource(), DecisionSource)
    assert isinstance(ScriptedDecisionSource(), DecisionSource)
