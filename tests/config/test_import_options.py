from __future__ import annotations

import pytest

from orbitsync.config import DEFAULT_VAULT_NAME, ConfigurationError, load_import_options
from orbitsync.domain.reconciliation import DEFAULT_UPDATE_WORKERS


def test_defaults() -> None:
    options = load_import_options()

    assert options.orbit_id is None
    assert options.dest_name is None
    assert options.overwrite_all is False
    assert options.frontmatter == {}
    assert options.vault_name == DEFAULT_VAULT_NAME
    assert options.update_workers == DEFAULT_UPDATE_WORKERS == 8


def test_blank_strings_become_none() -> None:
    options = load_import_options({"orbit_id": "  ", "dest_name": ""})

    assert options.orbit_id is None
    assert options.dest_name is None


def test_overrides_win_and_none_overrides_are_ignored() -> None:
    options = load_import_options(
        {"vault_name": "base", "orbit_id": "m-1"},
        vault_name="notes",
        orbit_id=None,
        overwrite_all=True,
    )

    assert options.vault_name == "notes"
    assert options.orbit_id == "m-1"
    assert options.overwrite_all is True


@pytest.mark.parametrize("dest_name", ["people..alice", "people alice", ".people", "a/b"])
def test_dest_name_must_be_a_note_name(dest_name: str) -> None:
    with pytest.raises(ConfigurationError, match="dest_name"):
        load_import_options(dest_name=dest_name)


def test_dest_name_accepts_hierarchy() -> None:
    assert load_import_options(dest_name="team.alice").dest_name == "team.alice"


def test_unknown_options_and_bad_values_are_rejected() -> None:
    with pytest.raises(ConfigurationError):
        load_import_options({"workspace": "acme"})
    with pytest.raises(ConfigurationError):
        load_import_options(update_workers=0)
    with pytest.raises(ConfigurationError):
        load_import_options(vault_name="   ")
