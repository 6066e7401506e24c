from __future__ import annotations

from orbitsync.domain.reconciliation import detect_conflicts

_INCOMING = {
    "github": "alice",
    "discord": "alice#1",
    "linkedin": None,
    "twitter": "alice_t",
    "email": "alice@example.com",
}


def test_no_social_section_means_no_conflicts() -> None:
    assert detect_conflicts({}, _INCOMING) == []
    assert detect_conflicts(None, _INCOMING) == []
    assert detect_conflicts({"orbit": {"id": "m-1"}}, _INCOMING) == []


def test_unset_existing_values_are_not_conflicts() -> None:
    existing = {"social": {"github": None, "discord": None}}

    assert detect_conflicts(existing, _INCOMING) == []


def test_differing_set_values_conflict_in_enumeration_order() -> None:
    existing = {
        "social": {
            "email": "old@example.com",
            "twitter": "other",
            "github": "alice",
            "discord": "someone-else",
        }
    }

    assert detect_conflicts(existing, _INCOMING) == ["discord", "twitter", "email"]


def test_set_value_against_missing_incoming_conflicts() -> None:
    existing = {"social": {"linkedin": "alice-li"}}

    assert detect_conflicts(existing, _INCOMING) == ["linkedin"]


def test_comparison_is_type_sensitive() -> None:
    existing = {"social": {"github": 1}}

    assert detect_conflicts(existing, {"github": "1"}) == ["github"]
