"""Derive a note name for a member record."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

    from orbitsync.domain.model import MemberRecord

# Anything that is not a word character or dash; this includes the hierarchy
# separator so a name always stays a single segment.
_DISALLOWED = re.compile(r"[^\w-]+")


def clean_fname(value: str) -> str:
    """Make ``value`` safe to use as one note-name segment; case is preserved."""

    collapsed = _DISALLOWED.sub("-", value.strip())
    return collapsed.strip("-")


def name_from_email(email: str | None) -> str | None:
    if not email:
        return None
    return email.split("@", 1)[0]


def _name_candidates(record: MemberRecord) -> Iterator[str | None]:
    yield record.attributes.name
    yield record.social.github
    yield record.social.discord
    yield record.social.twitter
    yield name_from_email(record.social.email)


def resolve_note_name(record: MemberRecord) -> str:
    """Return the sanitized name for ``record``.

    Takes the first non-empty of display name, GitHub, Discord and Twitter
    handles and the email local-part, falling back to the member id. Candidates
    that sanitize to nothing are passed over.
    """

    for candidate in _name_candidates(record):
        if candidate is None or not candidate.strip():
            continue
        cleaned = clean_fname(candidate)
        if cleaned:
            return cleaned
    return clean_fname(record.id) or record.id
