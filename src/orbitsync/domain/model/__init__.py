"""Domain model for members and vault notes."""

from __future__ import annotations

from .member import SOCIAL_KEYS, MemberAttributes, MemberRecord, SocialHandles, SocialKey
from .note import HIERARCHY_SEPARATOR, Note, Vault, new_note_id, title_from_fname, utcnow

__all__ = [
    "HIERARCHY_SEPARATOR",
    "SOCIAL_KEYS",
    "MemberAttributes",
    "MemberRecord",
    "Note",
    "SocialHandles",
    "SocialKey",
    "Vault",
    "new_note_id",
    "title_from_fname",
    "utcnow",
]
