"""Domain port definitions for adapters."""

from __future__ import annotations

from .decisions import DecisionSource
from .fetching import FIRST_PAGE, MemberFetcher, MemberPage
from .persistence import NoteStore

__all__ = [
    "FIRST_PAGE",
    "DecisionSource",
    "MemberFetcher",
    "MemberPage",
    "NoteStore",
]
