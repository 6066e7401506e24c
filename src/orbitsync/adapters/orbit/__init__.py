"""Orbit community members adapter."""

from __future__ import annotations

from .client import OrbitClient
from .fetcher import OrbitFetcher, build_orbit_fetcher
from .schema import MemberResponse, MembersPage, OrbitMember, OrbitMemberAttributes
from .translator import translate_member

__all__ = [
    "MemberResponse",
    "MembersPage",
    "OrbitClient",
    "OrbitFetcher",
    "OrbitMember",
    "OrbitMemberAttributes",
    "build_orbit_fetcher",
    "translate_member",
]
