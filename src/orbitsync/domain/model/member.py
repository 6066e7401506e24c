"""Member records as read from the remote community directory."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Final


class SocialKey(StrEnum):
    GITHUB = "github"
    DISCORD = "discord"
    LINKEDIN = "linkedin"
    TWITTER = "twitter"
    EMAIL = "email"


# Enumeration order is significant: conflict reports follow it.
SOCIAL_KEYS: Final[tuple[SocialKey, ...]] = (
    SocialKey.GITHUB,
    SocialKey.DISCORD,
    SocialKey.LINKEDIN,
    SocialKey.TWITTER,
    SocialKey.EMAIL,
)


@dataclass(frozen=True, slots=True, kw_only=True)
class SocialHandles:
    """Closed set of social identities attached to a member."""

    github: str | None = None
    discord: str | None = None
    linkedin: str | None = None
    twitter: str | None = None
    email: str | None = None

    def get(self, key: SocialKey | str) -> str | None:
        return getattr(self, SocialKey(key).value)

    def as_dict(self) -> dict[str, str | None]:
        return {key.value: self.get(key) for key in SOCIAL_KEYS}


@dataclass(frozen=True, slots=True, kw_only=True)
class MemberAttributes:
    """Allow-listed, non-social member attributes."""

    name: str | None = None
    slug: str | None = None
    company: str | None = None
    location: str | None = None
    birthday: str | None = None
    avatar_url: str | None = None
    orbit_url: str | None = None
    shipping_address: str | None = None
    first_activity_occurred_at: str | None = None
    last_activity_occurred_at: str | None = None
    updated_at: str | None = None
    orbit_level: int | None = None
    reach: int | None = None
    love: str | None = None
    activities_count: int | None = None
    tag_list: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True, kw_only=True)
class MemberRecord:
    """One member of a community workspace, pre-mapping."""

    id: str
    attributes: MemberAttributes
    social: SocialHandles
