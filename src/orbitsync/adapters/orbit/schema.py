"""Pydantic models describing the Orbit members API payloads."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class OrbitBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class OrbitMemberAttributes(OrbitBaseModel):
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
    # Decimal string, e.g. "1.2".
    love: str | None = None
    activities_count: int | None = None
    tag_list: list[str] = Field(default_factory=list[str])

    github: str | None = None
    discord: str | None = None
    linkedin: str | None = None
    twitter: str | None = None
    email: str | None = None

    _normalize_social = field_validator(
        "github", "discord", "linkedin", "twitter", "email", mode="before"
    )(_blank_to_none)

    @field_validator("tag_list", mode="before")
    @classmethod
    def _null_tags(cls, value: object) -> object:
        return [] if value is None else value

    @field_validator("love", mode="before")
    @classmethod
    def _love_as_text(cls, value: object) -> object:
        if isinstance(value, int | float):
            return str(value)
        return value


class OrbitMember(OrbitBaseModel):
    id: str
    type: Literal["member"] = "member"
    attributes: OrbitMemberAttributes


class OrbitLinks(OrbitBaseModel):
    first: str | None = None
    prev: str | None = None
    next: str | None = None

    _normalize_next = field_validator("next", mode="before")(_blank_to_none)


class MembersPage(OrbitBaseModel):
    data: list[OrbitMember]
    links: OrbitLinks = Field(default_factory=OrbitLinks)


class MemberResponse(OrbitBaseModel):
    data: OrbitMember
