"""Translate Orbit member payloads into domain records."""

from __future__ import annotations

from collections.abc import Mapping

from orbitsync.domain.model import MemberAttributes, MemberRecord, SocialHandles

from .schema import OrbitMember

type OrbitMemberInput = OrbitMember | Mapping[str, object]


def _ensure_member_payload(member: OrbitMemberInput) -> OrbitMember:
    if isinstance(member, OrbitMember):
        return member
    return OrbitMember.model_validate(member)


def translate_member(member: OrbitMemberInput) -> MemberRecord:
    payload = _ensure_member_payload(member)
    attributes = payload.attributes
    return MemberRecord(
        id=payload.id,
        attributes=MemberAttributes(
            name=attributes.name,
            slug=attributes.slug,
            company=attributes.company,
            location=attributes.location,
            birthday=attributes.birthday,
            avatar_url=attributes.avatar_url,
            orbit_url=attributes.orbit_url,
            shipping_address=attributes.shipping_address,
            first_activity_occurred_at=attributes.first_activity_occurred_at,
            last_activity_occurred_at=attributes.last_activity_occurred_at,
            updated_at=attributes.updated_at,
            orbit_level=attributes.orbit_level,
            reach=attributes.reach,
            love=attributes.love,
            activities_count=attributes.activities_count,
            tag_list=tuple(attributes.tag_list),
        ),
        social=SocialHandles(
            github=attributes.github,
            discord=attributes.discord,
            linkedin=attributes.linkedin,
            twitter=attributes.twitter,
            email=attributes.email,
        ),
    )
