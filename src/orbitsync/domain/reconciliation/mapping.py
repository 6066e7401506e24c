"""Project member records into note metadata."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, Final

if TYPE_CHECKING:
    from orbitsync.domain.model import MemberRecord

SOCIAL_SECTION: Final[str] = "social"
PROVIDER_SECTION: Final[str] = "orbit"
IMPORTED_AT_KEY: Final[str] = "last_imported_at"


def social_attributes(record: MemberRecord) -> dict[str, str | None]:
    return record.social.as_dict()


def provider_attributes(record: MemberRecord, *, now: datetime) -> dict[str, Any]:
    attributes = record.attributes
    imported_at = now if now.tzinfo else now.replace(tzinfo=UTC)
    return {
        "id": record.id,
        "first_activity_occurred_at": attributes.first_activity_occurred_at,
        "last_activity_occurred_at": attributes.last_activity_occurred_at,
        "company": attributes.company,
        "orbit_level": attributes.orbit_level,
        "orbit_url": attributes.orbit_url,
        "reach": attributes.reach,
        "love": attributes.love,
        "slug": attributes.slug,
        "tag_list": list(attributes.tag_list),
        "shipping_address": attributes.shipping_address,
        "updated_at": attributes.updated_at,
        "activities_count": attributes.activities_count,
        "avatar_url": attributes.avatar_url,
        "birthday": attributes.birthday,
        "location": attributes.location,
        "name": attributes.name,
        IMPORTED_AT_KEY: imported_at.isoformat(),
    }


def map_member_metadata(record: MemberRecord, *, now: datetime) -> dict[str, Any]:
    """Return the custom-metadata bag written for ``record``."""

    return {
        SOCIAL_SECTION: social_attributes(record),
        PROVIDER_SECTION: provider_attributes(record, now=now),
    }
