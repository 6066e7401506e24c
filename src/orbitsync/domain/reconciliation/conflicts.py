"""Field-level conflict detection between stored notes and incoming members."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from orbitsync.domain.model import SOCIAL_KEYS

from .mapping import SOCIAL_SECTION


def detect_conflicts(
    existing_custom: Mapping[str, Any] | None,
    incoming_social: Mapping[str, Any],
) -> list[str]:
    """Return the social keys whose stored value disagrees with the incoming one.

    A key conflicts only when the stored value is set (present and not ``None``)
    and differs from the incoming value; unset stored values are adopted later
    instead. Keys come back in ``SOCIAL_KEYS`` order.
    """

    if not existing_custom:
        return []
    existing_social = existing_custom.get(SOCIAL_SECTION)
    if not isinstance(existing_social, Mapping):
        return []

    conflicts: list[str] = []
    for key in SOCIAL_KEYS:
        stored = existing_social.get(key.value)
        if stored is None:
            continue
        incoming = incoming_social.get(key.value)
        if _differs(stored, incoming):
            conflicts.append(key.value)
    return conflicts


def _differs(stored: object, incoming: object) -> bool:
    # Type-sensitive: 1 and "1" (or True and 1) are different values.
    return type(stored) is not type(incoming) or stored != incoming
