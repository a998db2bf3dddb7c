"""Deterministic weekly emblem rotation."""

import hashlib
from datetime import datetime, timezone

FALLBACK_EMBLEM = "1538938257"  # Seventh Column Projection


def iso_week_key(now: datetime) -> str:
    """ISO week of the UTC date, e.g. "2026-W06"."""
    year, week, _ = now.astimezone(timezone.utc).isocalendar()
    return f"{year}-W{week:02d}"


def select_emblem(
    rotation: list[str] | None,
    fallback: str | None = None,
    now: datetime | None = None,
) -> str:
    """Pick this week's emblem from the rotation.

    Everyone running the same rotation in the same ISO week gets the same
    emblem: the first 8 bytes of sha256(week key) modulo the rotation length.
    """
    if not rotation:
        return fallback or FALLBACK_EMBLEM

    now = now or datetime.now(timezone.utc)
    digest = hashlib.sha256(iso_week_key(now).encode()).digest()
    index = int.from_bytes(digest[:8], "big") % len(rotation)
    return rotation[index]
