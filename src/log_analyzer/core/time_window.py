"""Helpers for user-supplied time bounds and level lists."""

from __future__ import annotations

from datetime import datetime

BOUND_FORMATS = ("%Y-%m-%dT%H:%M:%S", "%Y-%m-%d %H:%M:%S")


def parse_bound(s: str) -> datetime:
    """Parse a start/end bound. Returns a naive datetime."""
    value = s.strip()
    for fmt in BOUND_FORMATS:
        try:
            return datetime.strptime(value, fmt)
        except ValueError:
            continue
    raise ValueError(f"invalid time bound {s!r}: expected YYYY-MM-DDTHH:MM:SS")


def resolve_bounds(
    start: str | None = None,
    end: str | None = None,
) -> tuple[datetime | None, datetime | None]:
    """Parse optional start/end bounds; ordering is checked by FilterConfig."""
    s = parse_bound(start) if start else None
    e = parse_bound(end) if end else None
    return s, e


def parse_levels(csv: str) -> frozenset[str]:
    """Split a comma-separated level list into lower-cased names."""
    out = frozenset(part.strip().lower() for part in csv.split(",") if part.strip())
    if not out:
        raise ValueError("at least one level must be provided")
    return out
