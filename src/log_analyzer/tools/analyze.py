"""MCP tool implementations.

Keep this layer thin: validate inputs, translate them into core calls, and
return JSON-serializable data structures.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from log_analyzer.core.filters import DEFAULT_LEVELS, FilterConfig
from log_analyzer.core.log_service import analyze_file_async
from log_analyzer.core.time_window import resolve_bounds


def _filter_config(
    levels: Sequence[str] | None,
    start: str | None,
    end: str | None,
    legacy_filter: bool,
) -> FilterConfig:
    """Build a FilterConfig from raw tool arguments."""
    start_dt, end_dt = resolve_bounds(start, end)
    return FilterConfig(
        levels=frozenset(levels) if levels else DEFAULT_LEVELS,
        start=start_dt,
        end=end_dt,
        legacy_passthrough=legacy_filter,
    )


async def analyze_log_impl(
    *,
    log_path: str,
    levels: Sequence[str] | None = None,
    start: str | None = None,
    end: str | None = None,
    legacy_filter: bool = False,
) -> dict[str, Any]:
    """Implementation for the `analyze_log` MCP tool.

    Notes
    -----
    - levels defaults to ["info"]; names are case-insensitive.
    - start/end accept YYYY-MM-DDTHH:MM:SS and are inclusive.
    """
    config = _filter_config(levels, start, end, legacy_filter)
    result = await analyze_file_async(log_path, config)
    out = result.report.summary().model_dump()
    out["parsed_entries"] = result.parsed_entries
    out["invalid_lines"] = result.invalid_lines
    return out
