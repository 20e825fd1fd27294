"""MCP server entrypoint (stdio transport).

Run locally (stdio):
    python -m log_analyzer.server.log_server
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Sequence
from typing import Any

from mcp.server.fastmcp import FastMCP

from log_analyzer.logging_setup import configure_logging
from log_analyzer.tools.analyze import analyze_log_impl

LOGGER = logging.getLogger(__name__)

mcp = FastMCP("log-analyzer", json_response=True)


@mcp.tool()
async def analyze_log(
    log_path: str,
    levels: Sequence[str] | None = None,
    start: str | None = None,
    end: str | None = None,
    legacy_filter: bool = False,
) -> dict[str, Any]:
    """Summarize a plain-text log file.

    Parameters
    ----------
    log_path:
        Path to a local `.log` or `.txt` file with lines like
        `2025-12-30 08:12:04 INFO request handled 12.5 ms`.
    levels:
        Levels to aggregate (e.g., ["info", "error"]). Case-insensitive. Default: ["info"].
    start/end:
        Inclusive bounds as YYYY-MM-DDTHH:MM:SS (no timezone).
    legacy_filter:
        When true, filters are evaluated but nothing is excluded.

    Returns
    -------
    dict:
        {"total_entries", "levels", "average_response_time_ms", "response_time_samples",
         "most_frequent_message", "parsed_entries", "invalid_lines"}
    """
    return await analyze_log_impl(
        log_path=log_path,
        levels=levels,
        start=start,
        end=end,
        legacy_filter=legacy_filter,
    )


def main(argv: Sequence[str] | None = None) -> None:
    """Start the MCP server over stdio."""
    configure_logging()
    LOGGER.debug("Starting MCP server (transport=stdio)")
    _ = argv or sys.argv[1:]
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
