from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest


@pytest.fixture
def write_log() -> Callable[[Path], None]:
    """Two INFO entries with response times and one ERROR entry."""

    def _write(path: Path) -> None:
        path.write_text(
            "\n".join(
                [
                    "2024-01-01 10:00:00 INFO request handled 100 ms",
                    "2024-01-01 10:00:01 INFO request handled 200 ms",
                    "2024-01-01 10:00:02 ERROR database unavailable",
                ]
            )
            + "\n",
            encoding="utf-8",
        )

    return _write


@pytest.fixture
def write_mixed_log() -> Callable[[Path], None]:
    """Mixed levels, a few invalid lines and a repeated message."""

    def _write(path: Path) -> None:
        path.write_text(
            "\n".join(
                [
                    "2024-01-01 09:00:00 info service started",
                    "bad line",
                    "2024-01-01 10:00:00 WARN retrying upstream",
                    "",
                    "2024-01-01 11:00:00 debug cache warm 12.5 ms",
                    "2024-13-01 11:30:00 info impossible month",
                    "2024-01-01 12:00:00 error upstream timeout",
                    "2024-01-01 13:00:00 INFO service started",
                    "2024-01-01 14:00:00 trace unknown level",
                ]
            )
            + "\n",
            encoding="utf-8",
        )

    return _write
