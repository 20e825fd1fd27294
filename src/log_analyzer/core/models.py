"""Core data models for log analysis."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class KnownLevel(str, Enum):
    """Severity levels that get their own counter in the report."""

    INFO = "info"
    WARN = "warn"
    ERROR = "error"
    DEBUG = "debug"

    @classmethod
    def lookup(cls, level: str) -> KnownLevel | None:
        """Case-insensitive lookup; None for levels outside the known set."""
        try:
            return cls(level.lower())
        except ValueError:
            return None


@dataclass(frozen=True, slots=True)
class LogEntry:
    """One structured record extracted from a log line."""

    timestamp: datetime  # naive, second precision
    level: str  # verbatim, case as written
    message: str
    line_no: int = 0
