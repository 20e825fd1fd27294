"""Streaming aggregation of log entries into a summary report."""

from __future__ import annotations

import math
import re
from collections import Counter
from collections.abc import AsyncIterable, Iterable
from dataclasses import dataclass, field

from pydantic import BaseModel, Field

from .filters import EntryFilter
from .models import KnownLevel, LogEntry

RESPONSE_TIME_SUFFIX = " ms"
_NUMBER_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)

# Render order of the per-level lines.
_RENDER_ORDER = (KnownLevel.INFO, KnownLevel.DEBUG, KnownLevel.WARN, KnownLevel.ERROR)


class ReportSummary(BaseModel):
    """Serializable snapshot of a finished report."""

    total_entries: int = Field(ge=0)
    levels: dict[str, int] = Field(description="Counts for info/debug/warn/error.")
    average_response_time_ms: float | None = Field(
        default=None, description="Mean of collected samples; None without samples."
    )
    response_time_samples: int = Field(default=0, ge=0)
    most_frequent_message: str | None = None


def _response_time(message: str) -> float | None:
    """Extract `<n>` from messages ending in `<n> ms`."""
    if not message.endswith(RESPONSE_TIME_SUFFIX):
        return None
    token = message[: -len(RESPONSE_TIME_SUFFIX)].rsplit(" ", 1)[-1]
    # float() alone would also take "1_000", padded or non-ASCII digits.
    if not _NUMBER_RE.fullmatch(token):
        return None
    value = float(token)
    return value if math.isfinite(value) else None


@dataclass(slots=True)
class AnalysisReport:
    """Running accumulator fed one entry at a time."""

    total_entries: int = 0
    level_counts: dict[KnownLevel, int] = field(
        default_factory=lambda: {lvl: 0 for lvl in KnownLevel}
    )
    response_times: list[float] = field(default_factory=list)  # ms
    message_frequency: Counter[str] = field(default_factory=Counter)

    def add(self, entry: LogEntry) -> None:
        self.total_entries += 1

        known = KnownLevel.lookup(entry.level)
        if known is not None:
            self.level_counts[known] += 1

        rt = _response_time(entry.message)
        if rt is not None:
            self.response_times.append(rt)

        self.message_frequency[entry.message] += 1

    def count(self, level: KnownLevel | str) -> int:
        known = level if isinstance(level, KnownLevel) else KnownLevel.lookup(level)
        return self.level_counts[known] if known is not None else 0

    @property
    def average_response_time(self) -> float | None:
        if not self.response_times:
            return None
        return sum(self.response_times) / len(self.response_times)

    @property
    def most_frequent_message(self) -> str | None:
        """Highest-count message; ties go to the message seen first."""
        # Counter.most_common sorts stably, so insertion order breaks ties.
        top = self.message_frequency.most_common(1)
        return top[0][0] if top else None

    def summary(self) -> ReportSummary:
        return ReportSummary(
            total_entries=self.total_entries,
            levels={lvl.value: self.level_counts[lvl] for lvl in _RENDER_ORDER},
            average_response_time_ms=self.average_response_time,
            response_time_samples=len(self.response_times),
            most_frequent_message=self.most_frequent_message,
        )

    def render(self) -> str:
        """Render the human-readable text report."""
        lines = [f"Total Log Entries: {self.total_entries}"]
        lines.extend(f"{lvl.name}: {self.level_counts[lvl]}" for lvl in _RENDER_ORDER)
        avg = self.average_response_time
        if avg is not None:
            lines.append(f"Average Response Time: {avg:.2f} ms")
        msg = self.most_frequent_message
        if msg is not None:
            lines.append(f"Most frequent message: '{msg}'")
        return "\n".join(lines) + "\n"


def _offer(report: AnalysisReport, entry: LogEntry, entry_filter: EntryFilter | None) -> None:
    if entry_filter is not None and entry_filter.excludes(entry):
        return
    report.add(entry)


def analyze(
    entries: Iterable[LogEntry],
    entry_filter: EntryFilter | None = None,
    *,
    report: AnalysisReport | None = None,
) -> AnalysisReport:
    """Fold entries into a report, skipping those the filter excludes."""
    report = report if report is not None else AnalysisReport()
    for entry in entries:
        _offer(report, entry, entry_filter)
    return report


async def analyze_async(
    entries: AsyncIterable[LogEntry],
    entry_filter: EntryFilter | None = None,
    *,
    report: AnalysisReport | None = None,
) -> AnalysisReport:
    """Async twin of analyze."""
    report = report if report is not None else AnalysisReport()
    async for entry in entries:
        _offer(report, entry, entry_filter)
    return report
