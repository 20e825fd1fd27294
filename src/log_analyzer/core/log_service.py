"""File-level integration: read a log file and stream it through the pipeline.

Entries are never buffered; each line is parsed, filtered and accumulated
before the next one is read.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterable, AsyncIterator, Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import Path

import aiofiles

from .filters import EntryFilter, FilterConfig
from .models import LogEntry
from .parser import EntryParser, LogParseError, aiter_entries, iter_entries
from .report import AnalysisReport, analyze, analyze_async

logger = logging.getLogger(__name__)

LOG_EXTENSIONS = frozenset({"log", "txt"})
ENCODING = "utf-8"
DECODE_ERRORS = "replace"
# Split on "\n" only; a lone "\r" belongs to the message.
NEWLINE = "\n"


def is_log_file(path: str | Path) -> bool:
    """Everything after the first dot of the file name must be `log` or `txt`.

    `app.log` passes, `app.log.bak` and `app` do not.
    """
    _, sep, ext = Path(path).name.partition(".")
    return bool(sep) and ext in LOG_EXTENSIONS


@dataclass(slots=True)
class AnalysisResult:
    """Report plus bookkeeping about the lines that fed it."""

    report: AnalysisReport = field(default_factory=AnalysisReport)
    parsed_entries: int = 0
    invalid_lines: int = 0

    def _record_invalid(self, _: LogParseError) -> None:
        self.invalid_lines += 1

    def _count(self, entries: Iterable[LogEntry]) -> Iterator[LogEntry]:
        for entry in entries:
            self.parsed_entries += 1
            yield entry

    async def _acount(self, entries: AsyncIterable[LogEntry]) -> AsyncIterator[LogEntry]:
        async for entry in entries:
            self.parsed_entries += 1
            yield entry


def _check_path(log_path: str | Path) -> Path:
    path = Path(log_path)
    if not is_log_file(path):
        raise ValueError(f"{path} is not a log file")
    if not path.is_file():
        raise FileNotFoundError(f"Log file not found: {path}")
    return path


def _finish(path: Path, result: AnalysisResult) -> AnalysisResult:
    logger.debug(
        "Analyzed %s: parsed=%d invalid=%d aggregated=%d",
        path,
        result.parsed_entries,
        result.invalid_lines,
        result.report.total_entries,
    )
    if result.parsed_entries == 0:
        raise ValueError(f"no log entries found in {path}")
    return result


def analyze_lines(
    lines: Iterable[str],
    config: FilterConfig | None = None,
    *,
    parser: EntryParser | None = None,
) -> AnalysisResult:
    """Run raw lines through parse -> filter -> aggregate.

    Unlike the file helpers this does not fail on zero parsed entries.
    """
    result = AnalysisResult()
    entries = iter_entries(lines, parser, on_invalid=result._record_invalid)
    analyze(
        result._count(entries),
        EntryFilter.from_config(config or FilterConfig()),
        report=result.report,
    )
    return result


def analyze_file(
    log_path: str | Path,
    config: FilterConfig | None = None,
    *,
    parser: EntryParser | None = None,
) -> AnalysisResult:
    """Analyze a `.log`/`.txt` file in a single streaming pass."""
    path = _check_path(log_path)
    with path.open(encoding=ENCODING, errors=DECODE_ERRORS, newline=NEWLINE) as f:
        result = analyze_lines(f, config, parser=parser)
    return _finish(path, result)


async def analyze_file_async(
    log_path: str | Path,
    config: FilterConfig | None = None,
    *,
    parser: EntryParser | None = None,
) -> AnalysisResult:
    """Async twin of analyze_file, reading through aiofiles."""
    path = _check_path(log_path)
    result = AnalysisResult()
    async with aiofiles.open(
        path, encoding=ENCODING, errors=DECODE_ERRORS, newline=NEWLINE
    ) as f:
        entries = aiter_entries(f, parser, on_invalid=result._record_invalid)
        await analyze_async(
            result._acount(entries),
            EntryFilter.from_config(config or FilterConfig()),
            report=result.report,
        )
    return _finish(path, result)
