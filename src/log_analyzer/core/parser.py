"""Line parser for the `<date> <time> <level> <message...>` grammar."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterable, AsyncIterator, Callable, Iterable, Iterator
from dataclasses import dataclass
from datetime import datetime

from .models import LogEntry

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
INVALID_ENTRY = "invalid log entry"
INVALID_TIME = "invalid log time"

InvalidLineHook = Callable[["LogParseError"], None]


class LogParseError(ValueError):
    """Raised when a line does not follow the log grammar."""

    def __init__(self, reason: str, *, line_no: int = 0, detail: str | None = None) -> None:
        self.reason = reason
        self.line_no = line_no
        self.detail = detail
        super().__init__(f"{reason}: {detail}" if detail else reason)


def _strip_eol(line: str) -> str:
    """Drop one trailing `\\n` and then one `\\r`; inner `\\r` is message text."""
    return line.removesuffix("\n").removesuffix("\r")


@dataclass(frozen=True, slots=True)
class EntryParser:
    """Parse `<date> <time> <level> <message...>` lines.

    Fields are split on the first three single spaces, so the message keeps
    any spacing of its own.
    """

    timestamp_format: str = TIMESTAMP_FORMAT

    def _render_ts(self, ts: datetime) -> str:
        # strftime("%Y") is not zero-padded below year 1000 on glibc.
        if self.timestamp_format == TIMESTAMP_FORMAT:
            return ts.isoformat(sep=" ")
        return ts.strftime(self.timestamp_format)

    def _parse_ts(self, ts_str: str, line_no: int) -> datetime:
        try:
            ts = datetime.strptime(ts_str, self.timestamp_format)
        except ValueError as e:
            raise LogParseError(INVALID_TIME, line_no=line_no, detail=str(e)) from e
        # strptime tolerates unpadded fields; the layout is fixed-width.
        if self._render_ts(ts) != ts_str:
            raise LogParseError(
                INVALID_TIME,
                line_no=line_no,
                detail=f"{ts_str!r} does not match format {self.timestamp_format!r}",
            )
        return ts

    def parse(self, line_no: int, line: str) -> LogEntry:
        """Parse one raw line into a LogEntry or raise LogParseError."""
        fields = _strip_eol(line).split(" ", 3)
        if len(fields) < 4:
            raise LogParseError(INVALID_ENTRY, line_no=line_no)

        log_date, log_time, level, msg = fields
        ts = self._parse_ts(f"{log_date} {log_time}", line_no)
        return LogEntry(timestamp=ts, level=level, message=msg, line_no=line_no)


_DEFAULT_PARSER = EntryParser()


def parse_line(line: str, *, line_no: int = 0) -> LogEntry:
    """Parse a single line with the default parser."""
    return _DEFAULT_PARSER.parse(line_no, line)


def _parse_or_skip(
    parser: EntryParser,
    line_no: int,
    line: str,
    on_invalid: InvalidLineHook | None,
) -> LogEntry | None:
    try:
        return parser.parse(line_no, line)
    except LogParseError as e:
        logger.warning("invalid log entry: %s (line %d)", e, line_no)
        if on_invalid is not None:
            on_invalid(e)
        return None


def iter_entries(
    lines: Iterable[str],
    parser: EntryParser | None = None,
    *,
    on_invalid: InvalidLineHook | None = None,
) -> Iterator[LogEntry]:
    """Yield entries for valid lines; invalid lines are logged and skipped."""
    parser = parser or _DEFAULT_PARSER
    for line_no, line in enumerate(lines, start=1):
        entry = _parse_or_skip(parser, line_no, line, on_invalid)
        if entry is not None:
            yield entry


async def aiter_entries(
    lines: AsyncIterable[str],
    parser: EntryParser | None = None,
    *,
    on_invalid: InvalidLineHook | None = None,
) -> AsyncIterator[LogEntry]:
    """Async twin of iter_entries for aiofiles line iterators."""
    parser = parser or _DEFAULT_PARSER
    line_no = 0
    async for line in lines:
        line_no += 1
        entry = _parse_or_skip(parser, line_no, line, on_invalid)
        if entry is not None:
            yield entry
