from __future__ import annotations

import logging
from datetime import datetime

import pytest

from log_analyzer.core.parser import (
    INVALID_ENTRY,
    INVALID_TIME,
    TIMESTAMP_FORMAT,
    EntryParser,
    LogParseError,
    iter_entries,
    parse_line,
)


def test_parse_line_keeps_level_and_message_verbatim() -> None:
    entry = parse_line("2024-01-01 10:00:00 INFO started ok")
    assert entry.timestamp == datetime(2024, 1, 1, 10, 0, 0)
    assert entry.level == "INFO"
    assert entry.message == "started ok"


def test_message_preserves_internal_spacing() -> None:
    entry = parse_line("2024-01-01 10:00:00 warn  two  spaces ")
    assert entry.level == "warn"
    assert entry.message == " two  spaces "


def test_trailing_newline_is_stripped() -> None:
    entry = EntryParser().parse(7, "2024-01-01 10:00:00 debug done\r\n")
    assert entry.message == "done"
    assert entry.line_no == 7


def test_empty_message_is_allowed() -> None:
    entry = parse_line("2024-01-01 10:00:00 INFO ")
    assert entry.message == ""


@pytest.mark.parametrize(
    "line",
    [
        "",
        "bad line",
        "2024-01-01",
        "2024-01-01 10:00:00 info",
    ],
)
def test_too_few_fields_is_invalid_entry(line: str) -> None:
    with pytest.raises(LogParseError) as exc:
        parse_line(line)
    assert exc.value.reason == INVALID_ENTRY
    assert str(exc.value) == "invalid log entry"


@pytest.mark.parametrize(
    "line",
    [
        "2024-13-01 10:00:00 info bad month",
        "yesterday 10:00:00 info words",
        "2024-01-01 10:00 info no seconds",
        "2024-1-1 10:00:00 info unpadded",
        "2024-01-01T10:00:00 info x y",
    ],
)
def test_bad_timestamp_is_invalid_time(line: str) -> None:
    with pytest.raises(LogParseError) as exc:
        parse_line(line)
    assert exc.value.reason == INVALID_TIME
    assert str(exc.value).startswith("invalid log time")


def test_parse_error_is_value_error() -> None:
    with pytest.raises(ValueError):
        parse_line("bad line")


@pytest.mark.parametrize(
    "line",
    [
        "2024-01-01 10:00:00 INFO a",
        "1999-12-31 23:59:59 error end of an era",
        "2024-02-29 00:00:00 debug leap day",
        "0999-01-01 10:00:00 INFO old",
        "0001-01-01 00:00:00 info first year",
    ],
)
def test_timestamp_round_trips(line: str) -> None:
    entry = parse_line(line)
    assert entry.timestamp.strftime(TIMESTAMP_FORMAT) == line[:19]


def test_iter_entries_skips_and_logs_invalid_lines(caplog: pytest.LogCaptureFixture) -> None:
    lines = [
        "2024-01-01 10:00:00 INFO first",
        "bad line",
        "2024-99-01 10:00:00 INFO bad time",
        "2024-01-01 10:00:02 ERROR last",
    ]
    with caplog.at_level(logging.WARNING, logger="log_analyzer.core.parser"):
        entries = list(iter_entries(lines))

    assert [e.message for e in entries] == ["first", "last"]
    assert [e.line_no for e in entries] == [1, 4]
    messages = [r.getMessage() for r in caplog.records]
    assert any(m.startswith("invalid log entry: ") and "line 2" in m for m in messages)
    assert any(m.startswith("invalid log entry: invalid log time") and "line 3" in m for m in messages)


def test_inner_carriage_return_stays_in_message() -> None:
    entry = parse_line("2024-01-01 10:00:00 INFO a\rb\n")
    assert entry.message == "a\rb"


def test_crlf_line_ending_is_stripped_once() -> None:
    entry = parse_line("2024-01-01 10:00:00 INFO done\r\n")
    assert entry.message == "done"


def test_iter_entries_reports_invalid_lines_to_hook() -> None:
    errors: list[LogParseError] = []
    entries = list(
        iter_entries(
            ["bad line", "2024-01-01 10:00:00 INFO ok", "2024-01-01 25:00:00 INFO late"],
            on_invalid=errors.append,
        )
    )

    assert [e.message for e in entries] == ["ok"]
    assert [(e.reason, e.line_no) for e in errors] == [(INVALID_ENTRY, 1), (INVALID_TIME, 3)]
