"""Plain-text log analyzer: parse, filter and summarize log files."""

from __future__ import annotations

from log_analyzer.core.filters import EntryFilter, FilterConfig, FilterOutcome
from log_analyzer.core.log_service import analyze_file, analyze_file_async
from log_analyzer.core.models import KnownLevel, LogEntry
from log_analyzer.core.parser import LogParseError, parse_line
from log_analyzer.core.report import AnalysisReport, ReportSummary, analyze

__all__ = [
    "AnalysisReport",
    "EntryFilter",
    "FilterConfig",
    "FilterOutcome",
    "KnownLevel",
    "LogEntry",
    "LogParseError",
    "ReportSummary",
    "analyze",
    "analyze_file",
    "analyze_file_async",
    "parse_line",
]
