"""Composable exclusion predicates applied between parsing and aggregation."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from .models import LogEntry

FilterPredicate = Callable[[LogEntry], bool]
"""Return True to exclude the entry."""

DEFAULT_LEVELS = frozenset({"info"})


class FilterOutcome(str, Enum):
    """Result of running an entry through the filter chain."""

    INCLUDE = "include"
    EXCLUDE = "exclude"
    CONTINUE = "continue"


@dataclass(frozen=True, slots=True)
class FilterConfig:
    """User-supplied filter settings.

    `legacy_passthrough` evaluates every predicate but never excludes,
    matching older releases where filtering had no effect on the report.
    """

    levels: frozenset[str] = DEFAULT_LEVELS
    start: datetime | None = None
    end: datetime | None = None
    legacy_passthrough: bool = False

    def __post_init__(self) -> None:
        normalized = frozenset(lvl.strip().lower() for lvl in self.levels if lvl.strip())
        if not normalized:
            raise ValueError("at least one level must be configured")
        if self.start is not None and self.end is not None and self.start > self.end:
            raise ValueError("start must be <= end")
        object.__setattr__(self, "levels", normalized)

    @classmethod
    def from_levels(cls, levels: Iterable[str], **kwargs) -> FilterConfig:
        return cls(levels=frozenset(levels), **kwargs)


def level_predicate(levels: frozenset[str]) -> FilterPredicate:
    def _excluded(entry: LogEntry) -> bool:
        return entry.level.lower() not in levels

    return _excluded


def start_predicate(start: datetime) -> FilterPredicate:
    def _excluded(entry: LogEntry) -> bool:
        return entry.timestamp < start

    return _excluded


def end_predicate(end: datetime) -> FilterPredicate:
    def _excluded(entry: LogEntry) -> bool:
        return entry.timestamp > end

    return _excluded


def build_predicates(config: FilterConfig) -> tuple[FilterPredicate, ...]:
    """Return the active predicates for a config (level check always applies)."""
    preds: list[FilterPredicate] = [level_predicate(config.levels)]
    if config.start is not None:
        preds.append(start_predicate(config.start))
    if config.end is not None:
        preds.append(end_predicate(config.end))
    return tuple(preds)


@dataclass(frozen=True, slots=True)
class EntryFilter:
    """Predicate chain combined with OR: any predicate may exclude an entry."""

    predicates: Sequence[FilterPredicate] = field(default_factory=tuple)
    legacy_passthrough: bool = False

    @classmethod
    def from_config(cls, config: FilterConfig) -> EntryFilter:
        return cls(
            predicates=build_predicates(config),
            legacy_passthrough=config.legacy_passthrough,
        )

    @staticmethod
    def _step(pred: FilterPredicate, entry: LogEntry) -> FilterOutcome:
        return FilterOutcome.EXCLUDE if pred(entry) else FilterOutcome.CONTINUE

    def evaluate(self, entry: LogEntry) -> FilterOutcome:
        """Run the chain, stopping at the first exclusion."""
        if self.legacy_passthrough:
            for pred in self.predicates:
                self._step(pred, entry)
            return FilterOutcome.INCLUDE

        for pred in self.predicates:
            if self._step(pred, entry) is FilterOutcome.EXCLUDE:
                return FilterOutcome.EXCLUDE
        return FilterOutcome.INCLUDE

    def excludes(self, entry: LogEntry) -> bool:
        return self.evaluate(entry) is FilterOutcome.EXCLUDE
