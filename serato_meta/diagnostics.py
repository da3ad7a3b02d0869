from __future__ import annotations

import logging
from collections import Counter, deque
from dataclasses import dataclass
from enum import Enum
from threading import Lock
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from .config import DiagnosticsSettings

logger = logging.getLogger(__name__)

DEFAULT_MAX_EVENTS = 256


class MarkerIssue(Enum):
    MISSING_POSITION = "missing_position"
    UNEXPECTED_ENTRY_TYPE = "unexpected_entry_type"


@dataclass(frozen=True, slots=True)
class MarkerDiagnostic:
    section: str
    index: int
    issue: MarkerIssue
    detail: str = ""


class MarkerDiagnostics:
    """Collects malformed marker entries dropped during reconciliation.

    Events are logged, counted per issue and kept in a bounded buffer so upstream data
    quality can be monitored without changing what the queries return.
    """

    def __init__(self, level: int = logging.WARNING, max_events: int = DEFAULT_MAX_EVENTS) -> None:
        self.level = level
        self.counts: Counter[MarkerIssue] = Counter()
        self._events: deque[MarkerDiagnostic] = deque(maxlen=max_events)
        self._lock = Lock()

    @classmethod
    def from_settings(cls, settings: Optional["DiagnosticsSettings"]) -> "MarkerDiagnostics":
        if settings is None:
            return cls()
        return cls(level=settings.level_number(), max_events=settings.max_events)

    def report(self, section: str, index: int, issue: MarkerIssue, detail: str = "") -> None:
        event = MarkerDiagnostic(section=section, index=index, issue=issue, detail=detail)
        with self._lock:
            self.counts[issue] += 1
            self._events.append(event)
        logger.log(self.level, "Malformed %s marker %d (%s)%s", section, index, issue.value, f": {detail}" if detail else "")

    @property
    def events(self) -> list[MarkerDiagnostic]:
        with self._lock:
            return list(self._events)

    @property
    def total(self) -> int:
        with self._lock:
            return sum(self.counts.values())

    def clear(self) -> None:
        with self._lock:
            self.counts.clear()
            self._events.clear()
