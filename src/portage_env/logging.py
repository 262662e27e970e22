"""Audit log for mapping loads and conflict checks.

Every interesting event — a backing store loaded, a malformed line
skipped, a conflicting atom rejected — is recorded as a structured
entry.  The command-line tool prints the entries with ``--verbose``;
tests inspect them directly.

- **LogLevel** — ordered severities, so ``>=`` filtering works.
- **LogEntry** — one immutable record (level, message, source).
- **Logger** — an append-only list of entries with simple querying.
"""

from dataclasses import dataclass
from enum import IntEnum


class LogLevel(IntEnum):
    """Severity of a log entry (DEBUG < INFO < WARNING < ERROR)."""

    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3


@dataclass(frozen=True)
class LogEntry:
    """A single audit record.

    Attributes:
        level: How serious the event is.
        message: Human-readable description.
        source: Where it happened, usually a backing store path.

    """

    level: LogLevel
    message: str
    source: str

    def __str__(self) -> str:
        """Format as ``[LEVEL] source: message``."""
        return f"[{self.level.name}] {self.source}: {self.message}"


class Logger:
    """Append-only collection of ``LogEntry`` records."""

    def __init__(self) -> None:
        """Create an empty logger."""
        self._entries: list[LogEntry] = []

    @property
    def entries(self) -> list[LogEntry]:
        """Return a copy of all entries in the order they were logged."""
        return list(self._entries)

    def log(self, level: LogLevel, message: str, *, source: str) -> None:
        """Append an entry."""
        self._entries.append(LogEntry(level=level, message=message, source=source))

    def filter(
        self,
        *,
        min_level: LogLevel | None = None,
        source: str | None = None,
    ) -> list[LogEntry]:
        """Return entries at or above *min_level* and/or from *source*.

        Args:
            min_level: If set, drop entries below this severity.
            source: If set, keep only entries from this source.

        Returns:
            The matching entries, oldest first.

        """
        return [
            entry
            for entry in self._entries
            if (min_level is None or entry.level >= min_level)
            and (source is None or entry.source == source)
        ]

    def __len__(self) -> int:
        """Return the number of entries."""
        return len(self._entries)
