"""Service keeping the results of completed quiz sessions."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from threading import Lock
from typing import Protocol

from quiz_arena.core.models import Difficulty
from quiz_arena.core.scoring import QuizSummary


class HistorySink(Protocol):
    """Receives the summary of every finished session exactly once."""

    def record(self, summary: QuizSummary) -> None: ...


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True, slots=True)
class HistoryEntry:
    """Immutable snapshot returned to consumers."""

    summary: QuizSummary
    recorded_at: datetime = field(default_factory=_utcnow)

    def to_payload(self) -> dict[str, object]:
        payload = self.summary.to_payload()
        payload["recorded_at"] = self.recorded_at.isoformat()
        return payload


class ResultHistory:
    """In-memory history shared by every client of the application."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._entries: list[HistoryEntry] = []

    def record(self, summary: QuizSummary) -> None:
        with self._lock:
            self._entries.append(HistoryEntry(summary=summary))

    def entries(self) -> list[HistoryEntry]:
        """Return all entries, most recent first."""
        with self._lock:
            return list(reversed(self._entries))

    def best_for(self, difficulty: Difficulty | str) -> HistoryEntry | None:
        """Return the highest-scoring entry for a tier, earliest first on ties."""
        tier = Difficulty(difficulty)
        with self._lock:
            candidates = [entry for entry in self._entries if entry.summary.difficulty == tier]
        if not candidates:
            return None
        return max(candidates, key=lambda e: (e.summary.percentage, e.summary.points))

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
