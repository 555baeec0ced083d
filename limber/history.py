"""Completed-session history and summary stats.

Streaks
-------
Streaks count distinct calendar days with at least one session.

- ``longest_streak`` is the longest run of consecutive days.
- ``current_streak`` is the run ending today, or ending yesterday when
  nothing has been done yet today (the streak is still alive).  Any
  older run gives 0.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterable, Sequence

from .catalog.stretches import SessionItem
from .database.db import get_session
from .database.models import SessionRecord


@dataclass(frozen=True)
class HistoryStats:
    total_sessions: int = 0
    total_duration: int = 0        # seconds
    average_duration: int = 0      # seconds, rounded
    total_stretches: int = 0
    current_streak: int = 0        # days
    longest_streak: int = 0        # days


# ── persistence ─────────────────────────────────────────────────────────


def record_session(
    items: Sequence[SessionItem],
    routine_name: str | None = None,
    completed_at: datetime | None = None,
) -> SessionRecord:
    """Store a completed session built from *items*."""
    completed_at = completed_at or datetime.now()
    with get_session() as db:
        record = SessionRecord(
            day=completed_at.date(),
            duration_seconds=sum(item.duration for item in items),
            stretch_count=len(items),
            routine_name=routine_name,
            completed_at=completed_at,
        )
        db.add(record)
        db.flush()
    return record


def load_history(limit: int | None = None) -> list[SessionRecord]:
    """Newest first."""
    with get_session() as db:
        query = db.query(SessionRecord).order_by(
            SessionRecord.completed_at.desc(), SessionRecord.id.desc(),
        )
        if limit is not None:
            query = query.limit(limit)
        return query.all()


def delete_record(record_id: int) -> bool:
    with get_session() as db:
        record = db.get(SessionRecord, record_id)
        if record is None:
            return False
        db.delete(record)
        return True


def clear_history() -> int:
    with get_session() as db:
        return db.query(SessionRecord).delete()


# ── stats ───────────────────────────────────────────────────────────────


def _runs(days: list[date]) -> list[tuple[date, int]]:
    """Consecutive-day runs over sorted unique *days* as ``(last_day, length)``."""
    runs: list[tuple[date, int]] = []
    for day in days:
        if runs and day - runs[-1][0] == timedelta(days=1):
            runs[-1] = (day, runs[-1][1] + 1)
        else:
            runs.append((day, 1))
    return runs


def calculate_stats(records: Iterable[SessionRecord], today: date | None = None) -> HistoryStats:
    records = list(records)
    if not records:
        return HistoryStats()

    today = today or date.today()
    total_sessions = len(records)
    total_duration = sum(r.duration_seconds for r in records)
    total_stretches = sum(r.stretch_count for r in records)

    runs = _runs(sorted({r.day for r in records}))
    longest = max(length for _, length in runs)
    # Future-dated days (clock changes) are ignored for the current streak.
    past_runs = _runs(sorted({r.day for r in records if r.day <= today}))
    current = 0
    if past_runs:
        last_day, last_length = past_runs[-1]
        if today - last_day <= timedelta(days=1):
            current = last_length

    return HistoryStats(
        total_sessions=total_sessions,
        total_duration=total_duration,
        average_duration=round(total_duration / total_sessions),
        total_stretches=total_stretches,
        current_streak=current,
        longest_streak=longest,
    )


def format_duration_display(seconds: int) -> str:
    """``95`` → ``1分35秒``, ``120`` → ``2分``, ``40`` → ``40秒``."""
    mins, secs = divmod(max(0, seconds), 60)
    if mins > 0:
        return f"{mins}分{secs}秒" if secs > 0 else f"{mins}分"
    return f"{secs}秒"
