"""User-saved routines, stored by catalog stretch id."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Sequence

from .catalog.presets import build_items
from .catalog.stretches import SessionItem
from .database.db import get_session
from .database.models import SavedRoutine, SavedRoutineItem


@dataclass(frozen=True)
class UserRoutine:
    id: int
    name: str
    created_at: datetime
    items: tuple[SessionItem, ...]


def save_routine(name: str, items: Sequence[SessionItem]) -> int:
    """Persist a routine and return its id."""
    name = name.strip()
    if not name:
        raise ValueError("routine name must not be empty")
    if not items:
        raise ValueError("routine must contain at least one stretch")

    with get_session() as db:
        routine = SavedRoutine(name=name)
        routine.items = [
            SavedRoutineItem(
                position=position,
                stretch_id=item.stretch.id,
                duration_seconds=item.duration,
            )
            for position, item in enumerate(items)
        ]
        db.add(routine)
        db.flush()
        return routine.id


def load_routines() -> list[UserRoutine]:
    """Oldest first.  Stretches no longer in the catalog are dropped."""
    with get_session() as db:
        rows = db.query(SavedRoutine).order_by(SavedRoutine.created_at, SavedRoutine.id).all()
        return [
            UserRoutine(
                id=row.id,
                name=row.name,
                created_at=row.created_at,
                items=build_items([(i.stretch_id, i.duration_seconds) for i in row.items]),
            )
            for row in rows
        ]


def delete_routine(routine_id: int) -> bool:
    with get_session() as db:
        routine = db.get(SavedRoutine, routine_id)
        if routine is None:
            return False
        db.delete(routine)
        return True
