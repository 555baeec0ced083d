"""Database package."""

from .db import configure_engine, get_session, init_db
from .models import SessionRecord, SavedRoutine, SavedRoutineItem

__all__ = [
    "configure_engine",
    "get_session",
    "init_db",
    "SessionRecord",
    "SavedRoutine",
    "SavedRoutineItem",
]
