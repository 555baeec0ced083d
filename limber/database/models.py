"""SQLAlchemy ORM models for Limber."""

from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, Date, ForeignKey
from sqlalchemy.orm import DeclarativeBase, relationship


class Base(DeclarativeBase):
    pass


class SessionRecord(Base):
    """One completed stretch session."""

    __tablename__ = "session_records"

    id = Column(Integer, primary_key=True, autoincrement=True)
    day = Column(Date, nullable=False, index=True)          # local calendar day
    duration_seconds = Column(Integer, nullable=False, default=0)
    stretch_count = Column(Integer, nullable=False, default=0)
    routine_name = Column(String(120), nullable=True)
    completed_at = Column(DateTime, nullable=False, default=datetime.now)

    def __repr__(self) -> str:
        return (
            f"<SessionRecord id={self.id} day={self.day} "
            f"stretches={self.stretch_count} {self.duration_seconds}s>"
        )


class SavedRoutine(Base):
    """A user-built routine."""

    __tablename__ = "saved_routines"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(120), nullable=False)
    created_at = Column(DateTime, nullable=False, default=datetime.now)

    items = relationship(
        "SavedRoutineItem",
        order_by="SavedRoutineItem.position",
        cascade="all, delete-orphan",
        back_populates="routine",
    )

    def __repr__(self) -> str:
        return f"<SavedRoutine id={self.id} name={self.name!r}>"


class SavedRoutineItem(Base):
    """One stretch within a saved routine, by catalog id."""

    __tablename__ = "saved_routine_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    routine_id = Column(Integer, ForeignKey("saved_routines.id"), nullable=False)
    position = Column(Integer, nullable=False)
    stretch_id = Column(String(64), nullable=False)
    duration_seconds = Column(Integer, nullable=False)

    routine = relationship("SavedRoutine", back_populates="items")
