"""Built-in routines: ordered stretch lists with per-routine durations."""

from __future__ import annotations

from dataclasses import dataclass

from .stretches import SessionItem, get_stretch


@dataclass(frozen=True)
class PresetRoutine:
    id: str
    name: str
    icon: str
    description: str
    items: tuple[SessionItem, ...]


def build_items(entries: list[tuple[str, int | None]]) -> tuple[SessionItem, ...]:
    """Resolve ``(stretch_id, duration)`` pairs, dropping unknown ids.

    A ``None`` duration falls back to the stretch's default.
    """
    items: list[SessionItem] = []
    for stretch_id, duration in entries:
        stretch = get_stretch(stretch_id)
        if stretch is not None:
            items.append(SessionItem.of(stretch, duration))
    return tuple(items)


PRESET_ROUTINES: tuple[PresetRoutine, ...] = (
    PresetRoutine(
        "morning", "朝ストレッチ", "🌅", "目覚めをスッキリさせる全身ストレッチ",
        build_items([
            ("full-body-stretch", 30),
            ("neck-tilt", 30),
            ("shoulder-roll", 30),
            ("side-stretch", 45),
            ("cat-cow", 60),
            ("hamstring-stretch", 45),
        ]),
    ),
    PresetRoutine(
        "bedtime", "就寝前ストレッチ", "🌙", "リラックスして質の良い睡眠へ",
        build_items([
            ("neck-rotation", 45),
            ("shoulder-stretch", 45),
            ("child-pose", 60),
            ("cat-cow", 60),
            ("hamstring-stretch", 60),
            ("full-body-stretch", 30),
        ]),
    ),
    PresetRoutine(
        "deskwork", "デスクワーク休憩", "💻", "座りっぱなしの疲れを解消",
        build_items([
            ("neck-tilt", 30),
            ("neck-rotation", 30),
            ("shoulder-roll", 30),
            ("shoulder-stretch", 30),
            ("wrist-stretch", 30),
            ("waist-twist", 45),
            ("side-stretch", 30),
        ]),
    ),
    PresetRoutine(
        "quick-refresh", "クイックリフレッシュ", "⚡", "3分で気分転換",
        build_items([
            ("full-body-stretch", 20),
            ("neck-tilt", 20),
            ("shoulder-roll", 20),
            ("waist-twist", 30),
            ("side-stretch", 30),
        ]),
    ),
    PresetRoutine(
        "lower-body", "下半身ストレッチ", "🦵", "脚の疲れをほぐす",
        build_items([
            ("hamstring-stretch", 60),
            ("quad-stretch", 60),
            ("calf-stretch", 45),
            ("waist-twist", 45),
        ]),
    ),
    PresetRoutine(
        "upper-body", "上半身ストレッチ", "💪", "肩こり・首こり解消",
        build_items([
            ("neck-tilt", 30),
            ("neck-rotation", 45),
            ("shoulder-roll", 30),
            ("shoulder-stretch", 45),
            ("tricep-stretch", 30),
            ("wrist-stretch", 30),
            ("cobra-stretch", 45),
        ]),
    ),
)


def get_preset_routine(routine_id: str) -> PresetRoutine | None:
    for routine in PRESET_ROUTINES:
        if routine.id == routine_id:
            return routine
    return None


def routine_duration(items) -> int:
    """Total seconds for a sequence of session items."""
    return sum(item.duration for item in items)


def format_routine_duration(seconds: int) -> str:
    if seconds < 60:
        return f"{seconds}秒"
    return f"約{seconds // 60}分"
