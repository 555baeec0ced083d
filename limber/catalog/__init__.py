"""Static stretch and routine catalogs."""

from .stretches import (
    BodyPart,
    BODY_PART_LABELS,
    DURATION_OPTIONS,
    PRESET_STRETCHES,
    SessionItem,
    Stretch,
    format_duration,
    get_stretch,
    stretches_by_body_part,
)
from .presets import (
    PRESET_ROUTINES,
    PresetRoutine,
    build_items,
    format_routine_duration,
    get_preset_routine,
    routine_duration,
)

__all__ = [
    "BodyPart",
    "BODY_PART_LABELS",
    "DURATION_OPTIONS",
    "PRESET_STRETCHES",
    "SessionItem",
    "Stretch",
    "format_duration",
    "get_stretch",
    "stretches_by_body_part",
    "PRESET_ROUTINES",
    "PresetRoutine",
    "build_items",
    "format_routine_duration",
    "get_preset_routine",
    "routine_duration",
]
