"""Built-in stretch catalog.

Catalog
-------
15 stretches across 7 body parts.  Names and descriptions are Japanese,
matching the default speech language; the stretch name is spoken as-is
in either language.

Session items
-------------
``SessionItem`` pairs a catalog stretch with the duration chosen for one
session.  Items are immutable once built.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class BodyPart(Enum):
    SHOULDER = "shoulder"
    NECK = "neck"
    WAIST = "waist"
    LEGS = "legs"
    ARMS = "arms"
    BACK = "back"
    FULL = "full"


BODY_PART_LABELS: dict[BodyPart, str] = {
    BodyPart.SHOULDER: "肩",
    BodyPart.NECK: "首",
    BodyPart.WAIST: "腰",
    BodyPart.LEGS: "脚",
    BodyPart.ARMS: "腕",
    BodyPart.BACK: "背中",
    BodyPart.FULL: "全身",
}

DURATION_OPTIONS = (30, 45, 60, 90, 120, 180)  # seconds


# ── catalog dataclasses ──────────────────────────────────────────────────


@dataclass(frozen=True)
class Stretch:
    id: str
    name: str
    body_part: BodyPart
    default_duration: int   # seconds
    description: str
    icon: str


@dataclass(frozen=True)
class SessionItem:
    stretch: Stretch
    duration: int   # seconds, may differ from stretch.default_duration

    def __post_init__(self) -> None:
        if isinstance(self.duration, bool) or not isinstance(self.duration, int) or self.duration <= 0:
            raise ValueError(f"duration must be a positive integer, got {self.duration!r}")

    @classmethod
    def of(cls, stretch: Stretch, duration: int | None = None) -> SessionItem:
        return cls(stretch, stretch.default_duration if duration is None else duration)


# ── catalog ──────────────────────────────────────────────────────────────

PRESET_STRETCHES: tuple[Stretch, ...] = (
    Stretch("shoulder-roll", "肩回し", BodyPart.SHOULDER, 30,
            "両肩を大きく前後に回します", "🔄"),
    Stretch("shoulder-stretch", "肩のストレッチ", BodyPart.SHOULDER, 45,
            "片腕を胸の前で引き寄せます", "💪"),
    Stretch("neck-tilt", "首の傾け", BodyPart.NECK, 30,
            "首をゆっくり左右に傾けます", "🙆"),
    Stretch("neck-rotation", "首回し", BodyPart.NECK, 45,
            "首をゆっくり回転させます", "🔃"),
    Stretch("waist-twist", "腰ひねり", BodyPart.WAIST, 60,
            "座ったまま上半身をひねります", "🌀"),
    Stretch("cat-cow", "キャットカウ", BodyPart.WAIST, 60,
            "四つん這いで背中を丸めたり反らしたり", "🐱"),
    Stretch("hamstring-stretch", "太もも裏ストレッチ", BodyPart.LEGS, 45,
            "足を伸ばして前屈します", "🦵"),
    Stretch("quad-stretch", "太もも前ストレッチ", BodyPart.LEGS, 45,
            "片足を後ろに曲げて引き上げます", "🏃"),
    Stretch("calf-stretch", "ふくらはぎストレッチ", BodyPart.LEGS, 30,
            "壁に手をついてふくらはぎを伸ばします", "🧘"),
    Stretch("wrist-stretch", "手首ストレッチ", BodyPart.ARMS, 30,
            "手首を前後に曲げ伸ばします", "🤲"),
    Stretch("tricep-stretch", "上腕三頭筋ストレッチ", BodyPart.ARMS, 30,
            "腕を頭の後ろで曲げます", "💪"),
    Stretch("child-pose", "チャイルドポーズ", BodyPart.BACK, 60,
            "正座から前に伸びます", "🙇"),
    Stretch("cobra-stretch", "コブラストレッチ", BodyPart.BACK, 45,
            "うつ伏せから上半身を起こします", "🐍"),
    Stretch("full-body-stretch", "全身伸び", BodyPart.FULL, 30,
            "両手を上に伸ばして全身を伸ばします", "🙌"),
    Stretch("side-stretch", "体側ストレッチ", BodyPart.FULL, 45,
            "両手を上げて左右に体を倒します", "🌊"),
)

_BY_ID: dict[str, Stretch] = {s.id: s for s in PRESET_STRETCHES}


def get_stretch(stretch_id: str) -> Stretch | None:
    return _BY_ID.get(stretch_id)


def stretches_by_body_part(body_part: BodyPart) -> list[Stretch]:
    return [s for s in PRESET_STRETCHES if s.body_part == body_part]


def format_duration(seconds: int) -> str:
    """``90`` → ``1分30秒``, ``60`` → ``1分``, ``45`` → ``45秒``."""
    mins, secs = divmod(seconds, 60)
    if mins == 0:
        return f"{secs}秒"
    if secs == 0:
        return f"{mins}分"
    return f"{mins}分{secs}秒"
