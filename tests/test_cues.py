"""Tests for the cue policy and the announcer."""

import pytest

from limber.audio.cues import (
    ANNOUNCE_AT,
    SECOND_PULSE_DELAY,
    CueAnnouncer,
    item_complete_message,
    item_start_message,
    session_complete_message,
    should_announce,
    time_left_message,
    vibration_for,
)
from limber.audio.sounds import HapticStyle
from limber.settings import Language

from helpers import FakeHaptics, FakeSpeaker


@pytest.fixture
def speaker():
    return FakeSpeaker()


@pytest.fixture
def haptics():
    return FakeHaptics()


@pytest.fixture
def cues(speaker, haptics, clock):
    return CueAnnouncer(speaker, haptics, scheduler=clock)


# ═══════════════════════════════════════════════════════════════════════════
#  POLICY
# ═══════════════════════════════════════════════════════════════════════════


class TestSchedule:

    @pytest.mark.parametrize("seconds", sorted(ANNOUNCE_AT))
    def test_announced_values(self, seconds):
        assert should_announce(seconds)

    @pytest.mark.parametrize("seconds", [0, 6, 9, 11, 29, 31, 45, 59, 61, 90, 120])
    def test_silent_values(self, seconds):
        assert not should_announce(seconds)

    @pytest.mark.parametrize("seconds, style", [
        (60, HapticStyle.LIGHT),
        (30, HapticStyle.LIGHT),
        (10, HapticStyle.MEDIUM),
        (5, HapticStyle.MEDIUM),
        (4, HapticStyle.MEDIUM),
        (3, HapticStyle.HEAVY),
        (1, HapticStyle.HEAVY),
    ])
    def test_vibration_tiers(self, seconds, style):
        assert vibration_for(seconds) is style


class TestMessages:

    @pytest.mark.parametrize("seconds, ja, en", [
        (60, "残り1分", "1 minute left"),
        (30, "残り30秒", "30 seconds left"),
        (10, "残り10秒", "10 seconds left"),
        (2, "残り2秒", "2 seconds left"),
        (1, "残り1秒", "1 second left"),
    ])
    def test_time_left(self, seconds, ja, en):
        assert time_left_message(seconds, Language.JA) == ja
        assert time_left_message(seconds, Language.EN) == en

    def test_time_left_plural_minutes(self):
        assert time_left_message(120, Language.EN) == "2 minutes left"
        assert time_left_message(120, Language.JA) == "残り2分"

    def test_language_given_as_string(self):
        assert time_left_message(5, "en") == "5 seconds left"

    def test_item_start(self):
        assert item_start_message("キャット&カウ", 60, Language.JA) == "キャット&カウを60秒間行います"
        assert item_start_message("Cat-Cow", 60, Language.EN) == "Cat-Cow for 60 seconds"

    def test_item_and_session_complete(self):
        assert item_complete_message(Language.JA) == "完了です！"
        assert item_complete_message(Language.EN) == "Complete!"
        assert "Great job" in session_complete_message(Language.EN)
        assert "お疲れ様でした" in session_complete_message(Language.JA)


# ═══════════════════════════════════════════════════════════════════════════
#  ANNOUNCER
# ═══════════════════════════════════════════════════════════════════════════


class TestAnnounceTime:

    def test_off_schedule_value_is_silent(self, cues, speaker, haptics):
        assert cues.announce_time(45, True, True, Language.EN) is False
        assert speaker.spoken == []
        assert haptics.events == []

    def test_ten_seconds(self, cues, speaker, haptics):
        assert cues.announce_time(10, True, True, Language.EN) is True
        assert haptics.events == [HapticStyle.MEDIUM]
        assert speaker.spoken == [("10 seconds left", Language.EN)]

    def test_ten_seconds_japanese(self, cues, speaker):
        cues.announce_time(10, True, False, Language.JA)
        assert speaker.spoken == [("残り10秒", Language.JA)]

    def test_flags_gate_independently(self, cues, speaker, haptics):
        cues.announce_time(3, False, True, Language.EN)
        assert haptics.events == [HapticStyle.HEAVY]
        assert speaker.spoken == []

        haptics.events.clear()
        cues.announce_time(3, True, False, Language.EN)
        assert haptics.events == []
        assert speaker.spoken == [("3 seconds left", Language.EN)]

    def test_both_flags_off(self, cues, speaker, haptics):
        cues.announce_time(1, False, False, Language.JA)
        assert speaker.spoken == []
        assert haptics.events == []


class TestAnnounceItems:

    def test_item_start(self, cues, speaker, haptics):
        cues.announce_item_start("Neck Rotation", 45, True, True, Language.EN)
        assert haptics.events == ["success"]
        assert speaker.spoken == [("Neck Rotation for 45 seconds", Language.EN)]

    def test_item_complete(self, cues, speaker, haptics):
        cues.announce_item_complete(True, True, Language.JA)
        assert haptics.events == ["success"]
        assert speaker.spoken == [("完了です！", Language.JA)]

    def test_session_complete_double_pulse(self, cues, haptics, speaker, clock):
        cues.announce_session_complete(True, True, Language.EN)
        assert haptics.events == ["success"]
        assert len(speaker.spoken) == 1

        clock.advance(SECOND_PULSE_DELAY)
        assert haptics.events == ["success", "success"]

    def test_session_complete_without_vibration_schedules_nothing(self, cues, clock):
        cues.announce_session_complete(True, False, Language.EN)
        assert clock.pending == 0


class TestFailureIsolation:

    def test_speaker_errors_are_logged_not_raised(self, haptics, clock, caplog):
        cues = CueAnnouncer(FakeSpeaker(fail=True), haptics, scheduler=clock)
        cues.announce_time(5, True, True, Language.EN)
        cues.announce_item_start("A", 30, True, True, Language.EN)
        cues.cancel_announcement()
        assert haptics.events == [HapticStyle.MEDIUM, "success"]
        assert "speech cue failed" in caplog.text

    def test_haptic_errors_do_not_block_speech(self, speaker, clock):
        class BrokenHaptics:
            def impact(self, style):
                raise OSError("audio device gone")

            def notify_success(self):
                raise OSError("audio device gone")

        cues = CueAnnouncer(speaker, BrokenHaptics(), scheduler=clock)
        cues.announce_time(30, True, True, Language.EN)
        cues.announce_session_complete(True, True, Language.EN)
        clock.advance(1)
        assert [text for text, _ in speaker.spoken] == [
            "30 seconds left", "Stretch session complete! Great job!",
        ]

    def test_cancel_is_idempotent(self, cues, speaker):
        cues.cancel_announcement()
        cues.cancel_announcement()
        assert speaker.stops == 2
