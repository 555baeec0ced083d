"""Shared test helpers for Limber."""

from limber.catalog.stretches import BodyPart, SessionItem, Stretch


class SignalCollector:
    """Utility to capture pyqtSignal emissions (or plain callbacks) into a list."""

    def __init__(self):
        self.items: list = []

    def slot(self, *args):
        self.items.append(args if len(args) > 1 else args[0] if args else None)

    def __call__(self, *args):
        self.slot(*args)

    def __len__(self):
        return len(self.items)

    def __getitem__(self, idx):
        return self.items[idx]

    @property
    def last(self):
        return self.items[-1] if self.items else None

    def clear(self):
        self.items.clear()


class RecordingAnnouncer:
    """Stands in for ``CueAnnouncer`` and records every call as a tuple."""

    def __init__(self, fail: bool = False):
        self.calls: list[tuple] = []
        self.fail = fail

    def _record(self, *call):
        self.calls.append(call)
        if self.fail:
            raise RuntimeError("speech engine exploded")

    def announce_time(self, remaining, use_speech, use_vibration, language):
        self._record("time", remaining, use_speech, use_vibration, language)

    def announce_item_start(self, name, duration, use_speech, use_vibration, language):
        self._record("item_start", name, duration, use_speech, use_vibration, language)

    def announce_item_complete(self, use_speech, use_vibration, language):
        self._record("item_complete", use_speech, use_vibration, language)

    def announce_session_complete(self, use_speech, use_vibration, language):
        self._record("session_complete", use_speech, use_vibration, language)

    def cancel_announcement(self):
        self._record("cancel")

    def of_kind(self, kind: str) -> list[tuple]:
        return [c for c in self.calls if c[0] == kind]

    def clear(self):
        self.calls.clear()


class FakeSpeaker:
    def __init__(self, fail: bool = False):
        self.spoken: list[tuple] = []
        self.stops = 0
        self.fail = fail

    def say(self, text, language):
        if self.fail:
            raise RuntimeError("no TTS engine")
        self.spoken.append((text, language))

    def stop(self):
        self.stops += 1
        if self.fail:
            raise RuntimeError("no TTS engine")


class FakeHaptics:
    def __init__(self):
        self.events: list = []

    def impact(self, style):
        self.events.append(style)

    def notify_success(self):
        self.events.append("success")


def stretch(name: str, seconds: int) -> SessionItem:
    """Ad-hoc item that is not in the catalog."""
    s = Stretch(name.lower(), name, BodyPart.FULL, seconds, "", "")
    return SessionItem(s, seconds)
