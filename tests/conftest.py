"""Shared pytest fixtures for Limber tests."""

import os
import sys
import tempfile

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
os.environ.setdefault("LIMBER_HOME", tempfile.mkdtemp(prefix="limber-test-"))

import pytest

from PyQt6.QtWidgets import QApplication

from limber.catalog.stretches import SessionItem, get_stretch
from limber.database.db import configure_engine, init_db
from limber.settings import Preferences
from limber.timer.scheduler import ManualScheduler
from limber.timer.session import SessionController

from helpers import RecordingAnnouncer, SignalCollector


@pytest.fixture(scope="session")
def qapp():
    """A single QApplication instance shared across the entire test run."""
    app = QApplication.instance() or QApplication(sys.argv)
    yield app


@pytest.fixture(autouse=True)
def test_db():
    """Point every test at a fresh in-memory SQLite database."""
    configure_engine("sqlite:///:memory:")
    init_db()
    yield


@pytest.fixture
def clock():
    return ManualScheduler()


@pytest.fixture
def prefs():
    return Preferences()


@pytest.fixture
def announcer():
    return RecordingAnnouncer()


@pytest.fixture
def items():
    """Three stretches: 30 s, 45 s, 60 s."""
    return [
        SessionItem(get_stretch("shoulder-roll"), 30),
        SessionItem(get_stretch("neck-rotation"), 45),
        SessionItem(get_stretch("cat-cow"), 60),
    ]


@pytest.fixture
def make_session(qapp, clock, prefs, announcer):
    """Factory for controllers wired to the virtual clock.

    Returns ``(controller, completions)`` where *completions* collects
    every invocation of the session-complete callback.
    """
    created: list[SessionController] = []

    def factory(session_items, preferences=None):
        completions = SignalCollector()
        controller = SessionController(
            session_items,
            preferences if preferences is not None else (lambda: prefs),
            announcer,
            on_session_complete=completions,
            scheduler=clock,
        )
        created.append(controller)
        return controller, completions

    yield factory
    for controller in created:
        controller.close()
