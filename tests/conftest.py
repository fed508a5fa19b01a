import os
import pathlib
import sys

import pytest

# Ensure project root is in sys.path
repo_root = pathlib.Path(__file__).parent.parent
sys.path.insert(0, str(repo_root))

# Widget tests run without a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6.QtWidgets import QApplication  # noqa: E402

from src.core.goals import Goal  # noqa: E402
from src.services.goal_store import GoalStore  # noqa: E402


@pytest.fixture(scope="session")
def qapp():
    """
    Ensure QApplication is instantiated only once.
    """
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app


class FakeClock:
    """
    Controllable replacement for ``now_ms``.
    """

    def __init__(self, now: int = 1_700_000_000_000):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


@pytest.fixture
def clock():
    """Provides a fake clock starting at a fixed instant."""
    return FakeClock()


@pytest.fixture
def store(clock):
    """
    Provides an in-memory goal store driven by the fake clock.
    """
    return GoalStore(clock=clock)


@pytest.fixture
def populated_store(store, clock):
    """
    Store with one completed and one open goal.
    """
    store.add(Goal("Read a book", clock.now - 10_000, clock.now - 2_000))
    store.add(Goal("Learn Rust", clock.now - 5_000))
    return store


class MockQSettings:
    """
    In-memory mock for QSettings to prevent tests from overwriting real config.
    """

    _storage = {}  # Class-level storage to persist across instances if needed

    def __init__(self, *args, **kwargs):
        self.organization = args[0] if len(args) > 0 else "MockOrg"
        self.application = args[1] if len(args) > 1 else "MockApp"

    def setValue(self, key, value):
        full_key = f"{self.organization}/{self.application}/{key}"
        self._storage[full_key] = value

    def value(self, key, default=None, type=None):
        full_key = f"{self.organization}/{self.application}/{key}"
        return self._storage.get(full_key, default)

    def contains(self, key):
        full_key = f"{self.organization}/{self.application}/{key}"
        return full_key in self._storage

    def clear(self):
        self._storage.clear()

    def sync(self):
        pass


@pytest.fixture(autouse=True)
def mock_qsettings(monkeypatch):
    """
    Patches QSettings where the main window uses it.
    Protects user's real settings from being overwritten by tests.
    """
    MockQSettings._storage = {}
    monkeypatch.setattr("src.app.main_window.QSettings", MockQSettings)
    yield MockQSettings
