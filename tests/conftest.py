"""Shared fakes for pointer controller tests."""

import pytest

from config import MouseSettings
from mouse_controller import MouseController
from mouse_errors import CursorIOError


class FakeCursorBackend:
    """Records every call and answers with scripted position and bounds."""

    def __init__(self, position=(100, 100), bounds=(1920, 1080)):
        self.position = position
        self.bounds = bounds
        self.calls = []
        self.pressed = set()
        self.fail_set_position = False
        self.bounds_queries = 0
        self.closed = False

    def get_cursor_position(self):
        return self.position

    def set_cursor_position(self, x, y):
        if self.fail_set_position:
            raise CursorIOError("refused")
        self.calls.append(("set", x, y))
        self.position = (x, y)

    def get_screen_bounds(self):
        self.bounds_queries += 1
        return self.bounds

    def inject_button_event(self, button, action):
        self.calls.append(("button", button, action))

    def inject_wheel_event(self, delta, horizontal=False):
        self.calls.append(("wheel", delta, horizontal))

    def get_async_button_state(self, button):
        return button in self.pressed

    def close(self):
        self.closed = True

    def moves(self):
        return [(c[1], c[2]) for c in self.calls if c[0] == "set"]

    def of_kind(self, kind):
        return [c for c in self.calls if c[0] == kind]


class FakeClock:
    """Monotonic clock that only advances when sleep() is called."""

    def __init__(self):
        self.now = 0.0
        self.sleeps = []

    def __call__(self):
        return self.now

    def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def backend():
    return FakeCursorBackend()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def settings():
    return MouseSettings(click_pause=0.05, multi_click_pause=0.02, poll_interval=0.01, log_level="DEBUG")


@pytest.fixture
def mouse(backend, settings, clock):
    return MouseController(backend=backend, settings=settings, clock=clock, sleep=clock.sleep)

