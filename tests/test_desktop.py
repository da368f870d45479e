import sys
from types import SimpleNamespace

import pytest

from pointertrack.capture import TrackingController
from pointertrack.capture.desktop import ModifierState, PynputInputSource
from pointertrack.config import TrackerConfig
from pointertrack.errors import RegistrationError
from pointertrack.models import EventKind


def key(name):
    return SimpleNamespace(name=name)


def test_modifier_state():
    mods = ModifierState()
    mods.press(key("ctrl_l"))
    mods.press(key("shift"))
    mods.press(SimpleNamespace(char="a"))  # plain key, ignored
    assert mods.is_held("ctrl") and mods.is_held("shift")
    assert not mods.is_held("alt")
    mods.press(key("cmd_r"))
    assert mods.is_held("meta")
    mods.release(key("ctrl_l"))
    assert not mods.is_held("ctrl")


def test_modifier_pair_released_one_side():
    mods = ModifierState()
    mods.press(key("alt_l"))
    mods.press(key("alt_r"))
    mods.release(key("alt_l"))
    assert mods.is_held("alt")


@pytest.fixture
def desktop(monkeypatch):
    src = PynputInputSource()
    # keep pynput backends out of the test run
    monkeypatch.setattr(src, "_start_listeners", lambda: None)
    return src


def test_desktop_source_feeds_tracker(desktop, clock):
    tracker = TrackingController(TrackerConfig(throttle_interval=0), desktop, clock=clock)
    tracker.start()
    desktop.modifiers.press(key("shift"))
    desktop._on_move(10, 20)
    desktop._on_click(10, 20, SimpleNamespace(name="left"), True)   # press: ignored
    desktop._on_click(10, 20, SimpleNamespace(name="left"), False)  # release: click
    events = tracker.get_data().events
    assert [e.kind for e in events] == [EventKind.MOVE, EventKind.CLICK]
    assert events[0].target == "screen"
    assert events[0].screen_x == 10
    assert events[1].button == "left"
    assert events[1].modifiers.shift


def test_desktop_source_stops_listeners_when_empty(desktop):
    stopped = []
    desktop._mouse_listener = SimpleNamespace(stop=lambda: stopped.append("mouse"))
    desktop._kb_listener = SimpleNamespace(stop=lambda: stopped.append("kb"))
    handler = lambda raw: None  # noqa: E731
    desktop.add_listener("move", handler)
    desktop.add_listener("click", handler)
    desktop.remove_listener("move", handler)
    assert stopped == []
    desktop.remove_listener("click", handler)
    assert stopped == ["mouse", "kb"]
    assert desktop._mouse_listener is None


class FakeListener:
    """Stands in for pynput's mouse/keyboard Listener threads."""

    log: list = []
    fail_starts = 0

    def __init__(self, **callbacks) -> None:
        self.callbacks = callbacks
        self.running = False

    def start(self) -> None:
        cls = type(self)
        if cls.fail_starts:
            cls.fail_starts -= 1
            raise OSError("no display")
        self.running = True
        FakeListener.log.append(("start", cls.__name__))

    def stop(self) -> None:
        self.running = False
        FakeListener.log.append(("stop", type(self).__name__))


@pytest.fixture
def fake_pynput(monkeypatch):
    class MouseListener(FakeListener):
        pass

    class KeyboardListener(FakeListener):
        pass

    FakeListener.log = []
    module = SimpleNamespace(
        mouse=SimpleNamespace(Listener=MouseListener),
        keyboard=SimpleNamespace(Listener=KeyboardListener),
    )
    monkeypatch.setitem(sys.modules, "pynput", module)
    return module


def test_failed_keyboard_start_leaves_source_stopped(fake_pynput, clock):
    fake_pynput.keyboard.Listener.fail_starts = 1
    src = PynputInputSource()
    tracker = TrackingController(TrackerConfig(), src, clock=clock)

    with pytest.raises(RegistrationError, match="no display"):
        tracker.start()

    assert FakeListener.log == [("start", "MouseListener"), ("stop", "MouseListener")]
    assert src._mouse_listener is None
    assert src._kb_listener is None
    assert not tracker.is_tracking

    # a retry builds and starts a fresh pair
    assert tracker.start() is True
    assert src._mouse_listener.running
    assert src._kb_listener.running
    assert tracker.stop() is True
    assert src._mouse_listener is None


def test_listeners_start_once_for_both_handlers(fake_pynput, clock):
    src = PynputInputSource()
    tracker = TrackingController(TrackerConfig(), src, clock=clock)
    tracker.start()
    assert FakeListener.log == [("start", "MouseListener"), ("start", "KeyboardListener")]
    assert src._mouse_listener.callbacks["on_move"] == src._on_move
