from __future__ import annotations

import pytest

from pointertrack.capture import ManualInputSource, TrackingController
from pointertrack.config import TrackerConfig
from pointertrack.models import Element, RawInputNotification


class FakeClock:
    """Millisecond clock the tests advance by hand."""

    def __init__(self, start: float = 1_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> float:
        self.now += ms
        return self.now


def element_chain() -> Element:
    body = Element(tag="BODY")
    main = Element(tag="MAIN", id="content", class_name="page  wide", parent=body)
    return Element(tag="BUTTON", id="", class_name="", parent=main)


def raw(kind: str, x: float = 0, y: float = 0, **kw) -> RawInputNotification:
    kw.setdefault("target", element_chain())
    return RawInputNotification(
        kind=kind,
        client_x=x,
        client_y=y,
        screen_x=kw.pop("screen_x", x + 20),
        screen_y=kw.pop("screen_y", y + 20),
        **kw,
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def source() -> ManualInputSource:
    return ManualInputSource()


@pytest.fixture
def make_tracker(clock, source):
    def _make(**cfg) -> TrackingController:
        cfg.setdefault("max_events", 10)
        return TrackingController(TrackerConfig(**cfg), source, clock=clock)

    return _make


@pytest.fixture
def tracker(make_tracker) -> TrackingController:
    return make_tracker()


@pytest.fixture
def move():
    def _move(x: float = 0, y: float = 0, **kw) -> RawInputNotification:
        return raw("move", x, y, **kw)

    return _move


@pytest.fixture
def click():
    def _click(x: float = 0, y: float = 0, button=0, **kw) -> RawInputNotification:
        return raw("click", x, y, button=button, **kw)

    return _click
