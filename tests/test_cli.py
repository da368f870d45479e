import json
import sys
import time

import pytest

from pointertrack import cli
from pointertrack.capture import ManualInputSource, TrackingController

from conftest import raw


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("POINTERTRACK_MAX_EVENTS", "POINTERTRACK_THROTTLE_MS", "POINTERTRACK_DEBUG", "POINTERTRACK_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def harness(monkeypatch):
    """Run the CLI against a ManualInputSource that receives one burst of input."""
    state = {"trackers": [], "sources": [], "fed": False}
    real_sleep = time.sleep

    def make_source():
        src = ManualInputSource()
        state["sources"].append(src)
        return src

    class RecordingController(TrackingController):
        def __init__(self, *args, **kwargs):
            super().__init__(*args, **kwargs)
            state["trackers"].append(self)

    def feed_then_sleep(seconds):
        if not state["fed"]:
            state["fed"] = True
            src = state["sources"][-1]
            for x in (10, 20, 30):
                src.dispatch(raw("move", x, x))
            src.dispatch(raw("click", 5, 6, button="left", shift=True))
        real_sleep(0.02)

    monkeypatch.setattr(cli, "PynputInputSource", make_source)
    monkeypatch.setattr(cli, "TrackingController", RecordingController)
    monkeypatch.setattr(cli.time, "sleep", feed_then_sleep)

    def run(*argv):
        monkeypatch.setattr(sys, "argv", ["pointertrack", "run", "--duration", "0.01", *argv])
        cli.main()
        return state["trackers"][-1]

    return run


def test_run_json(harness, capsys):
    tracker = harness("--json", "--max-events", "2", "--throttle-ms", "0")
    assert tracker.config.max_events == 2
    assert tracker.config.throttle_interval == 0
    assert not tracker.is_tracking

    data = json.loads(capsys.readouterr().out)
    assert data["is_tracking"] is False
    # capacity 2 keeps the last move and the click
    assert data["total_events"] == 2
    assert [e["type"] for e in data["events"]] == ["move", "click"]
    assert data["events"][0]["x"] == 30
    assert data["events"][1]["button"] == "left"
    assert data["events"][1]["modifiers"]["shift"] is True
    assert data["statistics"]["click_events"] == 1


def test_run_defaults_throttle_moves(harness, capsys):
    tracker = harness("--json")
    assert tracker.config.max_events == 1000
    assert tracker.config.throttle_interval == 50
    stats = json.loads(capsys.readouterr().out)["statistics"]
    # the burst arrives within one throttle window
    assert stats["move_events"] == 1
    assert stats["click_events"] == 1


def test_run_settings_from_env(harness, monkeypatch):
    monkeypatch.setenv("POINTERTRACK_MAX_EVENTS", "9")
    monkeypatch.setenv("POINTERTRACK_THROTTLE_MS", "7")
    tracker = harness()
    assert (tracker.config.max_events, tracker.config.throttle_interval) == (9, 7)


def test_run_summary_and_echo(harness, capsys):
    harness("--echo", "--throttle-ms", "0")
    out = capsys.readouterr().out
    assert "Events:\t 4" in out
    assert "Clicks:\t 1" in out
    assert "click (5,6) button=left shift" in out


def test_run_rejects_bad_max_events(harness):
    with pytest.raises(ValueError, match="max_events"):
        harness("--max-events", "0")
