from __future__ import annotations

import argparse
import json
import logging
import signal
import time

from .capture import CapturedEvent, Notification, TrackerData, TrackingController
from .capture.desktop import PynputInputSource
from .config import Settings


def print_summary(data: TrackerData) -> None:
    stats = data.statistics
    print("Events:\t", data.total_events)
    print("Moves:\t", stats.move_events)
    print("Clicks:\t", stats.click_events)
    print("Event rate (ev/s):", round(stats.event_rate, 2))
    print("Avg speed (px/s):", round(stats.average_movement_speed, 2))


def _echo(event: CapturedEvent) -> None:
    mods = "+".join(event.modifiers.active)
    extra = f" button={event.button}" if event.button is not None else ""
    print(f"{event.timestamp:.0f} {event.kind.value:5s} ({event.x:.0f},{event.y:.0f}){extra} {mods}".rstrip())


def cmd_run(args: argparse.Namespace) -> None:
    settings = Settings.from_env()
    level = getattr(logging, (args.log_level or settings.log_level).upper(), logging.INFO)
    if args.debug:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(message)s",
    )
    cfg = settings.to_tracker_config(
        max_events=args.max_events,
        throttle_ms=args.throttle_ms,
        debug=True if args.debug else None,
    )
    tracker = TrackingController(cfg, PynputInputSource())
    if args.echo:
        tracker.subscribe(Notification.EVENT_ADDED, _echo)

    running = True

    def handler(*_):
        nonlocal running
        running = False

    previous = {sig: signal.signal(sig, handler) for sig in (signal.SIGINT, signal.SIGTERM)}
    try:
        tracker.start()
        deadline = time.monotonic() + args.duration if args.duration > 0 else None
        try:
            while running and (deadline is None or time.monotonic() < deadline):
                time.sleep(0.1)
        finally:
            tracker.stop()
    finally:
        for sig, prev in previous.items():
            if prev is not None:
                signal.signal(sig, prev)

    data = tracker.get_data()
    if args.json:
        print(json.dumps(data.as_dict(), indent=2))
    else:
        print_summary(data)


def main() -> None:
    p = argparse.ArgumentParser(prog="pointertrack", description="pointertrack: bounded pointer move & click capture")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_run = sub.add_parser("run", help="Capture desktop pointer events and print statistics")
    p_run.add_argument("--max-events", type=int, default=None, help="Ring buffer capacity (default 1000)")
    p_run.add_argument("--throttle-ms", type=int, default=None, help="Min ms between recorded moves; 0 disables (default 50)")
    p_run.add_argument("--duration", type=float, default=0, help="Seconds to capture; 0 runs until Ctrl+C")
    p_run.add_argument("--debug", action="store_true", help="Forward tracker debug reports")
    p_run.add_argument("--echo", action="store_true", help="Print each recorded event")
    p_run.add_argument("--json", action="store_true", help="Print the captured data as JSON")
    p_run.add_argument("--log-level", default=None, help="Logging level (DEBUG, INFO, ...)")
    p_run.set_defaults(func=cmd_run)

    args = p.parse_args()
    args.func(args)


if __name__ == "__main__":
    main()
