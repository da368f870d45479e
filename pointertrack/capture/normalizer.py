"""Raw input notification -> CapturedEvent.

Tags are lower-cased; the path begins at the target and walks up through
its ancestors. Empty ids and class strings are treated as absent.
"""
from __future__ import annotations

from typing import Optional

from ..errors import MalformedEventError
from ..models import CapturedEvent, Element, EventKind, Modifiers, PathEntry, RawInputNotification


def _path_entry(element: Element) -> PathEntry:
    classes: Optional[tuple[str, ...]] = None
    if element.class_name:
        classes = tuple(element.class_name.split()) or None
    return PathEntry(
        tag=(element.tag or "").lower(),
        id=element.id or None,
        classes=classes,
    )


def event_path(target: Element) -> tuple[PathEntry, ...]:
    path: list[PathEntry] = []
    node: Optional[Element] = target
    while node is not None:
        path.append(_path_entry(node))
        node = node.parent
    return tuple(path)


def normalize(raw: RawInputNotification, now: float) -> CapturedEvent:
    if not isinstance(raw, RawInputNotification):
        raise MalformedEventError(f"not a pointer notification: {raw!r}")
    try:
        kind = EventKind(raw.kind)
    except ValueError:
        raise MalformedEventError(f"unknown pointer event kind: {raw.kind!r}") from None

    target = raw.target
    if target is None or not target.tag:
        raise MalformedEventError(f"{kind.value} notification has no resolvable target")

    return CapturedEvent(
        kind=kind,
        x=raw.client_x,
        y=raw.client_y,
        screen_x=raw.screen_x,
        screen_y=raw.screen_y,
        timestamp=now,
        target=target.tag.lower(),
        path=event_path(target),
        modifiers=Modifiers(ctrl=bool(raw.ctrl), alt=bool(raw.alt), shift=bool(raw.shift), meta=bool(raw.meta)),
        button=raw.button if kind is EventKind.CLICK else None,
    )
