# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Tag added/removed notifications."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)


class TagEventKind(str, Enum):
    ADDED = "addedTag"
    REMOVED = "removedTag"


@dataclass(frozen=True)
class TagEvent:
    kind: TagEventKind
    set_id: str
    key: int
    label: str


TagListener = Callable[[TagEvent], None]


class TagEventBus:
    """
    Synchronous observer list owned by a single controller.

    Listeners are fire-and-forget: one that raises is logged and skipped, and
    the remaining listeners still run.
    """

    def __init__(self):
        self._listeners: list[tuple[TagEventKind | None, TagListener]] = []

    def subscribe(self, listener: TagListener, kind: TagEventKind | None = None) -> Callable[[], None]:
        """Register ``listener`` for ``kind`` (or every kind); returns an unsubscribe callable."""
        entry = (kind, listener)
        self._listeners.append(entry)

        def unsubscribe() -> None:
            if entry in self._listeners:
                self._listeners.remove(entry)

        return unsubscribe

    def publish(self, event: TagEvent) -> None:
        for kind, listener in list(self._listeners):
            if kind is not None and kind != event.kind:
                continue
            try:
                listener(event)
            except Exception as exc:
                logger.exception("Listener %r failed on %s: %s", listener, event.kind.value, exc)

    def __len__(self) -> int:
        return len(self._listeners)


__all__ = ["TagEvent", "TagEventBus", "TagEventKind", "TagListener"]
