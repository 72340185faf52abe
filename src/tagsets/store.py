# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Tag set storage."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any

from .config import coerce_bool
from .errors import OutOfRange


@dataclass
class TagSetState:
    """Ordered labels plus the editability and lock flags of one set."""

    tags: list[str] = field(default_factory=list)
    is_editable: bool = True
    is_locked: bool = False

    def __len__(self) -> int:
        return len(self.tags)


class TagSetStore:
    """
    Registry of tag sets keyed by clean set id.

    Mutations here are unconditional; locking and editability policy belong to
    the controller. A tag's key is its current index, so keys shift on removal.
    """

    def __init__(self):
        self._sets: dict[str, TagSetState] = {}

    def ensure_set(self, set_id: str) -> TagSetState:
        state = self._sets.get(set_id)
        if state is None:
            state = TagSetState()
            self._sets[set_id] = state
        return state

    def get(self, set_id: str) -> TagSetState:
        """Return the live state for ``set_id``, creating it on first reference."""
        return self.ensure_set(set_id)

    def replace_tags(self, set_id: str, labels: Iterable[str]) -> None:
        # editability survives a reset
        state = self.ensure_set(set_id)
        state.tags = []
        for label in labels:
            self.upsert_tag(set_id, label)

    def upsert_tag(self, set_id: str, label: str, key: int | None = None) -> int:
        """Append ``label`` (no key, or key == size) or overwrite it in place; return its key."""
        state = self.ensure_set(set_id)
        size = len(state.tags)
        if key is None or key == size:
            state.tags.append(label)
            return size
        if not isinstance(key, int) or not 0 <= key < size:
            raise OutOfRange(set_id, key, size)
        state.tags[key] = label
        return key

    def remove_tag(self, set_id: str, key: int) -> str:
        state = self.ensure_set(set_id)
        size = len(state.tags)
        if not isinstance(key, int) or isinstance(key, bool) or not 0 <= key < size:
            raise OutOfRange(set_id, key, size)
        return state.tags.pop(key)

    def set_editable(self, set_id: str, value: Any) -> bool:
        state = self.ensure_set(set_id)
        state.is_editable = coerce_bool(value)
        return state.is_editable

    def set_locked(self, set_id: str, value: bool) -> None:
        self.ensure_set(set_id).is_locked = bool(value)

    def get_tags(self, set_id: str) -> list[str]:
        return list(self.ensure_set(set_id).tags)

    def get_all_tags(self) -> dict[str, list[str]]:
        return {set_id: list(state.tags) for set_id, state in self._sets.items()}

    def __contains__(self, set_id: str) -> bool:
        return set_id in self._sets

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._sets))

    def __len__(self) -> int:
        return len(self._sets)

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"TagSetStore({self.get_all_tags()!r})"


__all__ = ["TagSetState", "TagSetStore"]
