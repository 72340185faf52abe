# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Tag set controller.

One controller owns any number of tag sets. Each set cycles between IDLE and
one locked mode (COMPOSING a new tag or EDITING an existing one); at most one
tag per set is uncommitted at a time. Policy violations (locked, not editable,
limit reached, stale reference) are silent no-ops that return False. The only
raised error is ``OutOfRange`` when a delete targets a tag that does not exist.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .config import TagSetSettings, load_settings
from .errors import OutOfRange, RejectReason, reject_reason_to_message
from .events import TagEvent, TagEventBus, TagEventKind, TagListener
from .ids import clean_set_id, clean_tag_id, parse_tag_ref, provisional_element_id, tag_element_id
from .interactions import Interaction, InteractionKind
from .store import TagSetStore
from .view import NullView, TagListView, TagSetView

logger = logging.getLogger(__name__)


class TagSetMode(str, Enum):
    IDLE = "IDLE"
    COMPOSING = "COMPOSING"
    EDITING = "EDITING"


@dataclass
class EditSession:
    """The single uncommitted tag of a locked set."""

    mode: TagSetMode
    key: int
    original: str | None = None


class TagSetController:
    def __init__(
        self,
        settings: TagSetSettings | Mapping[str, Any] | None = None,
        view: TagSetView | None = None,
        *,
        events: TagEventBus | None = None,
        store: TagSetStore | None = None,
    ):
        if isinstance(settings, TagSetSettings):
            self.settings = settings
        else:
            self.settings = load_settings(settings)
        self.view = view or NullView()
        self.events = events or TagEventBus()
        self.store = store or TagSetStore()
        self._sessions: dict[str, EditSession] = {}

    # configuration / query surface

    def set_tags(self, set_ref: str, labels: Iterable[str]) -> None:
        """Replace a set's tags (initial population); forces the set back to IDLE."""
        set_id = clean_set_id(set_ref)
        self.store.replace_tags(set_id, labels)
        self._refresh(set_id)

    def get_tags_by_tag_set_id(self, set_ref: str) -> list[str]:
        return self.store.get_tags(clean_set_id(set_ref))

    def get_all_tags(self) -> dict[str, list[str]]:
        return self.store.get_all_tags()

    def set_tags_editable(self, set_ref: str, value: Any) -> bool:
        set_id = clean_set_id(set_ref)
        editable = self.store.set_editable(set_id, value)
        self._refresh(set_id)
        return editable

    def mode(self, set_ref: str) -> TagSetMode:
        session = self._sessions.get(clean_set_id(set_ref))
        return session.mode if session else TagSetMode.IDLE

    def is_locked(self, set_ref: str) -> bool:
        return self.store.get(clean_set_id(set_ref)).is_locked

    def subscribe(self, listener: TagListener, kind: TagEventKind | None = None) -> Callable[[], None]:
        return self.events.subscribe(listener, kind)

    def on_tag_added(self, listener: TagListener) -> Callable[[], None]:
        return self.events.subscribe(listener, TagEventKind.ADDED)

    def on_tag_removed(self, listener: TagListener) -> Callable[[], None]:
        return self.events.subscribe(listener, TagEventKind.REMOVED)

    # transitions

    def begin_add(self, set_ref: str) -> bool:
        set_id = clean_set_id(set_ref)
        state = self.store.get(set_id)
        count = len(state.tags)

        if not state.is_editable:
            return self._reject("begin_add", set_id, RejectReason.NOT_EDITABLE)
        if state.is_locked:
            return self._reject("begin_add", set_id, RejectReason.LOCKED)
        # inclusive: a set already at the limit may still begin one more add
        if not self.settings.unlimited and count > self.settings.max_tag_limit:
            return self._reject("begin_add", set_id, RejectReason.LIMIT_REACHED)

        element_id = provisional_element_id(set_id, count)
        self.view.show_compose(set_id, element_id, self.settings.add_tag_input_text, self.settings.edit_tag_btn_label)
        self._open_session(set_id, EditSession(TagSetMode.COMPOSING, count))
        return True

    def begin_edit(self, set_ref: str, tag_ref: str | int) -> bool:
        set_id = clean_set_id(set_ref)
        state = self.store.get(set_id)
        ref = parse_tag_ref(tag_ref)

        if not state.is_editable:
            return self._reject("begin_edit", set_id, RejectReason.NOT_EDITABLE)
        if state.is_locked:
            return self._reject("begin_edit", set_id, RejectReason.LOCKED)
        if ref.provisional or ref.key is None or ref.key >= len(state.tags):
            return self._reject("begin_edit", set_id, RejectReason.UNKNOWN_TAG)

        label = state.tags[ref.key]
        element_id = tag_element_id(set_id, ref.key)
        self.view.show_edit(set_id, element_id, label, self.settings.edit_tag_btn_label)
        self._open_session(set_id, EditSession(TagSetMode.EDITING, ref.key, original=label))
        return True

    def save(self, set_ref: str, tag_ref: str | int, value: str | None) -> bool:
        """
        Commit, revert, or cancel the set's open add/edit.

        Non-empty input other than the placeholder is committed. Otherwise an
        edited tag keeps its original label and a provisional tag is discarded.
        The set is IDLE afterwards whichever branch ran.
        """
        set_id = clean_set_id(set_ref)
        ref = parse_tag_ref(tag_ref)
        session = self._sessions.get(set_id)
        if (
            session is None
            or session.key != ref.key
            or (session.mode is TagSetMode.COMPOSING) != ref.provisional
        ):
            return self._reject("save", set_id, RejectReason.NO_SESSION)

        text = "" if value is None else str(value)
        try:
            if text and text != self.settings.add_tag_input_text:
                key = self.store.upsert_tag(set_id, text, None if ref.provisional else ref.key)
                logger.debug("Committed tag %d in set %s", key, set_id)
                self.events.publish(TagEvent(TagEventKind.ADDED, set_id, key, text))
                self._refresh(set_id)
            elif not ref.provisional:
                logger.debug("Reverted tag %d in set %s to %r", ref.key, set_id, session.original)
                self._refresh(set_id)
            else:
                self.delete(set_id, ref.raw)
        finally:
            self._close_session(set_id)
        return True

    def submit(self, set_ref: str, tag_ref: str | int, value: str | None) -> bool:
        return self.save(set_ref, tag_ref, value)

    def blur(self, set_ref: str, tag_ref: str | int, value: str | None) -> bool:
        if not self.settings.submit_on_blur:
            return self._reject("blur", clean_set_id(set_ref), RejectReason.BLUR_DISABLED)
        return self.save(set_ref, tag_ref, value)

    def delete(self, set_ref: str, tag_ref: str | int) -> bool:
        set_id = clean_set_id(set_ref)
        ref = parse_tag_ref(tag_ref)
        state = self.store.get(set_id)

        if not state.is_editable:
            return self._reject("delete", set_id, RejectReason.NOT_EDITABLE)

        if ref.provisional:
            # never entered the sequence; dropping the item releases the lock
            self._refresh(set_id)
            return True

        if ref.key is None:
            raise OutOfRange(set_id, clean_tag_id(ref.raw), len(state.tags))
        label = self.store.remove_tag(set_id, ref.key)
        logger.debug("Removed tag %d from set %s", ref.key, set_id)
        self.events.publish(TagEvent(TagEventKind.REMOVED, set_id, ref.key, label))
        self._refresh(set_id)
        return True

    def dispatch(self, interaction: Interaction) -> bool:
        """Route a delegated view interaction to its transition."""
        kind = InteractionKind(interaction.kind)
        if kind is InteractionKind.ADD:
            return self.begin_add(interaction.set_ref)

        set_id = clean_set_id(interaction.set_ref)
        if interaction.tag_ref is None:
            return self._reject(kind.value, set_id, RejectReason.UNKNOWN_TAG)
        if kind is InteractionKind.EDIT:
            return self.begin_edit(interaction.set_ref, interaction.tag_ref)
        if kind is InteractionKind.SUBMIT:
            return self.submit(interaction.set_ref, interaction.tag_ref, interaction.value)
        if kind is InteractionKind.BLUR:
            return self.blur(interaction.set_ref, interaction.tag_ref, interaction.value)
        return self.delete(interaction.set_ref, interaction.tag_ref)

    # internals

    def _open_session(self, set_id: str, session: EditSession) -> None:
        self._sessions[set_id] = session
        self.store.set_locked(set_id, True)

    def _close_session(self, set_id: str) -> None:
        self._sessions.pop(set_id, None)
        self.store.set_locked(set_id, False)

    def _refresh(self, set_id: str) -> None:
        # regenerating the list destroys any in-progress input
        self._close_session(set_id)
        state = self.store.get(set_id)
        self.view.render(
            TagListView(
                set_id=set_id,
                labels=tuple(state.tags),
                is_editable=state.is_editable,
                add_label=self.settings.add_tag_btn_label,
            )
        )

    def _reject(self, operation: str, set_id: str, reason: RejectReason) -> bool:
        logger.debug("%s skipped for tag set %s: %s", operation, set_id, reject_reason_to_message(reason))
        return False


__all__ = ["EditSession", "TagSetController", "TagSetMode"]
