# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""View collaborator protocol and reference implementations."""

from __future__ import annotations

import html
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Protocol

from .ids import set_element_id, tag_element_id


@dataclass(frozen=True)
class TagListView:
    """Everything a view needs to regenerate one set's list."""

    set_id: str
    labels: tuple[str, ...]
    is_editable: bool
    add_label: str

    @property
    def element_id(self) -> str:
        return set_element_id(self.set_id)

    def items(self) -> Iterator[tuple[str, str]]:
        for key, label in enumerate(self.labels):
            yield tag_element_id(self.set_id, key), label


class TagSetView(Protocol):
    """Rendering primitives the controller drives."""

    def render(self, view: TagListView) -> None: ...

    def show_compose(self, set_id: str, element_id: str, placeholder: str, submit_label: str) -> None: ...

    def show_edit(self, set_id: str, element_id: str, value: str, submit_label: str) -> None: ...


class NullView:
    """Headless view; the controller still works, nothing is drawn."""

    def render(self, view: TagListView) -> None:
        return None

    def show_compose(self, set_id: str, element_id: str, placeholder: str, submit_label: str) -> None:
        return None

    def show_edit(self, set_id: str, element_id: str, value: str, submit_label: str) -> None:
        return None


def _esc(value: str) -> str:
    return html.escape(str(value), quote=True)


class MarkupView:
    """
    Keeps an HTML fragment per tag set, using the widget's class names.

    ``render`` replaces the whole fragment. ``show_compose`` appends a
    provisional item and ``show_edit`` swaps one item's label for an input;
    both record the element whose input is focused and selected in ``focused``.
    """

    def __init__(self):
        self._items: dict[str, list[tuple[str, str]]] = {}
        self._add_item: dict[str, str] = {}
        self.focused: str | None = None

    def render(self, view: TagListView) -> None:
        self.focused = None
        if view.is_editable:
            self._add_item[view.set_id] = f'<li class="addTagItem"><a class="addTagBtn">{_esc(view.add_label)}</a></li>'
        else:
            self._add_item[view.set_id] = ""
        delete_btn = '<button class="tagDeleteBtn"></button>' if view.is_editable else ""
        self._items[view.set_id] = [
            (
                element_id,
                f'<li id="{_esc(element_id)}"><span class="tagLabel view">{_esc(label)}</span>{delete_btn}</li>',
            )
            for element_id, label in view.items()
        ]

    def show_compose(self, set_id: str, element_id: str, placeholder: str, submit_label: str) -> None:
        item = (
            f'<li id="{_esc(element_id)}"><span class="tagLabel edit">'
            f"{self._input(placeholder, submit_label)}</span>"
            '<button class="tagDeleteBtn"></button></li>'
        )
        self._items.setdefault(set_id, []).append((element_id, item))
        self.focused = element_id

    def show_edit(self, set_id: str, element_id: str, value: str, submit_label: str) -> None:
        items = self._items.setdefault(set_id, [])
        for index, (existing_id, _) in enumerate(items):
            if existing_id == element_id:
                items[index] = (
                    element_id,
                    f'<li id="{_esc(element_id)}"><span class="tagLabel edit">'
                    f"{self._input(value, submit_label)}</span>"
                    '<button class="tagDeleteBtn"></button></li>',
                )
                self.focused = element_id
                return

    def markup(self, set_id: str) -> str:
        body = self._add_item.get(set_id, "") + "".join(item for _, item in self._items.get(set_id, []))
        return f'<ul id="{_esc(set_element_id(set_id))}">{body}</ul>'

    def element_ids(self, set_id: str) -> list[str]:
        return [element_id for element_id, _ in self._items.get(set_id, [])]

    @staticmethod
    def _input(value: str, submit_label: str) -> str:
        return (
            f'<input type="text" value="{_esc(value)}" class="tagLabelInput" />'
            f'<button class="tagSubmitBtn">{_esc(submit_label)}</button>'
        )


__all__ = ["MarkupView", "NullView", "TagListView", "TagSetView"]
