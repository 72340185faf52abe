# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Interaction payloads routed from a view layer to the controller."""

from dataclasses import dataclass
from enum import Enum


class InteractionKind(str, Enum):
    ADD = "add"
    EDIT = "edit"
    SUBMIT = "submit"
    BLUR = "blur"
    DELETE = "delete"


@dataclass(frozen=True)
class Interaction:
    """
    One user interaction, carrying the composite element ids it targets.

    ``set_ref`` is the enclosing list's id. ``tag_ref`` is the tag item's id
    (unused for ADD). ``value`` is the input content for SUBMIT and BLUR.
    """

    kind: InteractionKind
    set_ref: str
    tag_ref: str | None = None
    value: str | None = None


__all__ = ["Interaction", "InteractionKind"]
