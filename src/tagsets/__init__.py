# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
tagsets package entrypoint.

A single TagSetController manages any number of independently editable tag
sets, each addressed by a set id. Rendering is delegated to an injectable
view, and tag additions/removals are broadcast to listeners subscribed on the
controller so persistence can live outside the package.
"""

from .config import TagSetSettings, coerce_bool, load_settings
from .controller import TagSetController, TagSetMode
from .errors import OutOfRange, RejectReason, TagSetError
from .events import TagEvent, TagEventBus, TagEventKind
from .ids import clean_set_id, clean_tag_id, is_provisional
from .interactions import Interaction, InteractionKind
from .log import setup_logging
from .store import TagSetState, TagSetStore
from .version import __version__
from .view import MarkupView, NullView, TagListView, TagSetView

__all__ = [
    "Interaction",
    "InteractionKind",
    "MarkupView",
    "NullView",
    "OutOfRange",
    "RejectReason",
    "TagEvent",
    "TagEventBus",
    "TagEventKind",
    "TagListView",
    "TagSetController",
    "TagSetError",
    "TagSetMode",
    "TagSetSettings",
    "TagSetState",
    "TagSetStore",
    "TagSetView",
    "clean_set_id",
    "clean_tag_id",
    "coerce_bool",
    "is_provisional",
    "load_settings",
    "setup_logging",
    "__version__",
]
