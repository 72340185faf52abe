# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and reject reasons."""

from enum import Enum
from typing import Optional


class TagSetError(Exception):
    """Base class for tagsets errors."""


class OutOfRange(TagSetError, IndexError):
    """A tag key does not denote a current position in its set."""

    def __init__(self, set_id: str, key: object, size: int):
        self.set_id = set_id
        self.key = key
        self.size = size
        super().__init__(f"tag key {key!r} out of range for tag set {set_id!r} (size {size})")


class RejectReason(str, Enum):
    """Why a transition was skipped; these are silent no-ops, never raised."""

    NOT_EDITABLE = "NOT_EDITABLE"
    LOCKED = "LOCKED"
    LIMIT_REACHED = "LIMIT_REACHED"
    UNKNOWN_TAG = "UNKNOWN_TAG"
    NO_SESSION = "NO_SESSION"
    BLUR_DISABLED = "BLUR_DISABLED"


def reject_reason_to_message(reason: Optional[RejectReason]) -> str:
    """Human-readable reason string."""
    mapping = {
        RejectReason.NOT_EDITABLE: "Tag set is not editable",
        RejectReason.LOCKED: "Another tag in this set is being added or edited",
        RejectReason.LIMIT_REACHED: "Tag limit reached",
        RejectReason.UNKNOWN_TAG: "Tag reference does not match a tag in view mode",
        RejectReason.NO_SESSION: "No add/edit in progress for this tag",
        RejectReason.BLUR_DISABLED: "Submit on blur is disabled",
        None: "",
    }
    return mapping.get(reason, "Transition skipped")


__all__ = ["OutOfRange", "RejectReason", "TagSetError", "reject_reason_to_message"]
