# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Element identifier codec.

Views address tag sets and tags through composite element ids. A set list is
``tagSet_<setId>``; a committed tag is ``tagSet_<setId>-tag_<key>``; a
provisional tag (added but not saved yet) is ``tempTag_<key>``, optionally
carrying the same ``tagSet_<setId>-`` prefix. The helpers here strip that
wrapping to recover store keys, and re-apply it when rendering.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

SET_PREFIX = "tagSet_"
TAG_PREFIX = "tag_"
PROVISIONAL_PREFIX = "tempTag_"

_SET_PREFIX_RE = re.compile(r"^tagSet_")
_TAG_ID_RE = re.compile(r"^(?:tagSet_.+?-)?(?:tag|tempTag)_(?P<key>[0-9]+)$")
_PROVISIONAL_RE = re.compile(r"(?:^|-)tempTag_[0-9]+$")


def clean_set_id(raw: str) -> str:
    """Strip the set prefix; clean ids pass through unchanged."""
    return _SET_PREFIX_RE.sub("", str(raw), count=1)


def clean_tag_id(raw: str) -> str:
    """Strip set and tag prefixes, returning the bare key (or ``raw`` if unmatched)."""
    raw = str(raw)
    match = _TAG_ID_RE.match(raw)
    if not match:
        return raw
    return match.group("key")


def is_provisional(raw: str) -> bool:
    return bool(_PROVISIONAL_RE.search(str(raw)))


def tag_key(raw: str | int) -> int | None:
    """Resolve a tag reference to its integer key, or None when malformed."""
    if isinstance(raw, int) and not isinstance(raw, bool):
        return raw if raw >= 0 else None
    cleaned = clean_tag_id(str(raw))
    if not (cleaned.isascii() and cleaned.isdecimal()):
        return None
    return int(cleaned)


def set_element_id(set_id: str) -> str:
    return f"{SET_PREFIX}{clean_set_id(set_id)}"


def tag_element_id(set_id: str, key: int) -> str:
    return f"{set_element_id(set_id)}-{TAG_PREFIX}{key}"


def provisional_element_id(set_id: str, key: int) -> str:
    return f"{set_element_id(set_id)}-{PROVISIONAL_PREFIX}{key}"


@dataclass(frozen=True)
class TagRef:
    """A tag reference resolved at the moment of use."""

    raw: str
    key: int | None
    provisional: bool

    @property
    def valid(self) -> bool:
        return self.key is not None


def parse_tag_ref(raw: str | int) -> TagRef:
    # provisional marker must be read before the id is cleaned
    provisional = is_provisional(raw) if isinstance(raw, str) else False
    return TagRef(raw=str(raw), key=tag_key(raw), provisional=provisional)


__all__ = [
    "PROVISIONAL_PREFIX",
    "SET_PREFIX",
    "TAG_PREFIX",
    "TagRef",
    "clean_set_id",
    "clean_tag_id",
    "is_provisional",
    "parse_tag_ref",
    "provisional_element_id",
    "set_element_id",
    "tag_element_id",
    "tag_key",
]
