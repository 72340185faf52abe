# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for tagsets."""

import os
from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from typing import Any

_TRUE_STRINGS = {"1", "true", "yes", "on"}

# camelCase keys accepted from widget-style config dicts
_CONFIG_ALIASES = {
    "addTagInputText": "add_tag_input_text",
    "addTagBtnLabel": "add_tag_btn_label",
    "editTagBtnLabel": "edit_tag_btn_label",
    "submitOnBlur": "submit_on_blur",
    "maxTagLimit": "max_tag_limit",
}


def coerce_bool(value: Any) -> bool:
    """Coerce an untrusted input to a bool; strings must spell out a true value."""
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_STRINGS
    return bool(value)


def _int_env(name: str, default: int) -> int:
    try:
        value = os.getenv(name)
        return int(value) if value is not None else default
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return coerce_bool(value)


def _str_env(name: str, default: str) -> str:
    value = os.getenv(name)
    return value if value else default


def _clamp_limit(value: Any) -> int:
    try:
        limit = int(value)
    except (TypeError, ValueError):
        return 0
    return limit if limit > 0 else 0


@dataclass(frozen=True)
class TagSetSettings:
    """Controller defaults, supplied once at construction."""

    add_tag_input_text: str = "Add Tag Here"
    add_tag_btn_label: str = "Add Tag"
    edit_tag_btn_label: str = "OK"
    submit_on_blur: bool = False
    max_tag_limit: int = 0

    def __post_init__(self) -> None:
        # negative or unparsable limits mean unlimited
        object.__setattr__(self, "max_tag_limit", _clamp_limit(self.max_tag_limit))

    @property
    def unlimited(self) -> bool:
        return self.max_tag_limit == 0

    @classmethod
    def from_env(cls) -> "TagSetSettings":
        """Create settings from environment variables (evaluated at call time)."""
        return cls(
            add_tag_input_text=_str_env("TAGSETS_ADD_TAG_INPUT_TEXT", cls.add_tag_input_text),
            add_tag_btn_label=_str_env("TAGSETS_ADD_TAG_BTN_LABEL", cls.add_tag_btn_label),
            edit_tag_btn_label=_str_env("TAGSETS_EDIT_TAG_BTN_LABEL", cls.edit_tag_btn_label),
            submit_on_blur=_bool_env("TAGSETS_SUBMIT_ON_BLUR", cls.submit_on_blur),
            max_tag_limit=_clamp_limit(_int_env("TAGSETS_MAX_TAG_LIMIT", cls.max_tag_limit)),
        )

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any] | None, *, base: "TagSetSettings | None" = None) -> "TagSetSettings":
        """
        Layer a config mapping over ``base`` (or the dataclass defaults).

        Both snake_case field names and the widget's camelCase keys are accepted;
        unknown keys and None values are ignored.
        """
        settings = base or cls()
        if not mapping:
            return settings
        known = {f.name for f in fields(cls)}
        overrides: dict[str, Any] = {}
        for key, value in mapping.items():
            name = _CONFIG_ALIASES.get(key, key)
            if name not in known or value is None:
                continue
            if name == "submit_on_blur":
                value = coerce_bool(value)
            elif name == "max_tag_limit":
                value = _clamp_limit(value)
            else:
                value = str(value)
            overrides[name] = value
        return replace(settings, **overrides) if overrides else settings


def load_settings(overrides: Mapping[str, Any] | None = None) -> TagSetSettings:
    """Load settings from the environment, then apply ``overrides``."""
    return TagSetSettings.from_mapping(overrides, base=TagSetSettings.from_env())


__all__ = ["TagSetSettings", "coerce_bool", "load_settings"]
