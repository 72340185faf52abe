# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Logging helpers for tagsets."""

from __future__ import annotations

import logging
import os

DEFAULT_LOG_LEVEL = os.getenv("TAGSETS_LOG_LEVEL", "WARNING").upper()
PACKAGE_LOGGER = "tagsets"


def setup_logging(level: str | None = None) -> None:
    """
    Configure standard logging for embedding applications.

    Rejected transitions are logged at DEBUG on the ``tagsets`` loggers, so
    ``setup_logging("debug")`` explains why an add/edit/delete did nothing.
    """
    effective_level = getattr(logging, (level or DEFAULT_LOG_LEVEL).upper(), logging.WARNING)
    logging.basicConfig(
        level=effective_level,
        format="%(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger(PACKAGE_LOGGER).setLevel(effective_level)


__all__ = ["PACKAGE_LOGGER", "setup_logging"]
