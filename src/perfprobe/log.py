# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Logging helpers for perfprobe."""

from __future__ import annotations

import logging
import os

DEFAULT_LOG_LEVEL = os.getenv("PERFPROBE_LOG_LEVEL", "WARNING").upper()

# httpx/httpcore announce every request at INFO; one line per probe is noise.
TRANSPORT_LOGGERS = ("httpx", "httpcore")


def setup_logging(level: str | None = None) -> None:
    """Configure logging for the CLI and the service; transport chatter only shows at DEBUG."""
    effective = getattr(logging, (level or DEFAULT_LOG_LEVEL).upper(), logging.WARNING)
    logging.basicConfig(
        level=effective,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    transport_level = logging.DEBUG if effective <= logging.DEBUG else logging.WARNING
    for name in TRANSPORT_LOGGERS:
        logging.getLogger(name).setLevel(transport_level)


__all__ = ["TRANSPORT_LOGGERS", "setup_logging"]
