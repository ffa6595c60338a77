# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Request header presets and case-insensitive response header access."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..config import ProbeSettings

BROWSER_ACCEPT = "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8"


def browser_headers(settings: ProbeSettings) -> dict[str, str]:
    """
    Header set of a desktop Chrome navigation.

    Targets behind bot filters often reject requests that do not look like a browser
    page load, which would turn a latency probe into a refused-connection report.
    """
    return {
        "User-Agent": settings.user_agent,
        "Accept": BROWSER_ACCEPT,
        "Accept-Language": settings.accept_language,
        "Accept-Encoding": "gzip, deflate, br",
        "Connection": "keep-alive",
        "Upgrade-Insecure-Requests": "1",
        "Cache-Control": "max-age=0",
    }


def _coerce_headers_mapping(headers: Any) -> Mapping[object, object] | None:
    """Best-effort coercion of dicts, httpx.Headers or pair lists into a Mapping."""
    if not headers:
        return None
    if isinstance(headers, Mapping):
        return headers

    items = getattr(headers, "items", None)
    if callable(items):
        try:
            return dict(items())
        except (TypeError, ValueError):
            pass

    try:
        return dict(headers)
    except (TypeError, ValueError):
        return None


def header_value(headers: Mapping[object, object] | None, name: str, default: str = "") -> str:
    """Return a header value using case-insensitive key matching."""
    if not headers or not name:
        return default

    coerced = _coerce_headers_mapping(headers)
    if not coerced:
        return default

    lower = str(name).lower()
    for key, value in coerced.items():
        if key is None:
            continue
        if str(key).lower() == lower:
            return default if value is None else str(value).strip()

    return default


def content_length(headers: Mapping[object, object] | None) -> int | None:
    """Parse ``Content-Length``; ``None`` when absent, malformed or negative."""
    raw = header_value(headers, "content-length")
    if not raw:
        return None
    try:
        value = int(raw)
    except ValueError:
        return None
    return value if value >= 0 else None


__all__ = ["BROWSER_ACCEPT", "browser_headers", "content_length", "header_value"]
