# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Transport seam between the live prober and the network."""

from typing import Protocol

from ..config import ProbeSettings, load_probe_settings
from .models import HttpRequest, HttpResponse


class HttpClient(Protocol):
    """
    Issues the single outbound GET of a live measurement.

    Implementations never raise for transport failures: they return
    ``HttpResponse(ok=False)`` with ``error_category`` set, bounded by
    ``HttpRequest.timeout``.
    """

    def request(self, request: HttpRequest) -> HttpResponse: ...

    def close(self) -> None:  # pragma: no cover - optional for adapters
        ...


def create_default_http_client(settings: ProbeSettings | None = None) -> HttpClient:
    """httpx-backed client honoring the timeout, redirect and TLS settings."""
    from .httpx_client import HttpxClient

    return HttpxClient(settings or load_probe_settings())
