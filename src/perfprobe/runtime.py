# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""High-level perfprobe facade shared by the CLI and the HTTP service."""

from __future__ import annotations

import random
from contextlib import suppress

from .config import STRATEGY_SIMULATE, ProbeSettings, load_probe_settings
from .http.client import HttpClient, create_default_http_client
from .models import ProbeRequest, ProbeResult
from .probe import PerformanceProber


class PerfProbe:
    """
    Convenience wrapper that owns the settings, the HTTP client and the prober.

    One instance is meant to live for the whole process so concurrent requests
    share a single connection pool.
    """

    def __init__(
        self,
        settings: ProbeSettings | None = None,
        *,
        http_client: HttpClient | None = None,
        rng: random.Random | None = None,
    ):
        self.settings = settings or load_probe_settings()
        if http_client is None and self.settings.strategy != STRATEGY_SIMULATE:
            http_client = create_default_http_client(self.settings)
        self.http_client = http_client
        self.prober = PerformanceProber(self.settings, http_client=http_client, rng=rng)

    def probe(self, url: str, region: str) -> ProbeResult:
        return self.prober.probe(url, region)

    def run(self, request: ProbeRequest) -> ProbeResult:
        return self.probe(request.url, request.region)

    def close(self) -> None:
        with suppress(Exception):
            if self.http_client is not None and hasattr(self.http_client, "close"):
                self.http_client.close()

    def __enter__(self) -> PerfProbe:
        return self

    def __exit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        self.close()
