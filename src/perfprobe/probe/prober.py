# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Performance prober: validate the target, then measure or simulate it."""

from __future__ import annotations

import random
from collections.abc import Callable

from ..config import STRATEGY_SIMULATE, ProbeSettings, load_probe_settings
from ..errors import ValidationError
from ..http import HttpClient, create_default_http_client
from ..models import ProbeResult
from .strategies import LiveProbeStrategy, ProbeStrategy, SimulatedProbeStrategy

HTTPS_PREFIX = "https://"


def validate_target_url(url: str) -> str:
    """Return the stripped URL, or raise ValidationError unless it uses the HTTPS scheme."""
    candidate = str(url or "").strip()
    if not candidate.lower().startswith(HTTPS_PREFIX) or len(candidate) <= len(HTTPS_PREFIX):
        raise ValidationError("Target URL must be HTTPS (mixed content is not supported)")
    return candidate


def build_strategy(
    settings: ProbeSettings,
    *,
    http_client: HttpClient | None = None,
) -> ProbeStrategy:
    """Instantiate the strategy named by ``settings.strategy``."""
    if settings.strategy == STRATEGY_SIMULATE:
        return SimulatedProbeStrategy(default_region=settings.default_region)
    return LiveProbeStrategy(http_client or create_default_http_client(settings), settings)


class PerformanceProber:
    """
    Runs a single diagnostic probe per call; holds no per-call state.

    Each call draws from its own ``random.Random`` built by ``rng_factory``. Passing
    ``rng`` pins every call to that one instance, which keeps tests reproducible.
    """

    def __init__(
        self,
        settings: ProbeSettings | None = None,
        *,
        http_client: HttpClient | None = None,
        rng: random.Random | None = None,
        rng_factory: Callable[[], random.Random] = random.Random,
        strategy: ProbeStrategy | None = None,
    ):
        self.settings = settings or load_probe_settings()
        self.strategy = strategy or build_strategy(self.settings, http_client=http_client)
        self.rng_factory = (lambda: rng) if rng is not None else rng_factory

    def probe(self, url: str, region: str) -> ProbeResult:
        target = validate_target_url(url)
        return self.strategy.measure(target, region, self.rng_factory())


def probe(
    url: str,
    region: str,
    *,
    settings: ProbeSettings | None = None,
    http_client: HttpClient | None = None,
    rng: random.Random | None = None,
) -> ProbeResult:
    """One-off probe using a freshly built prober; a client created here is closed afterwards."""
    settings = settings or load_probe_settings()
    owned_client = None
    if http_client is None and settings.strategy != STRATEGY_SIMULATE:
        owned_client = http_client = create_default_http_client(settings)
    try:
        return PerformanceProber(settings, http_client=http_client, rng=rng).probe(url, region)
    finally:
        if owned_client is not None:
            owned_client.close()


__all__ = ["HTTPS_PREFIX", "PerformanceProber", "build_strategy", "probe", "validate_target_url"]
