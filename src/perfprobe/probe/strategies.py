# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Measurement strategies: a live timed fetch, or region-biased simulation."""

from __future__ import annotations

import logging
import random
import time
from abc import ABC, abstractmethod
from collections.abc import Callable

from ..config import STRATEGY_LIVE, STRATEGY_SIMULATE, ProbeSettings
from ..errors import ErrorCategory, categorize_error_message, probe_error_for
from ..http import HttpClient, HttpRequest, browser_headers, content_length
from ..models import ProbeResult, format_test_time
from .regions import DEFAULT_REGION, get_region_profile

logger = logging.getLogger(__name__)

TTI_JITTER_MS = 1500
DNS_RANGE_MS = 800
TCP_RANGE_MS = 1000
FALLBACK_RESOURCE_MIN = 100 * 1024
FALLBACK_RESOURCE_SPAN = 500 * 1024
SIMULATION_JITTER = 0.2


class ProbeStrategy(ABC):
    name: str = "base"

    @abstractmethod
    def measure(self, url: str, region: str, rng: random.Random) -> ProbeResult: ...

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"{self.__class__.__name__}(name={self.name!r})"


class LiveProbeStrategy(ProbeStrategy):
    """
    Time one real GET against the target.

    Only the full-response latency is measured. TTI, DNS and TCP timings are
    synthesized because the transport does not expose per-phase timings and no
    browser renders the page.
    """

    name = STRATEGY_LIVE

    def __init__(
        self,
        http_client: HttpClient,
        settings: ProbeSettings,
        *,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.http_client = http_client
        self.settings = settings
        self.clock = clock

    def measure(self, url: str, region: str, rng: random.Random) -> ProbeResult:
        dns_time = rng.randrange(DNS_RANGE_MS)
        tcp_time = rng.randrange(TCP_RANGE_MS)

        request = HttpRequest(
            url=url,
            method="GET",
            headers=browser_headers(self.settings),
            timeout=self.settings.timeout,
            allow_redirects=self.settings.allow_redirects,
        )
        started = self.clock()
        response = self.http_client.request(request)
        elapsed_ms = max(0, int((self.clock() - started) * 1000))

        if not response.ok:
            category = response.error_category
            if category in (None, ErrorCategory.UNKNOWN_ERROR):
                category = categorize_error_message(response.error_message, response.error_type)
            logger.warning(
                "Probe of %s failed (%s): %s: %s",
                url,
                category.value,
                response.error_type or "error",
                response.error_message,
            )
            raise probe_error_for(
                category,
                url=url,
                message=response.error_message,
                timeout=request.timeout,
            )

        resource_size = content_length(response.headers)
        if resource_size is None:
            resource_size = rng.randrange(FALLBACK_RESOURCE_SPAN) + FALLBACK_RESOURCE_MIN

        logger.debug("Probe of %s answered %s in %d ms", url, response.status_code, elapsed_ms)
        return ProbeResult(
            region=region,
            first_contentful_paint=elapsed_ms,
            resource_size=resource_size,
            tti=elapsed_ms + rng.randrange(TTI_JITTER_MS),
            dns_time=dns_time,
            tcp_time=tcp_time,
            test_time=format_test_time(),
        )


class SimulatedProbeStrategy(ProbeStrategy):
    """Fabricate metrics from the region's baseline profile with ±10% jitter."""

    name = STRATEGY_SIMULATE

    def __init__(self, *, default_region: str = DEFAULT_REGION):
        self.default_region = default_region

    @staticmethod
    def _jitter(value: int, rng: random.Random) -> int:
        return int(value * (1 + (rng.random() - 0.5) * SIMULATION_JITTER))

    def measure(self, url: str, region: str, rng: random.Random) -> ProbeResult:
        profile = get_region_profile(region, default=self.default_region)
        fcp = self._jitter(profile.fcp, rng)
        resource = self._jitter(profile.resource, rng)
        tti = self._jitter(profile.tti, rng)
        dns = self._jitter(profile.dns, rng)
        tcp = self._jitter(profile.tcp, rng)
        return ProbeResult(
            region=region,
            first_contentful_paint=fcp,
            resource_size=resource,
            tti=max(tti, fcp),
            dns_time=dns,
            tcp_time=tcp,
            test_time=format_test_time(),
        )


__all__ = [
    "LiveProbeStrategy",
    "ProbeStrategy",
    "SimulatedProbeStrategy",
]
