# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
perfprobe package entrypoint.

This package measures (or simulates) coarse web-performance metrics for a single
HTTPS URL from a labelled test region. HTTP behavior is abstracted behind an
injectable client interface, and results are modeled with typed dataclasses.
"""

from .config import ProbeSettings, load_probe_settings
from .errors import (
    ConnectionRefusedProbeError,
    DNSFailureError,
    ErrorCategory,
    PerfProbeError,
    ProbeError,
    ProbeTimeoutError,
    TLSFailureError,
    TransportError,
    ValidationError,
)
from .http import (
    HttpClient,
    HttpRequest,
    HttpResponse,
    HttpxClient,
    StubHttpClient,
    create_default_http_client,
)
from .log import setup_logging
from .models import ProbeRequest, ProbeResult
from .probe import (
    REGION_PROFILES,
    LiveProbeStrategy,
    PerformanceProber,
    RegionProfile,
    SimulatedProbeStrategy,
    probe,
)
from .runtime import PerfProbe
from .version import __version__

__all__ = [
    "ConnectionRefusedProbeError",
    "DNSFailureError",
    "ErrorCategory",
    "HttpClient",
    "HttpRequest",
    "HttpResponse",
    "HttpxClient",
    "LiveProbeStrategy",
    "PerfProbe",
    "PerfProbeError",
    "PerformanceProber",
    "ProbeError",
    "ProbeRequest",
    "ProbeResult",
    "ProbeSettings",
    "ProbeTimeoutError",
    "REGION_PROFILES",
    "RegionProfile",
    "SimulatedProbeStrategy",
    "StubHttpClient",
    "TLSFailureError",
    "TransportError",
    "ValidationError",
    "create_default_http_client",
    "load_probe_settings",
    "probe",
    "setup_logging",
    "__version__",
]
