# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Performance probing: URL validation, live/simulated measurement, failure classification."""

from .prober import PerformanceProber, build_strategy, probe, validate_target_url
from .regions import DEFAULT_REGION, REGION_PROFILES, RegionProfile, get_region_profile
from .strategies import LiveProbeStrategy, ProbeStrategy, SimulatedProbeStrategy

__all__ = [
    "DEFAULT_REGION",
    "LiveProbeStrategy",
    "PerformanceProber",
    "ProbeStrategy",
    "REGION_PROFILES",
    "RegionProfile",
    "SimulatedProbeStrategy",
    "build_strategy",
    "get_region_profile",
    "probe",
    "validate_target_url",
]
