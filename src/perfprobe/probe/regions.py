# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Baseline metrics per test-origin region, used by the simulated strategy."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType


@dataclass(frozen=True)
class RegionProfile:
    """Baseline ``fcp``/``tti``/``dns``/``tcp`` in milliseconds and ``resource`` in bytes."""

    fcp: int
    resource: int
    tti: int
    dns: int
    tcp: int


DEFAULT_REGION = "beijing"

_PAGE_BYTES = 512 * 1024

REGION_PROFILES: Mapping[str, RegionProfile] = MappingProxyType(
    {
        "beijing": RegionProfile(fcp=1200, resource=_PAGE_BYTES, tti=2800, dns=60, tcp=90),
        "shanghai": RegionProfile(fcp=1000, resource=_PAGE_BYTES, tti=2500, dns=45, tcp=70),
        "hangzhou": RegionProfile(fcp=1100, resource=_PAGE_BYTES, tti=2600, dns=50, tcp=80),
        "shenzhen": RegionProfile(fcp=1300, resource=_PAGE_BYTES, tti=2900, dns=70, tcp=100),
        "guangzhou": RegionProfile(fcp=1250, resource=_PAGE_BYTES, tti=2850, dns=65, tcp=95),
        "chengdu": RegionProfile(fcp=1500, resource=_PAGE_BYTES, tti=3200, dns=90, tcp=130),
        "hongkong": RegionProfile(fcp=1600, resource=_PAGE_BYTES, tti=3400, dns=120, tcp=180),
        "singapore": RegionProfile(fcp=1900, resource=_PAGE_BYTES, tti=3900, dns=160, tcp=220),
        "tokyo": RegionProfile(fcp=2100, resource=_PAGE_BYTES, tti=4200, dns=180, tcp=240),
        "us-west": RegionProfile(fcp=2600, resource=_PAGE_BYTES, tti=4900, dns=240, tcp=300),
        "us-east": RegionProfile(fcp=3000, resource=_PAGE_BYTES, tti=5600, dns=280, tcp=350),
        "frankfurt": RegionProfile(fcp=2800, resource=_PAGE_BYTES, tti=5200, dns=260, tcp=320),
    }
)


def get_region_profile(region: str | None, *, default: str = DEFAULT_REGION) -> RegionProfile:
    """Look up ``region`` case-insensitively; unknown keys resolve to the default profile."""
    key = str(region or "").strip().lower()
    profile = REGION_PROFILES.get(key)
    if profile is not None:
        return profile
    return REGION_PROFILES.get(default, REGION_PROFILES[DEFAULT_REGION])


__all__ = ["DEFAULT_REGION", "REGION_PROFILES", "RegionProfile", "get_region_profile"]
