# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Probe request/result models."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

TEST_TIME_FORMAT = "%Y/%m/%d %H:%M:%S"


def format_test_time(moment: datetime | None = None) -> str:
    """Local wall-clock stamp in the ``2025/01/31 08:15:00`` style."""
    return (moment or datetime.now()).strftime(TEST_TIME_FORMAT)


@dataclass(frozen=True)
class ProbeRequest:
    url: str
    region: str

    @classmethod
    def from_mapping(cls, data: Any) -> ProbeRequest | None:
        """Build a request from a decoded JSON body; ``None`` when url or region is missing."""
        if not isinstance(data, dict):
            return None
        url = data.get("url")
        region = data.get("region")
        if not isinstance(url, str) or not isinstance(region, str):
            return None
        url = url.strip()
        # The label is echoed back verbatim; blank-only counts as missing.
        if not url or not region.strip():
            return None
        return cls(url=url, region=region)


@dataclass(frozen=True)
class ProbeResult:
    """Metrics for one probe run; all timings in milliseconds, sizes in bytes."""

    region: str
    first_contentful_paint: int
    resource_size: int
    tti: int
    dns_time: int
    tcp_time: int
    test_time: str

    def __post_init__(self) -> None:
        for name in ("first_contentful_paint", "resource_size", "tti", "dns_time", "tcp_time"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative")
        if self.tti < self.first_contentful_paint:
            raise ValueError("tti must not be earlier than first_contentful_paint")

    def to_dict(self) -> dict[str, Any]:
        return {
            "region": self.region,
            "firstContentfulPaint": self.first_contentful_paint,
            "resourceSize": self.resource_size,
            "tti": self.tti,
            "dnsTime": self.dns_time,
            "tcpTime": self.tcp_time,
            "testTime": self.test_time,
        }
