# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""perfprobe CLI."""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any

from ..config import STRATEGY_SIMULATE, ProbeSettings, clamp_timeout, load_probe_settings
from ..errors import ProbeError, ValidationError
from ..log import setup_logging
from ..models import ProbeResult
from ..probe import DEFAULT_REGION
from ..runtime import PerfProbe

EXIT_OK = 0
EXIT_PROBE_FAILED = 1
EXIT_INVALID_INPUT = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="perfprobe web performance diagnostic probe")
    parser.add_argument("url", help="HTTPS URL to probe")
    parser.add_argument("--region", default=DEFAULT_REGION, help=f"Test-origin region label (default: {DEFAULT_REGION})")
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output JSON instead of human-friendly summary",
    )
    parser.add_argument(
        "--simulate",
        action="store_true",
        help="Fabricate region-biased metrics instead of fetching the URL",
    )
    parser.add_argument(
        "--ignore-ssl-errors",
        action="store_true",
        help="Skip TLS verification (useful for lab/self-signed targets)",
    )
    parser.add_argument("--timeout", type=float, default=None, help="Request timeout in seconds")
    return parser


def _print_json(data: dict[str, Any] | Any) -> None:
    payload = data.to_dict() if hasattr(data, "to_dict") else data
    json.dump(payload, sys.stdout, indent=2, ensure_ascii=False)
    sys.stdout.write("\n")


def _pretty_print(result: ProbeResult) -> None:
    print(f"[perfprobe] Region: {result.region}")
    print(f"First contentful paint: {result.first_contentful_paint} ms")
    print(f"Time to interactive: {result.tti} ms")
    print(f"Resource size: {result.resource_size / 1024:.1f} KiB ({result.resource_size} bytes)")
    print(f"DNS: {result.dns_time} ms, TCP: {result.tcp_time} ms")
    print(f"Tested at: {result.test_time}")


def main(argv: list[str] | None = None) -> int:
    setup_logging()
    parser = build_parser()
    args = parser.parse_args(argv)

    settings: ProbeSettings = load_probe_settings()
    if args.simulate:
        settings.strategy = STRATEGY_SIMULATE
    if args.ignore_ssl_errors:
        settings.verify_ssl = False
    if args.timeout is not None:
        settings.timeout = clamp_timeout(args.timeout)

    with PerfProbe(settings) as runtime:
        try:
            result = runtime.probe(args.url, args.region)
        except ValidationError as exc:
            print(f"error: {exc}", file=sys.stderr)
            return EXIT_INVALID_INPUT
        except ProbeError as exc:
            print(f"probe failed: {exc}", file=sys.stderr)
            return EXIT_PROBE_FAILED

    if args.json:
        _print_json(result)
    else:
        _pretty_print(result)

    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
