# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Run the perfprobe HTTP service under uvicorn."""

from __future__ import annotations

import argparse

import uvicorn

from ..config import STRATEGY_SIMULATE, ProbeSettings, load_probe_settings
from ..log import setup_logging
from ..runtime import PerfProbe
from .app import create_app


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="perfprobe HTTP service (POST /performance-test)")
    parser.add_argument("--host", default=None, help="Bind address (default: PERFPROBE_HOST or 0.0.0.0)")
    parser.add_argument("--port", type=int, default=None, help="Bind port (default: PERFPROBE_PORT or 8000)")
    parser.add_argument(
        "--simulate",
        action="store_true",
        help="Serve region-biased simulated metrics instead of fetching targets",
    )
    parser.add_argument(
        "--ignore-ssl-errors",
        action="store_true",
        help="Skip TLS verification when fetching targets (lab/self-signed targets only)",
    )
    parser.add_argument("--log-level", default=None, help="Logging level (default: PERFPROBE_LOG_LEVEL or WARNING)")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    settings: ProbeSettings = load_probe_settings()
    if args.simulate:
        settings.strategy = STRATEGY_SIMULATE
    if args.ignore_ssl_errors:
        settings.verify_ssl = False

    with PerfProbe(settings) as runtime:
        uvicorn.run(
            create_app(runtime),
            host=args.host or settings.host,
            port=args.port or settings.port,
            log_level=(args.log_level or "info").lower(),
        )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
