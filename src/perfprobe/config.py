# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for perfprobe."""

import os
from dataclasses import dataclass

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)
DEFAULT_ACCEPT_LANGUAGE = "zh-CN,zh;q=0.9,en;q=0.8"

STRATEGY_LIVE = "live"
STRATEGY_SIMULATE = "simulate"
STRATEGIES = frozenset({STRATEGY_LIVE, STRATEGY_SIMULATE})

MIN_TIMEOUT = 1.0
MAX_TIMEOUT = 60.0


def _float_env(name: str, default: float) -> float:
    try:
        value = os.getenv(name)
        return float(value) if value is not None else default
    except ValueError:
        return default


def _int_env(name: str, default: int) -> int:
    try:
        value = os.getenv(name)
        return int(value) if value is not None else default
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _choice_env(name: str, default: str, choices: frozenset[str]) -> str:
    value = os.getenv(name)
    if value is None:
        return default
    value = value.strip().lower()
    return value if value in choices else default


def clamp_timeout(value: float) -> float:
    """Keep the outbound timeout bounded so a probe can never hang indefinitely."""
    return min(max(value, MIN_TIMEOUT), MAX_TIMEOUT)


@dataclass
class ProbeSettings:
    """Outbound HTTP and probe defaults."""

    timeout: float = 15.0
    user_agent: str = DEFAULT_USER_AGENT
    accept_language: str = DEFAULT_ACCEPT_LANGUAGE
    allow_redirects: bool = True
    # Relaxed TLS is a measurement convenience for lab targets; it stays opt-in.
    verify_ssl: bool = True
    max_body_bytes: int = 16 * 1024 * 1024
    strategy: str = STRATEGY_LIVE
    default_region: str = "beijing"
    host: str = "0.0.0.0"
    port: int = 8000

    @classmethod
    def from_env(cls) -> "ProbeSettings":
        """Create settings from environment variables (evaluated at call time)."""
        max_body_bytes = _int_env("PERFPROBE_HTTP_MAX_BODY_BYTES", cls.max_body_bytes)
        if max_body_bytes <= 0:
            max_body_bytes = cls.max_body_bytes
        port = _int_env("PERFPROBE_PORT", cls.port)
        if not 0 < port < 65536:
            port = cls.port
        return cls(
            timeout=clamp_timeout(_float_env("PERFPROBE_HTTP_TIMEOUT", cls.timeout)),
            user_agent=os.getenv("PERFPROBE_USER_AGENT", cls.user_agent),
            accept_language=os.getenv("PERFPROBE_ACCEPT_LANGUAGE", cls.accept_language),
            allow_redirects=_bool_env("PERFPROBE_HTTP_REDIRECTS", cls.allow_redirects),
            verify_ssl=_bool_env("PERFPROBE_HTTP_VERIFY_SSL", cls.verify_ssl),
            max_body_bytes=max_body_bytes,
            strategy=_choice_env("PERFPROBE_STRATEGY", cls.strategy, STRATEGIES),
            default_region=os.getenv("PERFPROBE_DEFAULT_REGION", cls.default_region).strip().lower() or cls.default_region,
            host=os.getenv("PERFPROBE_HOST", cls.host),
            port=port,
        )


def load_probe_settings() -> ProbeSettings:
    """Load probe settings from environment with sensible defaults."""
    return ProbeSettings.from_env()
