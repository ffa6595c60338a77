# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers."""

from __future__ import annotations

import socket
import ssl as ssl_module
from collections.abc import Iterator
from enum import Enum

import httpx


class ErrorCategory(str, Enum):
    TIMEOUT = "TIMEOUT"
    SSL_ERROR = "SSL_ERROR"
    CONNECTION_REFUSED = "CONNECTION_REFUSED"
    DNS_ERROR = "DNS_ERROR"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    NONE = "NONE"


# Substring markers for adapters that only hand back an error string.
_MESSAGE_MARKERS: tuple[tuple[ErrorCategory, tuple[str, ...]], ...] = (
    (ErrorCategory.TIMEOUT, ("aborterror", "timed out", "timeout")),
    (ErrorCategory.SSL_ERROR, ("certificate", "ssl")),
    (ErrorCategory.CONNECTION_REFUSED, ("econnrefused", "connection refused")),
    (
        ErrorCategory.DNS_ERROR,
        ("enotfound", "name or service not known", "nodename nor servname", "getaddrinfo", "name resolution"),
    ),
)


def _exception_chain(exc: BaseException) -> Iterator[BaseException]:
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        current = current.__cause__ or current.__context__


def categorize_exception(exc: BaseException) -> ErrorCategory:
    """
    Map Python/httpx exceptions to ErrorCategory.

    httpx wraps socket and TLS failures in ``ConnectError``, so the whole
    ``__cause__``/``__context__`` chain is inspected before settling on the
    generic connection bucket.
    """
    chain = list(_exception_chain(exc))

    if any(isinstance(item, (httpx.TimeoutException, TimeoutError)) for item in chain):
        return ErrorCategory.TIMEOUT

    if any(isinstance(item, (ssl_module.SSLError, ssl_module.CertificateError)) for item in chain):
        return ErrorCategory.SSL_ERROR

    if any(isinstance(item, (socket.gaierror, socket.herror)) for item in chain):
        return ErrorCategory.DNS_ERROR

    if any(isinstance(item, ConnectionRefusedError) for item in chain):
        return ErrorCategory.CONNECTION_REFUSED

    by_message = categorize_error_message(" ".join(str(item) for item in chain))
    if by_message is not ErrorCategory.UNKNOWN_ERROR:
        return by_message

    if any(isinstance(item, (httpx.TransportError, ConnectionError)) for item in chain):
        return ErrorCategory.CONNECTION_ERROR

    return ErrorCategory.UNKNOWN_ERROR


def categorize_error_message(message: str | None, error_type: str | None = None) -> ErrorCategory:
    """Best-effort classification from an error's text and type name."""
    haystack = f"{error_type or ''} {message or ''}".lower()
    if not haystack.strip():
        return ErrorCategory.UNKNOWN_ERROR
    for category, markers in _MESSAGE_MARKERS:
        if any(marker in haystack for marker in markers):
            return category
    return ErrorCategory.UNKNOWN_ERROR


def error_category_to_reason(category: ErrorCategory | None) -> str:
    """User-facing reason string."""
    mapping = {
        ErrorCategory.TIMEOUT: "Network timeout during probe",
        ErrorCategory.SSL_ERROR: "TLS/certificate issue",
        ErrorCategory.CONNECTION_REFUSED: "Connection refused by target",
        ErrorCategory.DNS_ERROR: "DNS resolution failure",
        ErrorCategory.CONNECTION_ERROR: "Network connectivity issue",
        ErrorCategory.UNKNOWN_ERROR: "Network error during probe",
        ErrorCategory.NONE: "",
        None: "",
    }
    return mapping.get(category, "Probe failed due to network error")


class PerfProbeError(Exception):
    """Base class for errors raised by perfprobe."""


class ValidationError(PerfProbeError):
    """The caller supplied an input the prober refuses to run against."""


class ProbeError(PerfProbeError):
    """The outbound measurement failed for an environmental reason."""

    category: ErrorCategory = ErrorCategory.UNKNOWN_ERROR

    def __init__(self, message: str, *, url: str | None = None):
        super().__init__(message)
        self.url = url

    @property
    def reason(self) -> str:
        return error_category_to_reason(self.category)


class ProbeTimeoutError(ProbeError):
    category = ErrorCategory.TIMEOUT


class TLSFailureError(ProbeError):
    category = ErrorCategory.SSL_ERROR


class ConnectionRefusedProbeError(ProbeError):
    category = ErrorCategory.CONNECTION_REFUSED


class DNSFailureError(ProbeError):
    category = ErrorCategory.DNS_ERROR


class TransportError(ProbeError):
    category = ErrorCategory.CONNECTION_ERROR


FALLBACK_TEST_URL = "https://www.aliyun.com"


def probe_error_for(
    category: ErrorCategory | None,
    *,
    url: str,
    message: str | None = None,
    timeout: float | None = None,
) -> ProbeError:
    """Build the ProbeError subclass (and remediation message) for a transport failure."""
    if category == ErrorCategory.TIMEOUT:
        bound = f" ({timeout:g}s)" if timeout else ""
        return ProbeTimeoutError(
            f"Request timed out{bound}: target URL {url} responded too slowly, or the probe's egress IP is being blocked",
            url=url,
        )
    if category == ErrorCategory.SSL_ERROR:
        return TLSFailureError(
            "TLS certificate error: the target URL's HTTPS certificate is invalid or expired, "
            "so a secure connection could not be established",
            url=url,
        )
    if category == ErrorCategory.CONNECTION_REFUSED:
        return ConnectionRefusedProbeError(
            "Connection refused: the target server rejected the probe's request (anti-bot or hotlink protection)",
            url=url,
        )
    if category == ErrorCategory.DNS_ERROR:
        return DNSFailureError(
            "DNS resolution failed: the target URL does not exist or its DNS is misconfigured",
            url=url,
        )
    detail = message or error_category_to_reason(category) or "unknown error"
    return TransportError(
        f"Failed to reach target URL: {detail} (consider another test URL, e.g. {FALLBACK_TEST_URL})",
        url=url,
    )


__all__ = [
    "ConnectionRefusedProbeError",
    "DNSFailureError",
    "ErrorCategory",
    "FALLBACK_TEST_URL",
    "PerfProbeError",
    "ProbeError",
    "ProbeTimeoutError",
    "TLSFailureError",
    "TransportError",
    "ValidationError",
    "categorize_error_message",
    "categorize_exception",
    "error_category_to_reason",
    "probe_error_for",
]
