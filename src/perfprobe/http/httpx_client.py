# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx-backed HttpClient implementation."""

from __future__ import annotations

import asyncio

import httpx

from ..config import ProbeSettings, load_probe_settings
from ..errors import categorize_exception
from .client import HttpClient
from .models import HttpRequest, HttpResponse


class HttpxClient(HttpClient):
    """
    Blocking facade over ``httpx.AsyncClient``.

    httpx timeouts apply per network operation, so a server trickling its status
    line or headers could keep a request alive indefinitely. Each exchange runs under
    ``asyncio.wait_for`` instead, which cancels the task (and drops the connection)
    once the configured timeout has elapsed overall.

    Every call runs its own event loop, so instances are safe to share across the
    server's worker threads.
    """

    def __init__(self, settings: ProbeSettings | None = None, transport: httpx.AsyncBaseTransport | None = None):
        self.settings = settings or load_probe_settings()
        self._transport = transport
        self._ssl_context = None
        if transport is None:
            self._ssl_context = httpx.create_ssl_context(verify=self.settings.verify_ssl)

    def _new_client(self, timeout: float) -> httpx.AsyncClient:
        if self._transport is not None:
            return httpx.AsyncClient(
                follow_redirects=self.settings.allow_redirects,
                timeout=timeout,
                transport=self._transport,
            )
        return httpx.AsyncClient(
            follow_redirects=self.settings.allow_redirects,
            timeout=timeout,
            verify=self._ssl_context,
        )

    def request(self, request: HttpRequest) -> HttpResponse:
        headers = dict(request.headers or {})
        headers.setdefault("User-Agent", self.settings.user_agent)
        timeout = request.timeout if request.timeout is not None else self.settings.timeout

        try:
            return asyncio.run(self._request_within(request, headers, timeout))
        except Exception as exc:  # noqa: BLE001
            return HttpResponse(
                ok=False,
                url=request.url,
                error_message=str(exc) or type(exc).__name__,
                error_type=type(exc).__name__,
                error_category=categorize_exception(exc),
            )

    async def _request_within(self, request: HttpRequest, headers: dict[str, str], timeout: float) -> HttpResponse:
        try:
            return await asyncio.wait_for(self._send(request, headers, timeout), timeout)
        except asyncio.TimeoutError as exc:
            raise httpx.ReadTimeout(f"No complete response within {timeout:g}s") from exc

    async def _send(self, request: HttpRequest, headers: dict[str, str], timeout: float) -> HttpResponse:
        max_body_bytes = self.settings.max_body_bytes
        if max_body_bytes <= 0:
            max_body_bytes = 16 * 1024 * 1024

        async with self._new_client(timeout) as client:
            async with client.stream(
                request.method,
                request.url,
                headers=headers,
                follow_redirects=request.allow_redirects,
            ) as resp:
                bytes_read = 0
                truncated = False
                async for chunk in resp.aiter_bytes():
                    bytes_read += len(chunk)
                    if bytes_read >= max_body_bytes:
                        truncated = True
                        break

        return HttpResponse(
            ok=True,
            status_code=resp.status_code,
            headers=dict(resp.headers),
            url=str(resp.url),
            meta={
                "body_truncated": truncated,
                "body_bytes_read": bytes_read,
                "body_bytes_limit": max_body_bytes,
            },
        )

    def close(self) -> None:
        # Clients live for a single exchange; nothing is pooled between calls.
        return None
