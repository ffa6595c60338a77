# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Canned HttpClient for exercising the live strategy without a network."""

from __future__ import annotations

from .client import HttpClient
from .models import HttpRequest, HttpResponse

UNCONFIGURED_MESSAGE = "No stubbed response configured"


class StubHttpClient(HttpClient):
    """
    Answers each target URL with a preset response, success or categorized failure.

    Every request is recorded so callers can assert how many outbound calls a
    measurement made (none at all for rejected URLs or simulated runs).
    """

    def __init__(self, responses: dict[str, HttpResponse] | None = None):
        self._responses = responses or {}
        self.requests: list[HttpRequest] = []

    def add(self, url: str, response: HttpResponse) -> None:
        self._responses[url] = response

    def request(self, request: HttpRequest) -> HttpResponse:
        self.requests.append(request)
        response = self._responses.get(request.url)
        if response is not None:
            return response
        return HttpResponse(ok=False, url=request.url, error_message=UNCONFIGURED_MESSAGE)

    def close(self) -> None:
        return None
