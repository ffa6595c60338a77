# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP client exports."""

from .adapters import StubHttpClient
from .client import HttpClient, create_default_http_client
from .headers import browser_headers, content_length, header_value
from .httpx_client import HttpxClient
from .models import Headers, HttpRequest, HttpResponse

__all__ = [
    "Headers",
    "HttpClient",
    "HttpxClient",
    "HttpRequest",
    "HttpResponse",
    "StubHttpClient",
    "browser_headers",
    "content_length",
    "create_default_http_client",
    "header_value",
]
