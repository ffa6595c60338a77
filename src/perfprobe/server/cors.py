# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Unconditional CORS headers and preflight short-circuit."""

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

ALLOW_METHODS = "GET, POST, OPTIONS, PUT, DELETE"
ALLOW_HEADERS = "Content-Type, Authorization, X-Requested-With"
MAX_AGE = "86400"


def cors_headers(origin: str | None) -> dict[str, str]:
    return {
        "Access-Control-Allow-Origin": origin or "*",
        "Access-Control-Allow-Methods": ALLOW_METHODS,
        "Access-Control-Allow-Headers": ALLOW_HEADERS,
        "Access-Control-Allow-Credentials": "true",
        "Access-Control-Max-Age": MAX_AGE,
    }


class CORSHeadersMiddleware(BaseHTTPMiddleware):
    """Echo the caller's Origin on every response; answer any OPTIONS with 204."""

    async def dispatch(self, request: Request, call_next):
        if request.method == "OPTIONS":
            response = Response(status_code=204)
        else:
            response = await call_next(request)

        response.headers.update(cors_headers(request.headers.get("origin")))
        return response
