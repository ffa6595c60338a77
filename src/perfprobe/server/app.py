# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""FastAPI service exposing ``POST /performance-test``."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from json import JSONDecodeError
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..errors import PerfProbeError
from ..models import ProbeRequest
from ..runtime import PerfProbe
from .cors import CORSHeadersMiddleware

logger = logging.getLogger(__name__)

PERFORMANCE_TEST_PATH = "/performance-test"

MSG_OK = "测试成功"
MSG_NOT_FOUND = "接口不存在"
MSG_MISSING_PARAMS = "缺少参数：url或region"
MSG_INTERNAL_ERROR = "测试内部错误"


def envelope(code: int, msg: str, data: Any = None) -> JSONResponse:
    content: dict[str, Any] = {"code": code, "msg": msg}
    if data is not None:
        content["data"] = data
    return JSONResponse(status_code=code, content=content)


def create_app(runtime: PerfProbe | None = None) -> FastAPI:
    """
    Build the service app.

    An injected runtime stays owned by the caller; otherwise one is created on
    startup from environment settings and closed on shutdown.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        owned = None
        if getattr(app.state, "perfprobe", None) is None:
            owned = app.state.perfprobe = PerfProbe()
        try:
            yield
        finally:
            if owned is not None:
                owned.close()
                app.state.perfprobe = None

    app = FastAPI(
        title="perfprobe",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        lifespan=lifespan,
    )
    app.state.perfprobe = runtime
    app.add_middleware(CORSHeadersMiddleware)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
        # Unknown paths and wrong methods both read as "no such endpoint".
        if exc.status_code in (404, 405):
            return envelope(404, MSG_NOT_FOUND)
        return envelope(exc.status_code, str(exc.detail))

    @app.post(PERFORMANCE_TEST_PATH)
    async def performance_test(request: Request) -> JSONResponse:
        try:
            body = await request.json()
        except (JSONDecodeError, UnicodeDecodeError):
            body = None
        probe_request = ProbeRequest.from_mapping(body)
        if probe_request is None:
            return envelope(400, MSG_MISSING_PARAMS)

        perfprobe: PerfProbe = request.app.state.perfprobe
        try:
            result = await run_in_threadpool(perfprobe.run, probe_request)
        except PerfProbeError as exc:
            logger.warning("Performance test for %s (%s) failed: %s", probe_request.url, probe_request.region, exc)
            return envelope(500, str(exc))
        except Exception as exc:  # noqa: BLE001
            logger.exception("Performance test for %s crashed", probe_request.url)
            return envelope(500, str(exc) or MSG_INTERNAL_ERROR)

        return envelope(200, MSG_OK, result.to_dict())

    return app


__all__ = [
    "MSG_INTERNAL_ERROR",
    "MSG_MISSING_PARAMS",
    "MSG_NOT_FOUND",
    "MSG_OK",
    "PERFORMANCE_TEST_PATH",
    "create_app",
    "envelope",
]
