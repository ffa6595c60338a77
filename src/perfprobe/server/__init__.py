# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP service layer."""

from .app import PERFORMANCE_TEST_PATH, create_app
from .cors import CORSHeadersMiddleware, cors_headers

__all__ = ["CORSHeadersMiddleware", "PERFORMANCE_TEST_PATH", "cors_headers", "create_app"]
