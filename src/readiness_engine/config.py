"""Environment-variable-based configuration for the readiness engine."""

from __future__ import annotations

import os

ENGINE_VERSION: str = os.environ.get("READINESS_ENGINE_VERSION", "1.0.0")
KB_VERSION: str = os.environ.get("READINESS_KB_VERSION", "1.0")
DEFAULT_TIMEZONE: str = os.environ.get("READINESS_TIMEZONE", "Europe/Amsterdam")
DEFAULT_ACWR_WINDOW_DAYS: int = int(os.environ.get("READINESS_ACWR_WINDOW_DAYS", "28"))
DEFAULT_HISTORY_DAYS: int = int(os.environ.get("READINESS_HISTORY_DAYS", "28"))
