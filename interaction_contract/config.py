"""
Engine configuration.

Environment Variables:
- ENGINE_URL: Base URL of the remote analysis engine (unset = engine disabled)
- ENGINE_TIMEOUT_SECONDS: Request timeout the orchestrator should apply
- LOG_LEVEL: Root log level for main.py (default INFO)

Read fresh on every call; nothing is cached at import time.
"""

import logging
import os
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 5.0


@dataclass(frozen=True)
class EngineSettings:
    engine_url: str = ""
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    @property
    def is_configured(self) -> bool:
        """Check if the engine can be called at all."""
        return bool(self.engine_url)


def _parse_timeout(raw: str) -> float:
    try:
        value = float(raw)
    except ValueError:
        logger.warning(f"Invalid ENGINE_TIMEOUT_SECONDS={raw!r}, using {DEFAULT_TIMEOUT_SECONDS}")
        return DEFAULT_TIMEOUT_SECONDS
    if value <= 0:
        logger.warning(f"Non-positive ENGINE_TIMEOUT_SECONDS={raw!r}, using {DEFAULT_TIMEOUT_SECONDS}")
        return DEFAULT_TIMEOUT_SECONDS
    return value


def get_engine_settings() -> EngineSettings:
    engine_url = os.getenv("ENGINE_URL", "").strip().rstrip("/")
    raw_timeout = os.getenv("ENGINE_TIMEOUT_SECONDS", "")
    timeout = _parse_timeout(raw_timeout) if raw_timeout else DEFAULT_TIMEOUT_SECONDS
    return EngineSettings(engine_url=engine_url, timeout_seconds=timeout)
