"""
Fallback Reason Models

Closed taxonomy explaining why the engine's answer was not used for a
request. The string values are consumed by the observability pipeline and
are part of a versioned contract: never rename a value without bumping
FALLBACK_CONTRACT_VERSION.
"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field


FALLBACK_CONTRACT_VERSION = "1"


class FallbackReason(str, Enum):
    NOT_CONFIGURED = "not_configured"
    NO_SESSION = "no_session"
    TIMEOUT = "timeout"
    NETWORK_ERROR = "network_error"
    NON_OK_RESPONSE = "non_ok_response"
    UNKNOWN_ERROR = "unknown_error"


class FallbackContext(BaseModel):
    """
    What the orchestrator knows after attempting (or skipping) an engine call.
    """
    engine_configured: bool = Field(alias="engineConfigured")
    has_session: bool = Field(alias="hasSession")
    status_code: Optional[int] = Field(default=None, alias="statusCode")
    error: Optional[Any] = Field(
        default=None,
        description="Exception caught around the engine call, if any",
    )

    class Config:
        populate_by_name = True
        arbitrary_types_allowed = True
