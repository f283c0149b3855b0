"""
Fallback Classifier

Maps the outcome of an engine call onto a FallbackReason.

Two entry points:
- classify_request_error(error): label a caught exception
- resolve_fallback_reason(context): label a whole request outcome, in
  fixed priority order (configuration, session, status, error)

Both are total. Whatever the orchestrator hands over, a label comes back;
nothing here raises.

Usage:
    from interaction_contract.fallback.classify import resolve_fallback_reason

    reason = resolve_fallback_reason(FallbackContext(
        engine_configured=settings.is_configured,
        has_session=session is not None,
        status_code=response.status_code,
    ))
"""

import asyncio
import re
from typing import Any, Mapping, Optional, Set, Union

import httpx

from .models import FallbackContext, FallbackReason


TIMEOUT_ERROR_NAMES = frozenset(["TimeoutError", "AbortError", "TimeoutException"])
TIMEOUT_MESSAGE_MARKERS = ("timeout", "timed out", "aborted")
NETWORK_MESSAGE_MARKERS = ("fetch failed", "connection refused", "connection reset")

# Status forwarded by a client wrapper, e.g. "Engine request failed: 503 ..."
# or "status 502". Bare numbers elsewhere in a message do not count.
_WRAPPED_STATUS_RE = re.compile(
    r"(?:failed|error|status(?:\s+code)?|response)\s*[:=]?\s*\(?([45]\d{2})\b",
    re.IGNORECASE,
)


def _error_message(error: Any) -> str:
    try:
        return str(error)
    except Exception:
        # A broken __str__ must not turn classification into a crash.
        return ""


def _error_names(error: Any) -> Set[str]:
    names = {cls.__name__ for cls in type(error).__mro__}
    try:
        name_attr = getattr(error, "name", None)
    except Exception:
        name_attr = None
    if isinstance(name_attr, str):
        names.add(name_attr)
    return names


def _is_success(status_code: int) -> bool:
    return 200 <= status_code < 300


def _status_code(error: Any) -> Optional[int]:
    """Status carried on the error itself or on its `.response`."""
    try:
        candidates = [getattr(error, "status_code", None)]
        response = getattr(error, "response", None)
        if response is not None:
            candidates.append(getattr(response, "status_code", None))
    except Exception:
        # httpx raises RuntimeError when .response/.request is unset.
        return None

    for status in candidates:
        if isinstance(status, int) and not isinstance(status, bool):
            return status
    return None


def _is_timeout_type(error: Any) -> bool:
    if isinstance(error, (TimeoutError, asyncio.TimeoutError, httpx.TimeoutException)):
        return True
    return bool(_error_names(error) & TIMEOUT_ERROR_NAMES)


def _has_timeout_message(message: str) -> bool:
    return any(marker in message for marker in TIMEOUT_MESSAGE_MARKERS)


def _is_non_ok(error: Any, message: str) -> bool:
    status = _status_code(error)
    if status is not None:
        return not _is_success(status)
    return _WRAPPED_STATUS_RE.search(message) is not None


def _is_network(error: Any, message: str) -> bool:
    if isinstance(error, (TypeError, ConnectionError, httpx.TransportError)):
        return True
    return any(marker in message for marker in NETWORK_MESSAGE_MARKERS)


def classify_request_error(error: Any) -> FallbackReason:
    """
    Classify an exception caught around an engine call.

    Precedence:
        1. timeout         - timeout/abort exception types or names
        2. non_ok_response - non-2xx status on the error or in its message
        3. timeout         - timeout/abort wording in the message
        4. network_error   - failed fetch / connection-level errors
        5. unknown_error   - anything else, including None

    Args:
        error: Whatever the orchestrator caught

    Returns:
        FallbackReason, never raises
    """
    if error is None:
        return FallbackReason.UNKNOWN_ERROR

    message = _error_message(error).lower()

    if _is_timeout_type(error):
        return FallbackReason.TIMEOUT
    # A status means the call completed, even if the body says "Gateway Timeout".
    if _is_non_ok(error, message):
        return FallbackReason.NON_OK_RESPONSE
    if _has_timeout_message(message):
        return FallbackReason.TIMEOUT
    if _is_network(error, message):
        return FallbackReason.NETWORK_ERROR
    return FallbackReason.UNKNOWN_ERROR


def resolve_fallback_reason(
    context: Union[FallbackContext, Mapping[str, Any]],
) -> Optional[FallbackReason]:
    """
    Decide why the engine result could not be used for this request.

    Priority (first match wins):
        1. engine not configured           -> not_configured
        2. no authenticated session        -> no_session
        3. status present and not 2xx      -> non_ok_response
        4. caught error present            -> classify_request_error(error)
        5. otherwise                       -> None (no fallback needed)
    """
    if not isinstance(context, FallbackContext):
        context = FallbackContext.model_validate(context)

    if not context.engine_configured:
        return FallbackReason.NOT_CONFIGURED
    if not context.has_session:
        return FallbackReason.NO_SESSION
    if context.status_code is not None and not _is_success(context.status_code):
        return FallbackReason.NON_OK_RESPONSE
    if context.error is not None:
        return classify_request_error(context.error)
    return None
