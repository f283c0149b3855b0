"""
Engine Fallback Classifier Tests

Covers error classification, request-outcome priority order and the
telemetry events derived from fallback reasons.
"""

import asyncio
import logging

import httpx
import pytest

from interaction_contract.fallback.models import (
    FALLBACK_CONTRACT_VERSION,
    FallbackContext,
    FallbackReason,
)
from interaction_contract.fallback.errors import EngineRequestError
from interaction_contract.fallback.classify import (
    classify_request_error,
    resolve_fallback_reason,
)
from interaction_contract.fallback.derive import (
    FALLBACK_EVENT_TYPE,
    derive_fallback_event,
)


class AbortSignalError(Exception):
    """Mimics an abort signal error that reports its kind via `name`."""

    def __init__(self, message: str, name: str):
        super().__init__(message)
        self.name = name


class UnprintableError(Exception):
    def __str__(self):
        raise RuntimeError("cannot render")


def _engine_request() -> httpx.Request:
    return httpx.Request("POST", "http://engine.local/api/analyze")


class TestClassifyRequestError:
    """Tests for classify_request_error(error)"""

    def test_builtin_timeout(self):
        assert classify_request_error(TimeoutError()) == FallbackReason.TIMEOUT

    def test_asyncio_timeout(self):
        assert classify_request_error(asyncio.TimeoutError()) == FallbackReason.TIMEOUT

    def test_httpx_timeout(self):
        error = httpx.ReadTimeout("read timed out", request=_engine_request())
        assert classify_request_error(error) == FallbackReason.TIMEOUT

    def test_named_timeout_signal(self):
        error = AbortSignalError("signal fired", name="TimeoutError")
        assert classify_request_error(error) == FallbackReason.TIMEOUT

    def test_named_abort_signal(self):
        error = AbortSignalError("signal fired", name="AbortError")
        assert classify_request_error(error) == FallbackReason.TIMEOUT

    @pytest.mark.parametrize("message", [
        "signal timed out",
        "Request Timeout while calling engine",
        "This operation was aborted",
    ])
    def test_timeout_messages(self, message):
        assert classify_request_error(Exception(message)) == FallbackReason.TIMEOUT

    def test_fetch_failed_type_error(self):
        assert classify_request_error(TypeError("fetch failed")) == FallbackReason.NETWORK_ERROR

    def test_connection_error(self):
        assert classify_request_error(ConnectionRefusedError()) == FallbackReason.NETWORK_ERROR

    def test_httpx_connect_error(self):
        error = httpx.ConnectError("Connection refused", request=_engine_request())
        assert classify_request_error(error) == FallbackReason.NETWORK_ERROR

    def test_wrapped_5xx_message(self):
        error = Exception("Engine timing check failed: 503 service unavailable")
        assert classify_request_error(error) == FallbackReason.NON_OK_RESPONSE

    def test_wrapped_4xx_message(self):
        error = RuntimeError("engine returned status 401")
        assert classify_request_error(error) == FallbackReason.NON_OK_RESPONSE

    def test_engine_request_error(self):
        error = EngineRequestError.from_status(502, "bad gateway")
        assert str(error) == "Engine request failed: 502 bad gateway"
        assert classify_request_error(error) == FallbackReason.NON_OK_RESPONSE

    def test_gateway_timeout_status_is_non_ok(self):
        error = EngineRequestError.from_status(504, "Gateway Timeout")
        assert classify_request_error(error) == FallbackReason.NON_OK_RESPONSE

    @pytest.mark.parametrize("message", [
        "Engine request failed: 408 Request Timeout",
        "Engine request failed: 504 upstream request timeout",
    ])
    def test_wrapped_status_beats_timeout_wording(self, message):
        assert classify_request_error(Exception(message)) == FallbackReason.NON_OK_RESPONSE

    def test_timeout_type_beats_status(self):
        error = httpx.ReadTimeout("read timed out", request=_engine_request())
        error.status_code = 504
        assert classify_request_error(error) == FallbackReason.TIMEOUT

    def test_httpx_status_error(self):
        request = _engine_request()
        response = httpx.Response(500, request=request)
        error = httpx.HTTPStatusError("server error", request=request, response=response)
        assert classify_request_error(error) == FallbackReason.NON_OK_RESPONSE

    def test_unrecognized_error(self):
        assert classify_request_error(ValueError("bad payload")) == FallbackReason.UNKNOWN_ERROR

    def test_none(self):
        assert classify_request_error(None) == FallbackReason.UNKNOWN_ERROR

    def test_non_exception_value(self):
        assert classify_request_error({"oops": True}) == FallbackReason.UNKNOWN_ERROR

    def test_unprintable_error_does_not_raise(self):
        assert classify_request_error(UnprintableError()) == FallbackReason.UNKNOWN_ERROR

    def test_result_is_always_in_taxonomy(self):
        for error in [None, 0, "text", object(), KeyError("x"), TypeError("fetch failed")]:
            assert classify_request_error(error) in set(FallbackReason)


class TestResolveFallbackReason:
    """Tests for resolve_fallback_reason(context) priority order."""

    def test_not_configured_wins(self):
        reason = resolve_fallback_reason(FallbackContext(
            engine_configured=False,
            has_session=True,
            status_code=503,
        ))
        assert reason == FallbackReason.NOT_CONFIGURED

    def test_not_configured_before_no_session(self):
        reason = resolve_fallback_reason(FallbackContext(engine_configured=False, has_session=False))
        assert reason == FallbackReason.NOT_CONFIGURED

    def test_no_session(self):
        reason = resolve_fallback_reason(FallbackContext(engine_configured=True, has_session=False))
        assert reason == FallbackReason.NO_SESSION

    def test_non_ok_status(self):
        reason = resolve_fallback_reason(FallbackContext(
            engine_configured=True,
            has_session=True,
            status_code=503,
        ))
        assert reason == FallbackReason.NON_OK_RESPONSE

    def test_success_status_needs_no_fallback(self):
        reason = resolve_fallback_reason(FallbackContext(
            engine_configured=True,
            has_session=True,
            status_code=200,
        ))
        assert reason is None

    def test_nothing_wrong(self):
        reason = resolve_fallback_reason(FallbackContext(engine_configured=True, has_session=True))
        assert reason is None

    def test_error_is_classified(self):
        reason = resolve_fallback_reason(FallbackContext(
            engine_configured=True,
            has_session=True,
            error=TypeError("fetch failed"),
        ))
        assert reason == FallbackReason.NETWORK_ERROR

    def test_status_before_error(self):
        reason = resolve_fallback_reason(FallbackContext(
            engine_configured=True,
            has_session=True,
            status_code=502,
            error=TimeoutError(),
        ))
        assert reason == FallbackReason.NON_OK_RESPONSE

    def test_accepts_wire_dict(self):
        reason = resolve_fallback_reason({
            "engineConfigured": True,
            "hasSession": True,
            "statusCode": 404,
        })
        assert reason == FallbackReason.NON_OK_RESPONSE


class TestFallbackLabels:
    """Labels are a versioned telemetry contract."""

    def test_label_values(self):
        assert {r.value for r in FallbackReason} == {
            "not_configured",
            "no_session",
            "timeout",
            "network_error",
            "non_ok_response",
            "unknown_error",
        }

    def test_contract_version(self):
        assert FALLBACK_CONTRACT_VERSION == "1"


class TestDeriveFallbackEvent:
    """Tests for derive_fallback_event()"""

    def test_no_reason_no_event(self):
        assert derive_fallback_event(None, operation="analyze") is None

    def test_event_fields(self):
        event = derive_fallback_event(FallbackReason.NON_OK_RESPONSE, operation="timing", status_code=503)
        assert event.event_type == FALLBACK_EVENT_TYPE
        assert event.code == "non_ok_response"
        assert event.count == 1
        assert event.metadata["operation"] == "timing"
        assert event.metadata["status_code"] == 503
        assert event.metadata["contract_version"] == FALLBACK_CONTRACT_VERSION

    def test_status_omitted_when_absent(self):
        event = derive_fallback_event(FallbackReason.TIMEOUT, operation="analyze")
        assert "status_code" not in event.metadata

    def test_string_reason_accepted(self):
        event = derive_fallback_event("no_session", operation="analyze")
        assert event.code == "no_session"

    def test_fallback_is_logged(self, caplog):
        with caplog.at_level(logging.WARNING):
            derive_fallback_event(FallbackReason.TIMEOUT, operation="analyze")
        assert "Engine fallback for analyze: timeout" in caplog.text
