from __future__ import annotations

import types

import httpx
import pytest

from gateway_providers.base.errors import (
    ErrorKind,
    ProviderError,
    ErrorInfo,
    classify_error,
    classify_exception,
)


@pytest.mark.parametrize(
    "status, message, vendor_type, expected",
    [
        (401, None, None, ErrorKind.AUTHENTICATION),
        (403, None, None, ErrorKind.AUTHENTICATION),
        (404, None, None, ErrorKind.MODEL_NOT_FOUND),
        (429, None, None, ErrorKind.RATE_LIMIT),
        (400, None, None, ErrorKind.INVALID_REQUEST),
        (413, None, None, ErrorKind.INVALID_REQUEST),
        (500, None, None, ErrorKind.SERVER),
        (529, None, None, ErrorKind.SERVER),
        (418, None, None, ErrorKind.SERVER),
        (402, "Payment Required", None, ErrorKind.SERVER),
        (409, None, None, ErrorKind.SERVER),
        (422, "Unprocessable Entity", None, ErrorKind.SERVER),
        (422, None, "invalid_request_error", ErrorKind.INVALID_REQUEST),
        (None, None, None, ErrorKind.SERVER),
        (None, None, "rate_limit_error", ErrorKind.RATE_LIMIT),
        (None, None, "overloaded_error", ErrorKind.SERVER),
        (None, None, "not_found_error", ErrorKind.MODEL_NOT_FOUND),
        (None, None, "permission_error", ErrorKind.AUTHENTICATION),
        (None, None, "request_too_large", ErrorKind.INVALID_REQUEST),
        (None, "something odd", None, ErrorKind.SERVER),
        (418, None, "rate_limit_error", ErrorKind.RATE_LIMIT),
        (401, None, "rate_limit_error", ErrorKind.AUTHENTICATION),
    ],
)
def test_classification_table(status, message, vendor_type, expected):
    assert classify_error(status, message, vendor_type) is expected  # nosec B101 - assert is appropriate in unit tests


def test_message_overrides_status():
    msg = "This model's maximum context length is 128000 tokens. However, you requested 130000 tokens."
    assert classify_error(400, msg) is ErrorKind.CONTEXT_LENGTH_EXCEEDED  # nosec B101
    assert classify_error(400, "String too long for field") is ErrorKind.CONTEXT_LENGTH_EXCEEDED  # nosec B101
    assert classify_error(None, "Context Length exceeded") is ErrorKind.CONTEXT_LENGTH_EXCEEDED  # nosec B101


def test_content_policy_regardless_of_status():
    for status in (None, 400, 403, 500):
        assert classify_error(status, "Rejected: violates our Content Policy") is ErrorKind.CONTENT_FILTERED  # nosec B101
    assert classify_error(400, "blocked by content filter", "invalid_request_error") is ErrorKind.CONTENT_FILTERED  # nosec B101


def test_error_kind_values_are_stable():
    assert ErrorKind.AUTHENTICATION.value == "authentication_error"  # nosec B101
    assert ErrorKind.MODEL_NOT_FOUND.value == "model_error"  # nosec B101
    assert ErrorKind.CONTENT_FILTERED.value == "content_filter"  # nosec B101
    assert ErrorKind("rate_limit_exceeded") is ErrorKind.RATE_LIMIT  # nosec B101


def test_classify_exception_status_attributes():
    e1 = types.SimpleNamespace(status_code=404)
    assert classify_exception(e1) is ErrorKind.MODEL_NOT_FOUND  # nosec B101
    e2 = types.SimpleNamespace(response=types.SimpleNamespace(status_code=503))
    assert classify_exception(e2) is ErrorKind.SERVER  # nosec B101


def test_classify_exception_transport_failures():
    assert classify_exception(TimeoutError("slow")) is ErrorKind.SERVER  # nosec B101
    assert classify_exception(ConnectionResetError()) is ErrorKind.SERVER  # nosec B101
    assert classify_exception(httpx.ConnectError("refused")) is ErrorKind.SERVER  # nosec B101
    assert classify_exception(ValueError("maximum number of tokens exceeded")) is ErrorKind.CONTEXT_LENGTH_EXCEEDED  # nosec B101


def test_classify_httpx_status_error():
    request = httpx.Request("POST", "https://api.example.com/v1/chat/completions")
    response = httpx.Response(429, request=request)
    exc = httpx.HTTPStatusError("too many", request=request, response=response)
    assert classify_exception(exc) is ErrorKind.RATE_LIMIT  # nosec B101


def test_provider_error_wraps_info():
    info = ErrorInfo(kind=ErrorKind.RATE_LIMIT, message="slow down", status_code=429)
    err = ProviderError(info=info, provider="openai", model="gpt")
    assert err.kind is ErrorKind.RATE_LIMIT  # nosec B101
    assert err.message == "slow down"  # nosec B101
    assert str(err) == "openai:gpt rate_limit_exceeded: slow down"  # nosec B101
    with pytest.raises(ProviderError):
        raise err


def test_error_info_to_dict_drops_unset():
    info = ErrorInfo(kind=ErrorKind.SERVER, message="boom")
    assert info.to_dict() == {"kind": "server_error", "message": "boom"}  # nosec B101
