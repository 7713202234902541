"""Tests for palytt_client.errors (taxonomy, status/exception mapping, presentation)."""

from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from palytt_client.errors import (
    APIError,
    ErrorKind,
    UnexpectedStatusError,
    analytics_code,
    describe,
    failure_reason,
    from_cause,
    from_status_code,
    recovery_suggestion,
    should_report,
)


class TestFromStatusCode:
    @pytest.mark.parametrize(
        "status_code,expected",
        [
            (400, APIError.bad_request("bad input")),
            (401, APIError.unauthorized()),
            (403, APIError.forbidden()),
            (404, APIError.not_found(None)),
            (409, APIError.conflict("bad input")),
            (429, APIError.too_many_requests()),
            (500, APIError.internal_server_error()),
            (503, APIError.service_unavailable()),
            (418, APIError.server_error(418, "bad input")),
            (502, APIError.server_error(502, "bad input")),
            (599, APIError.server_error(599, "bad input")),
        ],
    )
    def test_mapped_variants(self, status_code: int, expected: APIError) -> None:
        assert from_status_code(status_code, "bad input") == expected

    def test_404_drops_server_message(self) -> None:
        error = from_status_code(404, "Post abc does not exist")
        assert error.kind is ErrorKind.NOT_FOUND
        assert error.resource is None
        assert error.description == "The requested resource was not found"

    @pytest.mark.parametrize("status_code", [200, 302, 100, 600])
    def test_non_error_status_is_unknown(self, status_code: int) -> None:
        error = from_status_code(status_code, "odd")
        assert error.kind is ErrorKind.UNKNOWN
        assert isinstance(error.cause, UnexpectedStatusError)
        assert error.cause.status_code == status_code
        assert str(error.cause) == "odd"

    def test_unexpected_status_default_message(self) -> None:
        assert str(UnexpectedStatusError(302)) == "Unknown error"


class TestFromCause:
    def test_api_error_passes_through(self) -> None:
        original = APIError.forbidden()
        assert from_cause(original) is original

    @pytest.mark.parametrize(
        "exc",
        [httpx.ReadTimeout("slow"), httpx.ConnectTimeout("slow"), asyncio.TimeoutError(), TimeoutError()],
    )
    def test_timeouts(self, exc: BaseException) -> None:
        error = from_cause(exc)
        assert error.kind is ErrorKind.TIMEOUT
        assert error.cause is exc

    @pytest.mark.parametrize(
        "exc",
        [httpx.ConnectError("refused"), httpx.RemoteProtocolError("eof"), ConnectionResetError()],
    )
    def test_connection_lost(self, exc: BaseException) -> None:
        assert from_cause(exc).kind is ErrorKind.CONNECTION_LOST

    def test_other_transport_errors_are_network_errors(self) -> None:
        error = from_cause(httpx.ProxyError("proxy down"))
        assert error.kind is ErrorKind.NETWORK_ERROR
        assert error.network_code == "ProxyError"
        assert error.description == "Network error: proxy down"

    def test_json_errors_are_decoding_errors(self) -> None:
        exc = json.JSONDecodeError("Expecting value", "nope", 0)
        assert from_cause(exc).kind is ErrorKind.DECODING_ERROR

    def test_anything_else_is_unknown(self) -> None:
        error = from_cause(RuntimeError("boom"))
        assert error.kind is ErrorKind.UNKNOWN
        assert error.description == "An unexpected error occurred: boom"


class TestAPIError:
    def test_equality_by_kind_and_payload(self) -> None:
        assert APIError.server_error(502, "x") == APIError.server_error(502, "x")
        assert APIError.server_error(502, "x") != APIError.server_error(502, "y")
        assert APIError.server_error(502, "x") != APIError.server_error(504, "x")
        assert APIError.unauthorized() == APIError.unauthorized()
        assert APIError.unauthorized() != APIError.forbidden()
        assert APIError.validation_error(["a"]) == APIError.validation_error(["a"])

    def test_opaque_cause_variants_compare_by_identity(self) -> None:
        cause = ValueError("bad")
        a = APIError.decoding_error(cause)
        b = APIError.decoding_error(cause)
        assert a == a
        assert a != b
        assert APIError.unknown(cause) != APIError.unknown(cause)

    def test_hash_is_consistent_with_equality(self) -> None:
        assert hash(APIError.not_found("Post")) == hash(APIError.not_found("Post"))
        assert len({APIError.timeout(), APIError.timeout(), APIError.forbidden()}) == 2

    def test_repr_and_str(self) -> None:
        assert repr(APIError.not_found("Post")) == "APIError.not_found('Post')"
        assert repr(APIError.unauthorized()) == "APIError.unauthorized()"
        assert str(APIError.unauthorized()) == "[unauthorized] Please sign in to continue"
        assert str(APIError.server_error(502)) == "[server_error_502] Server error (502)"

    def test_fixed_status_codes(self) -> None:
        assert APIError.bad_request().status_code == 400
        assert APIError.not_found().status_code == 404
        assert APIError.internal_server_error().status_code == 500
        assert APIError.service_unavailable().status_code == 503

    def test_to_dict(self) -> None:
        error = APIError.too_many_requests()
        error.details["procedure"] = "posts.likePost"
        assert error.to_dict() == {
            "error": "too_many_requests",
            "kind": "too_many_requests",
            "message": "Too many requests. Please try again later",
            "recovery": "Wait a few moments before trying again",
            "should_report": True,
            "details": {"procedure": "posts.likePost"},
        }

    def test_is_raisable(self) -> None:
        with pytest.raises(APIError) as exc_info:
            raise APIError.conflict("Already friends")
        assert exc_info.value.kind is ErrorKind.CONFLICT


class TestPresentation:
    @pytest.mark.parametrize(
        "error,text",
        [
            (APIError.connection_lost(), "Connection lost. Please check your internet connection."),
            (APIError.timeout(), "Request timed out. Please try again."),
            (APIError.server_error(502), "Server error (502)"),
            (APIError.server_error(502, "Bad gateway"), "Bad gateway"),
            (APIError.bad_request(), "Invalid request"),
            (APIError.conflict(), "A conflict occurred with the current state"),
            (APIError.not_found("Post"), "Post not found"),
            (APIError.not_found(), "The requested resource was not found"),
            (APIError.invalid_data(), "Invalid data format"),
            (APIError.invalid_response(), "Invalid response received from server"),
            (APIError.validation_error(["Name is required", "Too long"]), "Name is required\nToo long"),
            (APIError.validation_error([]), "Validation failed"),
            (APIError.resource_limit_exceeded("daily post"), "You've exceeded the daily post limit"),
            (APIError.operation_not_allowed("Posting is disabled"), "Posting is disabled"),
            (APIError.network_error("DNS"), "Network error: DNS"),
            (APIError.decoding_error(ValueError("bad")), "Invalid data received from server: bad"),
            (APIError.encoding_error(ValueError("bad")), "Failed to encode request: bad"),
            (APIError.token_expired(), "Your session has expired. Please sign in again"),
        ],
    )
    def test_describe(self, error: APIError, text: str) -> None:
        assert describe(error) == text
        assert error.description == text

    def test_recovery_suggestions(self) -> None:
        network = "Check your internet connection and try again"
        sign_in = "Please sign in to continue"
        later = "Please try again in a few moments"
        assert recovery_suggestion(APIError.connection_lost()) == network
        assert recovery_suggestion(APIError.timeout()) == network
        assert recovery_suggestion(APIError.unauthorized()) == sign_in
        assert recovery_suggestion(APIError.token_expired()) == sign_in
        assert recovery_suggestion(APIError.authentication_required()) == sign_in
        assert recovery_suggestion(APIError.too_many_requests()) == "Wait a few moments before trying again"
        assert recovery_suggestion(APIError.service_unavailable()) == later
        assert recovery_suggestion(APIError.internal_server_error()) == later
        assert recovery_suggestion(APIError.forbidden()) is None
        assert recovery_suggestion(APIError.server_error(502)) is None

    def test_analytics_codes(self) -> None:
        assert analytics_code(APIError.server_error(502)) == "server_error_502"
        assert analytics_code(APIError.unknown(RuntimeError())) == "unknown_error"
        assert analytics_code(APIError.connection_lost()) == "connection_lost"
        assert analytics_code(APIError.invalid_token()) == "invalid_token"

    def test_should_report(self) -> None:
        for error in (
            APIError.unauthorized(),
            APIError.forbidden(),
            APIError.not_found(),
            APIError.validation_error(["x"]),
            APIError.timeout(),
            APIError.connection_lost(),
        ):
            assert should_report(error) is False
        for error in (
            APIError.internal_server_error(),
            APIError.server_error(502),
            APIError.decoding_error(ValueError()),
            APIError.token_expired(),
        ):
            assert should_report(error) is True

    def test_failure_reason(self) -> None:
        assert failure_reason(APIError.network_error("DNS")) == "DNS"
        assert failure_reason(APIError.unknown(RuntimeError())) == "RuntimeError"
        assert failure_reason(APIError.decoding_error(ValueError("x"))) == "x"
        assert failure_reason(APIError.unauthorized()) is None
