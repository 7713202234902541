"""User-facing strings and analytics metadata for ``APIError``."""

from __future__ import annotations

from typing import TYPE_CHECKING

from palytt_client.errors.types import ErrorKind

if TYPE_CHECKING:
    from palytt_client.errors.types import APIError


_FIXED_DESCRIPTIONS: dict[ErrorKind, str] = {
    ErrorKind.CONNECTION_LOST: "Connection lost. Please check your internet connection.",
    ErrorKind.TIMEOUT: "Request timed out. Please try again.",
    ErrorKind.INTERNAL_SERVER_ERROR: "An internal server error occurred. Please try again later.",
    ErrorKind.SERVICE_UNAVAILABLE: "Service is currently unavailable. Please try again later.",
    ErrorKind.UNAUTHORIZED: "Please sign in to continue",
    ErrorKind.FORBIDDEN: "You don't have permission to perform this action",
    ErrorKind.TOO_MANY_REQUESTS: "Too many requests. Please try again later",
    ErrorKind.INVALID_RESPONSE: "Invalid response received from server",
    ErrorKind.INVALID_DATA: "Invalid data format",
    ErrorKind.TOKEN_EXPIRED: "Your session has expired. Please sign in again",
    ErrorKind.INVALID_TOKEN: "Invalid authentication token",
    ErrorKind.AUTHENTICATION_REQUIRED: "Authentication required to perform this action",
}

_RECOVERY: dict[ErrorKind, str] = {
    ErrorKind.CONNECTION_LOST: "Check your internet connection and try again",
    ErrorKind.TIMEOUT: "Check your internet connection and try again",
    ErrorKind.UNAUTHORIZED: "Please sign in to continue",
    ErrorKind.TOKEN_EXPIRED: "Please sign in to continue",
    ErrorKind.AUTHENTICATION_REQUIRED: "Please sign in to continue",
    ErrorKind.TOO_MANY_REQUESTS: "Wait a few moments before trying again",
    ErrorKind.SERVICE_UNAVAILABLE: "Please try again in a few moments",
    ErrorKind.INTERNAL_SERVER_ERROR: "Please try again in a few moments",
}

_NOT_REPORTED = frozenset(
    {
        ErrorKind.UNAUTHORIZED,
        ErrorKind.FORBIDDEN,
        ErrorKind.NOT_FOUND,
        ErrorKind.VALIDATION_ERROR,
        ErrorKind.TIMEOUT,
        ErrorKind.CONNECTION_LOST,
    }
)


def _cause_text(error: APIError) -> str:
    if error.cause is None:
        return error.network_code or "unknown"
    text = str(error.cause)
    return text or type(error.cause).__name__


def describe(error: APIError) -> str:
    """Human-readable description of the error."""
    kind = error.kind
    fixed = _FIXED_DESCRIPTIONS.get(kind)
    if fixed is not None:
        return fixed
    if kind is ErrorKind.NETWORK_ERROR:
        return f"Network error: {_cause_text(error)}"
    if kind is ErrorKind.SERVER_ERROR:
        return error.message or f"Server error ({error.status_code})"
    if kind is ErrorKind.BAD_REQUEST:
        return error.message or "Invalid request"
    if kind is ErrorKind.NOT_FOUND:
        return f"{error.resource} not found" if error.resource else "The requested resource was not found"
    if kind is ErrorKind.CONFLICT:
        return error.message or "A conflict occurred with the current state"
    if kind is ErrorKind.DECODING_ERROR:
        return f"Invalid data received from server: {_cause_text(error)}"
    if kind is ErrorKind.ENCODING_ERROR:
        return f"Failed to encode request: {_cause_text(error)}"
    if kind is ErrorKind.VALIDATION_ERROR:
        return "\n".join(error.messages) if error.messages else "Validation failed"
    if kind is ErrorKind.RESOURCE_LIMIT_EXCEEDED:
        return f"You've exceeded the {error.limit} limit"
    if kind is ErrorKind.OPERATION_NOT_ALLOWED:
        return error.reason or ""
    return f"An unexpected error occurred: {_cause_text(error)}"


def failure_reason(error: APIError) -> str | None:
    """Underlying cause text, only for variants that carry a cause."""
    if error.kind in (
        ErrorKind.NETWORK_ERROR,
        ErrorKind.DECODING_ERROR,
        ErrorKind.ENCODING_ERROR,
        ErrorKind.UNKNOWN,
    ):
        return _cause_text(error)
    return None


def recovery_suggestion(error: APIError) -> str | None:
    return _RECOVERY.get(error.kind)


def analytics_code(error: APIError) -> str:
    if error.kind is ErrorKind.SERVER_ERROR:
        return f"server_error_{error.status_code}"
    if error.kind is ErrorKind.UNKNOWN:
        return "unknown_error"
    return error.kind.value


def should_report(error: APIError) -> bool:
    """User errors and network conditions are not reported."""
    return error.kind not in _NOT_REPORTED
