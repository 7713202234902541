"""
Error taxonomy for the Palytt RPC client.

Every failure the client surfaces is an ``APIError`` tagged with exactly one
``ErrorKind``. Display strings, recovery hints and analytics codes are pure
functions over the tag (see ``palytt_client.errors.presentation``).
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Closed set of failure categories."""

    # Network
    NETWORK_ERROR = "network_error"
    CONNECTION_LOST = "connection_lost"
    TIMEOUT = "timeout"

    # Server
    SERVER_ERROR = "server_error"
    INTERNAL_SERVER_ERROR = "internal_server_error"
    SERVICE_UNAVAILABLE = "service_unavailable"

    # Client
    BAD_REQUEST = "bad_request"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    TOO_MANY_REQUESTS = "too_many_requests"

    # Data
    DECODING_ERROR = "decoding_error"
    ENCODING_ERROR = "encoding_error"
    INVALID_RESPONSE = "invalid_response"
    INVALID_DATA = "invalid_data"

    # Domain
    VALIDATION_ERROR = "validation_error"
    RESOURCE_LIMIT_EXCEEDED = "resource_limit_exceeded"
    OPERATION_NOT_ALLOWED = "operation_not_allowed"

    # Auth
    TOKEN_EXPIRED = "token_expired"
    INVALID_TOKEN = "invalid_token"
    AUTHENTICATION_REQUIRED = "authentication_required"

    UNKNOWN = "unknown"


# Variants carrying an opaque cause compare by identity only.
_IDENTITY_KINDS = frozenset({ErrorKind.DECODING_ERROR, ErrorKind.ENCODING_ERROR, ErrorKind.UNKNOWN})


class APIError(Exception):
    """Single exception type for every client-side failure."""

    def __init__(
        self,
        kind: ErrorKind,
        *,
        status_code: int | None = None,
        message: str | None = None,
        resource: str | None = None,
        messages: list[str] | None = None,
        limit: str | None = None,
        reason: str | None = None,
        network_code: str | None = None,
        cause: BaseException | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.kind = kind
        self.status_code = status_code
        self.message = message
        self.resource = resource
        self.messages = list(messages) if messages is not None else None
        self.limit = limit
        self.reason = reason
        self.network_code = network_code
        self.cause = cause
        self.details: dict[str, Any] = details or {}
        super().__init__(self.description)

    # -- constructors ---------------------------------------------------

    @classmethod
    def network_error(cls, code: str, cause: BaseException | None = None) -> APIError:
        return cls(ErrorKind.NETWORK_ERROR, network_code=code, cause=cause)

    @classmethod
    def connection_lost(cls, cause: BaseException | None = None) -> APIError:
        return cls(ErrorKind.CONNECTION_LOST, cause=cause)

    @classmethod
    def timeout(cls, cause: BaseException | None = None) -> APIError:
        return cls(ErrorKind.TIMEOUT, cause=cause)

    @classmethod
    def server_error(cls, status_code: int, message: str | None = None) -> APIError:
        return cls(ErrorKind.SERVER_ERROR, status_code=status_code, message=message)

    @classmethod
    def internal_server_error(cls) -> APIError:
        return cls(ErrorKind.INTERNAL_SERVER_ERROR, status_code=500)

    @classmethod
    def service_unavailable(cls) -> APIError:
        return cls(ErrorKind.SERVICE_UNAVAILABLE, status_code=503)

    @classmethod
    def bad_request(cls, message: str | None = None) -> APIError:
        return cls(ErrorKind.BAD_REQUEST, status_code=400, message=message)

    @classmethod
    def unauthorized(cls) -> APIError:
        return cls(ErrorKind.UNAUTHORIZED, status_code=401)

    @classmethod
    def forbidden(cls) -> APIError:
        return cls(ErrorKind.FORBIDDEN, status_code=403)

    @classmethod
    def not_found(cls, resource: str | None = None) -> APIError:
        return cls(ErrorKind.NOT_FOUND, status_code=404, resource=resource)

    @classmethod
    def conflict(cls, message: str | None = None) -> APIError:
        return cls(ErrorKind.CONFLICT, status_code=409, message=message)

    @classmethod
    def too_many_requests(cls) -> APIError:
        return cls(ErrorKind.TOO_MANY_REQUESTS, status_code=429)

    @classmethod
    def decoding_error(cls, cause: BaseException) -> APIError:
        return cls(ErrorKind.DECODING_ERROR, cause=cause)

    @classmethod
    def encoding_error(cls, cause: BaseException) -> APIError:
        return cls(ErrorKind.ENCODING_ERROR, cause=cause)

    @classmethod
    def invalid_response(cls) -> APIError:
        return cls(ErrorKind.INVALID_RESPONSE)

    @classmethod
    def invalid_data(cls, details: dict[str, Any] | None = None) -> APIError:
        return cls(ErrorKind.INVALID_DATA, details=details)

    @classmethod
    def validation_error(cls, messages: list[str]) -> APIError:
        return cls(ErrorKind.VALIDATION_ERROR, messages=messages)

    @classmethod
    def resource_limit_exceeded(cls, limit: str) -> APIError:
        return cls(ErrorKind.RESOURCE_LIMIT_EXCEEDED, limit=limit)

    @classmethod
    def operation_not_allowed(cls, reason: str) -> APIError:
        return cls(ErrorKind.OPERATION_NOT_ALLOWED, reason=reason)

    @classmethod
    def token_expired(cls) -> APIError:
        return cls(ErrorKind.TOKEN_EXPIRED)

    @classmethod
    def invalid_token(cls) -> APIError:
        return cls(ErrorKind.INVALID_TOKEN)

    @classmethod
    def authentication_required(cls) -> APIError:
        return cls(ErrorKind.AUTHENTICATION_REQUIRED)

    @classmethod
    def unknown(cls, cause: BaseException) -> APIError:
        return cls(ErrorKind.UNKNOWN, cause=cause)

    # -- presentation ---------------------------------------------------

    @property
    def description(self) -> str:
        from palytt_client.errors.presentation import describe

        return describe(self)

    @property
    def failure_reason(self) -> str | None:
        from palytt_client.errors.presentation import failure_reason

        return failure_reason(self)

    @property
    def recovery_suggestion(self) -> str | None:
        from palytt_client.errors.presentation import recovery_suggestion

        return recovery_suggestion(self)

    @property
    def analytics_code(self) -> str:
        from palytt_client.errors.presentation import analytics_code

        return analytics_code(self)

    @property
    def should_report(self) -> bool:
        from palytt_client.errors.presentation import should_report

        return should_report(self)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.analytics_code,
            "kind": self.kind.value,
            "message": self.description,
            "recovery": self.recovery_suggestion,
            "should_report": self.should_report,
            "details": self.details,
        }

    # -- equality -------------------------------------------------------

    def _payload(self) -> tuple[Any, ...]:
        if self.kind is ErrorKind.NETWORK_ERROR:
            return (self.network_code,)
        if self.kind is ErrorKind.SERVER_ERROR:
            return (self.status_code, self.message)
        if self.kind in (ErrorKind.BAD_REQUEST, ErrorKind.CONFLICT):
            return (self.message,)
        if self.kind is ErrorKind.NOT_FOUND:
            return (self.resource,)
        if self.kind is ErrorKind.VALIDATION_ERROR:
            return (tuple(self.messages or ()),)
        if self.kind is ErrorKind.RESOURCE_LIMIT_EXCEEDED:
            return (self.limit,)
        if self.kind is ErrorKind.OPERATION_NOT_ALLOWED:
            return (self.reason,)
        return ()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, APIError):
            return NotImplemented
        if self is other:
            return True
        if self.kind is not other.kind or self.kind in _IDENTITY_KINDS:
            return False
        return self._payload() == other._payload()

    def __hash__(self) -> int:
        if self.kind in _IDENTITY_KINDS:
            return id(self)
        return hash((self.kind, self._payload()))

    def __repr__(self) -> str:
        payload = ", ".join(repr(p) for p in self._payload())
        return f"APIError.{self.kind.value}({payload})"

    def __str__(self) -> str:
        return f"[{self.analytics_code}] {self.description}"
