"""Normalize HTTP status codes and raised exceptions into ``APIError``."""

from __future__ import annotations

import asyncio
import json

import httpx
from pydantic import ValidationError
from pydantic_core import PydanticSerializationError

from palytt_client.errors.types import APIError


class UnexpectedStatusError(Exception):
    """Cause attached to ``APIError.unknown`` for status codes outside 4xx/5xx."""

    def __init__(self, status_code: int, message: str | None = None):
        super().__init__(message or "Unknown error")
        self.status_code = status_code
        self.message = message


_CONNECTION_LOST_TYPES: tuple[type[BaseException], ...] = (
    httpx.ConnectError,
    httpx.RemoteProtocolError,
    httpx.ReadError,
    httpx.WriteError,
    ConnectionError,
)


def from_status_code(status_code: int, message: str | None = None) -> APIError:
    """Map an HTTP status code (plus optional server message) to an ``APIError``."""
    if status_code == 400:
        return APIError.bad_request(message)
    if status_code == 401:
        return APIError.unauthorized()
    if status_code == 403:
        return APIError.forbidden()
    if status_code == 404:
        return APIError.not_found(None)
    if status_code == 409:
        return APIError.conflict(message)
    if status_code == 429:
        return APIError.too_many_requests()
    if status_code == 500:
        return APIError.internal_server_error()
    if status_code == 503:
        return APIError.service_unavailable()
    if 400 <= status_code < 600:
        return APIError.server_error(status_code, message)
    return APIError.unknown(UnexpectedStatusError(status_code, message))


def from_cause(exc: BaseException) -> APIError:
    """
    Map an arbitrary exception to an ``APIError``.

    An ``APIError`` is returned as-is. ``asyncio.CancelledError`` must never
    reach this function; callers re-raise it before normalizing.
    """
    if isinstance(exc, APIError):
        return exc
    if isinstance(exc, (httpx.TimeoutException, asyncio.TimeoutError, TimeoutError)):
        return APIError.timeout(exc)
    if isinstance(exc, _CONNECTION_LOST_TYPES):
        return APIError.connection_lost(exc)
    if isinstance(exc, httpx.TransportError):
        return APIError.network_error(type(exc).__name__, exc)
    if isinstance(exc, (json.JSONDecodeError, ValidationError)):
        return APIError.decoding_error(exc)
    if isinstance(exc, PydanticSerializationError):
        return APIError.encoding_error(exc)
    return APIError.unknown(exc)
