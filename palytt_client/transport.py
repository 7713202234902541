"""
HTTP transport for tRPC procedure calls.

One ``call`` builds the request, sends it, validates the status, decodes the
body and normalizes every failure into an ``APIError``. The client keeps no
per-call state; it only holds the base URL, auth provider and HTTP client.
"""

from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

import httpx
from loguru import logger

from palytt_client.auth import AnonymousAuth, AuthProvider
from palytt_client.codec import decode_output, encode_input
from palytt_client.errors import APIError, from_cause, from_status_code
from palytt_client.utils.sanitize import redact_headers, sanitize_text

DEFAULT_TIMEOUT_SECONDS = 30.0


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"


@dataclass
class HealthStatus:
    """Result of a backend health check."""

    healthy: bool
    status_code: int | None = None
    error: str | None = None
    checked_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


def extract_error_message(body: bytes) -> str | None:
    """
    Best-effort error message from a failed response body.

    Tries JSON ``message``, then ``error``, then ``errors`` joined by ", ";
    falls back to the raw text, then to ``None``.
    """
    try:
        payload = json.loads(body) if body else None
    except (json.JSONDecodeError, UnicodeDecodeError):
        payload = None
    if isinstance(payload, dict):
        message = payload.get("message")
        if isinstance(message, str):
            return message
        error = payload.get("error")
        if isinstance(error, str):
            return error
        errors = payload.get("errors")
        if isinstance(errors, list) and all(isinstance(e, str) for e in errors):
            return ", ".join(errors)
    try:
        text = body.decode("utf-8")
    except UnicodeDecodeError:
        return None
    return text or None


def _coerce_method(method: HttpMethod | str) -> HttpMethod:
    try:
        return HttpMethod(str(method.value if isinstance(method, HttpMethod) else method).upper())
    except ValueError:
        raise APIError.invalid_data({"reason": "unsupported_method", "method": str(method)}) from None


class APIClient:
    """Low-level client that executes a single tRPC procedure call."""

    def __init__(
        self,
        base_url: str,
        auth_provider: AuthProvider | None = None,
        *,
        http_client: httpx.AsyncClient | None = None,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ):
        if timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be positive")
        self.base_url = base_url.rstrip("/")
        self.auth_provider: AuthProvider = auth_provider or AnonymousAuth()
        self.timeout_seconds = timeout_seconds
        self._http_client = http_client
        self._owns_client = http_client is None

    def procedure_url(self, procedure: str) -> str:
        return f"{self.base_url}/trpc/{procedure}"

    async def _get_http_client(self) -> httpx.AsyncClient:
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(timeout=self.timeout_seconds)
            self._owns_client = True
        return self._http_client

    async def aclose(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._http_client is not None and self._owns_client:
            await self._http_client.aclose()
            self._http_client = None

    async def __aenter__(self) -> APIClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def _auth_headers(self) -> dict[str, str]:
        try:
            headers = await self.auth_provider.get_headers()
        except asyncio.CancelledError:
            raise
        except Exception as e:
            raise from_cause(e) from e
        return dict(headers)

    @staticmethod
    def _log_failure(procedure: str, error: APIError) -> APIError:
        logger.warning(
            f"tRPC {procedure} failed: [{error.analytics_code}] "
            f"{sanitize_text(error.description)} (report={error.should_report})"
        )
        return error

    async def call(
        self,
        procedure: str,
        input: Any = None,
        method: HttpMethod | str = HttpMethod.GET,
        *,
        output_type: Any = Any,
    ) -> Any:
        """
        Call ``procedure`` and decode the response as ``output_type``.

        ``input=None`` sends the empty object. GET carries the JSON input in
        the ``input`` query parameter; other methods send it as the body.
        Raises ``APIError`` on any failure; cancellation propagates unchanged.
        """
        if not procedure or not procedure.strip():
            raise APIError.invalid_data({"reason": "empty_procedure"})
        http_method = _coerce_method(method)
        url = self.procedure_url(procedure)

        try:
            headers = await self._auth_headers()
            encoded = encode_input(input)
        except APIError as e:
            raise self._log_failure(procedure, e)

        params: dict[str, str] | None = None
        content: bytes | None = None
        if http_method is HttpMethod.GET:
            params = {"input": encoded}
        else:
            content = encoded.encode("utf-8")
            headers["Content-Type"] = "application/json"

        logger.debug(f"tRPC {http_method.value} {procedure} headers={redact_headers(headers)}")
        client = await self._get_http_client()
        try:
            response = await client.request(
                http_method.value,
                url,
                params=params,
                content=content,
                headers=headers,
                timeout=self.timeout_seconds,
            )
        except asyncio.CancelledError:
            raise
        except Exception as e:
            raise self._log_failure(procedure, from_cause(e)) from e

        status_code = response.status_code
        logger.debug(f"tRPC {procedure} -> {status_code}")
        body = response.content

        if 400 <= status_code < 600:
            message = extract_error_message(body)
            error = from_status_code(status_code, message)
            error.details.update(
                {"status_code": status_code, "server_message": message, "procedure": procedure}
            )
            raise self._log_failure(procedure, error)
        if not 200 <= status_code < 300:
            error = APIError.invalid_response()
            error.details.update({"status_code": status_code, "procedure": procedure})
            raise self._log_failure(procedure, error)

        try:
            return decode_output(body, output_type)
        except APIError as e:
            e.details.setdefault("procedure", procedure)
            raise self._log_failure(procedure, e)

    async def check_health(self) -> HealthStatus:
        """GET ``{base_url}/health``; healthy iff the status is 200. Never raises."""
        client = await self._get_http_client()
        try:
            response = await client.get(f"{self.base_url}/health", timeout=self.timeout_seconds)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            error = from_cause(e)
            logger.warning(f"Health check failed: [{error.analytics_code}] {error.description}")
            return HealthStatus(healthy=False, error=error.description)
        healthy = response.status_code == 200
        return HealthStatus(
            healthy=healthy,
            status_code=response.status_code,
            error=None if healthy else f"Unexpected status {response.status_code}",
        )
