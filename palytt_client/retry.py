"""
Optional retry layer over a typed client.

Only queries are retried; mutations are passed through untouched since the
backend gives no idempotency guarantee for them.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Awaitable, Callable

from loguru import logger

from palytt_client.client import TRPCClient, TRPCClientProtocol
from palytt_client.errors import APIError, ErrorKind
from palytt_client.procedures.base import Procedure, ProcedureKind, check_kind
from palytt_client.shortcuts import ProcedureShortcuts

if TYPE_CHECKING:
    import httpx

    from palytt_client.auth import AuthProvider
    from palytt_client.config.schema import ClientConfig, RetryConfig


@dataclass(frozen=True)
class RetryPolicy:
    max_attempts: int = 3
    backoff_base_seconds: float = 0.5
    backoff_max_seconds: float = 8.0
    retry_on: frozenset[ErrorKind] = field(
        default_factory=lambda: frozenset({ErrorKind.CONNECTION_LOST, ErrorKind.TIMEOUT})
    )

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")

    @classmethod
    def from_config(cls, config: RetryConfig) -> RetryPolicy:
        return cls(
            max_attempts=config.max_attempts,
            backoff_base_seconds=config.backoff_base_seconds,
            backoff_max_seconds=config.backoff_max_seconds,
        )

    def delay(self, attempt: int) -> float:
        """Backoff before retry number ``attempt`` (0-based): 0.5s, 1s, 2s, ... capped."""
        return min(self.backoff_max_seconds, self.backoff_base_seconds * (2 ** max(0, attempt)))

    def should_retry(self, error: APIError) -> bool:
        return error.kind in self.retry_on


class RetryingTRPCClient(ProcedureShortcuts):
    """Wraps any ``TRPCClientProtocol`` and retries transient query failures."""

    def __init__(
        self,
        inner: TRPCClientProtocol,
        policy: RetryPolicy | None = None,
        *,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        self.inner = inner
        self.policy = policy or RetryPolicy()
        self._sleep = sleep

    @classmethod
    def from_config(
        cls,
        config: ClientConfig,
        auth_provider: AuthProvider | None = None,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> RetryingTRPCClient:
        """Build a ``TRPCClient`` from ``config`` wrapped in ``config.retry``."""
        inner = TRPCClient.from_config(config, auth_provider, http_client=http_client)
        return cls(inner, RetryPolicy.from_config(config.retry))

    async def _with_retries(self, name: str, send: Callable[[], Awaitable[Any]]) -> Any:
        attempt = 0
        while True:
            try:
                return await send()
            except APIError as e:
                attempt += 1
                if attempt >= self.policy.max_attempts or not self.policy.should_retry(e):
                    raise
                delay = self.policy.delay(attempt - 1)
                logger.info(
                    f"Retrying {name} after {e.analytics_code} "
                    f"(attempt {attempt + 1}/{self.policy.max_attempts}, in {delay:.2f}s)"
                )
                await self._sleep(delay)

    async def query(self, procedure: Procedure[Any, Any], input: Any = None) -> Any:
        check_kind(procedure, ProcedureKind.QUERY)
        return await self._with_retries(procedure.name, lambda: self.inner.query(procedure, input))

    async def mutate(self, procedure: Procedure[Any, Any], input: Any = None) -> Any:
        return await self.inner.mutate(procedure, input)

    async def call(
        self,
        procedure: str,
        input: Any = None,
        *,
        is_query: bool = True,
        output_type: Any = Any,
    ) -> Any:
        """Name-based dispatch through the inner ``TRPCClient``; only queries are retried."""

        def send() -> Awaitable[Any]:
            return self.inner.call(procedure, input, is_query=is_query, output_type=output_type)

        if not is_query:
            return await send()
        return await self._with_retries(procedure, send)

    async def aclose(self) -> None:
        close = getattr(self.inner, "aclose", None)
        if close is not None:
            await close()

    async def __aenter__(self) -> RetryingTRPCClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()
