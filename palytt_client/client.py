"""
Typed RPC client.

``TRPCClient`` turns a procedure descriptor plus an input into one transport
call with the right HTTP verb and output type.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from pydantic import BaseModel, ValidationError

from palytt_client.auth import AuthProvider
from palytt_client.errors import APIError
from palytt_client.procedures.base import Procedure, ProcedureKind, check_kind
from palytt_client.shortcuts import ProcedureShortcuts
from palytt_client.transport import APIClient, HttpMethod

if TYPE_CHECKING:
    import httpx

    from palytt_client.config.schema import ClientConfig


@runtime_checkable
class TRPCClientProtocol(Protocol):
    async def query(self, procedure: Procedure[Any, Any], input: Any = None) -> Any: ...
    async def mutate(self, procedure: Procedure[Any, Any], input: Any = None) -> Any: ...


def coerce_input(procedure: Procedure[Any, Any], input: Any) -> BaseModel:
    """
    Convert ``input`` into ``procedure.input_type``.

    Accepts an instance of the input model, a mapping (snake_case or
    camelCase keys), another pydantic model, or ``None`` for "no parameters".
    Invalid input raises ``APIError.encoding_error``.
    """
    input_type = procedure.input_type
    if isinstance(input, input_type):
        return input
    try:
        if input is None:
            return input_type()
        if isinstance(input, BaseModel):
            return input_type.model_validate(input.model_dump(exclude_none=True))
        if isinstance(input, Mapping):
            return input_type.model_validate(dict(input))
    except ValidationError as e:
        raise APIError.encoding_error(e) from e
    raise APIError.encoding_error(
        TypeError(f"{procedure.name} expects {input_type.__name__}, got {type(input).__name__}")
    )


class TRPCClient(ProcedureShortcuts):
    """Client for the Palytt tRPC backend."""

    def __init__(self, api_client: APIClient):
        self.api_client = api_client

    @classmethod
    def from_config(
        cls,
        config: ClientConfig,
        auth_provider: AuthProvider | None = None,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> TRPCClient:
        return cls(
            APIClient(
                config.resolved_base_url,
                auth_provider,
                http_client=http_client,
                timeout_seconds=config.timeout_seconds,
            )
        )

    async def _dispatch(
        self, procedure: Procedure[Any, Any], input: Any, expected: ProcedureKind
    ) -> Any:
        check_kind(procedure, expected)
        model = coerce_input(procedure, input)
        return await self.api_client.call(
            procedure.name,
            model,
            procedure.http_method,
            output_type=procedure.output_type,
        )

    async def query(self, procedure: Procedure[Any, Any], input: Any = None) -> Any:
        """Run a query procedure (GET). ``input=None`` sends ``{}``."""
        return await self._dispatch(procedure, input, ProcedureKind.QUERY)

    async def mutate(self, procedure: Procedure[Any, Any], input: Any = None) -> Any:
        """Run a mutation procedure (POST). ``input=None`` sends ``{}``."""
        return await self._dispatch(procedure, input, ProcedureKind.MUTATION)

    async def call(
        self,
        procedure: str,
        input: Any = None,
        *,
        is_query: bool = True,
        output_type: Any = Any,
    ) -> Any:
        """Dispatch by wire name, bypassing the descriptor catalog."""
        method = HttpMethod.GET if is_query else HttpMethod.POST
        return await self.api_client.call(procedure, input, method, output_type=output_type)

    async def aclose(self) -> None:
        await self.api_client.aclose()

    async def __aenter__(self) -> TRPCClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()
