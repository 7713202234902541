"""In-memory stand-in for ``TRPCClient`` in consumer tests."""

from __future__ import annotations

import inspect
from dataclasses import dataclass
from typing import Any

from palytt_client.errors import APIError
from palytt_client.procedures.base import Procedure, ProcedureKind, check_kind
from palytt_client.shortcuts import ProcedureShortcuts


@dataclass
class RecordedCall:
    procedure: str
    kind: ProcedureKind
    input: Any


class MockTRPCClient(ProcedureShortcuts):
    """
    Serves canned responses keyed by procedure name.

    A response may be a value or a callable taking the call input (sync or
    async). ``fail_with`` makes every call raise; per-procedure errors are
    set with ``set_error``. A call with no canned response raises
    ``APIError.invalid_data()``. Calling a query through ``mutate`` (or the
    reverse) fails the same way it does on ``TRPCClient`` and is not
    recorded. Every other call is appended to ``calls``.
    """

    def __init__(self) -> None:
        self.responses: dict[str, Any] = {}
        self.errors: dict[str, APIError] = {}
        self.fail_with: APIError | None = None
        self.calls: list[RecordedCall] = []

    def set_response(self, procedure: Procedure[Any, Any] | str, response: Any) -> None:
        self.responses[_name(procedure)] = response

    def set_error(self, procedure: Procedure[Any, Any] | str, error: APIError) -> None:
        self.errors[_name(procedure)] = error

    def reset(self) -> None:
        self.responses.clear()
        self.errors.clear()
        self.fail_with = None
        self.calls.clear()

    def calls_to(self, procedure: Procedure[Any, Any] | str) -> list[RecordedCall]:
        name = _name(procedure)
        return [c for c in self.calls if c.procedure == name]

    async def _respond(self, procedure: Procedure[Any, Any], input: Any, kind: ProcedureKind) -> Any:
        check_kind(procedure, kind)
        self.calls.append(RecordedCall(procedure.name, kind, input))
        if self.fail_with is not None:
            raise self.fail_with
        if procedure.name in self.errors:
            raise self.errors[procedure.name]
        if procedure.name not in self.responses:
            raise APIError.invalid_data({"reason": "no_mock_response", "procedure": procedure.name})
        response = self.responses[procedure.name]
        if callable(response) and not isinstance(response, type):
            result = response(input)
            if inspect.isawaitable(result):
                result = await result
            return result
        return response

    async def query(self, procedure: Procedure[Any, Any], input: Any = None) -> Any:
        return await self._respond(procedure, input, ProcedureKind.QUERY)

    async def mutate(self, procedure: Procedure[Any, Any], input: Any = None) -> Any:
        return await self._respond(procedure, input, ProcedureKind.MUTATION)


def _name(procedure: Procedure[Any, Any] | str) -> str:
    return procedure if isinstance(procedure, str) else procedure.name
