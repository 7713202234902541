"""Procedure descriptors and the registry that holds them."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, Iterator, TypeVar

from pydantic import BaseModel, ValidationError

from palytt_client.errors import APIError
from palytt_client.transport import HttpMethod

InputT = TypeVar("InputT", bound=BaseModel)
OutputT = TypeVar("OutputT")


class ProcedureKind(str, Enum):
    QUERY = "query"
    MUTATION = "mutation"


@dataclass(frozen=True)
class Procedure(Generic[InputT, OutputT]):
    """
    Declarative description of one remote procedure.

    ``output_type`` is any annotation pydantic can validate, including
    ``Model | None`` for lookups that may miss and ``list[Model]``.
    """

    name: str
    kind: ProcedureKind
    input_type: type[InputT]
    output_type: Any
    protected: bool = False

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValueError("procedure name must be non-empty")

    @property
    def http_method(self) -> HttpMethod:
        return HttpMethod.GET if self.kind is ProcedureKind.QUERY else HttpMethod.POST

    @property
    def is_query(self) -> bool:
        return self.kind is ProcedureKind.QUERY

    @property
    def router(self) -> str:
        return self.name.split(".", 1)[0]


def query(
    name: str, input_type: type[InputT], output_type: Any, *, protected: bool = False
) -> Procedure[InputT, Any]:
    return Procedure(name, ProcedureKind.QUERY, input_type, output_type, protected)


def mutation(
    name: str, input_type: type[InputT], output_type: Any, *, protected: bool = False
) -> Procedure[InputT, Any]:
    return Procedure(name, ProcedureKind.MUTATION, input_type, output_type, protected)


def check_kind(procedure: Procedure[Any, Any], expected: ProcedureKind) -> None:
    """Reject a query sent through ``mutate`` or a mutation through ``query``."""
    if procedure.kind is not expected:
        raise APIError.invalid_data(
            {"reason": "wrong_kind", "procedure": procedure.name, "kind": procedure.kind.value}
        )


def build_input(input_type: type[InputT], **fields: Any) -> InputT:
    """Construct an input model; bad fields raise ``APIError.encoding_error``."""
    try:
        return input_type(**fields)
    except ValidationError as e:
        raise APIError.encoding_error(e) from e


class ProcedureRegistry:
    """
    Registry of procedure descriptors keyed by wire name.

    Names are unique; registering a second descriptor under the same name
    raises ``ValueError``.
    """

    def __init__(self, procedures: list[Procedure[Any, Any]] | None = None):
        self._procedures: dict[str, Procedure[Any, Any]] = {}
        for procedure in procedures or []:
            self.register(procedure)

    def register(self, procedure: Procedure[Any, Any]) -> Procedure[Any, Any]:
        if procedure.name in self._procedures:
            raise ValueError(f"Procedure already registered: {procedure.name}")
        self._procedures[procedure.name] = procedure
        return procedure

    def extend(self, procedures: list[Procedure[Any, Any]]) -> None:
        for procedure in procedures:
            self.register(procedure)

    def get(self, name: str) -> Procedure[Any, Any] | None:
        return self._procedures.get(name)

    def require(self, name: str) -> Procedure[Any, Any]:
        """Get a descriptor by name or raise ``KeyError``."""
        procedure = self._procedures.get(name)
        if procedure is None:
            raise KeyError(f"Unknown procedure: {name}")
        return procedure

    @property
    def names(self) -> list[str]:
        return list(self._procedures)

    def queries(self) -> list[Procedure[Any, Any]]:
        return [p for p in self._procedures.values() if p.kind is ProcedureKind.QUERY]

    def mutations(self) -> list[Procedure[Any, Any]]:
        return [p for p in self._procedures.values() if p.kind is ProcedureKind.MUTATION]

    def by_router(self, router: str) -> list[Procedure[Any, Any]]:
        return [p for p in self._procedures.values() if p.router == router]

    def __iter__(self) -> Iterator[Procedure[Any, Any]]:
        return iter(self._procedures.values())

    def __len__(self) -> int:
        return len(self._procedures)

    def __contains__(self, name: object) -> bool:
        return name in self._procedures
