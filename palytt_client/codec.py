"""
Wire codec for tRPC procedure calls.

Inputs are serialized to compact JSON (camelCase aliases, ``None`` fields
dropped). Response bodies are either a bare JSON value or an envelope
``{"result": {"data": ...}, "error": {...}}``; an envelope ``error`` always
wins over ``result``.
"""

from __future__ import annotations

import json
from functools import lru_cache
from typing import Any

from pydantic import BaseModel, TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError

from palytt_client.errors import APIError

_ANY_ADAPTER: TypeAdapter[Any] = TypeAdapter(Any)


@lru_cache(maxsize=256)
def _cached_adapter(output_type: Any) -> TypeAdapter[Any]:
    return TypeAdapter(output_type)


def adapter_for(output_type: Any) -> TypeAdapter[Any]:
    """Return a (cached where possible) ``TypeAdapter`` for ``output_type``."""
    try:
        return _cached_adapter(output_type)
    except TypeError:
        # Unhashable annotations are rebuilt per call.
        return TypeAdapter(output_type)


def to_wire(value: Any) -> Any:
    """Convert ``value`` to plain JSON-compatible data."""
    if value is None:
        return {}
    if isinstance(value, BaseModel):
        return value.model_dump(by_alias=True, exclude_none=True, mode="json")
    return _ANY_ADAPTER.dump_python(value, mode="json")


def encode_input(value: Any) -> str:
    """
    Serialize a call input to a compact JSON string.

    ``None`` encodes as the empty object. Failures raise
    ``APIError.encoding_error``.
    """
    try:
        return json.dumps(to_wire(value), separators=(",", ":"), ensure_ascii=False)
    except (PydanticSerializationError, TypeError, ValueError) as e:
        raise APIError.encoding_error(e) from e


def _envelope_error(error: dict[str, Any]) -> APIError:
    code = error.get("code")
    if not isinstance(code, int) or isinstance(code, bool):
        data = error.get("data")
        http_status = data.get("httpStatus") if isinstance(data, dict) else None
        code = http_status if isinstance(http_status, int) else 500
    message = error.get("message")
    api_error = APIError.server_error(code, message if isinstance(message, str) else None)
    data = error.get("data")
    if isinstance(data, dict) and isinstance(data.get("code"), str):
        api_error.details["trpc_code"] = data["code"]
    return api_error


def parse_body(body: bytes) -> Any:
    """Parse a response body as JSON; an empty body is ``None``."""
    if not body or not body.strip():
        return None
    try:
        return json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise APIError.decoding_error(e) from e


def decode_output(body: bytes, output_type: Any = Any) -> Any:
    """
    Decode a successful response body into ``output_type``.

    Raises ``APIError.server_error`` for an envelope error and
    ``APIError.decoding_error`` when the payload does not validate. Once a
    body carries ``result.data``, only that value is validated; the bare body
    is read as the output only when there is no such envelope.
    """
    payload = parse_body(body)
    adapter = adapter_for(output_type)

    if isinstance(payload, dict):
        error = payload.get("error")
        if isinstance(error, dict):
            raise _envelope_error(error)
        result = payload.get("result")
        if isinstance(result, dict) and "data" in result:
            payload = result["data"]

    try:
        return adapter.validate_python(payload)
    except ValidationError as e:
        raise APIError.decoding_error(e) from e
