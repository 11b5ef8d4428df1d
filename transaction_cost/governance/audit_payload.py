"""Payload serialization and hashing for audit records. Never raises on arbitrary subjects."""

import dataclasses
import hashlib
import json
import traceback
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, Optional, Sequence

from pydantic import BaseModel

EMPTY_PAYLOAD = "{}"
MAX_STACK_TRACE_LINES = 20


def _json_default(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (set, frozenset)):
        return sorted(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def serialize_payload(subject: Any) -> str:
    """
    Deterministic JSON (sorted keys, compact). None becomes "{}".
    On failure returns a JSON object describing the serialization error.
    """
    if subject is None:
        return EMPTY_PAYLOAD
    try:
        return json.dumps(subject, default=_json_default, sort_keys=True, separators=(",", ":"))
    except Exception as e:
        return json.dumps({"error": f"Failed to serialize: {e}"}, separators=(",", ":"))


def compute_payload_hash(payload: Optional[str]) -> str:
    """SHA-256 of the UTF-8 payload as 64 lowercase hex chars. Empty or None payload hashes to ""."""
    if not payload:
        return ""
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


def query_descriptor(query_name: str, query: str, params: Sequence[Any]) -> Dict[str, Any]:
    """Subject of an OUTBOUND_QUERY checkpoint."""
    return {
        "query_name": query_name,
        "query": query,
        "params": [None if p is None else str(p) for p in params],
    }


def result_descriptor(query_name: str, result: Any) -> Dict[str, Any]:
    """Subject of an INBOUND_RESULT checkpoint."""
    return {"query_name": query_name, "result": result}


def error_category(exc: BaseException) -> str:
    return getattr(exc, "category", "INTERNAL_ERROR")


def error_message(exc: BaseException) -> str:
    return getattr(exc, "message", None) or str(exc)


def _stack_trace(exc: BaseException) -> str:
    lines = "".join(
        traceback.format_exception(type(exc), exc, exc.__traceback__)
    ).splitlines()
    if len(lines) > MAX_STACK_TRACE_LINES:
        lines = lines[:MAX_STACK_TRACE_LINES] + ["... (truncated)"]
    return "\n".join(lines)


def error_descriptor(exc: BaseException, context: str) -> Dict[str, Any]:
    """Subject of an ERROR checkpoint: where, what type, which category, message, short trace."""
    return {
        "context": context,
        "exception": type(exc).__name__,
        "category": error_category(exc),
        "message": error_message(exc),
        "stack_trace": _stack_trace(exc),
    }
