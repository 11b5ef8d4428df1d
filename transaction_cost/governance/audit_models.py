"""Immutable audit record model. Domain-level immutability."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

SYSTEM_ACTOR = "SYSTEM"


class CheckpointKind(str, Enum):
    """Discrete, auditable events in the lifecycle of one cost lookup."""

    ENTRY = "ENTRY"
    OUTBOUND_QUERY = "OUTBOUND_QUERY"
    INBOUND_RESULT = "INBOUND_RESULT"
    EXIT = "EXIT"
    ERROR = "ERROR"


class AuditStatus(str, Enum):
    OK = "OK"
    ERROR = "ERROR"


@dataclass(frozen=True)
class AuditRecord:
    """
    One checkpoint of one request. Created once, never mutated.
    payload_hash is the SHA-256 of the exact payload; None only if the producer omitted it.
    """

    transaction_id: str
    checkpoint_kind: CheckpointKind
    customer_ref: Optional[str]
    channel: str
    actor: str
    timestamp: datetime
    payload: str
    payload_hash: Optional[str]
    status: AuditStatus
    error_detail: Optional[str] = None
    origin: str = "PER002"
    service: str = "PER002"
    created_by: str = "PER002-SERVICE"

    def to_dict(self) -> Dict[str, Any]:
        """Structured representation for JSON logging."""
        return {
            "transaction_id": self.transaction_id,
            "checkpoint_kind": self.checkpoint_kind.value,
            "customer_ref": self.customer_ref,
            "channel": self.channel,
            "actor": self.actor,
            "timestamp": self.timestamp.isoformat(),
            "payload": self.payload,
            "payload_hash": self.payload_hash,
            "status": self.status.value,
            "error_detail": self.error_detail,
            "origin": self.origin,
            "service": self.service,
            "created_by": self.created_by,
        }
