"""Builds one audit record per checkpoint and hands it to the sink. No persistence knowledge."""

import logging
from datetime import datetime, timezone
from typing import Any, Optional, Protocol

from transaction_cost.governance.audit_models import (
    SYSTEM_ACTOR,
    AuditRecord,
    AuditStatus,
    CheckpointKind,
)
from transaction_cost.governance.audit_payload import compute_payload_hash, serialize_payload


logger = logging.getLogger(__name__)


class AuditSubmitter(Protocol):
    def submit(self, record: AuditRecord) -> None:
        ...


def build_audit_record(
    transaction_id: str,
    channel: str,
    customer_ref: Optional[str],
    checkpoint_kind: CheckpointKind,
    subject: Any,
    *,
    error_detail: Optional[str] = None,
    actor: str = SYSTEM_ACTOR,
    timestamp: Optional[datetime] = None,
    **provenance: str,
) -> AuditRecord:
    """Serialize the subject, hash that exact payload, stamp the time. Status follows the kind."""
    payload = serialize_payload(subject)
    is_error = checkpoint_kind is CheckpointKind.ERROR
    return AuditRecord(
        transaction_id=transaction_id,
        checkpoint_kind=checkpoint_kind,
        customer_ref=customer_ref,
        channel=channel,
        actor=actor,
        timestamp=timestamp or datetime.now(timezone.utc),
        payload=payload,
        payload_hash=compute_payload_hash(payload),
        status=AuditStatus.ERROR if is_error else AuditStatus.OK,
        error_detail=error_detail if is_error else None,
        **provenance,
    )


class AuditEmitter:
    """
    Emits checkpoints for one service. Returns the record it submitted so callers
    and tests can inspect it; the sink owns everything after submit().
    """

    def __init__(
        self,
        sink: AuditSubmitter,
        *,
        actor: str = SYSTEM_ACTOR,
        origin: str = "PER002",
        service: str = "PER002",
        created_by: str = "PER002-SERVICE",
    ) -> None:
        self._sink = sink
        self._actor = actor
        self._provenance = {"origin": origin, "service": service, "created_by": created_by}

    def emit(
        self,
        *,
        transaction_id: str,
        channel: str,
        customer_ref: Optional[str],
        checkpoint_kind: CheckpointKind,
        subject: Any,
        error_detail: Optional[str] = None,
    ) -> AuditRecord:
        record = build_audit_record(
            transaction_id,
            channel,
            customer_ref,
            checkpoint_kind,
            subject,
            error_detail=error_detail,
            actor=self._actor,
            **self._provenance,
        )
        try:
            self._sink.submit(record)
        except Exception:
            # The audit trail never fails the request it describes.
            logger.exception(
                "audit_submit_failed",
                extra={"checkpoint_kind": checkpoint_kind.value},
            )
        return record
