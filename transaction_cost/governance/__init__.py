"""Governance: audit records, emission, and asynchronous persistence. No web framework."""

from transaction_cost.governance.audit_emitter import AuditEmitter, build_audit_record
from transaction_cost.governance.audit_models import AuditRecord, AuditStatus, CheckpointKind
from transaction_cost.governance.audit_sink import AuditSink
from transaction_cost.governance.exceptions import AuditPersistenceError, GovernanceError

__all__ = [
    "AuditEmitter",
    "AuditPersistenceError",
    "AuditRecord",
    "AuditSink",
    "AuditStatus",
    "CheckpointKind",
    "GovernanceError",
    "build_audit_record",
]
