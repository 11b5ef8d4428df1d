"""Audit repository protocol. Governance layer depends on this; infrastructure implements it."""

from typing import Protocol

from transaction_cost.governance.audit_models import AuditRecord


class AuditRepository(Protocol):
    """Protocol for persisting immutable audit records."""

    async def save(self, record: AuditRecord) -> None:
        """Persist one record in its own transaction. Raises AuditPersistenceError on failure."""
        ...
