"""DB-backed audit repository. Each record is inserted in its own transaction."""

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from transaction_cost.governance.audit_models import AuditRecord
from transaction_cost.governance.audit_payload import compute_payload_hash
from transaction_cost.governance.exceptions import AuditPersistenceError
from transaction_cost.infrastructure.database.models import AuditLogRow


def _to_row(record: AuditRecord) -> AuditLogRow:
    payload_hash = record.payload_hash
    if payload_hash is None and record.payload is not None:
        payload_hash = compute_payload_hash(record.payload)
    return AuditLogRow(
        transaction_id=record.transaction_id,
        message_type=record.checkpoint_kind.value,
        customer_ref=record.customer_ref,
        channel=record.channel,
        login_user=record.actor,
        timestamp=record.timestamp,
        payload=record.payload,
        payload_hash=payload_hash,
        status=record.status.value,
        error_detail=record.error_detail,
        origin=record.origin,
        service=record.service,
        created_by=record.created_by,
    )


class DbAuditRepository:
    """Implements AuditRepository. Never joins a caller's session or transaction."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def save(self, record: AuditRecord) -> None:
        """Insert and commit; rolls back and raises AuditPersistenceError on failure."""
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    session.add(_to_row(record))
        except SQLAlchemyError as e:
            raise AuditPersistenceError(f"Audit insert failed: {e}") from e
