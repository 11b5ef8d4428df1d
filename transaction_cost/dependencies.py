"""Composition root: settings, engine, repositories, audit sink, cost lookup service."""

import logging

from sqlalchemy.ext.asyncio import AsyncEngine

from transaction_cost.application.cost_lookup_service import CostLookupService
from transaction_cost.config.logging import configure_logging
from transaction_cost.config.settings import get_settings
from transaction_cost.domain.catalog import HomologationCatalog
from transaction_cost.domain.validators.cost_lookup_validator import ValidationPipeline
from transaction_cost.governance.audit_emitter import AuditEmitter
from transaction_cost.governance.audit_sink import AuditSink
from transaction_cost.infrastructure.database.audit_repository_db import DbAuditRepository
from transaction_cost.infrastructure.database.lookup_repository_db import DbLookupRepository
from transaction_cost.infrastructure.database.session import build_engine, build_session_factory

_engine: AsyncEngine | None = None
_audit_sink: AuditSink | None = None
_service: CostLookupService | None = None


def get_engine() -> AsyncEngine:
    """Return singleton async engine."""
    global _engine
    if _engine is None:
        _engine = build_engine(get_settings())
    return _engine


def get_audit_sink() -> AuditSink:
    """Return singleton audit sink writing through its own sessions."""
    global _audit_sink
    if _audit_sink is None:
        settings = get_settings()
        _audit_sink = AuditSink(
            DbAuditRepository(build_session_factory(get_engine())),
            max_attempts=settings.audit_max_attempts,
            base_delay_seconds=settings.audit_base_delay_seconds,
            max_concurrent_writes=settings.audit_max_concurrent_writes,
            logger=logging.getLogger("transaction_cost.audit"),
        )
    return _audit_sink


def get_cost_lookup_service() -> CostLookupService:
    """Build the service once: logging, catalog, validation, lookups, audit emitter."""
    global _service
    if _service is None:
        settings = get_settings()
        configure_logging(settings.log_level)
        lookups = DbLookupRepository(build_session_factory(get_engine()))
        emitter = AuditEmitter(
            get_audit_sink(),
            actor=settings.audit_actor,
            origin=settings.audit_origin,
            service=settings.audit_service,
            created_by=settings.audit_created_by,
        )
        _service = CostLookupService(
            customers=lookups,
            cost_profiles=lookups,
            emitter=emitter,
            validator=ValidationPipeline(HomologationCatalog()),
            logger=logging.getLogger("transaction_cost.cost_lookup"),
            utc_offset_hours=settings.response_utc_offset_hours,
        )
    return _service


async def shutdown() -> None:
    """Flush pending audit writes, then release the connection pool."""
    global _engine, _audit_sink, _service
    if _audit_sink is not None:
        await _audit_sink.drain()
    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _audit_sink = None
    _service = None
