"""Fixtures for cost lookup service tests: mock lookups, recording audit sink."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from transaction_cost.application.cost_lookup_service import CostLookupService
from transaction_cost.domain.catalog import HomologationCatalog
from transaction_cost.domain.models.lookup import CostProfile, Customer
from transaction_cost.domain.validators.cost_lookup_validator import ValidationPipeline
from transaction_cost.governance.audit_emitter import AuditEmitter
from transaction_cost.governance.audit_models import AuditRecord
from transaction_cost.observability.metrics import MetricsCollector

FIXED_NOW = datetime(2026, 1, 15, 18, 30, 5, tzinfo=timezone.utc)


class RecordingSink:
    """Collects submitted records in submission order."""

    def __init__(self):
        self.records: list[AuditRecord] = []

    def submit(self, record: AuditRecord) -> None:
        self.records.append(record)

    @property
    def kinds(self) -> list[str]:
        return [r.checkpoint_kind.value for r in self.records]


@pytest.fixture
def customers():
    r = AsyncMock()
    r.find_customer_by_document = AsyncMock(
        return_value=Customer(customer_id="12345", document_type="CED", document_number="8-111-111")
    )
    return r


@pytest.fixture
def cost_profiles():
    r = AsyncMock()
    r.find_cost_profile = AsyncMock(
        return_value=CostProfile(
            transaction_code="01PAR157", customer_id="12345", cost=500, currency_code="USD"
        )
    )
    return r


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def metrics():
    return MetricsCollector()


@pytest.fixture
def logger():
    return MagicMock()


@pytest.fixture
def service(customers, cost_profiles, sink, logger, metrics):
    return CostLookupService(
        customers=customers,
        cost_profiles=cost_profiles,
        emitter=AuditEmitter(sink),
        validator=ValidationPipeline(HomologationCatalog()),
        logger=logger,
        metrics=metrics,
        utc_offset_hours=-6,
        clock=lambda: FIXED_NOW,
    )
