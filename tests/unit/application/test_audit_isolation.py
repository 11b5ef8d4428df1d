"""Cost lookup with a real AuditSink: audit retries and failures never touch the primary outcome."""

import asyncio
from collections import Counter

import pytest

from transaction_cost.application.cost_lookup_service import CostLookupService
from transaction_cost.domain.catalog import HomologationCatalog
from transaction_cost.domain.exceptions import CustomerNotFoundError
from transaction_cost.domain.schemas.cost_lookup import CostLookupRequest, RequestHeaders
from transaction_cost.domain.validators.cost_lookup_validator import ValidationPipeline
from transaction_cost.governance.audit_emitter import AuditEmitter
from transaction_cost.governance.audit_models import CheckpointKind
from transaction_cost.governance.audit_sink import AuditSink
from transaction_cost.governance.exceptions import AuditPersistenceError


class SleepRecorder:
    def __init__(self):
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


class ExitGatedRepository:
    """EXIT records fail `exit_failures` times, then wait on `gate` before being stored."""

    def __init__(self, exit_failures: int = 0, fail_everything: bool = False):
        self.exit_failures = exit_failures
        self.fail_everything = fail_everything
        self.attempts: Counter = Counter()
        self.saved = []
        self.gate = asyncio.Event()
        self.gate.set()

    async def save(self, record):
        self.attempts[record.checkpoint_kind] += 1
        if self.fail_everything:
            raise AuditPersistenceError("database unavailable")
        if record.checkpoint_kind is CheckpointKind.EXIT:
            if self.attempts[CheckpointKind.EXIT] <= self.exit_failures:
                raise AuditPersistenceError("database unavailable")
            await self.gate.wait()
        self.saved.append(record)


def _service(sink, customers, cost_profiles, logger, metrics) -> CostLookupService:
    return CostLookupService(
        customers=customers,
        cost_profiles=cost_profiles,
        emitter=AuditEmitter(sink),
        validator=ValidationPipeline(HomologationCatalog()),
        logger=logger,
        metrics=metrics,
    )


def _headers() -> RequestHeaders:
    return RequestHeaders(transaction_id="trx-iso", channel=81, user="bus-user")


def _request() -> CostLookupRequest:
    return CostLookupRequest(
        document_type="CED",
        document_number="8-111-111",
        country_code="PA",
        concept_code="COBPER",
    )


async def test_response_returned_before_third_attempt_resolves(customers, cost_profiles, logger, metrics):
    repo = ExitGatedRepository(exit_failures=2)
    repo.gate.clear()
    sleeper = SleepRecorder()
    sink = AuditSink(repo, base_delay_seconds=0.1, sleep=sleeper, metrics=metrics, logger=logger)
    service = _service(sink, customers, cost_profiles, logger, metrics)

    response = await service.lookup_transaction_cost(_headers(), _request())
    assert response.cost == 500

    for _ in range(100):
        if repo.attempts[CheckpointKind.EXIT] >= 3:
            break
        await asyncio.sleep(0)
    assert repo.attempts[CheckpointKind.EXIT] == 3
    assert CheckpointKind.EXIT not in [r.checkpoint_kind for r in repo.saved]

    repo.gate.set()
    await sink.drain()

    stored_kinds = [r.checkpoint_kind for r in repo.saved]
    assert stored_kinds.count(CheckpointKind.EXIT) == 1
    assert len(repo.saved) == 6
    assert sleeper.delays == pytest.approx([0.1, 0.2])


async def test_exhausted_audit_persistence_does_not_affect_success(customers, cost_profiles, logger, metrics):
    repo = ExitGatedRepository(fail_everything=True)
    sink = AuditSink(repo, sleep=SleepRecorder(), metrics=metrics, logger=logger)
    service = _service(sink, customers, cost_profiles, logger, metrics)

    response = await service.lookup_transaction_cost(_headers(), _request())
    await sink.drain()

    assert response.currency == "USD"
    assert repo.saved == []
    assert sum(repo.attempts.values()) == 6 * 3
    dropped = [c for c in logger.error.call_args_list if c[0][0] == "audit_persist_dropped"]
    assert len(dropped) == 6


async def test_exhausted_audit_persistence_does_not_mask_failure(customers, cost_profiles, logger, metrics):
    customers.find_customer_by_document.return_value = None
    repo = ExitGatedRepository(fail_everything=True)
    sink = AuditSink(repo, sleep=SleepRecorder(), metrics=metrics, logger=logger)
    service = _service(sink, customers, cost_profiles, logger, metrics)

    with pytest.raises(CustomerNotFoundError):
        await service.lookup_transaction_cost(_headers(), _request())
    await sink.drain()

    assert repo.saved == []
    assert metrics.counter("audit_dropped", checkpoint="ERROR") == 1


async def test_concurrent_requests_keep_per_request_order(customers, cost_profiles, logger, metrics):
    repo = ExitGatedRepository()
    sink = AuditSink(repo, sleep=SleepRecorder(), metrics=metrics, logger=logger)
    service = _service(sink, customers, cost_profiles, logger, metrics)

    async def one(tx: str):
        headers = RequestHeaders(transaction_id=tx, channel=81, user="bus-user")
        return await service.lookup_transaction_cost(headers, _request())

    await asyncio.gather(*(one(f"trx-{i}") for i in range(5)))
    await sink.drain()

    for i in range(5):
        own = [r for r in repo.saved if r.transaction_id == f"trx-{i}"]
        assert len(own) == 6
        assert sorted(own, key=lambda r: r.timestamp)[0].checkpoint_kind is CheckpointKind.ENTRY
