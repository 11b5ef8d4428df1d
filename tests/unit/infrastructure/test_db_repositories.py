"""DB adapters: row mapping, fresh session per call, independent audit transaction."""

import pytest
from sqlalchemy.exc import OperationalError

from transaction_cost.domain.models.lookup import CostProfile, Customer
from transaction_cost.governance.audit_emitter import build_audit_record
from transaction_cost.governance.audit_models import CheckpointKind
from transaction_cost.governance.exceptions import AuditPersistenceError
from transaction_cost.infrastructure.database.audit_repository_db import DbAuditRepository
from transaction_cost.infrastructure.database.lookup_repository_db import DbLookupRepository
from transaction_cost.infrastructure.database.models import (
    AuditLogRow,
    CostProfileRow,
    CustomerRow,
)


class FakeResult:
    def __init__(self, row):
        self._row = row

    def scalars(self):
        return self

    def first(self):
        return self._row


class FakeTransaction:
    def __init__(self, session):
        self._session = session

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        if exc_type is None:
            self._session.committed = True
        else:
            self._session.rolled_back = True
        return False


class FakeSession:
    def __init__(self, row=None, add_error=None):
        self.row = row
        self.add_error = add_error
        self.statements = []
        self.added = []
        self.committed = False
        self.rolled_back = False
        self.closed = False

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        self.closed = True
        return False

    async def execute(self, stmt):
        self.statements.append(stmt)
        return FakeResult(self.row)

    def add(self, obj):
        if self.add_error is not None:
            raise self.add_error
        self.added.append(obj)

    def begin(self):
        return FakeTransaction(self)


class FakeSessionFactory:
    def __init__(self, **session_kwargs):
        self._kwargs = session_kwargs
        self.sessions: list[FakeSession] = []

    def __call__(self):
        session = FakeSession(**self._kwargs)
        self.sessions.append(session)
        return session


async def test_find_customer_maps_row():
    factory = FakeSessionFactory(
        row=CustomerRow(customer_id="12345", document_type="CED", document_number="8-111-111")
    )
    repo = DbLookupRepository(factory)

    customer = await repo.find_customer_by_document("CED", "8-111-111")

    assert customer == Customer("12345", "CED", "8-111-111")
    sql = str(factory.sessions[0].statements[0])
    assert "CUMST" in sql
    assert "LIMIT" in sql
    assert factory.sessions[0].closed


async def test_find_customer_returns_none_when_absent():
    repo = DbLookupRepository(FakeSessionFactory(row=None))
    assert await repo.find_customer_by_document("CED", "0-000-000") is None


async def test_find_cost_profile_maps_row():
    factory = FakeSessionFactory(
        row=CostProfileRow(transaction_code="01PAR157", customer_id="12345", cost=500, currency_code="USD")
    )
    repo = DbLookupRepository(factory)

    profile = await repo.find_cost_profile("12345", "01PAR157")

    assert profile == CostProfile("01PAR157", "12345", 500, "USD")
    assert "CNTRLPRF" in str(factory.sessions[0].statements[0])


async def test_each_lookup_opens_its_own_session():
    factory = FakeSessionFactory(row=None)
    repo = DbLookupRepository(factory)

    await repo.find_customer_by_document("CED", "1")
    await repo.find_cost_profile("12345", "01PAR157")

    assert len(factory.sessions) == 2
    assert all(s.closed for s in factory.sessions)


async def test_audit_save_inserts_in_own_transaction():
    factory = FakeSessionFactory()
    repo = DbAuditRepository(factory)
    record = build_audit_record(
        "trx-1", "81", "12345", CheckpointKind.ERROR, {"m": "x"}, error_detail="x"
    )

    await repo.save(record)

    session = factory.sessions[0]
    assert session.committed
    (row,) = session.added
    assert isinstance(row, AuditLogRow)
    assert row.transaction_id == "trx-1"
    assert row.message_type == "ERROR"
    assert row.customer_ref == "12345"
    assert row.login_user == "SYSTEM"
    assert row.payload == record.payload
    assert row.payload_hash == record.payload_hash
    assert row.status == "ERROR"
    assert row.error_detail == "x"
    assert row.service == "PER002"


async def test_audit_save_failure_raises_persistence_error_and_rolls_back():
    factory = FakeSessionFactory(add_error=OperationalError("INSERT", {}, Exception("locked")))
    repo = DbAuditRepository(factory)

    with pytest.raises(AuditPersistenceError):
        await repo.save(build_audit_record("trx-1", "81", None, CheckpointKind.ENTRY, {}))

    assert factory.sessions[0].rolled_back
    assert not factory.sessions[0].committed
