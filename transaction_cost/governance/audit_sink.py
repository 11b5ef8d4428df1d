"""Asynchronous, retrying audit persistence. Isolated from the request that produced the record."""

import asyncio
import logging
from dataclasses import replace
from typing import Awaitable, Callable, Optional, Set

from transaction_cost.governance.audit_models import AuditRecord
from transaction_cost.governance.audit_payload import compute_payload_hash
from transaction_cost.governance.audit_repository import AuditRepository
from transaction_cost.observability.metrics import MetricsCollector, get_metrics_collector

DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_BASE_DELAY_SECONDS = 0.1
DEFAULT_MAX_CONCURRENT_WRITES = 20


class AuditSink:
    """
    Fire-and-forget persistence of audit records.

    submit() schedules a detached task and returns at once. Each record gets up to
    max_attempts saves; the delay before attempt n+1 is base_delay_seconds * n.
    After the last failure the record is logged and dropped. Nothing here ever
    raises into the caller. At most max_concurrent_writes saves are in flight.
    """

    def __init__(
        self,
        repository: AuditRepository,
        *,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        base_delay_seconds: float = DEFAULT_BASE_DELAY_SECONDS,
        max_concurrent_writes: int = DEFAULT_MAX_CONCURRENT_WRITES,
        logger: Optional[logging.Logger] = None,
        metrics: Optional[MetricsCollector] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self._repository = repository
        self._max_attempts = max_attempts
        self._base_delay = base_delay_seconds
        self._write_slots = asyncio.Semaphore(max_concurrent_writes)
        self._logger = logger or logging.getLogger(__name__)
        self._metrics = metrics or get_metrics_collector()
        self._sleep = sleep
        # Strong references: the loop only keeps weak ones to running tasks.
        self._pending: Set[asyncio.Task[bool]] = set()

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def backoff_delay(self, attempt: int) -> float:
        """Delay after failed attempt number `attempt` (1-based)."""
        return self._base_delay * attempt

    def submit(self, record: AuditRecord) -> None:
        """Schedule persistence and return immediately."""
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self._logger.error(
                "audit_submit_without_event_loop",
                extra={"checkpoint_kind": record.checkpoint_kind.value},
            )
            self._metrics.increment("audit_dropped", checkpoint=record.checkpoint_kind.value)
            return
        task = loop.create_task(self.write(record))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def write(self, record: AuditRecord) -> bool:
        """Persist with retry. Returns True when stored, False when dropped. Never raises."""
        if record.payload_hash is None:
            record = replace(record, payload_hash=compute_payload_hash(record.payload))

        for attempt in range(1, self._max_attempts + 1):
            try:
                async with self._write_slots:
                    await self._repository.save(record)
            except Exception as e:
                if attempt >= self._max_attempts:
                    self._logger.error(
                        "audit_persist_dropped",
                        extra={
                            "checkpoint_kind": record.checkpoint_kind.value,
                            "audit_transaction_id": record.transaction_id,
                            "attempts": attempt,
                            "error": str(e),
                        },
                    )
                    self._metrics.increment("audit_dropped", checkpoint=record.checkpoint_kind.value)
                    return False
                delay = self.backoff_delay(attempt)
                self._logger.warning(
                    "audit_persist_retry",
                    extra={
                        "checkpoint_kind": record.checkpoint_kind.value,
                        "audit_transaction_id": record.transaction_id,
                        "attempt": attempt,
                        "retries_left": self._max_attempts - attempt,
                        "delay_seconds": delay,
                        "error": str(e),
                    },
                )
                self._metrics.increment("audit_retry", checkpoint=record.checkpoint_kind.value)
                await self._sleep(delay)
                continue

            self._logger.debug(
                "audit_persisted",
                extra={
                    "checkpoint_kind": record.checkpoint_kind.value,
                    "audit_transaction_id": record.transaction_id,
                    "attempt": attempt,
                },
            )
            self._metrics.increment("audit_persisted", checkpoint=record.checkpoint_kind.value)
            return True
        return False

    async def drain(self) -> None:
        """Wait until every submitted record is stored or dropped."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)
