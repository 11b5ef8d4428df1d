"""Transaction cost lookup use case. Validates, runs two dependent lookups, audits every checkpoint."""

import logging
import time
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Callable, Dict, FrozenSet, Optional

from transaction_cost.application.lookup_repository import CostProfileRepository, CustomerRepository
from transaction_cost.core.context import request_context
from transaction_cost.domain.exceptions import CostNotFoundError, CustomerNotFoundError
from transaction_cost.domain.schemas.cost_lookup import (
    CostLookupRequest,
    CostLookupResponse,
    RequestHeaders,
)
from transaction_cost.domain.validators.cost_lookup_validator import ValidationPipeline
from transaction_cost.governance.audit_emitter import AuditEmitter
from transaction_cost.governance.audit_models import CheckpointKind
from transaction_cost.governance.audit_payload import (
    error_category,
    error_descriptor,
    error_message,
    query_descriptor,
    result_descriptor,
)
from transaction_cost.observability.metrics import MetricsCollector, get_metrics_collector

FIND_CUSTOMER_BY_DOCUMENT = "find_customer_by_document"
FIND_COST_PROFILE = "find_cost_profile"

QUERIES: Dict[str, str] = {
    FIND_CUSTOMER_BY_DOCUMENT: (
        "SELECT CUSCUN, CUSTID, CUSIDN FROM CUMST "
        "WHERE CUSTID = :document_type AND CUSIDN = :document_number"
    ),
    FIND_COST_PROFILE: (
        "SELECT PRFKEY, PRFCUN, PRFFA1, PRFFCY FROM CNTRLPRF "
        "WHERE PRFCUN = :customer_id AND PRFKEY = :transaction_code"
    ),
}

ERROR_CONTEXT = "lookup_transaction_cost"


class LookupState(str, Enum):
    START = "START"
    VALIDATED = "VALIDATED"
    CUSTOMER_RESOLVED = "CUSTOMER_RESOLVED"
    COST_RESOLVED = "COST_RESOLVED"
    DONE = "DONE"
    ERROR = "ERROR"


_TRANSITIONS: Dict[LookupState, FrozenSet[LookupState]] = {
    LookupState.START: frozenset({LookupState.VALIDATED, LookupState.ERROR}),
    LookupState.VALIDATED: frozenset({LookupState.CUSTOMER_RESOLVED, LookupState.ERROR}),
    LookupState.CUSTOMER_RESOLVED: frozenset({LookupState.COST_RESOLVED, LookupState.ERROR}),
    LookupState.COST_RESOLVED: frozenset({LookupState.DONE, LookupState.ERROR}),
    LookupState.DONE: frozenset(),
    LookupState.ERROR: frozenset(),
}


class _AuditTrail:
    """Checkpoints of one request. Carries customer_ref once the customer is known."""

    def __init__(self, emitter: AuditEmitter, transaction_id: str, channel: str) -> None:
        self._emitter = emitter
        self._transaction_id = transaction_id
        self._channel = channel
        self.customer_ref: Optional[str] = None

    def checkpoint(self, kind: CheckpointKind, subject: Any, error_detail: Optional[str] = None) -> None:
        self._emitter.emit(
            transaction_id=self._transaction_id,
            channel=self._channel,
            customer_ref=self.customer_ref,
            checkpoint_kind=kind,
            subject=subject,
            error_detail=error_detail,
        )


class CostLookupService:
    """
    Application-layer orchestration only. No HTTP, no ORM.

    Checkpoints, in order: ENTRY, OUTBOUND_QUERY/INBOUND_RESULT per lookup, EXIT.
    Any failure emits a single ERROR checkpoint and is re-raised unchanged.
    Audit records are submitted fire-and-forget; their persistence never
    delays or fails the lookup.
    """

    def __init__(
        self,
        customers: CustomerRepository,
        cost_profiles: CostProfileRepository,
        emitter: AuditEmitter,
        validator: ValidationPipeline,
        logger: logging.Logger,
        metrics: Optional[MetricsCollector] = None,
        utc_offset_hours: int = -6,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ) -> None:
        self._customers = customers
        self._cost_profiles = cost_profiles
        self._emitter = emitter
        self._validator = validator
        self._logger = logger
        self._metrics = metrics or get_metrics_collector()
        self._response_tz = timezone(timedelta(hours=utc_offset_hours))
        self._clock = clock

    def _advance(self, current: LookupState, new: LookupState) -> LookupState:
        if new not in _TRANSITIONS[current]:
            raise RuntimeError(f"Invalid lookup transition from {current.value} to {new.value}")
        self._logger.info(
            "cost_lookup_state",
            extra={"from_state": current.value, "to_state": new.value},
        )
        return new

    async def lookup_transaction_cost(
        self,
        headers: RequestHeaders,
        request: CostLookupRequest,
    ) -> CostLookupResponse:
        """Single entry point. Returns the cost response or raises the typed failure."""
        channel = "" if headers.channel is None else str(headers.channel)
        trail = _AuditTrail(self._emitter, headers.transaction_id, channel)
        state = LookupState.START
        started = time.perf_counter()

        with request_context(headers.transaction_id, channel):
            self._logger.info("cost_lookup_started", extra={"concept_code": request.concept_code})
            try:
                # START -> VALIDATED; ENTRY goes first so malformed requests are audited too
                trail.checkpoint(CheckpointKind.ENTRY, {"headers": headers, "body": request})
                transaction_code = self._validator.run(headers, request)
                state = self._advance(state, LookupState.VALIDATED)

                # VALIDATED -> CUSTOMER_RESOLVED
                trail.checkpoint(
                    CheckpointKind.OUTBOUND_QUERY,
                    query_descriptor(
                        FIND_CUSTOMER_BY_DOCUMENT,
                        QUERIES[FIND_CUSTOMER_BY_DOCUMENT],
                        [request.document_type, request.document_number],
                    ),
                )
                customer = await self._customers.find_customer_by_document(
                    request.document_type,
                    request.document_number,
                )
                if customer is None:
                    raise CustomerNotFoundError("Customer does not exist")
                trail.customer_ref = customer.customer_id
                trail.checkpoint(
                    CheckpointKind.INBOUND_RESULT,
                    result_descriptor(FIND_CUSTOMER_BY_DOCUMENT, customer),
                )
                state = self._advance(state, LookupState.CUSTOMER_RESOLVED)

                # CUSTOMER_RESOLVED -> COST_RESOLVED
                trail.checkpoint(
                    CheckpointKind.OUTBOUND_QUERY,
                    query_descriptor(
                        FIND_COST_PROFILE,
                        QUERIES[FIND_COST_PROFILE],
                        [customer.customer_id, transaction_code],
                    ),
                )
                cost_profile = await self._cost_profiles.find_cost_profile(
                    customer.customer_id,
                    transaction_code,
                )
                if cost_profile is None:
                    raise CostNotFoundError("Cost profile not found")
                trail.checkpoint(
                    CheckpointKind.INBOUND_RESULT,
                    result_descriptor(FIND_COST_PROFILE, cost_profile),
                )
                state = self._advance(state, LookupState.COST_RESOLVED)

                # COST_RESOLVED -> DONE
                response = CostLookupResponse(
                    movement_timestamp=self._clock()
                    .astimezone(self._response_tz)
                    .isoformat(timespec="seconds"),
                    cost=cost_profile.cost,
                    currency=cost_profile.currency_code,
                )
                trail.checkpoint(CheckpointKind.EXIT, response)
                state = self._advance(state, LookupState.DONE)
            except Exception as e:
                category = error_category(e)
                self._logger.error(
                    "cost_lookup_failed",
                    extra={
                        "failed_state": state.value,
                        "category": category,
                        "error": error_message(e),
                    },
                )
                trail.checkpoint(
                    CheckpointKind.ERROR,
                    error_descriptor(e, ERROR_CONTEXT),
                    error_detail=error_message(e),
                )
                self._record_outcome(category, started)
                raise

            self._logger.info(
                "cost_lookup_completed",
                extra={"customer_ref": trail.customer_ref, "currency": response.currency},
            )
            self._record_outcome("OK", started)
            return response

    def _record_outcome(self, outcome: str, started: float) -> None:
        self._metrics.increment("cost_lookup_total", outcome=outcome)
        self._metrics.observe_latency(
            "cost_lookup_latency_ms",
            (time.perf_counter() - started) * 1000,
        )
