"""Transaction cost lookup with an asynchronous, hash-verified audit trail."""

from transaction_cost.application.cost_lookup_service import CostLookupService
from transaction_cost.domain.schemas.cost_lookup import (
    CostLookupRequest,
    CostLookupResponse,
    RequestHeaders,
)

__all__ = [
    "CostLookupRequest",
    "CostLookupResponse",
    "CostLookupService",
    "RequestHeaders",
]
