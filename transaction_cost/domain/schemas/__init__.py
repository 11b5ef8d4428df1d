"""Domain schemas. Request/response of the cost lookup."""

from transaction_cost.domain.schemas.cost_lookup import (
    CostLookupRequest,
    CostLookupResponse,
    RequestHeaders,
)

__all__ = [
    "CostLookupRequest",
    "CostLookupResponse",
    "RequestHeaders",
]
