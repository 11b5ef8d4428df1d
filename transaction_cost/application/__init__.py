# Application layer: the cost lookup use case and the ports it depends on.

from transaction_cost.application.cost_lookup_service import CostLookupService, LookupState
from transaction_cost.application.lookup_repository import CostProfileRepository, CustomerRepository

__all__ = [
    "CostLookupService",
    "CostProfileRepository",
    "CustomerRepository",
    "LookupState",
]
