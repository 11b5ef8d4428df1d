"""Domain models. Pure business entities."""

from transaction_cost.domain.models.lookup import CostProfile, Customer

__all__ = [
    "CostProfile",
    "Customer",
]
