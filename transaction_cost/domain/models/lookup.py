"""Entities read by the cost lookup. Owned by the persistence collaborator, read-only here."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Customer:
    """Customer master record resolved from an identity document."""

    customer_id: str
    document_type: str
    document_number: str


@dataclass(frozen=True)
class CostProfile:
    """Cost of one internal transaction code for one customer. Cost is in minor units."""

    transaction_code: str
    customer_id: str
    cost: int
    currency_code: str
