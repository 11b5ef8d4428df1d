"""Lookup repository protocols. Application layer depends on these; infrastructure implements them."""

from typing import Optional, Protocol

from transaction_cost.domain.models.lookup import CostProfile, Customer


class CustomerRepository(Protocol):
    """Point lookup of the customer master. Side-effect free, at most one row."""

    async def find_customer_by_document(
        self,
        document_type: str,
        document_number: str,
    ) -> Optional[Customer]:
        """Return the customer holding this identity document, or None."""
        ...


class CostProfileRepository(Protocol):
    """Point lookup of the cost profile. Side-effect free, at most one row."""

    async def find_cost_profile(
        self,
        customer_id: str,
        internal_transaction_code: str,
    ) -> Optional[CostProfile]:
        """Return the customer's cost profile for the internal transaction code, or None."""
        ...
