"""DB-backed lookups of customer and cost profile. One fresh session per call, nothing cached."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from transaction_cost.domain.models.lookup import CostProfile, Customer
from transaction_cost.infrastructure.database.models import CostProfileRow, CustomerRow


class DbLookupRepository:
    """Implements CustomerRepository and CostProfileRepository protocols."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def find_customer_by_document(
        self,
        document_type: str,
        document_number: str,
    ) -> Optional[Customer]:
        stmt = (
            select(CustomerRow)
            .where(
                CustomerRow.document_type == document_type,
                CustomerRow.document_number == document_number,
            )
            .limit(1)
        )
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            row = result.scalars().first()
        if row is None:
            return None
        return Customer(
            customer_id=row.customer_id,
            document_type=row.document_type,
            document_number=row.document_number,
        )

    async def find_cost_profile(
        self,
        customer_id: str,
        internal_transaction_code: str,
    ) -> Optional[CostProfile]:
        stmt = (
            select(CostProfileRow)
            .where(
                CostProfileRow.customer_id == customer_id,
                CostProfileRow.transaction_code == internal_transaction_code,
            )
            .limit(1)
        )
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            row = result.scalars().first()
        if row is None:
            return None
        return CostProfile(
            transaction_code=row.transaction_code,
            customer_id=row.customer_id,
            cost=row.cost,
            currency_code=row.currency_code,
        )
