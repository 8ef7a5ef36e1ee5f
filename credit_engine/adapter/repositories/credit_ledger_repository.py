"""SQLAlchemy implementation of CreditLedgerRepository

Insert-only persistence for CreditLedgerEntry plus the aggregate queries
used for balance history and reconciliation.
"""

from sqlmodel import select, func
from sqlmodel.ext.asyncio.session import AsyncSession
from credit_engine.app.repositories.credit_ledger_repository import CreditLedgerRepository
from credit_engine.domain.credit_ledger_entry import CreditLedgerEntry


class SqlAlchemyCreditLedgerRepository(CreditLedgerRepository):
    """
    SQLAlchemy implementation of CreditLedgerRepository

    Features:
    - Append-only writes (no update/delete paths)
    - Deterministic ordering by (created_at, id)
    - Aggregate sums computed in the database
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def append(self, entry: CreditLedgerEntry) -> CreditLedgerEntry:
        """
        Insert a new immutable ledger entry

        Args:
            entry: CreditLedgerEntry to persist

        Returns:
            Persisted entry with generated ID
        """
        self.session.add(entry)
        await self.session.flush()
        await self.session.refresh(entry)
        return entry

    async def list_for_author(
        self, author_id: str, oldest_first: bool = False
    ) -> list[CreditLedgerEntry]:
        stmt = select(CreditLedgerEntry).where(CreditLedgerEntry.author_id == author_id)

        if oldest_first:
            stmt = stmt.order_by(CreditLedgerEntry.created_at.asc(), CreditLedgerEntry.id.asc())
        else:
            stmt = stmt.order_by(CreditLedgerEntry.created_at.desc(), CreditLedgerEntry.id.desc())

        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def sum_for_author(self, author_id: str) -> int:
        stmt = select(func.coalesce(func.sum(CreditLedgerEntry.amount), 0)).where(
            CreditLedgerEntry.author_id == author_id
        )
        result = await self.session.execute(stmt)
        return int(result.scalar() or 0)

    async def sum_by_author(self) -> dict[str, int]:
        stmt = select(
            CreditLedgerEntry.author_id, func.sum(CreditLedgerEntry.amount)
        ).group_by(CreditLedgerEntry.author_id)
        result = await self.session.execute(stmt)
        return {author_id: int(total or 0) for author_id, total in result.all()}
