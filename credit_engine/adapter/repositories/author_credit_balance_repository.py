"""SQLAlchemy implementation of AuthorCreditBalanceRepository

The balance row is the only contended resource in the engine. It is mutated
exclusively through INSERT ... ON CONFLICT DO UPDATE SET total = total + delta,
so concurrent assignments to the same author are all reflected.
"""

from typing import Optional
from sqlalchemy.exc import CompileError
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from credit_engine.app.repositories.author_credit_balance_repository import (
    AuthorCreditBalanceRepository,
)
from credit_engine.domain.author_credit_balance import AuthorCreditBalance
from credit_engine.domain.base import utc_now

UPSERT_INSERTS = {
    "postgresql": postgresql_insert,
    "sqlite": sqlite_insert,
}


class SqlAlchemyAuthorCreditBalanceRepository(AuthorCreditBalanceRepository):
    """
    SQLAlchemy implementation of AuthorCreditBalanceRepository

    Features:
    - Atomic add-or-initialize upsert (PostgreSQL and SQLite)
    - Reads bypass stale identity-map state after an upsert
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_author_id(self, author_id: str) -> Optional[AuthorCreditBalance]:
        """
        Retrieve the cached balance row of an author

        Args:
            author_id: Author identifier

        Returns:
            AuthorCreditBalance if present, None otherwise
        """
        stmt = (
            select(AuthorCreditBalance)
            .where(AuthorCreditBalance.author_id == author_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def apply_delta(self, author_id: str, amount: int) -> int:
        """
        Add amount to the cached total in a single statement

        Args:
            author_id: Author identifier
            amount: Signed delta

        Returns:
            Total after the delta was applied

        Raises:
            CompileError: If the database dialect has no upsert support here
        """
        dialect = self.session.get_bind().dialect.name
        insert = UPSERT_INSERTS.get(dialect)
        if insert is None:
            raise CompileError(f"Atomic balance upsert not supported for dialect {dialect}")

        now = utc_now()
        stmt = insert(AuthorCreditBalance).values(
            author_id=author_id,
            total_credits=amount,
            last_updated=now,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["author_id"],
            set_={
                "total_credits": AuthorCreditBalance.total_credits + amount,
                "last_updated": now,
            },
        ).returning(AuthorCreditBalance.total_credits)

        result = await self.session.execute(stmt)
        return int(result.scalar_one())

    async def get_all(self) -> list[AuthorCreditBalance]:
        stmt = select(AuthorCreditBalance).order_by(AuthorCreditBalance.author_id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
