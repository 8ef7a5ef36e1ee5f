"""Get Balance Use Case

Retrieves an author's current credit balance from the balance cache.
"""

from libs.result import Result, Return
from credit_engine.app.repositories.author_credit_balance_repository import (
    AuthorCreditBalanceRepository,
)
from .dtos import BalanceResponseDTO


class GetBalance:
    """
    Get Balance Use Case

    Read-only O(1) lookup. An author without a cache row has never had a
    credit movement, so the balance is zero rather than an error.
    """

    def __init__(self, balance_repo: AuthorCreditBalanceRepository):
        self.balance_repo = balance_repo

    async def execute(self, author_id: str) -> Result[BalanceResponseDTO]:
        balance = await self.balance_repo.get_by_author_id(author_id)

        if not balance:
            return Return.ok(BalanceResponseDTO(author_id=author_id, total_credits=0))

        return Return.ok(
            BalanceResponseDTO(
                author_id=balance.author_id,
                total_credits=balance.total_credits,
                last_updated=balance.last_updated,
            )
        )
