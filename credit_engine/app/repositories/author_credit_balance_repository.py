"""Author Credit Balance Repository Interface

Defines the contract for the balance cache.
"""

from abc import ABC, abstractmethod
from typing import Optional
from credit_engine.domain.author_credit_balance import AuthorCreditBalance


class AuthorCreditBalanceRepository(ABC):
    """
    Repository interface for AuthorCreditBalance persistence

    apply_delta must be a single atomic add-or-initialize statement; reading
    the current total and writing it back from application code would lose
    concurrent updates.
    """

    @abstractmethod
    async def get_by_author_id(self, author_id: str) -> Optional[AuthorCreditBalance]:
        """
        Retrieve the cached balance row of an author

        Returns:
            AuthorCreditBalance if present, None otherwise (balance is zero)
        """
        pass

    @abstractmethod
    async def apply_delta(self, author_id: str, amount: int) -> int:
        """
        Add amount to the author's cached total, creating the row if absent

        Args:
            author_id: Author identifier
            amount: Signed delta

        Returns:
            Total after the delta was applied
        """
        pass

    @abstractmethod
    async def get_all(self) -> list[AuthorCreditBalance]:
        """
        Retrieve every cached balance row
        """
        pass
