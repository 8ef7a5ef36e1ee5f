"""Credit Ledger Repository Interface

Defines the contract for the append-only ledger store.
"""

from abc import ABC, abstractmethod
from credit_engine.domain.credit_ledger_entry import CreditLedgerEntry


class CreditLedgerRepository(ABC):
    """
    Repository interface for CreditLedgerEntry persistence

    Entries are insert-only: the contract deliberately has no update or
    delete operation.
    """

    @abstractmethod
    async def append(self, entry: CreditLedgerEntry) -> CreditLedgerEntry:
        """
        Insert a new immutable ledger entry

        Args:
            entry: CreditLedgerEntry to persist

        Returns:
            Persisted entry with generated ID
        """
        pass

    @abstractmethod
    async def list_for_author(
        self, author_id: str, oldest_first: bool = False
    ) -> list[CreditLedgerEntry]:
        """
        Retrieve every entry of an author

        Args:
            author_id: Author identifier
            oldest_first: Chronological order when True, newest first otherwise

        Returns:
            List of CreditLedgerEntry (empty if none)
        """
        pass

    @abstractmethod
    async def sum_for_author(self, author_id: str) -> int:
        """
        Sum of all entry amounts of an author (0 if none)
        """
        pass

    @abstractmethod
    async def sum_by_author(self) -> dict[str, int]:
        """
        Ledger sum for every author that has at least one entry

        Returns:
            Mapping of author_id to SUM(amount)
        """
        pass
