"""
Get Credit History Use Case

Reconstructs the balance after every ledger entry of an author by replaying
the ledger chronologically.
"""
from libs.result import Result, Return
from credit_engine.app.repositories.credit_ledger_repository import CreditLedgerRepository
from credit_engine.app.repositories.author_credit_balance_repository import (
    AuthorCreditBalanceRepository,
)
from .dtos import CreditHistoryItemDTO, CreditHistoryResponseDTO
from .list_ledger_entries import to_ledger_entry_dto


class GetCreditHistory:
    """
    Use case: Credit history with running balances

    Entries are summed oldest first and returned newest first. The
    balance_after of the newest entry equals the cached balance whenever the
    cache is consistent with the ledger; current_balance is the cached value
    so callers can compare the two.
    """

    def __init__(
        self,
        ledger_repo: CreditLedgerRepository,
        balance_repo: AuthorCreditBalanceRepository,
    ):
        self.ledger_repo = ledger_repo
        self.balance_repo = balance_repo

    async def execute(self, author_id: str) -> Result[CreditHistoryResponseDTO]:
        entries = await self.ledger_repo.list_for_author(author_id, oldest_first=True)

        history = []
        running_balance = 0
        for entry in entries:
            running_balance += entry.amount
            history.append(
                CreditHistoryItemDTO(
                    **to_ledger_entry_dto(entry).model_dump(),
                    balance_after=running_balance,
                )
            )
        history.reverse()

        balance = await self.balance_repo.get_by_author_id(author_id)

        return Return.ok(
            CreditHistoryResponseDTO(
                author_id=author_id,
                entries=history,
                current_balance=balance.total_credits if balance else 0,
            )
        )
