"""
List Ledger Entries Use Case

Retrieves an author's credit ledger for display, most recent first.
"""
from libs.result import Result, Return
from credit_engine.app.repositories.credit_ledger_repository import CreditLedgerRepository
from credit_engine.domain.credit_ledger_entry import CreditLedgerEntry
from .dtos import LedgerEntryDTO, ListLedgerEntriesResponseDTO


def to_ledger_entry_dto(entry: CreditLedgerEntry) -> LedgerEntryDTO:
    return LedgerEntryDTO(
        id=entry.id,
        amount=entry.amount,
        event_type=entry.credit_event_type.value,
        created_at=entry.created_at,
        story_id=entry.story_id,
        purchase_id=entry.purchase_id,
    )


class ListLedgerEntries:
    def __init__(self, ledger_repo: CreditLedgerRepository):
        self.ledger_repo = ledger_repo

    async def execute(self, author_id: str) -> Result[ListLedgerEntriesResponseDTO]:
        entries = await self.ledger_repo.list_for_author(author_id)
        return Return.ok(
            ListLedgerEntriesResponseDTO(
                author_id=author_id,
                entries=[to_ledger_entry_dto(entry) for entry in entries],
                total=len(entries),
            )
        )
