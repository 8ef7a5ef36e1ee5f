"""Data Transfer Objects for Credit Use Cases

Pydantic models for command inputs and response outputs.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class AssignCreditsCommandDTO(BaseModel):
    """
    Command DTO for system-generated credit movements

    Used as input to AssignCredits. Amount is signed: debits for story
    generation or print orders are negative. Not amount-capped.
    """

    author_id: str = Field(
        ...,
        min_length=1,
        description="Author identifier"
    )

    amount: int = Field(
        ...,
        description="Signed credit amount (must be non-zero)"
    )

    event_type: str = Field(
        ...,
        description="Credit event type (e.g., 'eBookGeneration', 'creditPurchase')"
    )

    story_id: Optional[str] = Field(
        default=None,
        description="Story the movement relates to"
    )

    purchase_id: Optional[str] = Field(
        default=None,
        description="Purchase the movement relates to"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "author_id": "8d9c3a52-7b1e-4c55-9d0f-2f3b6a1c9e01",
                "amount": -5,
                "event_type": "eBookGeneration",
                "story_id": "story_123",
            }
        }


class AssignAdminCreditsCommandDTO(BaseModel):
    """
    Command DTO for manual admin credit grants

    Used as input to AssignAdminCredits. Range and event type are validated
    by the use case so that failures carry stable error codes.
    """

    author_id: str = Field(
        ...,
        min_length=1,
        description="Author identifier"
    )

    amount: int = Field(
        ...,
        description="Credits to grant (1-200)"
    )

    event_type: str = Field(
        ...,
        description="One of 'refund', 'voucher', 'promotion'"
    )


class CreditAssignmentResponseDTO(BaseModel):
    """Response DTO for a committed credit assignment"""

    entry_id: int
    author_id: str
    amount: int
    event_type: str
    balance_after: int
    created_at: datetime


class BalanceResponseDTO(BaseModel):
    """Response DTO for an author's cached balance"""

    author_id: str
    total_credits: int
    last_updated: Optional[datetime] = None


class LedgerEntryDTO(BaseModel):
    """Single ledger entry"""

    id: int
    amount: int
    event_type: str
    created_at: datetime
    story_id: Optional[str] = None
    purchase_id: Optional[str] = None


class ListLedgerEntriesResponseDTO(BaseModel):
    """Response DTO for an author's ledger, newest first"""

    author_id: str
    entries: list[LedgerEntryDTO]
    total: int


class CreditHistoryItemDTO(LedgerEntryDTO):
    """Ledger entry with the running balance right after it"""

    balance_after: int


class CreditHistoryResponseDTO(BaseModel):
    """Response DTO for balance history, newest first"""

    author_id: str
    entries: list[CreditHistoryItemDTO]
    current_balance: int


class BalanceDiscrepancyDTO(BaseModel):
    """Author whose cached balance differs from the ledger sum"""

    author_id: str
    cached_balance: int
    ledger_balance: int
    discrepancy: int  # cached_balance - ledger_balance


class ReconciliationResultDTO(BaseModel):
    """Result of a balance reconciliation run"""

    total_authors_checked: int
    discrepancies_found: int
    discrepancies: list[BalanceDiscrepancyDTO]
    reconciliation_time: datetime
    execution_time_ms: int
