"""Credit Ledger Entry Domain Entity

Immutable append-only record of every balance-affecting event.
The sum of an author's entries is that author's true balance.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import CheckConstraint, DateTime, Enum as SAEnum, String
from credit_engine.domain.base import BaseModel, BigIntPrimaryKey, utc_now


class CreditEventType(str, Enum):
    """Closed set of reasons a balance can change"""
    INITIAL_CREDIT = "initialCredit"
    CREDIT_PURCHASE = "creditPurchase"
    EBOOK_GENERATION = "eBookGeneration"
    AUDIOBOOK_GENERATION = "audioBookGeneration"
    PRINT_ORDER = "printOrder"
    REFUND = "refund"
    VOUCHER = "voucher"
    PROMOTION = "promotion"
    TEXT_EDIT = "textEdit"
    IMAGE_EDIT = "imageEdit"


ADMIN_EVENT_TYPES = frozenset(
    {CreditEventType.REFUND, CreditEventType.VOUCHER, CreditEventType.PROMOTION}
)


class CreditLedgerEntry(BaseModel, table=True):
    """
    Credit Ledger Entry - Signed credit movement attributed to one author

    Domain Rules:
    - Entries are immutable (insert only, never updated or deleted)
    - Amount is a non-zero signed integer
    - Corrections are made by appending a compensating entry
    - story_id / purchase_id are opaque references owned by other services
    """

    __tablename__ = "credit_ledger"
    __table_args__ = (
        CheckConstraint("amount <> 0", name="credit_ledger_amount_non_zero"),
        Index("credit_ledger_author_id_created_at_idx", "author_id", "created_at"),
        Index("credit_ledger_event_type_idx", "credit_event_type"),
        Index("credit_ledger_story_id_idx", "story_id"),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(BigIntPrimaryKey, primary_key=True, autoincrement=True),
        description="Unique entry identifier (auto-increment)"
    )

    author_id: str = Field(
        index=True,
        description="Opaque author identifier"
    )

    amount: int = Field(
        description="Signed credit movement (never zero)"
    )

    credit_event_type: CreditEventType = Field(
        sa_column=Column(
            SAEnum(
                CreditEventType,
                name="credit_event_type",
                values_callable=lambda enum: [member.value for member in enum],
            ),
            nullable=False,
        ),
        description="Reason for the movement"
    )

    story_id: Optional[str] = Field(
        default=None,
        sa_column=Column(String(64), nullable=True),
        description="Story the movement relates to, if any"
    )

    purchase_id: Optional[str] = Field(
        default=None,
        sa_column=Column(String(64), nullable=True),
        description="Purchase the movement relates to, if any"
    )

    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime, nullable=False),
        description="Entry timestamp (immutable)"
    )
