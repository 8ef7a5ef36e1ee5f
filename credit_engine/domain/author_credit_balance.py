"""Author Credit Balance Domain Entity

Read-optimised projection of the credit ledger: one row per author holding
the current total. Never a second source of truth.
"""

from datetime import datetime
from sqlmodel import Field, Column
from sqlalchemy import Integer, String, DateTime
from credit_engine.domain.base import BaseModel, utc_now


class AuthorCreditBalance(BaseModel, table=True):
    """
    Author Credit Balance - Cached total of an author's ledger entries

    Domain Rules:
    - At most one row per author (author_id is the primary key)
    - total_credits equals SUM(credit_ledger.amount) whenever no write is in flight
    - Mutated only through an atomic add-or-initialize upsert
    - A missing row means a balance of zero
    """

    __tablename__ = "author_credit_balances"

    author_id: str = Field(
        sa_column=Column(String(64), primary_key=True),
        description="Opaque author identifier"
    )

    total_credits: int = Field(
        default=0,
        sa_column=Column(Integer, nullable=False, default=0),
        description="Current total credits"
    )

    last_updated: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime, nullable=False, default=utc_now),
        description="Timestamp of the last applied delta"
    )
