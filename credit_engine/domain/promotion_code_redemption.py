"""Promotion Code Redemption Domain Entity

Immutable record of one successful promotion code use by one author.
"""

from datetime import datetime
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import BigInteger, DateTime, ForeignKey, String, UniqueConstraint
from credit_engine.domain.base import BaseModel, generate_uuid, utc_now


class PromotionCodeRedemption(BaseModel, table=True):
    """
    Promotion Code Redemption - One granted redemption

    Domain Rules:
    - Created exactly once per successful redemption, never updated or deleted
    - redemption_number is the row's 1-based position among the code's
      redemptions; author_redemption_number among this author's redemptions
      of the code. Both are unique per code (and author), so two writers that
      observed the same counts cannot both insert.
    - redemption_number <= max_global_redemptions and
      author_redemption_number <= max_redemptions_per_user
    """

    __tablename__ = "promotion_code_redemptions"
    __table_args__ = (
        UniqueConstraint(
            "promotion_code_id",
            "redemption_number",
            name="promotion_code_redemptions_global_slot_key",
        ),
        UniqueConstraint(
            "promotion_code_id",
            "author_id",
            "author_redemption_number",
            name="promotion_code_redemptions_author_slot_key",
        ),
        Index("promotion_code_redemptions_code_idx", "promotion_code_id"),
        Index("promotion_code_redemptions_author_idx", "author_id"),
    )

    promotion_code_redemption_id: str = Field(
        default_factory=generate_uuid,
        primary_key=True,
        description="Unique redemption identifier"
    )

    promotion_code_id: str = Field(
        sa_column=Column(
            String,
            ForeignKey("promotion_codes.promotion_code_id", ondelete="CASCADE"),
            nullable=False,
        ),
        description="Redeemed promotion code"
    )

    author_id: str = Field(
        sa_column=Column(String(64), nullable=False),
        description="Redeeming author"
    )

    credits_granted: int = Field(
        description="Credits granted by this redemption"
    )

    redemption_number: int = Field(
        description="1-based position among the code's redemptions"
    )

    author_redemption_number: int = Field(
        description="1-based position among this author's redemptions of the code"
    )

    credit_ledger_entry_id: Optional[int] = Field(
        default=None,
        sa_column=Column(BigInteger, nullable=True),
        description="Ledger entry produced by the grant"
    )

    redeemed_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime, nullable=False),
        description="Redemption timestamp"
    )
