"""Promotion Code Domain Entity

Catalog entry for a redeemable voucher code granting a fixed credit amount.
"""

import re
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional
from sqlmodel import Field, Column
from sqlalchemy import Boolean, CheckConstraint, DateTime, JSON, String
from credit_engine.domain.base import BaseModel, generate_uuid, utc_now

CODE_PATTERN = re.compile(r"^[A-Z0-9-]{3,64}$")


class PromotionCodeType(str, Enum):
    """Promotion code categories"""
    PARTNER = "partner"    # Codes handed out through partners
    REFERRAL = "referral"  # Codes tied to a referring author
    BOOK_QR = "book_qr"    # Codes printed inside physical books


def normalize_code(code: str) -> str:
    """Trim and upper-case a code the way it is stored"""
    return (code or "").strip().upper()


class PromotionCode(BaseModel, table=True):
    """
    Promotion Code - Redeemable code with caps and a validity window

    Domain Rules:
    - code is unique, stored upper-case, matches [A-Z0-9-]{3,64}
    - credit_amount > 0
    - max_global_redemptions None = unlimited
    - max_redemptions_per_user defaults to 1
    - valid_from < valid_until when both are set
    - Never deleted; only `active` changes after creation
    """

    __tablename__ = "promotion_codes"
    __table_args__ = (
        CheckConstraint("credit_amount > 0", name="promotion_codes_credit_amount_positive"),
        CheckConstraint(
            "max_redemptions_per_user >= 1",
            name="promotion_codes_per_user_cap_positive",
        ),
        CheckConstraint(
            "max_global_redemptions IS NULL OR max_global_redemptions >= 1",
            name="promotion_codes_global_cap_positive",
        ),
        CheckConstraint(
            "valid_from IS NULL OR valid_until IS NULL OR valid_from < valid_until",
            name="promotion_codes_validity_window",
        ),
    )

    promotion_code_id: str = Field(
        default_factory=generate_uuid,
        primary_key=True,
        description="Unique promotion code identifier"
    )

    code: str = Field(
        sa_column=Column(String(64), nullable=False, unique=True),
        description="Normalized upper-case code"
    )

    type: str = Field(
        default=PromotionCodeType.PARTNER.value,
        sa_column=Column(String(20), nullable=False, default=PromotionCodeType.PARTNER.value),
        description="Code category (partner, referral, book_qr)"
    )

    credit_amount: int = Field(
        description="Credits granted per redemption (> 0)"
    )

    max_global_redemptions: Optional[int] = Field(
        default=None,
        description="Cap across all authors (None = unlimited)"
    )

    max_redemptions_per_user: int = Field(
        default=1,
        description="Cap per author"
    )

    valid_from: Optional[datetime] = Field(
        default=None,
        sa_column=Column(DateTime, nullable=True),
        description="Start of the validity window (inclusive)"
    )

    valid_until: Optional[datetime] = Field(
        default=None,
        sa_column=Column(DateTime, nullable=True),
        description="End of the validity window (inclusive)"
    )

    referrer_author_id: Optional[str] = Field(
        default=None,
        sa_column=Column(String(64), nullable=True),
        description="Referring author for referral codes"
    )

    code_metadata: Optional[Dict[str, Any]] = Field(
        default=None,
        sa_column=Column("metadata", JSON, nullable=True),
        description="Free-form attributes"
    )

    active: bool = Field(
        default=True,
        sa_column=Column(Boolean, nullable=False, default=True),
        description="Inactive codes cannot be redeemed"
    )

    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime, nullable=False),
        description="Creation timestamp"
    )

    updated_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime, nullable=False),
        description="Last modification timestamp"
    )

    def remaining_global(self, total_redemptions: int) -> Optional[int]:
        if self.max_global_redemptions is None:
            return None
        return max(self.max_global_redemptions - total_redemptions, 0)
