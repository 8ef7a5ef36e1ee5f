"""Data Transfer Objects for Promotion Code Use Cases

Pydantic models for command inputs and response outputs.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional, Union
from pydantic import BaseModel, Field
from credit_engine.app.use_cases.pagination import PaginationDTO
from credit_engine.domain.promotion_code import PromotionCode
from credit_engine.domain.promotion_code_redemption import PromotionCodeRedemption


class RedemptionStatus(str, Enum):
    """Terminal outcome of a redemption attempt"""
    GRANTED = "granted"
    REJECTED = "rejected"


class CreatePromotionCodeCommandDTO(BaseModel):
    """
    Command DTO for creating a promotion code

    Values are validated by CreatePromotionCode so that each failure maps to
    a stable error code.
    """

    code: str = Field(
        ...,
        description="Code text; trimmed and upper-cased before storage"
    )

    type: Optional[str] = Field(
        default=None,
        description="partner, referral or book_qr (defaults to partner)"
    )

    credit_amount: int = Field(
        ...,
        description="Credits granted per redemption (must be > 0)"
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
        description="Start of validity window"
    )

    valid_until: Optional[datetime] = Field(
        default=None,
        description="End of validity window"
    )

    active: bool = Field(
        default=True,
        description="Whether the code can be redeemed right away"
    )

    referrer_author_id: Optional[str] = Field(
        default=None,
        description="Referring author for referral codes"
    )

    metadata: Optional[Dict[str, Any]] = Field(
        default=None,
        description="Free-form attributes"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "code": "summer10",
                "type": "partner",
                "credit_amount": 10,
                "max_global_redemptions": 500,
                "max_redemptions_per_user": 1,
                "valid_from": "2024-06-01T00:00:00Z",
                "valid_until": "2024-09-01T00:00:00Z",
            }
        }


class ListPromotionCodesQueryDTO(BaseModel):
    """Query DTO for listing promotion codes"""

    page: int = Field(default=1, description="1-based page number")
    limit: Optional[int] = Field(default=None, description="Page size")
    search_term: Optional[str] = Field(default=None, description="Substring of the code")
    type_filter: Optional[str] = Field(default=None, description="Type, or 'all'")
    active_filter: Optional[Union[bool, str]] = Field(
        default=None, description="'true' / 'false' (anything else = no filter)"
    )


class PromotionCodeDTO(BaseModel):
    """Promotion code with computed redemption figures"""

    promotion_code_id: str
    code: str
    type: str
    credit_amount: int
    max_global_redemptions: Optional[int] = None
    max_redemptions_per_user: int
    valid_from: Optional[datetime] = None
    valid_until: Optional[datetime] = None
    referrer_author_id: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None
    active: bool
    created_at: datetime
    updated_at: datetime
    total_redemptions: int = 0
    remaining_global: Optional[int] = None
    unique_users: Optional[int] = None


class ListPromotionCodesResponseDTO(BaseModel):
    data: list[PromotionCodeDTO]
    pagination: PaginationDTO


class RedemptionDTO(BaseModel):
    """Single promotion code redemption"""

    promotion_code_redemption_id: str
    promotion_code_id: str
    author_id: str
    credits_granted: int
    redeemed_at: datetime
    credit_ledger_entry_id: Optional[int] = None


class ListRedemptionsResponseDTO(BaseModel):
    data: list[RedemptionDTO]
    pagination: PaginationDTO


class RedeemPromotionCodeCommandDTO(BaseModel):
    """Command DTO for redeeming a code on behalf of an author"""

    author_id: str = Field(..., min_length=1, description="Redeeming author")
    code: str = Field(..., description="Code as entered; normalized before lookup")


class RedemptionResultDTO(BaseModel):
    """Response DTO for a granted redemption"""

    status: RedemptionStatus = RedemptionStatus.GRANTED
    code: str
    redemption: RedemptionDTO
    balance_after: int


def to_promotion_code_dto(
    promotion_code: PromotionCode,
    total_redemptions: int = 0,
    unique_users: Optional[int] = None,
) -> PromotionCodeDTO:
    return PromotionCodeDTO(
        promotion_code_id=promotion_code.promotion_code_id,
        code=promotion_code.code,
        type=promotion_code.type,
        credit_amount=promotion_code.credit_amount,
        max_global_redemptions=promotion_code.max_global_redemptions,
        max_redemptions_per_user=promotion_code.max_redemptions_per_user,
        valid_from=promotion_code.valid_from,
        valid_until=promotion_code.valid_until,
        referrer_author_id=promotion_code.referrer_author_id,
        metadata=promotion_code.code_metadata,
        active=promotion_code.active,
        created_at=promotion_code.created_at,
        updated_at=promotion_code.updated_at,
        total_redemptions=total_redemptions,
        remaining_global=promotion_code.remaining_global(total_redemptions),
        unique_users=unique_users,
    )


def to_redemption_dto(redemption: PromotionCodeRedemption) -> RedemptionDTO:
    return RedemptionDTO(
        promotion_code_redemption_id=redemption.promotion_code_redemption_id,
        promotion_code_id=redemption.promotion_code_id,
        author_id=redemption.author_id,
        credits_granted=redemption.credits_granted,
        redeemed_at=redemption.redeemed_at,
        credit_ledger_entry_id=redemption.credit_ledger_entry_id,
    )
