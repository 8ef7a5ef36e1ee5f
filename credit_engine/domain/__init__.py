from .base import BaseModel, generate_uuid, utc_now
from .credit_ledger_entry import CreditLedgerEntry, CreditEventType, ADMIN_EVENT_TYPES
from .author_credit_balance import AuthorCreditBalance
from .promotion_code import PromotionCode, PromotionCodeType, normalize_code, CODE_PATTERN
from .promotion_code_redemption import PromotionCodeRedemption

__all__ = [
    "BaseModel",
    "generate_uuid",
    "utc_now",
    "CreditLedgerEntry",
    "CreditEventType",
    "ADMIN_EVENT_TYPES",
    "AuthorCreditBalance",
    "PromotionCode",
    "PromotionCodeType",
    "normalize_code",
    "CODE_PATTERN",
    "PromotionCodeRedemption",
]
