from .credit_ledger_repository import CreditLedgerRepository
from .author_credit_balance_repository import AuthorCreditBalanceRepository
from .promotion_code_repository import PromotionCodeRepository
from .promotion_code_redemption_repository import PromotionCodeRedemptionRepository

__all__ = [
    "CreditLedgerRepository",
    "AuthorCreditBalanceRepository",
    "PromotionCodeRepository",
    "PromotionCodeRedemptionRepository",
]
