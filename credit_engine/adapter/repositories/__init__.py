from .credit_ledger_repository import SqlAlchemyCreditLedgerRepository
from .author_credit_balance_repository import SqlAlchemyAuthorCreditBalanceRepository
from .promotion_code_repository import SqlAlchemyPromotionCodeRepository
from .promotion_code_redemption_repository import SqlAlchemyPromotionCodeRedemptionRepository

__all__ = [
    "SqlAlchemyCreditLedgerRepository",
    "SqlAlchemyAuthorCreditBalanceRepository",
    "SqlAlchemyPromotionCodeRepository",
    "SqlAlchemyPromotionCodeRedemptionRepository",
]
