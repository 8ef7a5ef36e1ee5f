import logging
from typing import Optional
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from credit_engine.adapter.repositories import (
    SqlAlchemyAuthorCreditBalanceRepository,
    SqlAlchemyCreditLedgerRepository,
    SqlAlchemyPromotionCodeRedemptionRepository,
    SqlAlchemyPromotionCodeRepository,
)
from credit_engine.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from credit_engine.app.services.credit_assignment import CreditAssignmentService
from credit_engine.app.use_cases.credits import (
    AssignAdminCredits,
    AssignCredits,
    GetBalance,
    GetCreditHistory,
    ListLedgerEntries,
    ReconcileBalances,
)
from credit_engine.app.use_cases.promotions import (
    CreatePromotionCode,
    GetPromotionCode,
    ListPromotionCodeRedemptions,
    ListPromotionCodes,
    RedeemPromotionCode,
    TogglePromotionCodeActive,
)

engine = create_async_engine(ApplicationConfig.DB_URI, echo=ApplicationConfig.DB_ECHO, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)


def configure_logging(level: Optional[str] = None):
    logging.basicConfig(
        level=(level or ApplicationConfig.LOG_LEVEL).upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


async def create_tables(bind=None):
    """Create every table that does not exist yet"""
    async with (bind or engine).begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)


async def get_session() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        yield session


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def build_assignment_service(session: AsyncSession) -> CreditAssignmentService:
    return CreditAssignmentService(
        ledger_repo=SqlAlchemyCreditLedgerRepository(session),
        balance_repo=SqlAlchemyAuthorCreditBalanceRepository(session),
    )


# Credits

def build_assign_credits(session: AsyncSession) -> AssignCredits:
    return AssignCredits(SqlAlchemyUnitOfWork(session), build_assignment_service(session))


def build_assign_admin_credits(session: AsyncSession) -> AssignAdminCredits:
    return AssignAdminCredits(SqlAlchemyUnitOfWork(session), build_assignment_service(session))


def build_get_balance(session: AsyncSession) -> GetBalance:
    return GetBalance(SqlAlchemyAuthorCreditBalanceRepository(session))


def build_list_ledger_entries(session: AsyncSession) -> ListLedgerEntries:
    return ListLedgerEntries(SqlAlchemyCreditLedgerRepository(session))


def build_get_credit_history(session: AsyncSession) -> GetCreditHistory:
    return GetCreditHistory(
        SqlAlchemyCreditLedgerRepository(session),
        SqlAlchemyAuthorCreditBalanceRepository(session),
    )


def build_reconcile_balances(session: AsyncSession) -> ReconcileBalances:
    return ReconcileBalances(
        SqlAlchemyCreditLedgerRepository(session),
        SqlAlchemyAuthorCreditBalanceRepository(session),
    )


# Promotion codes

def build_create_promotion_code(session: AsyncSession) -> CreatePromotionCode:
    return CreatePromotionCode(
        SqlAlchemyUnitOfWork(session), SqlAlchemyPromotionCodeRepository(session)
    )


def build_get_promotion_code(session: AsyncSession) -> GetPromotionCode:
    return GetPromotionCode(
        SqlAlchemyPromotionCodeRepository(session),
        SqlAlchemyPromotionCodeRedemptionRepository(session),
    )


def build_list_promotion_codes(session: AsyncSession) -> ListPromotionCodes:
    return ListPromotionCodes(
        SqlAlchemyPromotionCodeRepository(session),
        SqlAlchemyPromotionCodeRedemptionRepository(session),
    )


def build_toggle_promotion_code_active(session: AsyncSession) -> TogglePromotionCodeActive:
    return TogglePromotionCodeActive(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyPromotionCodeRepository(session),
        SqlAlchemyPromotionCodeRedemptionRepository(session),
    )


def build_list_promotion_code_redemptions(session: AsyncSession) -> ListPromotionCodeRedemptions:
    return ListPromotionCodeRedemptions(
        SqlAlchemyPromotionCodeRepository(session),
        SqlAlchemyPromotionCodeRedemptionRepository(session),
    )


def build_redeem_promotion_code(session: AsyncSession) -> RedeemPromotionCode:
    return RedeemPromotionCode(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyPromotionCodeRepository(session),
        SqlAlchemyPromotionCodeRedemptionRepository(session),
        build_assignment_service(session),
    )
