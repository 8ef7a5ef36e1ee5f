"""Integration tests for RedeemPromotionCode against a real database

Tests cover:
- Per-user and global caps across authors
- Validity window and activation rejections
- Rejected attempts writing nothing
- Concurrent redemptions never exceeding caps
- Slot uniqueness enforced by the database
"""

import asyncio
import pytest
from datetime import timedelta
from sqlalchemy.exc import IntegrityError
from sqlmodel import select, func
from sqlmodel.ext.asyncio.session import AsyncSession

from credit_engine.app.errors import ErrorCode
from credit_engine.app.use_cases.promotions.dtos import (
    CreatePromotionCodeCommandDTO,
    RedeemPromotionCodeCommandDTO,
    RedemptionStatus,
)
from credit_engine.depends import (
    build_create_promotion_code,
    build_get_balance,
    build_redeem_promotion_code,
)
from credit_engine.domain.base import utc_now
from credit_engine.domain.credit_ledger_entry import CreditEventType, CreditLedgerEntry
from credit_engine.domain.promotion_code_redemption import PromotionCodeRedemption


async def create_code(session: AsyncSession, **kwargs):
    result = await build_create_promotion_code(session).execute(CreatePromotionCodeCommandDTO(**kwargs))
    assert result.is_ok(), result.error
    return result.value


async def redeem(session: AsyncSession, author_id: str, code: str):
    return await build_redeem_promotion_code(session).execute(
        RedeemPromotionCodeCommandDTO(author_id=author_id, code=code)
    )


async def balance_of(session: AsyncSession, author_id: str) -> int:
    result = await build_get_balance(session).execute(author_id)
    return result.value.total_credits


async def row_count(session: AsyncSession, model, *conditions) -> int:
    stmt = select(func.count()).select_from(model)
    if conditions:
        stmt = stmt.where(*conditions)
    result = await session.execute(stmt)
    return int(result.scalar())


async def ledger_sum(session: AsyncSession, author_id: str) -> int:
    result = await session.execute(
        select(func.coalesce(func.sum(CreditLedgerEntry.amount), 0)).where(
            CreditLedgerEntry.author_id == author_id
        )
    )
    return int(result.scalar())


@pytest.mark.asyncio
class TestRedeemPromotionCodeIntegration:
    async def test_caps_across_authors(self, db_session: AsyncSession):
        """
        Given: SUMMER10 worth 10 credits, one use per author, two uses in total
        When: auth-1 redeems twice, then auth-2 and auth-3 redeem
        Then: auth-1 and auth-2 are granted; the repeat and auth-3 are rejected
        """
        await create_code(
            db_session,
            code="SUMMER10",
            credit_amount=10,
            max_redemptions_per_user=1,
            max_global_redemptions=2,
        )

        first = await redeem(db_session, "auth-1", "SUMMER10")
        assert first.is_ok()
        assert first.value.status == RedemptionStatus.GRANTED
        assert first.value.balance_after == 10
        assert await balance_of(db_session, "auth-1") == 10

        repeat = await redeem(db_session, "auth-1", "summer10")
        assert repeat.is_err()
        assert repeat.error.code == ErrorCode.PER_USER_CAP_REACHED
        assert await balance_of(db_session, "auth-1") == 10

        second = await redeem(db_session, "auth-2", "SUMMER10")
        assert second.is_ok()

        third = await redeem(db_session, "auth-3", "SUMMER10")
        assert third.error.code == ErrorCode.GLOBAL_CAP_REACHED
        assert await balance_of(db_session, "auth-3") == 0

        assert await row_count(db_session, PromotionCodeRedemption) == 2

    async def test_grant_links_redemption_to_promotion_entry(self, db_session: AsyncSession):
        await create_code(db_session, code="LINKED", credit_amount=15)

        result = await redeem(db_session, "auth-1", "LINKED")

        entry = await db_session.get(CreditLedgerEntry, result.value.redemption.credit_ledger_entry_id)
        assert entry.amount == 15
        assert entry.author_id == "auth-1"
        assert entry.credit_event_type == CreditEventType.PROMOTION

    async def test_not_yet_valid(self, db_session: AsyncSession):
        now = utc_now()
        await create_code(
            db_session,
            code="FUTURE",
            credit_amount=10,
            valid_from=now + timedelta(days=7),
            valid_until=now + timedelta(days=30),
        )

        result = await redeem(db_session, "auth-1", "FUTURE")

        assert result.error.code == ErrorCode.NOT_YET_VALID

    async def test_expired(self, db_session: AsyncSession):
        now = utc_now()
        await create_code(
            db_session,
            code="PAST",
            credit_amount=10,
            valid_from=now - timedelta(days=30),
            valid_until=now - timedelta(days=1),
        )

        result = await redeem(db_session, "auth-1", "PAST")

        assert result.error.code == ErrorCode.EXPIRED

    async def test_unknown_code(self, db_session: AsyncSession):
        result = await redeem(db_session, "auth-1", "NOPE")

        assert result.error.code == ErrorCode.NOT_FOUND

    @pytest.mark.parametrize(
        "code_kwargs,expected",
        [
            ({"active": False}, ErrorCode.INACTIVE),
            ({"valid_from": utc_now() + timedelta(days=1)}, ErrorCode.NOT_YET_VALID),
        ],
    )
    async def test_rejection_writes_nothing(self, db_session: AsyncSession, code_kwargs, expected):
        await create_code(db_session, code="GATED", credit_amount=10, **code_kwargs)

        result = await redeem(db_session, "auth-1", "GATED")

        assert result.error.code == expected
        assert await row_count(db_session, PromotionCodeRedemption) == 0
        assert await row_count(db_session, CreditLedgerEntry, CreditLedgerEntry.author_id == "auth-1") == 0
        assert await balance_of(db_session, "auth-1") == 0


@pytest.mark.asyncio
class TestConcurrentRedemptionIntegration:
    async def test_global_cap_holds_under_concurrency(self, session_factory):
        """
        Given: A code with a single global redemption
        When: Several authors redeem it at the same time on separate sessions
        Then: Exactly one is granted and every balance matches its ledger
        """
        async with session_factory() as session:
            await create_code(session, code="ONLY-ONE", credit_amount=10, max_global_redemptions=1)

        authors = [f"auth-{index}" for index in range(4)]

        async def attempt(author_id):
            async with session_factory() as session:
                return await redeem(session, author_id, "ONLY-ONE")

        results = await asyncio.gather(*(attempt(author_id) for author_id in authors))

        granted = [result for result in results if result.is_ok()]
        assert len(granted) == 1
        for result in results:
            if result.is_err():
                assert result.error.code in {
                    ErrorCode.GLOBAL_CAP_REACHED,
                    ErrorCode.REDEMPTION_CONFLICT,
                    ErrorCode.REDEEM_PROMOTION_CODE_FAILED,
                }

        async with session_factory() as session:
            assert await row_count(session, PromotionCodeRedemption) == 1
            for author_id in authors:
                assert await balance_of(session, author_id) == await ledger_sum(session, author_id)

    async def test_per_user_cap_holds_under_concurrency(self, session_factory):
        async with session_factory() as session:
            await create_code(session, code="ONCE-EACH", credit_amount=10, max_redemptions_per_user=1)

        async def attempt():
            async with session_factory() as session:
                return await redeem(session, "auth-1", "ONCE-EACH")

        results = await asyncio.gather(attempt(), attempt(), attempt())

        assert sum(1 for result in results if result.is_ok()) == 1
        async with session_factory() as session:
            assert await balance_of(session, "auth-1") == 10
            assert await ledger_sum(session, "auth-1") == 10

    async def test_duplicate_slot_rejected_by_database(self, db_session: AsyncSession):
        created = await create_code(db_session, code="SLOTTED", credit_amount=10)

        for author_id in ("auth-1", "auth-2"):
            db_session.add(
                PromotionCodeRedemption(
                    promotion_code_id=created.promotion_code_id,
                    author_id=author_id,
                    credits_granted=10,
                    redemption_number=1,
                    author_redemption_number=1,
                )
            )

        with pytest.raises(IntegrityError):
            await db_session.flush()
        await db_session.rollback()
