import pytest
from sqlalchemy import update
from sqlmodel.ext.asyncio.session import AsyncSession

from credit_engine.app.use_cases.credits.dtos import AssignCreditsCommandDTO
from credit_engine.depends import build_assign_credits, build_reconcile_balances
from credit_engine.domain.author_credit_balance import AuthorCreditBalance


@pytest.mark.asyncio
class TestReconcileBalancesIntegration:
    async def test_consistent_store(self, db_session: AsyncSession):
        assign = build_assign_credits(db_session)
        await assign.execute(AssignCreditsCommandDTO(author_id="auth-1", amount=30, event_type="refund"))
        await assign.execute(AssignCreditsCommandDTO(author_id="auth-2", amount=5, event_type="voucher"))

        result = await build_reconcile_balances(db_session).execute()

        assert result.is_ok()
        assert result.value.total_authors_checked == 2
        assert result.value.discrepancies_found == 0

    async def test_detects_tampered_cache(self, db_session: AsyncSession):
        """
        Given: A balance row edited outside the engine
        When: Reconciliation runs
        Then: The drift is reported and nothing is modified
        """
        await build_assign_credits(db_session).execute(
            AssignCreditsCommandDTO(author_id="auth-1", amount=30, event_type="refund")
        )
        await db_session.execute(
            update(AuthorCreditBalance)
            .where(AuthorCreditBalance.author_id == "auth-1")
            .values(total_credits=45)
        )
        await db_session.commit()

        result = await build_reconcile_balances(db_session).execute()

        assert result.value.discrepancies_found == 1
        discrepancy = result.value.discrepancies[0]
        assert discrepancy.cached_balance == 45
        assert discrepancy.ledger_balance == 30
        assert discrepancy.discrepancy == 15

        again = await build_reconcile_balances(db_session).execute()
        assert again.value.discrepancies[0].cached_balance == 45
