"""Unit tests for ReconcileBalances use case

Tests cover:
- Discrepancy detection between balance cache and ledger sum
- Authors missing on either side
- Disabled reconciliation
- Error handling
"""

import pytest
from unittest.mock import AsyncMock, MagicMock
from sqlalchemy.exc import OperationalError

from config import ApplicationConfig
from credit_engine.app.errors import ErrorCode
from credit_engine.app.use_cases.credits.reconcile_balances import ReconcileBalances
from credit_engine.domain.author_credit_balance import AuthorCreditBalance


@pytest.fixture
def mock_ledger_repo():
    return MagicMock()


@pytest.fixture
def mock_balance_repo():
    return MagicMock()


@pytest.fixture
def reconcile_use_case(mock_ledger_repo, mock_balance_repo):
    return ReconcileBalances(ledger_repo=mock_ledger_repo, balance_repo=mock_balance_repo)


def cached(author_id: str, total: int) -> AuthorCreditBalance:
    return AuthorCreditBalance(author_id=author_id, total_credits=total)


@pytest.mark.asyncio
class TestReconcileBalances:
    async def test_no_discrepancy_when_cache_matches_ledger(
        self, reconcile_use_case, mock_ledger_repo, mock_balance_repo
    ):
        mock_balance_repo.get_all = AsyncMock(return_value=[cached("a1", 50), cached("a2", 0)])
        mock_ledger_repo.sum_by_author = AsyncMock(return_value={"a1": 50, "a2": 0})

        result = await reconcile_use_case.execute()

        assert result.is_ok()
        assert result.value.total_authors_checked == 2
        assert result.value.discrepancies_found == 0
        assert result.value.discrepancies == []

    async def test_detects_drifted_cache(
        self, reconcile_use_case, mock_ledger_repo, mock_balance_repo
    ):
        mock_balance_repo.get_all = AsyncMock(return_value=[cached("a1", 60)])
        mock_ledger_repo.sum_by_author = AsyncMock(return_value={"a1": 50})

        result = await reconcile_use_case.execute()

        assert result.is_ok()
        assert result.value.discrepancies_found == 1
        discrepancy = result.value.discrepancies[0]
        assert discrepancy.author_id == "a1"
        assert discrepancy.cached_balance == 60
        assert discrepancy.ledger_balance == 50
        assert discrepancy.discrepancy == 10

    async def test_ledger_without_cache_row_is_a_discrepancy(
        self, reconcile_use_case, mock_ledger_repo, mock_balance_repo
    ):
        mock_balance_repo.get_all = AsyncMock(return_value=[])
        mock_ledger_repo.sum_by_author = AsyncMock(return_value={"a1": 25})

        result = await reconcile_use_case.execute()

        assert result.value.total_authors_checked == 1
        discrepancy = result.value.discrepancies[0]
        assert discrepancy.cached_balance == 0
        assert discrepancy.ledger_balance == 25
        assert discrepancy.discrepancy == -25

    async def test_disabled_reconciliation_checks_nothing(
        self, reconcile_use_case, mock_ledger_repo, mock_balance_repo, monkeypatch
    ):
        monkeypatch.setattr(ApplicationConfig, "RECONCILIATION_ENABLED", False)
        mock_balance_repo.get_all = AsyncMock()

        result = await reconcile_use_case.execute()

        assert result.is_ok()
        assert result.value.total_authors_checked == 0
        mock_balance_repo.get_all.assert_not_called()

    async def test_store_failure_returns_error(
        self, reconcile_use_case, mock_ledger_repo, mock_balance_repo
    ):
        mock_balance_repo.get_all = AsyncMock(
            side_effect=OperationalError("SELECT", {}, Exception("connection refused"))
        )

        result = await reconcile_use_case.execute()

        assert result.is_err()
        assert result.error.code == ErrorCode.RECONCILIATION_FAILED
