"""ReconcileBalances Use Case

Compares every cached author balance against the sum of that author's
ledger entries to detect drift.
"""

import logging
import time
from config import ApplicationConfig
from libs.result import Result, Return
from sqlalchemy.exc import SQLAlchemyError
from credit_engine.app.errors import ErrorCode, persistence_error
from credit_engine.app.repositories.credit_ledger_repository import CreditLedgerRepository
from credit_engine.app.repositories.author_credit_balance_repository import (
    AuthorCreditBalanceRepository,
)
from credit_engine.domain.base import utc_now
from .dtos import BalanceDiscrepancyDTO, ReconciliationResultDTO

logger = logging.getLogger(__name__)


class ReconcileBalances:
    """
    Use Case: Reconcile balance cache against the ledger

    Business Rules:
    1. The ledger is the source of truth; the cache is checked against it
    2. Authors with ledger entries but no cache row count as cached balance 0
    3. Authors with a cache row but no ledger entries count as ledger sum 0
    4. Does NOT modify any data (read-only audit)
    """

    def __init__(
        self,
        ledger_repo: CreditLedgerRepository,
        balance_repo: AuthorCreditBalanceRepository,
    ):
        self.ledger_repo = ledger_repo
        self.balance_repo = balance_repo

    async def execute(self) -> Result[ReconciliationResultDTO]:
        """
        Execute balance reconciliation

        Returns:
            Result[ReconciliationResultDTO]: Reconciliation result with any discrepancies
        """
        start_time = time.time()
        reconciliation_time = utc_now()

        if not ApplicationConfig.RECONCILIATION_ENABLED:
            logger.info("Balance reconciliation is disabled, skipping")
            return Return.ok(
                ReconciliationResultDTO(
                    total_authors_checked=0,
                    discrepancies_found=0,
                    discrepancies=[],
                    reconciliation_time=reconciliation_time,
                    execution_time_ms=0,
                )
            )

        try:
            logger.info("Starting balance reconciliation")

            cached = {row.author_id: row.total_credits for row in await self.balance_repo.get_all()}
            ledger_sums = await self.ledger_repo.sum_by_author()
            author_ids = sorted(set(cached) | set(ledger_sums))

            discrepancies: list[BalanceDiscrepancyDTO] = []
            for author_id in author_ids:
                cached_balance = cached.get(author_id, 0)
                ledger_balance = ledger_sums.get(author_id, 0)
                if cached_balance == ledger_balance:
                    continue

                discrepancies.append(
                    BalanceDiscrepancyDTO(
                        author_id=author_id,
                        cached_balance=cached_balance,
                        ledger_balance=ledger_balance,
                        discrepancy=cached_balance - ledger_balance,
                    )
                )
                logger.warning(
                    f"Discrepancy found for author {author_id}: "
                    f"cached_balance={cached_balance}, "
                    f"ledger_sum={ledger_balance}, "
                    f"discrepancy={cached_balance - ledger_balance}"
                )

        except SQLAlchemyError as e:
            logger.exception("Balance reconciliation failed")
            return Return.err(
                persistence_error(
                    ErrorCode.RECONCILIATION_FAILED,
                    "Failed to reconcile balances",
                    reason=str(e),
                )
            )

        execution_time_ms = int((time.time() - start_time) * 1000)

        if discrepancies:
            logger.warning(
                f"Reconciliation complete. Found {len(discrepancies)} discrepancies "
                f"out of {len(author_ids)} authors in {execution_time_ms}ms"
            )
        else:
            logger.info(
                f"Reconciliation complete. All {len(author_ids)} authors balanced "
                f"in {execution_time_ms}ms"
            )

        return Return.ok(
            ReconciliationResultDTO(
                total_authors_checked=len(author_ids),
                discrepancies_found=len(discrepancies),
                discrepancies=discrepancies,
                reconciliation_time=reconciliation_time,
                execution_time_ms=execution_time_ms,
            )
        )
