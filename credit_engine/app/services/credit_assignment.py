"""Credit Assignment Service

The only sanctioned path to change a balance: appends a ledger entry and
applies the same amount to the balance cache. It does not commit; the
calling use case owns the unit of work so that the pair (and anything else
written alongside, such as a redemption) commits or rolls back together.
"""

import logging
from typing import NamedTuple, Optional, Union
from libs.result import Result, Return
from credit_engine.app.errors import ErrorCode, validation_error
from credit_engine.app.repositories.credit_ledger_repository import CreditLedgerRepository
from credit_engine.app.repositories.author_credit_balance_repository import (
    AuthorCreditBalanceRepository,
)
from credit_engine.domain.credit_ledger_entry import CreditLedgerEntry, CreditEventType

logger = logging.getLogger(__name__)


class CreditAssignment(NamedTuple):
    entry: CreditLedgerEntry
    balance_after: int


def parse_event_type(event_type: Union[CreditEventType, str]) -> Optional[CreditEventType]:
    """Coerce a raw value to CreditEventType, None if it is not a member"""
    if isinstance(event_type, CreditEventType):
        return event_type
    try:
        return CreditEventType(event_type)
    except ValueError:
        return None


class CreditAssignmentService:
    def __init__(
        self,
        ledger_repo: CreditLedgerRepository,
        balance_repo: AuthorCreditBalanceRepository,
    ):
        self.ledger_repo = ledger_repo
        self.balance_repo = balance_repo

    async def assign(
        self,
        author_id: str,
        amount: int,
        event_type: Union[CreditEventType, str],
        story_id: Optional[str] = None,
        purchase_id: Optional[str] = None,
    ) -> Result[CreditAssignment]:
        """
        Append a ledger entry and apply it to the balance cache

        Persistence errors propagate to the caller, which must roll back.

        Returns:
            Result[CreditAssignment]: Entry written and the resulting balance,
            or invalid_credit_amount / invalid_event_type
        """
        if isinstance(amount, bool) or not isinstance(amount, int) or amount == 0:
            return Return.err(
                validation_error(
                    ErrorCode.INVALID_CREDIT_AMOUNT,
                    f"Credit amount must be a non-zero integer, got {amount!r}",
                )
            )

        parsed_event_type = parse_event_type(event_type)
        if parsed_event_type is None:
            return Return.err(
                validation_error(
                    ErrorCode.INVALID_EVENT_TYPE,
                    f"Unknown credit event type {event_type!r}",
                )
            )

        entry = await self.ledger_repo.append(
            CreditLedgerEntry(
                author_id=author_id,
                amount=amount,
                credit_event_type=parsed_event_type,
                story_id=story_id,
                purchase_id=purchase_id,
            )
        )
        balance_after = await self.balance_repo.apply_delta(author_id, amount)

        logger.debug(
            f"Staged {parsed_event_type.value} of {amount} credits for author {author_id} "
            f"(entry_id={entry.id}, balance_after={balance_after})"
        )
        return Return.ok(CreditAssignment(entry=entry, balance_after=balance_after))
