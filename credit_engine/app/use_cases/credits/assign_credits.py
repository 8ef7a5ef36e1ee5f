"""AssignCredits Use Case

Applies a signed credit movement to an author: one ledger entry plus the
matching balance cache update, committed as a single unit of work.
"""

import logging
from sqlalchemy.exc import SQLAlchemyError
from libs.result import Result, Return
from credit_engine.app.errors import ErrorCode, persistence_error
from credit_engine.app.services.unit_of_work import UnitOfWork
from credit_engine.app.services.credit_assignment import CreditAssignmentService
from .dtos import AssignCreditsCommandDTO, CreditAssignmentResponseDTO

logger = logging.getLogger(__name__)


class AssignCredits:
    """
    Use Case: Assign credits to an author

    Business Rules:
    1. Amount is a non-zero signed integer (debits are negative)
    2. Ledger append and balance upsert commit together or not at all
    3. The balance is never read and written back from application code
    4. On a persistence failure nothing is committed; callers retry the whole call

    Flow:
    1. Append ledger entry
    2. Apply delta to balance cache (atomic upsert)
    3. Commit
    4. Return entry and resulting balance
    """

    def __init__(self, uow: UnitOfWork, assignment_service: CreditAssignmentService):
        self.uow = uow
        self.assignment_service = assignment_service

    async def execute(self, command: AssignCreditsCommandDTO) -> Result[CreditAssignmentResponseDTO]:
        """
        Execute credit assignment

        Args:
            command: AssignCreditsCommandDTO with author_id, amount, event_type

        Returns:
            Result[CreditAssignmentResponseDTO]: Committed entry and new balance, or error
        """
        try:
            assignment = await self.assignment_service.assign(
                author_id=command.author_id,
                amount=command.amount,
                event_type=command.event_type,
                story_id=command.story_id,
                purchase_id=command.purchase_id,
            )
            if assignment.is_err():
                await self.uow.rollback()
                return Return.err(assignment.error)

            await self.uow.commit()

        except SQLAlchemyError as e:
            await self.uow.rollback()
            logger.exception(f"Failed to assign {command.amount} credits to author {command.author_id}")
            return Return.err(
                persistence_error(
                    ErrorCode.ASSIGN_CREDITS_FAILED,
                    "Failed to assign credits",
                    reason=str(e),
                )
            )

        entry, balance_after = assignment.value
        logger.info(
            f"Assigned {entry.amount} credits ({entry.credit_event_type.value}) to author "
            f"{entry.author_id}; balance is now {balance_after}"
        )

        return Return.ok(
            CreditAssignmentResponseDTO(
                entry_id=entry.id,
                author_id=entry.author_id,
                amount=entry.amount,
                event_type=entry.credit_event_type.value,
                balance_after=balance_after,
                created_at=entry.created_at,
            )
        )
