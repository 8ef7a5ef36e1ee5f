"""AssignAdminCredits Use Case

Manual credit grant issued from the admin portal. Bounded to limit the
impact of a mistyped amount; system-generated movements go through
AssignCredits directly and are not capped.
"""

from libs.result import Result, Return
from config import ApplicationConfig
from credit_engine.app.errors import ErrorCode, validation_error
from credit_engine.app.services.unit_of_work import UnitOfWork
from credit_engine.app.services.credit_assignment import CreditAssignmentService, parse_event_type
from credit_engine.domain.credit_ledger_entry import ADMIN_EVENT_TYPES
from .assign_credits import AssignCredits
from .dtos import AssignAdminCreditsCommandDTO, AssignCreditsCommandDTO, CreditAssignmentResponseDTO


class AssignAdminCredits:
    """
    Use Case: Grant credits to an author on behalf of an administrator

    Business Rules:
    1. ADMIN_CREDIT_MIN <= amount <= ADMIN_CREDIT_MAX (1..200 by default)
    2. event_type is one of refund, voucher, promotion
    3. Validation happens before any write
    """

    def __init__(self, uow: UnitOfWork, assignment_service: CreditAssignmentService):
        self.assign_credits = AssignCredits(uow, assignment_service)
        self.min_amount = ApplicationConfig.ADMIN_CREDIT_MIN
        self.max_amount = ApplicationConfig.ADMIN_CREDIT_MAX

    async def execute(
        self, command: AssignAdminCreditsCommandDTO
    ) -> Result[CreditAssignmentResponseDTO]:
        if not self.min_amount <= command.amount <= self.max_amount:
            return Return.err(
                validation_error(
                    ErrorCode.INVALID_CREDIT_AMOUNT,
                    f"Amount must be between {self.min_amount} and {self.max_amount}",
                )
            )

        event_type = parse_event_type(command.event_type)
        if event_type not in ADMIN_EVENT_TYPES:
            return Return.err(
                validation_error(
                    ErrorCode.INVALID_EVENT_TYPE,
                    f"Admin credits must be a refund, voucher or promotion, got {command.event_type!r}",
                )
            )

        return await self.assign_credits.execute(
            AssignCreditsCommandDTO(
                author_id=command.author_id,
                amount=command.amount,
                event_type=event_type.value,
            )
        )
