"""RedeemPromotionCode Use Case

Turns "author presents a code" into either a credit grant or a rejection.
Every attempt is evaluated synchronously and is terminal.
"""

import logging
from datetime import datetime
from typing import Optional
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from config import ApplicationConfig
from libs.result import Error, Result, Return
from credit_engine.app.errors import (
    ErrorCode,
    conflict_error,
    not_found_error,
    persistence_error,
)
from credit_engine.app.services.unit_of_work import UnitOfWork
from credit_engine.app.services.credit_assignment import CreditAssignmentService
from credit_engine.app.repositories.promotion_code_repository import PromotionCodeRepository
from credit_engine.app.repositories.promotion_code_redemption_repository import (
    PromotionCodeRedemptionRepository,
)
from credit_engine.domain.base import utc_now
from credit_engine.domain.credit_ledger_entry import CreditEventType
from credit_engine.domain.promotion_code import PromotionCode, normalize_code
from credit_engine.domain.promotion_code_redemption import PromotionCodeRedemption
from .dtos import RedeemPromotionCodeCommandDTO, RedemptionResultDTO, to_redemption_dto

logger = logging.getLogger(__name__)


class RedeemPromotionCode:
    """
    Use Case: Redeem a promotion code for an author

    Checks, in order (first failure rejects the attempt):
    1. Code exists                                  -> not_found
    2. Code is active                               -> inactive
    3. valid_from <= now <= valid_until             -> not_yet_valid / expired
    4. Author's redemptions < max_redemptions_per_user -> per_user_cap_reached
    5. Redemptions < max_global_redemptions (if set)   -> global_cap_reached

    Grant:
    - Ledger entry (promotion), balance upsert and redemption row commit
      together in one unit of work
    - The code row is read FOR UPDATE, serializing redemptions of one code
    - The redemption row claims slot numbers derived from the counts checked
      above; unique constraints on those slots reject a concurrent writer
      that passed the same checks. The loser rolls back and is re-evaluated
      from step 1, so it ends up granted on a free slot or rejected by a cap.

    A rejected attempt writes nothing.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        promotion_code_repo: PromotionCodeRepository,
        redemption_repo: PromotionCodeRedemptionRepository,
        assignment_service: CreditAssignmentService,
    ):
        self.uow = uow
        self.promotion_code_repo = promotion_code_repo
        self.redemption_repo = redemption_repo
        self.assignment_service = assignment_service
        self.max_attempts = max(int(ApplicationConfig.REDEMPTION_MAX_ATTEMPTS), 1)

    async def execute(self, command: RedeemPromotionCodeCommandDTO) -> Result[RedemptionResultDTO]:
        """
        Execute redemption

        Args:
            command: RedeemPromotionCodeCommandDTO with author_id and code

        Returns:
            Result[RedemptionResultDTO]: Granted redemption and new balance, or
            the rejection reason as the error code
        """
        code = normalize_code(command.code)
        last_error: Optional[Exception] = None

        for attempt in range(1, self.max_attempts + 1):
            try:
                return await self._attempt(command.author_id, code)

            except IntegrityError as e:
                await self.uow.rollback()
                last_error = e
                logger.warning(
                    f"Redemption slot collision for code {code} by author {command.author_id} "
                    f"(attempt {attempt}/{self.max_attempts})"
                )

            except SQLAlchemyError as e:
                await self.uow.rollback()
                logger.exception(f"Failed to redeem code {code} for author {command.author_id}")
                return Return.err(
                    persistence_error(
                        ErrorCode.REDEEM_PROMOTION_CODE_FAILED,
                        "Failed to redeem promotion code",
                        reason=str(e),
                    )
                )

        return Return.err(
            persistence_error(
                ErrorCode.REDEMPTION_CONFLICT,
                "Promotion code is being redeemed concurrently, try again",
                reason=str(last_error) if last_error else None,
            )
        )

    async def _attempt(self, author_id: str, code: str) -> Result[RedemptionResultDTO]:
        promotion_code = await self.promotion_code_repo.get_by_code(code, for_update=True)
        if not promotion_code:
            return await self._reject(
                author_id, code, not_found_error(f"Promotion code {code} not found")
            )

        rejection = self._check_state(promotion_code, utc_now())
        if rejection:
            return await self._reject(author_id, code, rejection)

        author_redemptions = await self.redemption_repo.count_by_code_and_author(
            promotion_code.promotion_code_id, author_id
        )
        if author_redemptions >= promotion_code.max_redemptions_per_user:
            return await self._reject(
                author_id,
                code,
                conflict_error(
                    ErrorCode.PER_USER_CAP_REACHED,
                    f"Author already redeemed {code} {author_redemptions} time(s)",
                ),
            )

        total_redemptions = await self.redemption_repo.count_by_code(
            promotion_code.promotion_code_id
        )
        if (
            promotion_code.max_global_redemptions is not None
            and total_redemptions >= promotion_code.max_global_redemptions
        ):
            return await self._reject(
                author_id,
                code,
                conflict_error(
                    ErrorCode.GLOBAL_CAP_REACHED,
                    f"Promotion code {code} has no redemptions left",
                ),
            )

        assignment = await self.assignment_service.assign(
            author_id=author_id,
            amount=promotion_code.credit_amount,
            event_type=CreditEventType.PROMOTION,
        )
        if assignment.is_err():
            return await self._reject(author_id, code, assignment.error)

        entry, balance_after = assignment.value
        redemption = await self.redemption_repo.create(
            PromotionCodeRedemption(
                promotion_code_id=promotion_code.promotion_code_id,
                author_id=author_id,
                credits_granted=promotion_code.credit_amount,
                redemption_number=total_redemptions + 1,
                author_redemption_number=author_redemptions + 1,
                credit_ledger_entry_id=entry.id,
            )
        )
        await self.uow.commit()

        logger.info(
            f"Granted {redemption.credits_granted} credits to author {author_id} "
            f"for code {code} (redemption {redemption.redemption_number}); "
            f"balance is now {balance_after}"
        )
        return Return.ok(
            RedemptionResultDTO(
                code=code,
                redemption=to_redemption_dto(redemption),
                balance_after=balance_after,
            )
        )

    @staticmethod
    def _check_state(promotion_code: PromotionCode, now: datetime) -> Optional[Error]:
        if not promotion_code.active:
            return conflict_error(ErrorCode.INACTIVE, f"Promotion code {promotion_code.code} is inactive")

        if promotion_code.valid_from and now < promotion_code.valid_from:
            return conflict_error(
                ErrorCode.NOT_YET_VALID,
                f"Promotion code {promotion_code.code} is valid from {promotion_code.valid_from.isoformat()}",
            )

        if promotion_code.valid_until and now > promotion_code.valid_until:
            return conflict_error(
                ErrorCode.EXPIRED,
                f"Promotion code {promotion_code.code} expired at {promotion_code.valid_until.isoformat()}",
            )

        return None

    async def _reject(self, author_id: str, code: str, error: Error) -> Result[RedemptionResultDTO]:
        # Releases the code row lock; nothing has been written
        await self.uow.rollback()
        logger.warning(f"Rejected redemption of {code} by author {author_id}: {error.code}")
        return Return.err(error)
