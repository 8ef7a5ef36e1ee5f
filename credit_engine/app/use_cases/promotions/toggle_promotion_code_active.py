"""TogglePromotionCodeActive Use Case

Flips the active flag of a promotion code, the only mutation a code
supports after creation.
"""

import logging
from sqlalchemy.exc import SQLAlchemyError
from libs.result import Result, Return
from credit_engine.app.errors import ErrorCode, not_found_error, persistence_error
from credit_engine.app.services.unit_of_work import UnitOfWork
from credit_engine.app.repositories.promotion_code_repository import PromotionCodeRepository
from credit_engine.app.repositories.promotion_code_redemption_repository import (
    PromotionCodeRedemptionRepository,
)
from .dtos import PromotionCodeDTO, to_promotion_code_dto

logger = logging.getLogger(__name__)


class TogglePromotionCodeActive:
    def __init__(
        self,
        uow: UnitOfWork,
        promotion_code_repo: PromotionCodeRepository,
        redemption_repo: PromotionCodeRedemptionRepository,
    ):
        self.uow = uow
        self.promotion_code_repo = promotion_code_repo
        self.redemption_repo = redemption_repo

    async def execute(self, promotion_code_id: str) -> Result[PromotionCodeDTO]:
        try:
            promotion_code = await self.promotion_code_repo.toggle_active(promotion_code_id)
            if not promotion_code:
                await self.uow.rollback()
                return Return.err(not_found_error(f"Promotion code {promotion_code_id} not found"))

            total_redemptions = await self.redemption_repo.count_by_code(promotion_code_id)
            await self.uow.commit()

        except SQLAlchemyError as e:
            await self.uow.rollback()
            logger.exception(f"Failed to toggle promotion code {promotion_code_id}")
            return Return.err(
                persistence_error(
                    ErrorCode.TOGGLE_PROMOTION_CODE_FAILED,
                    "Failed to toggle promotion code",
                    reason=str(e),
                )
            )

        logger.info(
            f"Promotion code {promotion_code.code} is now "
            f"{'active' if promotion_code.active else 'inactive'}"
        )
        return Return.ok(to_promotion_code_dto(promotion_code, total_redemptions=total_redemptions))
