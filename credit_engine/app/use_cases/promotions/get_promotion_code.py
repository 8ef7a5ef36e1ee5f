"""Get Promotion Code Use Case

Retrieves one promotion code with its redemption figures.
"""

from libs.result import Result, Return
from credit_engine.app.errors import not_found_error
from credit_engine.app.repositories.promotion_code_repository import PromotionCodeRepository
from credit_engine.app.repositories.promotion_code_redemption_repository import (
    PromotionCodeRedemptionRepository,
)
from .dtos import PromotionCodeDTO, to_promotion_code_dto


class GetPromotionCode:
    """
    Get Promotion Code Use Case

    Adds total_redemptions, unique_users and remaining_global to the stored
    row. remaining_global is None for uncapped codes.
    """

    def __init__(
        self,
        promotion_code_repo: PromotionCodeRepository,
        redemption_repo: PromotionCodeRedemptionRepository,
    ):
        self.promotion_code_repo = promotion_code_repo
        self.redemption_repo = redemption_repo

    async def execute(self, promotion_code_id: str) -> Result[PromotionCodeDTO]:
        promotion_code = await self.promotion_code_repo.get_by_id(promotion_code_id)
        if not promotion_code:
            return Return.err(not_found_error(f"Promotion code {promotion_code_id} not found"))

        total_redemptions = await self.redemption_repo.count_by_code(promotion_code_id)
        unique_users = await self.redemption_repo.count_unique_authors(promotion_code_id)

        return Return.ok(
            to_promotion_code_dto(
                promotion_code,
                total_redemptions=total_redemptions,
                unique_users=unique_users,
            )
        )
