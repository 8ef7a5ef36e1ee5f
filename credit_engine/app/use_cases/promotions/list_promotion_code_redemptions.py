"""
List Promotion Code Redemptions Use Case

Paginated redemption history of a single promotion code, newest first.
"""
from typing import Optional
from libs.result import Result, Return
from credit_engine.app.errors import not_found_error
from credit_engine.app.repositories.promotion_code_repository import PromotionCodeRepository
from credit_engine.app.repositories.promotion_code_redemption_repository import (
    PromotionCodeRedemptionRepository,
)
from credit_engine.app.use_cases.pagination import build_pagination, resolve_page
from .dtos import ListRedemptionsResponseDTO, to_redemption_dto


class ListPromotionCodeRedemptions:
    def __init__(
        self,
        promotion_code_repo: PromotionCodeRepository,
        redemption_repo: PromotionCodeRedemptionRepository,
    ):
        self.promotion_code_repo = promotion_code_repo
        self.redemption_repo = redemption_repo

    async def execute(
        self, promotion_code_id: str, page: int = 1, limit: Optional[int] = None
    ) -> Result[ListRedemptionsResponseDTO]:
        page_result = resolve_page(page, limit)
        if page_result.is_err():
            return Return.err(page_result.error)
        page_request = page_result.value

        if not await self.promotion_code_repo.get_by_id(promotion_code_id):
            return Return.err(not_found_error(f"Promotion code {promotion_code_id} not found"))

        redemptions, total = await self.redemption_repo.get_by_code(
            promotion_code_id,
            limit=page_request.limit,
            offset=page_request.offset,
        )

        return Return.ok(
            ListRedemptionsResponseDTO(
                data=[to_redemption_dto(redemption) for redemption in redemptions],
                pagination=build_pagination(page_request, total, len(redemptions)),
            )
        )
