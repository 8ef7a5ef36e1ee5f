"""
List Promotion Codes Use Case

Filtered, paginated listing of the promotion code catalog.
"""
from typing import Optional, Union
from libs.result import Result, Return
from credit_engine.app.repositories.promotion_code_repository import PromotionCodeRepository
from credit_engine.app.repositories.promotion_code_redemption_repository import (
    PromotionCodeRedemptionRepository,
)
from credit_engine.app.use_cases.pagination import build_pagination, resolve_page
from .dtos import ListPromotionCodesQueryDTO, ListPromotionCodesResponseDTO, to_promotion_code_dto


def parse_active_filter(active_filter: Optional[Union[bool, str]]) -> Optional[bool]:
    """'true' / 'false' (or a bool) filter on the flag; anything else disables the filter"""
    if isinstance(active_filter, bool):
        return active_filter
    if active_filter == "true":
        return True
    if active_filter == "false":
        return False
    return None


class ListPromotionCodes:
    """
    Use case: List promotion codes

    Codes are ordered by created_at DESC. Redemption counts for the page are
    fetched in a single grouped query.
    """

    def __init__(
        self,
        promotion_code_repo: PromotionCodeRepository,
        redemption_repo: PromotionCodeRedemptionRepository,
    ):
        self.promotion_code_repo = promotion_code_repo
        self.redemption_repo = redemption_repo

    async def execute(self, query: ListPromotionCodesQueryDTO) -> Result[ListPromotionCodesResponseDTO]:
        page_result = resolve_page(query.page, query.limit)
        if page_result.is_err():
            return Return.err(page_result.error)
        page = page_result.value

        search_term = query.search_term.strip() if query.search_term else None
        type_filter = query.type_filter if query.type_filter and query.type_filter != "all" else None

        promotion_codes, total = await self.promotion_code_repo.search(
            search_term=search_term or None,
            type_filter=type_filter,
            active=parse_active_filter(query.active_filter),
            limit=page.limit,
            offset=page.offset,
        )

        counts = await self.redemption_repo.count_by_codes(
            [promotion_code.promotion_code_id for promotion_code in promotion_codes]
        )

        return Return.ok(
            ListPromotionCodesResponseDTO(
                data=[
                    to_promotion_code_dto(
                        promotion_code,
                        total_redemptions=counts.get(promotion_code.promotion_code_id, 0),
                    )
                    for promotion_code in promotion_codes
                ],
                pagination=build_pagination(page, total, len(promotion_codes)),
            )
        )
