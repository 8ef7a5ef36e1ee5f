"""Promotion Code Redemption Repository Interface

Defines the contract for redemption history persistence.
"""

from abc import ABC, abstractmethod
from credit_engine.domain.promotion_code_redemption import PromotionCodeRedemption


class PromotionCodeRedemptionRepository(ABC):
    """
    Repository interface for PromotionCodeRedemption persistence

    Redemptions are insert-only. Slot uniqueness (per code and per code and
    author) is enforced by the store.
    """

    @abstractmethod
    async def create(self, redemption: PromotionCodeRedemption) -> PromotionCodeRedemption:
        """
        Insert a redemption

        Raises:
            IntegrityError: If another redemption already holds the same slot
        """
        pass

    @abstractmethod
    async def count_by_code(self, promotion_code_id: str) -> int:
        """Number of redemptions of a code"""
        pass

    @abstractmethod
    async def count_by_code_and_author(self, promotion_code_id: str, author_id: str) -> int:
        """Number of redemptions of a code by one author"""
        pass

    @abstractmethod
    async def count_unique_authors(self, promotion_code_id: str) -> int:
        """Number of distinct authors that redeemed a code"""
        pass

    @abstractmethod
    async def count_by_codes(self, promotion_code_ids: list[str]) -> dict[str, int]:
        """
        Redemption counts for several codes in one query

        Returns:
            Mapping of promotion_code_id to count (codes without redemptions omitted)
        """
        pass

    @abstractmethod
    async def get_by_code(
        self, promotion_code_id: str, limit: int = 50, offset: int = 0
    ) -> tuple[list[PromotionCodeRedemption], int]:
        """
        Paginated redemptions of a code ordered by redeemed_at DESC

        Returns:
            Tuple of (page of PromotionCodeRedemption, total count)
        """
        pass
