"""Promotion Code Repository Interface

Defines the contract for the promotion code catalog.
"""

from abc import ABC, abstractmethod
from typing import Optional
from credit_engine.domain.promotion_code import PromotionCode


class PromotionCodeRepository(ABC):
    """
    Repository interface for PromotionCode persistence

    Codes are never deleted; the only mutation after creation is toggling
    the active flag.
    """

    @abstractmethod
    async def create(self, promotion_code: PromotionCode) -> PromotionCode:
        """
        Insert a new promotion code

        Raises:
            IntegrityError: If the code already exists
        """
        pass

    @abstractmethod
    async def get_by_id(
        self, promotion_code_id: str, for_update: bool = False
    ) -> Optional[PromotionCode]:
        """
        Retrieve a code by ID

        Args:
            promotion_code_id: Promotion code ID
            for_update: If True, lock the row with SELECT FOR UPDATE

        Returns:
            PromotionCode if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_by_code(self, code: str, for_update: bool = False) -> Optional[PromotionCode]:
        """
        Retrieve a code by its normalized text

        Args:
            code: Normalized (upper-case) code
            for_update: If True, lock the row with SELECT FOR UPDATE

        Returns:
            PromotionCode if found, None otherwise
        """
        pass

    @abstractmethod
    async def search(
        self,
        search_term: Optional[str] = None,
        type_filter: Optional[str] = None,
        active: Optional[bool] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> tuple[list[PromotionCode], int]:
        """
        Filtered, paginated listing ordered by created_at DESC

        Args:
            search_term: Case-insensitive substring of the code
            type_filter: Exact type match
            active: Exact active flag match
            limit: Maximum rows to return
            offset: Rows to skip

        Returns:
            Tuple of (page of PromotionCode, total matching count)
        """
        pass

    @abstractmethod
    async def toggle_active(self, promotion_code_id: str) -> Optional[PromotionCode]:
        """
        Flip the active flag in place

        Returns:
            Updated PromotionCode, None if it does not exist
        """
        pass
