"""SQLAlchemy implementation of PromotionCodeRepository

Provides persistence for PromotionCode entities with pessimistic locking
support for redemption and activation toggling.
"""

from typing import Optional
from sqlmodel import select, func, and_
from sqlmodel.ext.asyncio.session import AsyncSession
from credit_engine.app.repositories.promotion_code_repository import PromotionCodeRepository
from credit_engine.domain.base import utc_now
from credit_engine.domain.promotion_code import PromotionCode


class SqlAlchemyPromotionCodeRepository(PromotionCodeRepository):
    """
    SQLAlchemy implementation of PromotionCodeRepository

    Features:
    - Pessimistic locking via SELECT FOR UPDATE
    - Uniqueness of code enforced by the database (IntegrityError on duplicates)
    - Filtered pagination with a separate count query
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, promotion_code: PromotionCode) -> PromotionCode:
        """
        Insert a new promotion code

        Args:
            promotion_code: PromotionCode entity to persist

        Returns:
            Created PromotionCode

        Raises:
            IntegrityError: If the code already exists
        """
        self.session.add(promotion_code)
        await self.session.flush()
        await self.session.refresh(promotion_code)
        return promotion_code

    async def get_by_id(
        self, promotion_code_id: str, for_update: bool = False
    ) -> Optional[PromotionCode]:
        stmt = select(PromotionCode).where(PromotionCode.promotion_code_id == promotion_code_id)

        if for_update:
            stmt = stmt.with_for_update()

        result = await self.session.execute(stmt.execution_options(populate_existing=True))
        return result.scalar_one_or_none()

    async def get_by_code(self, code: str, for_update: bool = False) -> Optional[PromotionCode]:
        stmt = select(PromotionCode).where(PromotionCode.code == code)

        if for_update:
            stmt = stmt.with_for_update()

        result = await self.session.execute(stmt.execution_options(populate_existing=True))
        return result.scalar_one_or_none()

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

        Returns:
            Tuple of (page of PromotionCode, total matching count)
        """
        conditions = []
        if search_term:
            # Codes are stored upper-case
            conditions.append(PromotionCode.code.contains(search_term.upper(), autoescape=True))
        if type_filter:
            conditions.append(PromotionCode.type == type_filter)
        if active is not None:
            conditions.append(PromotionCode.active == active)

        # Get total count
        count_stmt = select(func.count()).select_from(PromotionCode)
        if conditions:
            count_stmt = count_stmt.where(and_(*conditions))
        count_result = await self.session.execute(count_stmt)
        total = count_result.scalar() or 0

        # Get page ordered by created_at DESC
        stmt = select(PromotionCode)
        if conditions:
            stmt = stmt.where(and_(*conditions))
        stmt = (
            stmt.order_by(PromotionCode.created_at.desc(), PromotionCode.code.asc())
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all()), total

    async def toggle_active(self, promotion_code_id: str) -> Optional[PromotionCode]:
        """
        Flip the active flag and bump updated_at

        Note:
            The row is locked for the duration of the caller's transaction
        """
        promotion_code = await self.get_by_id(promotion_code_id, for_update=True)
        if not promotion_code:
            return None

        promotion_code.active = not promotion_code.active
        promotion_code.updated_at = utc_now()
        self.session.add(promotion_code)
        await self.session.flush()
        await self.session.refresh(promotion_code)
        return promotion_code
