"""SQLAlchemy implementation of PromotionCodeRedemptionRepository

Provides persistence for PromotionCodeRedemption entities. Slot uniqueness
constraints surface as IntegrityError on flush.
"""

from sqlmodel import select, func
from sqlmodel.ext.asyncio.session import AsyncSession
from credit_engine.app.repositories.promotion_code_redemption_repository import (
    PromotionCodeRedemptionRepository,
)
from credit_engine.domain.promotion_code_redemption import PromotionCodeRedemption


class SqlAlchemyPromotionCodeRedemptionRepository(PromotionCodeRedemptionRepository):
    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, redemption: PromotionCodeRedemption) -> PromotionCodeRedemption:
        self.session.add(redemption)
        await self.session.flush()
        await self.session.refresh(redemption)
        return redemption

    async def count_by_code(self, promotion_code_id: str) -> int:
        stmt = select(func.count()).select_from(PromotionCodeRedemption).where(
            PromotionCodeRedemption.promotion_code_id == promotion_code_id
        )
        result = await self.session.execute(stmt)
        return int(result.scalar() or 0)

    async def count_by_code_and_author(self, promotion_code_id: str, author_id: str) -> int:
        stmt = select(func.count()).select_from(PromotionCodeRedemption).where(
            PromotionCodeRedemption.promotion_code_id == promotion_code_id,
            PromotionCodeRedemption.author_id == author_id,
        )
        result = await self.session.execute(stmt)
        return int(result.scalar() or 0)

    async def count_unique_authors(self, promotion_code_id: str) -> int:
        stmt = select(func.count(func.distinct(PromotionCodeRedemption.author_id))).where(
            PromotionCodeRedemption.promotion_code_id == promotion_code_id
        )
        result = await self.session.execute(stmt)
        return int(result.scalar() or 0)

    async def count_by_codes(self, promotion_code_ids: list[str]) -> dict[str, int]:
        if not promotion_code_ids:
            return {}

        stmt = (
            select(PromotionCodeRedemption.promotion_code_id, func.count())
            .where(PromotionCodeRedemption.promotion_code_id.in_(promotion_code_ids))
            .group_by(PromotionCodeRedemption.promotion_code_id)
        )
        result = await self.session.execute(stmt)
        return {code_id: int(total) for code_id, total in result.all()}

    async def get_by_code(
        self, promotion_code_id: str, limit: int = 50, offset: int = 0
    ) -> tuple[list[PromotionCodeRedemption], int]:
        total = await self.count_by_code(promotion_code_id)
        if total == 0:
            return [], 0

        # Newest first
        stmt = (
            select(PromotionCodeRedemption)
            .where(PromotionCodeRedemption.promotion_code_id == promotion_code_id)
            .order_by(
                PromotionCodeRedemption.redeemed_at.desc(),
                PromotionCodeRedemption.redemption_number.desc(),
            )
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all()), total
