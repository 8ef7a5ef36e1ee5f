"""CreatePromotionCode Use Case

Adds a redeemable code to the promotion code catalog.
"""

import logging
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from config import ApplicationConfig
from libs.result import Result, Return
from credit_engine.app.errors import ErrorCode, conflict_error, persistence_error, validation_error
from credit_engine.app.services.unit_of_work import UnitOfWork
from credit_engine.app.repositories.promotion_code_repository import PromotionCodeRepository
from credit_engine.domain.base import to_naive_utc
from credit_engine.domain.promotion_code import (
    CODE_PATTERN,
    PromotionCode,
    PromotionCodeType,
    normalize_code,
)
from .dtos import CreatePromotionCodeCommandDTO, PromotionCodeDTO, to_promotion_code_dto

logger = logging.getLogger(__name__)

PROMOTION_CODE_TYPES = frozenset(code_type.value for code_type in PromotionCodeType)


class CreatePromotionCode:
    """
    Use Case: Create a promotion code

    Validation order (first failure wins, nothing is written):
    1. Normalize code (trim, upper-case)
    2. Format [A-Z0-9-]{3,64}            -> invalid_code_format
    3. credit_amount > 0                 -> invalid_credit_amount
    4. Known type                        -> invalid_code_type
    5. Caps >= 1                         -> invalid_redemption_limit
    6. valid_from < valid_until          -> invalid_validity_window
    7. Unique code (enforced by store)   -> code_exists
    """

    def __init__(self, uow: UnitOfWork, promotion_code_repo: PromotionCodeRepository):
        self.uow = uow
        self.promotion_code_repo = promotion_code_repo

    async def execute(self, command: CreatePromotionCodeCommandDTO) -> Result[PromotionCodeDTO]:
        code = normalize_code(command.code)
        if not CODE_PATTERN.match(code):
            return Return.err(
                validation_error(
                    ErrorCode.INVALID_CODE_FORMAT,
                    "Code must be 3-64 characters of A-Z, 0-9 or '-'",
                )
            )

        if command.credit_amount <= 0:
            return Return.err(
                validation_error(
                    ErrorCode.INVALID_CREDIT_AMOUNT,
                    "Credit amount must be greater than 0",
                )
            )

        code_type = command.type or ApplicationConfig.DEFAULT_PROMOTION_CODE_TYPE
        if code_type not in PROMOTION_CODE_TYPES:
            return Return.err(
                validation_error(
                    ErrorCode.INVALID_CODE_TYPE,
                    f"Type must be one of {sorted(PROMOTION_CODE_TYPES)}, got {code_type!r}",
                )
            )

        if command.max_redemptions_per_user < 1 or (
            command.max_global_redemptions is not None and command.max_global_redemptions < 1
        ):
            return Return.err(
                validation_error(
                    ErrorCode.INVALID_REDEMPTION_LIMIT,
                    "Redemption limits must be at least 1",
                )
            )

        valid_from = to_naive_utc(command.valid_from)
        valid_until = to_naive_utc(command.valid_until)
        if valid_from and valid_until and valid_from >= valid_until:
            return Return.err(
                validation_error(
                    ErrorCode.INVALID_VALIDITY_WINDOW,
                    "valid_from must be earlier than valid_until",
                )
            )

        try:
            created = await self.promotion_code_repo.create(
                PromotionCode(
                    code=code,
                    type=code_type,
                    credit_amount=command.credit_amount,
                    max_global_redemptions=command.max_global_redemptions,
                    max_redemptions_per_user=command.max_redemptions_per_user,
                    valid_from=valid_from,
                    valid_until=valid_until,
                    referrer_author_id=command.referrer_author_id,
                    code_metadata=command.metadata,
                    active=command.active,
                )
            )
            await self.uow.commit()

        except IntegrityError as e:
            await self.uow.rollback()
            logger.info(f"Promotion code {code} already exists")
            return Return.err(
                conflict_error(
                    ErrorCode.CODE_EXISTS,
                    f"Promotion code {code} already exists",
                    reason=str(e.orig),
                )
            )
        except SQLAlchemyError as e:
            await self.uow.rollback()
            logger.exception(f"Failed to create promotion code {code}")
            return Return.err(
                persistence_error(
                    ErrorCode.CREATE_PROMOTION_CODE_FAILED,
                    "Failed to create promotion code",
                    reason=str(e),
                )
            )

        logger.info(
            f"Created promotion code {created.code} ({created.type}, "
            f"{created.credit_amount} credits, id={created.promotion_code_id})"
        )
        return Return.ok(to_promotion_code_dto(created, total_redemptions=0))
