"""Unit tests for CreatePromotionCode use case

Tests cover:
- Normalization and defaults
- Validation order (format, amount, type, limits, window)
- Duplicate code mapped to code_exists
"""

import pytest
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock
from sqlalchemy.exc import IntegrityError, OperationalError

from credit_engine.app.errors import ErrorCode, ErrorKind
from credit_engine.app.use_cases.promotions.create_promotion_code import CreatePromotionCode
from credit_engine.app.use_cases.promotions.dtos import CreatePromotionCodeCommandDTO


@pytest.fixture
def mock_promotion_code_repo():
    repo = MagicMock()
    # create() hands back the row it was given, as a flushed insert would
    repo.create = AsyncMock(side_effect=lambda promotion_code: promotion_code)
    return repo


@pytest.fixture
def use_case(mock_uow, mock_promotion_code_repo):
    return CreatePromotionCode(uow=mock_uow, promotion_code_repo=mock_promotion_code_repo)


@pytest.mark.asyncio
class TestCreatePromotionCode:
    async def test_creates_normalized_code_with_defaults(
        self, use_case, mock_promotion_code_repo, mock_uow
    ):
        """
        Given: A lower-case code padded with whitespace
        When: The code is created
        Then: It is stored upper-cased, as a partner code, one redemption per author
        """
        result = await use_case.execute(
            CreatePromotionCodeCommandDTO(code="  summer10 ", credit_amount=10)
        )

        assert result.is_ok()
        created = result.value
        assert created.code == "SUMMER10"
        assert created.type == "partner"
        assert created.max_redemptions_per_user == 1
        assert created.max_global_redemptions is None
        assert created.active is True
        assert created.total_redemptions == 0
        assert created.remaining_global is None
        mock_promotion_code_repo.create.assert_called_once()
        mock_uow.commit.assert_called_once()

    async def test_aware_validity_window_stored_as_naive_utc(self, use_case):
        result = await use_case.execute(
            CreatePromotionCodeCommandDTO(
                code="WINTER-24",
                type="referral",
                credit_amount=25,
                max_global_redemptions=100,
                valid_from=datetime(2024, 12, 1, tzinfo=timezone.utc),
                valid_until=datetime(2025, 3, 1, tzinfo=timezone.utc),
                referrer_author_id="author_9",
                metadata={"campaign": "winter"},
            )
        )

        assert result.is_ok()
        created = result.value
        assert created.type == "referral"
        assert created.valid_from == datetime(2024, 12, 1)
        assert created.valid_from.tzinfo is None
        assert created.remaining_global == 100
        assert created.referrer_author_id == "author_9"
        assert created.metadata == {"campaign": "winter"}

    @pytest.mark.parametrize("code", ["bad code!", "AB", "X" * 65, "", "SUMMER_10"])
    async def test_invalid_format_rejected_without_write(
        self, use_case, mock_promotion_code_repo, mock_uow, code
    ):
        result = await use_case.execute(CreatePromotionCodeCommandDTO(code=code, credit_amount=10))

        assert result.is_err()
        assert result.error.code == ErrorCode.INVALID_CODE_FORMAT
        assert result.error.kind == ErrorKind.VALIDATION.value
        mock_promotion_code_repo.create.assert_not_called()
        mock_uow.commit.assert_not_called()

    @pytest.mark.parametrize("credit_amount", [0, -5])
    async def test_non_positive_credit_amount_rejected(
        self, use_case, mock_promotion_code_repo, credit_amount
    ):
        result = await use_case.execute(
            CreatePromotionCodeCommandDTO(code="SUMMER10", credit_amount=credit_amount)
        )

        assert result.error.code == ErrorCode.INVALID_CREDIT_AMOUNT
        mock_promotion_code_repo.create.assert_not_called()

    async def test_format_checked_before_amount(self, use_case):
        result = await use_case.execute(CreatePromotionCodeCommandDTO(code="bad code!", credit_amount=0))

        assert result.error.code == ErrorCode.INVALID_CODE_FORMAT

    async def test_unknown_type_rejected(self, use_case, mock_promotion_code_repo):
        result = await use_case.execute(
            CreatePromotionCodeCommandDTO(code="SUMMER10", type="giveaway", credit_amount=10)
        )

        assert result.error.code == ErrorCode.INVALID_CODE_TYPE
        mock_promotion_code_repo.create.assert_not_called()

    @pytest.mark.parametrize(
        "limits",
        [
            {"max_redemptions_per_user": 0},
            {"max_global_redemptions": 0},
            {"max_global_redemptions": -1},
        ],
    )
    async def test_invalid_limits_rejected(self, use_case, limits):
        result = await use_case.execute(
            CreatePromotionCodeCommandDTO(code="SUMMER10", credit_amount=10, **limits)
        )

        assert result.error.code == ErrorCode.INVALID_REDEMPTION_LIMIT

    @pytest.mark.parametrize(
        "valid_from,valid_until",
        [
            (datetime(2024, 9, 1), datetime(2024, 6, 1)),
            (datetime(2024, 6, 1), datetime(2024, 6, 1)),
        ],
    )
    async def test_invalid_validity_window_rejected(
        self, use_case, mock_promotion_code_repo, valid_from, valid_until
    ):
        result = await use_case.execute(
            CreatePromotionCodeCommandDTO(
                code="SUMMER10",
                credit_amount=10,
                valid_from=valid_from,
                valid_until=valid_until,
            )
        )

        assert result.error.code == ErrorCode.INVALID_VALIDITY_WINDOW
        mock_promotion_code_repo.create.assert_not_called()

    async def test_duplicate_code_returns_code_exists(
        self, use_case, mock_promotion_code_repo, mock_uow
    ):
        mock_promotion_code_repo.create = AsyncMock(
            side_effect=IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed"))
        )

        result = await use_case.execute(CreatePromotionCodeCommandDTO(code="SUMMER10", credit_amount=10))

        assert result.is_err()
        assert result.error.code == ErrorCode.CODE_EXISTS
        assert result.error.kind == ErrorKind.CONFLICT.value
        mock_uow.rollback.assert_called_once()
        mock_uow.commit.assert_not_called()

    async def test_store_failure_returns_persistence_error(
        self, use_case, mock_promotion_code_repo, mock_uow
    ):
        mock_promotion_code_repo.create = AsyncMock(
            side_effect=OperationalError("INSERT", {}, Exception("disk I/O error"))
        )

        result = await use_case.execute(CreatePromotionCodeCommandDTO(code="SUMMER10", credit_amount=10))

        assert result.error.code == ErrorCode.CREATE_PROMOTION_CODE_FAILED
        assert result.error.kind == ErrorKind.PERSISTENCE.value
        mock_uow.rollback.assert_called_once()
