"""Promotion code registry and redemption use cases"""
from .create_promotion_code import CreatePromotionCode
from .get_promotion_code import GetPromotionCode
from .list_promotion_codes import ListPromotionCodes
from .toggle_promotion_code_active import TogglePromotionCodeActive
from .list_promotion_code_redemptions import ListPromotionCodeRedemptions
from .redeem_promotion_code import RedeemPromotionCode
from .dtos import (
    RedemptionStatus,
    CreatePromotionCodeCommandDTO,
    ListPromotionCodesQueryDTO,
    PromotionCodeDTO,
    ListPromotionCodesResponseDTO,
    RedemptionDTO,
    ListRedemptionsResponseDTO,
    RedeemPromotionCodeCommandDTO,
    RedemptionResultDTO,
)

__all__ = [
    "CreatePromotionCode",
    "GetPromotionCode",
    "ListPromotionCodes",
    "TogglePromotionCodeActive",
    "ListPromotionCodeRedemptions",
    "RedeemPromotionCode",
    "RedemptionStatus",
    "CreatePromotionCodeCommandDTO",
    "ListPromotionCodesQueryDTO",
    "PromotionCodeDTO",
    "ListPromotionCodesResponseDTO",
    "RedemptionDTO",
    "ListRedemptionsResponseDTO",
    "RedeemPromotionCodeCommandDTO",
    "RedemptionResultDTO",
]
