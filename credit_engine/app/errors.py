"""Error taxonomy shared by all use cases

Every failure carries a stable machine-readable ``code`` (what callers branch
on) and a human ``message``. ``kind`` groups codes by how a caller should
react: fix the input, accept the conflict, treat as missing, or retry.
"""

from enum import Enum
from typing import Optional
from libs.result import Error


class ErrorKind(str, Enum):
    VALIDATION = "validation"    # Malformed input, caught before any write
    CONFLICT = "conflict"        # Uniqueness violation or redemption rejected by state/caps
    NOT_FOUND = "not_found"      # Referenced entity does not exist
    PERSISTENCE = "persistence"  # Store failure; unit of work rolled back, safe to retry


class ErrorCode:
    INVALID_CODE_FORMAT = "invalid_code_format"
    INVALID_CODE_TYPE = "invalid_code_type"
    INVALID_CREDIT_AMOUNT = "invalid_credit_amount"
    INVALID_REDEMPTION_LIMIT = "invalid_redemption_limit"
    INVALID_VALIDITY_WINDOW = "invalid_validity_window"
    INVALID_EVENT_TYPE = "invalid_event_type"
    INVALID_PAGINATION = "invalid_pagination"
    CODE_EXISTS = "code_exists"
    NOT_FOUND = "not_found"
    INACTIVE = "inactive"
    EXPIRED = "expired"
    NOT_YET_VALID = "not_yet_valid"
    PER_USER_CAP_REACHED = "per_user_cap_reached"
    GLOBAL_CAP_REACHED = "global_cap_reached"
    REDEMPTION_CONFLICT = "redemption_conflict"
    ASSIGN_CREDITS_FAILED = "assign_credits_failed"
    CREATE_PROMOTION_CODE_FAILED = "create_promotion_code_failed"
    TOGGLE_PROMOTION_CODE_FAILED = "toggle_promotion_code_failed"
    REDEEM_PROMOTION_CODE_FAILED = "redeem_promotion_code_failed"
    RECONCILIATION_FAILED = "reconciliation_failed"


def validation_error(code: str, message: str, reason: Optional[str] = None) -> Error:
    return Error(code=code, message=message, reason=reason, kind=ErrorKind.VALIDATION.value)


def conflict_error(code: str, message: str, reason: Optional[str] = None) -> Error:
    return Error(code=code, message=message, reason=reason, kind=ErrorKind.CONFLICT.value)


def not_found_error(message: str, code: str = ErrorCode.NOT_FOUND) -> Error:
    return Error(code=code, message=message, kind=ErrorKind.NOT_FOUND.value)


def persistence_error(code: str, message: str, reason: Optional[str] = None) -> Error:
    return Error(code=code, message=message, reason=reason, kind=ErrorKind.PERSISTENCE.value)
