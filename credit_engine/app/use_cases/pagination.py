"""Page/limit handling shared by listing use cases"""

import math
from typing import NamedTuple, Optional
from pydantic import BaseModel
from config import ApplicationConfig
from libs.result import Result, Return
from credit_engine.app.errors import ErrorCode, validation_error


class PageRequest(NamedTuple):
    page: int
    limit: int
    offset: int


class PaginationDTO(BaseModel):
    page: int
    limit: int
    total_count: int
    total_pages: int
    has_next: bool
    has_prev: bool


def resolve_page(page: int = 1, limit: Optional[int] = None) -> Result[PageRequest]:
    """
    Validate page/limit and derive the row offset

    limit defaults to DEFAULT_PAGE_LIMIT and is clamped to MAX_PAGE_LIMIT.
    """
    if limit is None:
        limit = ApplicationConfig.DEFAULT_PAGE_LIMIT

    if page < 1 or limit < 1:
        return Return.err(
            validation_error(
                ErrorCode.INVALID_PAGINATION,
                f"page and limit must be >= 1 (page={page}, limit={limit})",
            )
        )

    limit = min(limit, ApplicationConfig.MAX_PAGE_LIMIT)
    return Return.ok(PageRequest(page=page, limit=limit, offset=(page - 1) * limit))


def build_pagination(request: PageRequest, total_count: int, returned: int) -> PaginationDTO:
    return PaginationDTO(
        page=request.page,
        limit=request.limit,
        total_count=total_count,
        total_pages=math.ceil(total_count / request.limit) if total_count else 0,
        has_next=request.offset + returned < total_count,
        has_prev=request.page > 1,
    )
