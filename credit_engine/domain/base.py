"""Shared building blocks for domain entities"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import BigInteger, Integer
from sqlmodel import SQLModel

# BIGINT identity on PostgreSQL, INTEGER rowid alias on SQLite
BigIntPrimaryKey = BigInteger().with_variant(Integer, "sqlite")


class BaseModel(SQLModel):
    """Base class for all persisted entities"""


def generate_uuid() -> str:
    return str(uuid.uuid4())


def utc_now() -> datetime:
    """Naive UTC timestamp, the representation stored in every table"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)
