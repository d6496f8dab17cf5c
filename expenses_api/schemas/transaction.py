# expenses_api/schemas/transaction.py
from typing import Optional
from datetime import datetime, timezone
from pydantic import Field, field_validator

from .account import CamelModel
from expenses_api.models.base import utcnow

TRANSACTION_TYPES = ("Income", "Expense")


def normalize_transaction_type(value: str) -> str:
    for known in TRANSACTION_TYPES:
        if value.strip().lower() == known.lower():
            return known
    raise ValueError(f"type must be one of: {', '.join(TRANSACTION_TYPES)}")


class TransactionBase(CamelModel):
    type: str = Field(..., description="Income or Expense")
    amount: float = Field(..., allow_inf_nan=False)
    category: str = Field(..., min_length=1, max_length=100, description="E.g. Food, Salary")

    @field_validator("type")
    @classmethod
    def check_type(cls, value: str) -> str:
        return normalize_transaction_type(value)

    @field_validator("category")
    @classmethod
    def strip_category(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("category must not be blank")
        return value


class TransactionCreate(TransactionBase):
    created_at: Optional[datetime] = Field(None, description="ISO 8601; defaults to now")

    @field_validator("created_at")
    @classmethod
    def to_naive_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        if value is not None and value.tzinfo is not None:
            value = value.astimezone(timezone.utc).replace(tzinfo=None)
        if value is not None and value > utcnow():
            raise ValueError("createdAt cannot be in the future")
        return value


class TransactionUpdate(TransactionBase):
    pass


class TransactionRead(TransactionBase):
    id: int
    user_id: int
    created_at: datetime
    updated_at: datetime

    # Stored rows are trusted; skip the input-side type check
    @field_validator("type")
    @classmethod
    def check_type(cls, value: str) -> str:
        return value
