from __future__ import annotations
from pydantic import BaseModel, Field, StrictStr, field_validator
from typing import Optional
from datetime import datetime, timezone


def to_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Normalize a timestamp to UTC; naive values are taken as already UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class ExpenseRequest(BaseModel):
    """Body of ``PUT /expense``.

    Every field has a zero value so that an incomplete body reaches the
    expense validator (and its specific message) instead of failing decode.
    """

    name: StrictStr = ""
    category: StrictStr = ""
    amount: float = Field(0.0, allow_inf_nan=False)
    date: Optional[datetime] = None

    @field_validator("amount", mode="before")
    @classmethod
    def amount_is_json_number(cls, v):
        # numeric strings and booleans are type errors, not amounts
        if isinstance(v, (str, bool)):
            raise ValueError("amount must be a JSON number")
        return v

    def to_expense(self) -> "Expense":
        return Expense(
            name=self.name,
            category=self.category,
            amount=self.amount,
            date=to_utc(self.date),
        )


class Expense(BaseModel):
    id: str = ""
    name: str
    category: str
    amount: float = Field(..., allow_inf_nan=False)
    date: Optional[datetime] = None
