"""Pydantic models for the ExpenseOwl API."""

from .constants import (
    DEFAULT_CATEGORIES,
    DEFAULT_CURRENCY,
)  # re-export
from .expense import Expense, ExpenseRequest
from .responses import (
    ConfigResponse,
    ErrorResponse,
    StatusResponse,
    error_responses,
)

__all__ = [
    "DEFAULT_CATEGORIES",
    "DEFAULT_CURRENCY",
    "Expense",
    "ExpenseRequest",
    "ConfigResponse",
    "ErrorResponse",
    "StatusResponse",
    "error_responses",
]
