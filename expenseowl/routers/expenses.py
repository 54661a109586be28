import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from expenseowl.models import (
    Expense,
    ExpenseRequest,
    StatusResponse,
    error_responses,
)
from expenseowl.routers.deps import get_config, get_storage
from expenseowl.services.app_config import ExpenseConfig, ExpenseValidationError
from expenseowl.storage import ExpenseStorage, StorageError

router = APIRouter(tags=["expenses"])
logger = logging.getLogger(__name__)


# Routes -----------------------------------------------------------
@router.put(
    "/expense",
    response_model=Expense,
    summary="Add an expense",
    responses=error_responses(400, 500),
)
async def add_expense(
    payload: ExpenseRequest,
    storage: ExpenseStorage = Depends(get_storage),
    config: ExpenseConfig = Depends(get_config),
):
    # 1. Date normalized to UTC inside to_expense; absent stays None
    expense = payload.to_expense()

    # 2. Validation rules owned by the config
    try:
        config.validate_expense(expense)
    except ExpenseValidationError as e:
        logger.warning("HTTP ERROR: Failed to validate expense: %s", e)
        raise HTTPException(status_code=400, detail=str(e)) from e

    # 3. Persist; storage assigns the id
    try:
        stored = storage.save_expense(expense)
    except StorageError as e:
        logger.error("HTTP ERROR: Failed to save expense: %s", e)
        raise HTTPException(status_code=500, detail="Failed to save expense") from e

    logger.info("HTTP: Added expense %s", stored.id)
    return stored


@router.get(
    "/expenses",
    response_model=List[Expense],
    summary="List all expenses",
    responses=error_responses(500),
)
async def get_expenses(storage: ExpenseStorage = Depends(get_storage)):
    try:
        return storage.get_all_expenses()
    except StorageError as e:
        logger.error("HTTP ERROR: Failed to retrieve expenses: %s", e)
        raise HTTPException(
            status_code=500, detail="Failed to retrieve expenses"
        ) from e


@router.delete(
    "/expense/delete",
    response_model=StatusResponse,
    summary="Delete an expense by id",
    responses=error_responses(400, 404, 500),
)
async def delete_expense(
    expense_id: Optional[str] = Query(
        None, alias="id", description="Identifier of the expense"
    ),
    storage: ExpenseStorage = Depends(get_storage),
):
    if not expense_id:
        logger.warning("HTTP ERROR: ID parameter is required")
        raise HTTPException(status_code=400, detail="ID parameter is required")
    try:
        storage.delete_expense(expense_id)
    except StorageError as e:
        if e.not_found:
            logger.warning("HTTP ERROR: Expense not found: %s", e)
            raise HTTPException(status_code=404, detail="Expense not found") from e
        logger.error("HTTP ERROR: Failed to delete expense: %s", e)
        raise HTTPException(status_code=500, detail="Failed to delete expense") from e
    logger.info("HTTP: Deleted expense with ID %s", expense_id)
    return StatusResponse()
