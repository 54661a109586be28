import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from expenseowl.models import error_responses
from expenseowl.routers.deps import get_storage
from expenseowl.services.exports import render_csv, render_json
from expenseowl.storage import ExpenseStorage, StorageError

router = APIRouter(prefix="/export", tags=["export"])
logger = logging.getLogger(__name__)


def _fetch_all(storage: ExpenseStorage):
    try:
        return storage.get_all_expenses()
    except StorageError as e:
        logger.error("HTTP ERROR: Failed to retrieve expenses: %s", e)
        raise HTTPException(
            status_code=500, detail="Failed to retrieve expenses"
        ) from e


@router.get(
    "/csv", summary="Download all expenses as CSV", responses=error_responses(500)
)
async def export_csv(storage: ExpenseStorage = Depends(get_storage)):
    body = render_csv(_fetch_all(storage))
    logger.info("HTTP: Exported expenses to CSV")
    return Response(
        content=body,
        media_type="text/csv",
        headers={"Content-Disposition": "attachment; filename=expenses.csv"},
    )


@router.get(
    "/json",
    summary="Download all expenses as indented JSON",
    responses=error_responses(500),
)
async def export_json(storage: ExpenseStorage = Depends(get_storage)):
    expenses = _fetch_all(storage)
    try:
        body = render_json(expenses)
    except (TypeError, ValueError) as e:
        logger.error("HTTP ERROR: Failed to marshal JSON data: %s", e)
        raise HTTPException(
            status_code=500, detail="Failed to marshal JSON data"
        ) from e
    logger.info("HTTP: Exported expenses to JSON")
    return Response(
        content=body,
        media_type="application/json",
        headers={"Content-Disposition": "attachment; filename=expenses.json"},
    )
