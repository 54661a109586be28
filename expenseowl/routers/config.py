import logging
from typing import List

from fastapi import APIRouter, Body, Depends, HTTPException

from expenseowl.models import ConfigResponse, StatusResponse, error_responses
from expenseowl.routers.deps import get_config
from expenseowl.services.app_config import ExpenseConfig
from expenseowl.storage import StorageError

router = APIRouter(tags=["config"])
logger = logging.getLogger(__name__)


@router.get(
    "/categories",
    response_model=ConfigResponse,
    summary="List categories and the currency",
)
async def get_categories(config: ExpenseConfig = Depends(get_config)):
    return ConfigResponse(**config.snapshot())


@router.put(
    "/categories/edit",
    response_model=StatusResponse,
    summary="Replace the whole category list",
    responses=error_responses(400, 500),
)
async def edit_categories(
    categories: List[str] = Body(..., description="New ordered category list"),
    config: ExpenseConfig = Depends(get_config),
):
    try:
        config.update_categories(categories)
    except StorageError as e:
        logger.error("HTTP ERROR: Failed to save categories: %s", e)
        raise HTTPException(status_code=500, detail="Failed to save categories") from e
    logger.info("HTTP: Updated categories")
    return StatusResponse()


@router.put(
    "/currency",
    response_model=StatusResponse,
    summary="Replace the currency",
    responses=error_responses(400, 500),
)
async def edit_currency(
    currency: str = Body(..., description="Currency code, e.g. usd"),
    config: ExpenseConfig = Depends(get_config),
):
    try:
        config.update_currency(currency)
    except StorageError as e:
        logger.error("HTTP ERROR: Failed to save currency: %s", e)
        raise HTTPException(status_code=500, detail="Failed to save currency") from e
    logger.info("HTTP: Updated currency")
    return StatusResponse()
