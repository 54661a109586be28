from typing import Any, Dict, List
from pydantic import BaseModel


class ConfigResponse(BaseModel):
    categories: List[str]
    currency: str


class StatusResponse(BaseModel):
    status: str = "success"


class ErrorResponse(BaseModel):
    error: str


def error_responses(*status_codes: int) -> Dict[int, Dict[str, Any]]:
    """OpenAPI ``responses`` entries for error statuses returned as ``{"error": ...}``."""
    return {code: {"model": ErrorResponse} for code in status_codes}
