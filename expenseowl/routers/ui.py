import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import HTMLResponse, Response

from expenseowl.core.config import Settings
from expenseowl.models import error_responses
from expenseowl.routers.deps import get_app_settings, get_config
from expenseowl.services.app_config import ExpenseConfig
from expenseowl.web.renderer import StaticAssetError, render_template, resolve_static

router = APIRouter(tags=["ui"])
logger = logging.getLogger(__name__)


def _serve_template(
    request: Request, name: str, settings: Settings, config: ExpenseConfig
):
    context = {
        "app_name": settings.app_name,
        "version": settings.version,
        "currency": config.currency,
        "page": name.rsplit(".", 1)[0],
    }
    try:
        return render_template(request, name, context)
    except Exception as e:
        logger.error("HTTP ERROR: Failed to serve template %s: %s", name, e)
        raise HTTPException(status_code=500, detail="Failed to serve template") from e


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
@router.get(
    "/table", response_class=HTMLResponse, responses=error_responses(500)
)
async def serve_table_view(
    request: Request,
    settings: Settings = Depends(get_app_settings),
    config: ExpenseConfig = Depends(get_config),
):
    return _serve_template(request, "table.html", settings, config)


@router.get(
    "/settings", response_class=HTMLResponse, responses=error_responses(500)
)
async def serve_settings_page(
    request: Request,
    settings: Settings = Depends(get_app_settings),
    config: ExpenseConfig = Depends(get_config),
):
    return _serve_template(request, "settings.html", settings, config)


@router.get(
    "/api-setup", response_class=HTMLResponse, responses=error_responses(500)
)
async def serve_api_setup_view(
    request: Request,
    settings: Settings = Depends(get_app_settings),
    config: ExpenseConfig = Depends(get_config),
):
    return _serve_template(request, "api-setup.html", settings, config)


@router.get("/static/{asset_path:path}", include_in_schema=False)
async def serve_static_file(asset_path: str):
    try:
        content, media_type = resolve_static(asset_path)
    except StaticAssetError as e:
        logger.error("HTTP ERROR: Failed to serve static file %s: %s", asset_path, e)
        raise HTTPException(
            status_code=500, detail="Failed to serve static file"
        ) from e
    return Response(content=content, media_type=media_type)
