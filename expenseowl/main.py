import logging

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core.config import get_settings, Settings
from .core.logging import init_logging, request_context_middleware
from .core import errors
from .routers import config, expenses, exports, ui
from .services.app_config import ExpenseConfig
from .storage import build_storage


def create_app(settings_override: Settings | None = None) -> FastAPI:
    """Application factory.

    settings_override: pass an already constructed Settings instance for tests
    to isolate environment (e.g., temp data dir). Falls back to cached get_settings().
    """
    settings = settings_override or get_settings()
    settings.init_post_load()
    init_logging(debug=settings.debug)
    logger = logging.getLogger("expenseowl")

    # Storage and config are fatal on failure: nothing can be served without them
    try:
        storage = build_storage(settings)
        expense_config = ExpenseConfig.load(
            storage, settings.default_categories, settings.default_currency
        )
    except Exception:
        logger.exception("failed to initialize %s storage", settings.storage_backend)
        raise

    app = FastAPI(
        title=settings.app_name, debug=settings.debug, version=settings.version
    )
    app.state.settings = settings
    app.state.storage = storage
    app.state.config = expense_config

    # Middleware (request id / structured logging)
    app.middleware("http")(request_context_middleware)

    # Error handlers
    app.add_exception_handler(StarletteHTTPException, errors.http_error_handler)
    app.add_exception_handler(RequestValidationError, errors.validation_error_handler)
    app.add_exception_handler(Exception, errors.server_error_handler)

    # Routers
    app.include_router(config.router)
    app.include_router(expenses.router)
    app.include_router(exports.router)
    app.include_router(ui.router)

    logger.info(
        "ExpenseOwl %s ready (storage=%s, data_dir=%s)",
        settings.version,
        settings.storage_backend,
        settings.data_dir,
    )
    return app


app = create_app()
