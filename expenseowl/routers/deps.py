from fastapi import Request

from expenseowl.core.config import Settings
from expenseowl.services.app_config import ExpenseConfig
from expenseowl.storage import ExpenseStorage

# Dependencies -----------------------------------------------------
# create_app puts the shared collaborators on app.state; tests may swap them.


def get_storage(request: Request) -> ExpenseStorage:
    return request.app.state.storage


def get_config(request: Request) -> ExpenseConfig:
    return request.app.state.config


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings
