from functools import lru_cache
from pathlib import Path
from typing import List, Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from expenseowl.models.constants import DEFAULT_CATEGORIES, DEFAULT_CURRENCY


class Settings(BaseSettings):
    """Application settings loaded from environment with defaults.

    Environment variable mapping follows pydantic's rules (e.g., APP_NAME, DEBUG, DATA_DIR, STORAGE_BACKEND, PORT).
    """

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Basic app metadata
    app_name: str = "ExpenseOwl"
    debug: bool = False
    version: str = "0.1.0"

    # Server (python -m expenseowl)
    host: str = "0.0.0.0"
    port: int = 8080

    # Data & persistence
    data_dir: Path = Path("data")
    # Allowed: 'sqlite' (default), 'json' (single file, atomic rewrites)
    storage_backend: str = "sqlite"
    db_filename: str = "expenseowl.sqlite3"
    db_path: Optional[Path] = None  # derived if not provided
    json_filename: str = "expenses.json"
    json_path: Optional[Path] = None  # derived if not provided

    # First-run seed values; afterwards the persisted config wins
    default_categories: List[str] = Field(
        default_factory=lambda: list(DEFAULT_CATEGORIES)
    )
    default_currency: str = DEFAULT_CURRENCY

    def init_post_load(self) -> None:
        """Finalize derived fields and ensure directories exist."""
        allowed = {"sqlite", "json"}
        if self.storage_backend not in allowed:
            raise ValueError(
                f"Unsupported storage_backend '{self.storage_backend}'. Allowed: {allowed}"
            )
        if self.db_path is None:
            self.db_path = self.data_dir / self.db_filename
        if self.json_path is None:
            self.json_path = self.data_dir / self.json_filename
        self.data_dir.mkdir(parents=True, exist_ok=True)


@lru_cache
def get_settings() -> Settings:
    settings = Settings()
    settings.init_post_load()
    return settings
