import logging
import os
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

# Data directory: use FINANCE_DATA_DIR env var if set (e.g. /data in Docker),
# otherwise fall back to ~/.config/finance-tracker for local dev
_data_dir = os.environ.get("FINANCE_DATA_DIR")
DATA_DIR = Path(_data_dir) if _data_dir else Path.home() / ".config" / "finance-tracker"

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def default_database_url() -> str:
    """SQLite file inside the data directory."""
    return f"sqlite:///{DATA_DIR / 'finance.db'}"


class Settings(BaseSettings):
    """Application settings, read once at startup and passed explicitly."""

    model_config = SettingsConfigDict(
        env_prefix="FINANCE_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = "Finance Tracker"
    debug: bool = False
    database_url: str = default_database_url()

    # Token signing
    jwt_secret: str = "change-me"
    jwt_algorithm: str = "HS256"
    token_expire_days: int = 7

    cors_origins: list[str] = ["http://localhost:5173", "http://127.0.0.1:5173"]

    # Upper bound for the trend lookback window, in months
    max_trend_months: int = 120

    log_level: str = "INFO"


def configure_logging(level: str = "INFO") -> None:
    """Install the root handler once; later calls only adjust the level."""
    if logging.root.handlers:
        logging.root.setLevel(level.upper())
        return
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
