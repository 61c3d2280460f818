# backend/app/core/config.py
import logging
import os
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import MAX_PAGE_SIZE, MIN_PAGE_SIZE


def is_running_tests() -> bool:
    """
    Detect if code is running under pytest.

    PYTEST_CURRENT_TEST is set automatically by pytest during test runs, and is
    not expected to be present in production environments.
    """
    return os.getenv("PYTEST_CURRENT_TEST") is not None


_BACKEND_ROOT = Path(__file__).resolve().parents[2]

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    # Runtime
    environment: str = Field(default="development", description="Deployment environment name")
    log_level: str = Field(default="INFO", description="Root log level")
    allowed_origins: str = Field(
        default="*",
        description="Comma-separated CORS origins ('*' allows any)",
    )

    # Database
    database_url: str = Field(
        default=f"sqlite+pysqlite:///{_BACKEND_ROOT / 'petbnb.db'}",
        description="SQLAlchemy database URL",
    )
    sql_echo: bool = Field(default=False, description="Echo SQL statements to the log")

    # Search
    default_page_size: int = Field(default=50, description="Page size when the caller omits it")
    max_page_size: int = Field(default=MAX_PAGE_SIZE, description="Largest accepted page size")
    distance_unit: Literal["mi", "km"] = Field(
        default="mi",
        description="Unit used for the distance figure in search results",
    )
    sitter_image_url_template: str = Field(
        default="/assets/sitters/{sitter_id}.jpg",
        description="Image reference for a sitter; formatted with sitter_id",
    )

    # Profile
    availability_horizon_days: int = Field(
        default=60,
        description="Days ahead of today listed as upcoming availability on a profile",
    )
    recent_reviews_limit: int = Field(
        default=5,
        description="Number of most recent reviews returned on a profile",
    )

    # Rating aggregation
    rating_cache_enabled: bool = Field(
        default=True,
        description="Serve rating summaries from a periodically refreshed snapshot",
    )
    rating_refresh_interval_seconds: float = Field(
        default=300.0,
        description="Snapshot refresh period; also the maximum staleness searches tolerate",
    )

    model_config = SettingsConfigDict(
        env_file=".env" if not os.getenv("CI") else None,
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("default_page_size")
    @classmethod
    def _page_size_in_bounds(cls, value: int) -> int:
        if not MIN_PAGE_SIZE <= value <= MAX_PAGE_SIZE:
            raise ValueError(f"default_page_size must be between {MIN_PAGE_SIZE} and {MAX_PAGE_SIZE}")
        return value

    @field_validator("max_page_size")
    @classmethod
    def _max_page_size_in_bounds(cls, value: int) -> int:
        return max(MIN_PAGE_SIZE, min(value, MAX_PAGE_SIZE))

    @field_validator("rating_refresh_interval_seconds")
    @classmethod
    def _positive_interval(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("rating_refresh_interval_seconds must be positive")
        return value

    @property
    def cors_origins(self) -> list[str]:
        origins = [o.strip() for o in self.allowed_origins.split(",") if o.strip()]
        return origins or ["*"]


settings = Settings()
