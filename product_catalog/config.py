"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - Every store file lives directly inside data_dir (file names carry no path parts)
    - get_settings() is cached (lru_cache) — single instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - CATALOG_ prefix: avoids clashing with generic names like DATA_DIR
    - Defaults mirror the desktop app layout: ./data/{products,categories,manufacturers}.json
"""

from functools import lru_cache
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", env_prefix="CATALOG_", case_sensitive=False,
    )

    # Storage
    data_dir: Path = Path("data")
    products_file: str = "products.json"
    categories_file: str = "categories.json"
    manufacturers_file: str = "manufacturers.json"
    json_indent: int = 2

    @field_validator(
        "products_file", "categories_file", "manufacturers_file", mode="before",
    )
    @classmethod
    def require_bare_file_name(cls, v: str) -> str:
        """A store owns one file in data_dir; sub-paths would escape that."""
        if not isinstance(v, str) or not v.strip():
            raise ValueError("file name cannot be empty")
        v = v.strip()
        if Path(v).name != v or v in (".", ".."):
            raise ValueError(f"file name must not contain path separators: {v!r}")
        return v

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
