"""Pydantic model for generator configuration."""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field


class GeneratorConfig(BaseModel):
    """Generator settings from the ``[generator]`` table of larifriqiya.toml."""

    migrations_dir: str = "database/migrations"  # relative to the project root
    app_dir: str = "app"  # directory backing the application namespace
    extension: str = "php"
    column_indent: int = Field(default=12, ge=0)
    foreign_keys: Literal["all", "first"] = "all"
    timestamp_format: str = "%Y_%m_%d_%H%M%S"
    stubs_dir: Path | None = None  # custom stubs override the packaged ones
    refresh_autoload: bool = True
    composer_binary: str = "composer"
