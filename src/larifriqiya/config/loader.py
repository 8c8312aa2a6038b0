"""Load generator configuration from a TOML file."""

import tomllib
from pathlib import Path

from pydantic import ValidationError

from larifriqiya.config.models import GeneratorConfig
from larifriqiya.errors import InvalidFormatError, NotFoundError, ParseError

CONFIG_FILENAME = "larifriqiya.toml"


def load_generator_config(
    config_path: Path | None = None,
    base_path: Path | None = None,
) -> GeneratorConfig:
    """Load generator configuration.

    Args:
        config_path: Explicit TOML file. Must exist when given.
        base_path: Project root searched for ``larifriqiya.toml`` when no
            explicit path is given (default: current directory).

    Returns:
        GeneratorConfig; defaults when the implicit file is absent.
        A relative ``stubs_dir`` is resolved against the config file's
        directory.

    Raises:
        NotFoundError: If an explicit config file doesn't exist.
        ParseError: If the file is not valid TOML.
        InvalidFormatError: If a setting has an invalid value.
    """
    if config_path is None:
        config_path = (base_path or Path.cwd()) / CONFIG_FILENAME
        if not config_path.exists():
            return GeneratorConfig()
    elif not config_path.exists():
        raise NotFoundError(f"Config file not found: {config_path}")

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except (tomllib.TOMLDecodeError, UnicodeDecodeError) as e:
        raise ParseError(f"{config_path} is not valid TOML: {e}") from e

    try:
        config = GeneratorConfig(**data.get("generator", {}))
    except ValidationError as e:
        raise InvalidFormatError(f"Invalid settings in {config_path}:\n{e}") from e

    if config.stubs_dir is not None and not config.stubs_dir.is_absolute():
        config.stubs_dir = config_path.parent / config.stubs_dir

    return config
