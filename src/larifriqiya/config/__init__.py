"""Configuration: TOML loading and the generator settings model.

Usage:
    >>> from larifriqiya.config import load_generator_config, GeneratorConfig
"""

from larifriqiya.config.loader import load_generator_config
from larifriqiya.config.models import GeneratorConfig

__all__ = ["load_generator_config", "GeneratorConfig"]
