"""File generators (migrations, models) and the host framework seam.

Usage:
    >>> from larifriqiya.generators import MigrationGenerator, ModelGenerator, LaravelHost
"""

from larifriqiya.generators.host import HostFramework, LaravelHost
from larifriqiya.generators.migration import MigrationGenerator
from larifriqiya.generators.model import ModelGenerator
from larifriqiya.generators.models import GeneratedFile

__all__ = [
    "GeneratedFile",
    "HostFramework",
    "LaravelHost",
    "MigrationGenerator",
    "ModelGenerator",
]
