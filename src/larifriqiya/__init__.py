"""larifriqiya: Generate Laravel migrations and Eloquent models from JSON.

Reads a JSON schema description (tables, fields, relationships, foreign
keys) and writes timestamped migration scripts and model class files into
a Laravel project.

Usage:
    from larifriqiya import load_schema_file, MigrationGenerator, LaravelHost

    schema_file = load_schema_file("schema.json")
    host = LaravelHost(project_root)
    MigrationGenerator(project_root, host).generate_all(schema_file)
"""

__version__ = "0.1.0"

# Errors
from larifriqiya.errors import (
    GenerationError,
    HostError,
    InvalidFormatError,
    LarifriqiyaError,
    NotFoundError,
    ParseError,
    StubError,
)

# Schema
from larifriqiya.schema.models import SchemaFile, TableSchema
from larifriqiya.schema.parser import load_schema_file

# Syntax
from larifriqiya.migrations.syntax import Action, SyntaxBuilder

# Config
from larifriqiya.config.loader import load_generator_config
from larifriqiya.config.models import GeneratorConfig

# Generators
from larifriqiya.generators.host import HostFramework, LaravelHost
from larifriqiya.generators.migration import MigrationGenerator
from larifriqiya.generators.model import ModelGenerator

__all__ = [
    # Errors
    "LarifriqiyaError",
    "NotFoundError",
    "InvalidFormatError",
    "ParseError",
    "GenerationError",
    "StubError",
    "HostError",
    # Schema
    "SchemaFile",
    "TableSchema",
    "load_schema_file",
    # Syntax
    "Action",
    "SyntaxBuilder",
    # Config
    "GeneratorConfig",
    "load_generator_config",
    # Generators
    "HostFramework",
    "LaravelHost",
    "MigrationGenerator",
    "ModelGenerator",
]
