"""Schema description: models and the JSON parser.

Usage:
    >>> from larifriqiya.schema import load_schema_file, TableSchema
"""

from larifriqiya.schema.models import (
    FieldOption,
    FieldSpec,
    ForeignKeySpec,
    RelationshipSpec,
    SchemaFile,
    TableSchema,
)
from larifriqiya.schema.parser import load_schema_file, parse, validate

__all__ = [
    "FieldOption",
    "FieldSpec",
    "ForeignKeySpec",
    "RelationshipSpec",
    "SchemaFile",
    "TableSchema",
    "load_schema_file",
    "parse",
    "validate",
]
