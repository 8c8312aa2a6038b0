"""Pydantic models for the JSON schema description.

The input file is a JSON array of table records. JSON keys keep the
spelling used by the schema designer (``softDelete``, ``foreign_keys``,
``class``, ``onDelete``); Python attributes are snake_case.

Usage:
    from larifriqiya.schema.models import TableSchema

    table = TableSchema.model_validate({
        "name": "post",
        "namespace": "App",
        "fields": [{"name": "title", "type": "string"}],
    })
    table.table_name            # 'posts'
    table.migration_class_name  # 'CreatePostsTable'
    table.model_class_name      # 'Post'
"""

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictFloat, StrictInt

from larifriqiya import naming


# ============================================================================
# Field / Relationship / Foreign-key records
# ============================================================================


class FieldOption(BaseModel):
    """A column modifier such as ``nullable`` or ``default``."""

    key: str | None = None  # modifier name; options without a key are ignored
    value: Any = None  # rendered verbatim as the modifier argument


class FieldSpec(BaseModel):
    """One column of a table.

    Example:
        >>> FieldSpec(name="amount", type="decimal", arguments=[8, 2]).arguments
        [8, 2]
    """

    name: str
    type: str  # schema-builder column type: string, integer, enum, decimal, ...
    arguments: list[StrictBool | StrictInt | StrictFloat | str] = Field(default_factory=list)
    options: list[FieldOption] = Field(default_factory=list)


class RelationshipSpec(BaseModel):
    """A model relationship accessor (e.g. ``comments`` -> ``hasMany``)."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    type: str  # hasOne, hasMany, belongsTo, belongsToMany, ...
    class_name: str = Field(alias="class")
    arguments: list[str] = Field(default_factory=list)


class ForeignKeySpec(BaseModel):
    """A foreign-key constraint on the created table."""

    model_config = ConfigDict(populate_by_name=True)

    column: str
    references: str
    on: str
    on_delete: str | None = Field(default=None, alias="onDelete")
    on_update: str | None = Field(default=None, alias="onUpdate")


# ============================================================================
# Table / file records
# ============================================================================


class TableSchema(BaseModel):
    """Declarative description of one table and its model."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    namespace: str
    fields: list[FieldSpec]
    fillable: list[str] = Field(default_factory=list)
    soft_delete: bool = Field(default=False, alias="softDelete")
    relationships: list[RelationshipSpec] = Field(default_factory=list)
    foreign_keys: list[ForeignKeySpec] = Field(default_factory=list)
    table: str = ""  # derived; attached by the parser before rendering

    @property
    def table_name(self) -> str:
        """Pluralized snake_case table name (``blog_post`` -> ``blog_posts``)."""
        return self.table or naming.table_name(self.name)

    @property
    def migration_class_name(self) -> str:
        return naming.migration_class_name(self.name)

    @property
    def model_class_name(self) -> str:
        return naming.model_class_name(self.name)


class SchemaFile(BaseModel):
    """All table records of one input file, in file order."""

    path: Path | None = None
    tables: list[TableSchema] = Field(default_factory=list)
