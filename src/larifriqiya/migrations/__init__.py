"""Migration syntax: typed statements and the up/down body builder.

Usage:
    >>> from larifriqiya.migrations import SyntaxBuilder, Action
"""

from larifriqiya.migrations.syntax import (
    Action,
    ColumnAdd,
    ColumnDrop,
    Direction,
    DropTable,
    ForeignKey,
    RelationshipMethod,
    SchemaSyntax,
    SyntaxBuilder,
    render_column_block,
    render_fillable_list,
    render_foreign_keys,
)

__all__ = [
    "Action",
    "ColumnAdd",
    "ColumnDrop",
    "Direction",
    "DropTable",
    "ForeignKey",
    "RelationshipMethod",
    "SchemaSyntax",
    "SyntaxBuilder",
    "render_column_block",
    "render_fillable_list",
    "render_foreign_keys",
]
