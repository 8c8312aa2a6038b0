"""Syntax builder: schema records -> PHP statement text.

Turns field lists, foreign keys and relationship descriptors into Laravel
schema-builder calls and Eloquent accessor methods. Every statement kind is
a small dataclass with a ``render()`` method; ``SyntaxBuilder`` assembles
them into the ``up``/``down`` bodies of a migration.

Pure logic apart from reading the wrapper stubs. Nothing is written.

Usage:
    from larifriqiya.migrations.syntax import SyntaxBuilder

    syntax = SyntaxBuilder().build(table)
    syntax.up    # "Schema::create('posts', function (Blueprint $table) {..."
    syntax.down  # "Schema::dropIfExists('posts');"
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Literal

from larifriqiya.errors import GenerationError
from larifriqiya.schema.models import (
    FieldSpec,
    ForeignKeySpec,
    RelationshipSpec,
    TableSchema,
)
from larifriqiya.stubs.engine import StubLoader, render

logger = logging.getLogger(__name__)

DEFAULT_COLUMN_INDENT = 12
TAB = "    "

RELATIONSHIP_TYPES = frozenset(
    {
        "hasOne",
        "hasMany",
        "belongsTo",
        "belongsToMany",
        "hasOneThrough",
        "hasManyThrough",
        "morphTo",
        "morphOne",
        "morphMany",
        "morphToMany",
        "morphedByMany",
    }
)

ForeignKeyPolicy = Literal["all", "first"]


class Direction(str, Enum):
    """Whether a column block adds or drops its columns."""

    ADD = "add"
    DROP = "drop"


class Action(str, Enum):
    """Kind of migration being built."""

    CREATE = "create"  # create the table; down drops it
    ADD = "add"  # add columns to an existing table; down drops them
    REMOVE = "remove"  # drop columns; down adds them back


def _literal(value: object) -> str:
    """Render a JSON scalar as a PHP literal (strings are passed verbatim)."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


# ------------------------------------------------------------------
# Statements
# ------------------------------------------------------------------


@dataclass
class ColumnAdd:
    """A column definition.

    Example:
        ColumnAdd(FieldSpec(name="amount", type="decimal", arguments=[8, 2])).render()
        # "$table->decimal('amount', 8, 2);"
    """

    field: FieldSpec

    def render(self) -> str:
        """Generate ``$table-><type>('<name>'[, args])[-><modifier>(<value>)...];``.

        Enum columns take their choices as one array argument:
        ``$table->enum('status', ['draft', 'published'])``.
        """
        args = [f"'{self.field.name}'"]
        if self.field.arguments:
            literals = [_literal(arg) for arg in self.field.arguments]
            if self.field.type == "enum":
                args.append("[" + ", ".join(literals) + "]")
            else:
                args.extend(literals)

        syntax = f"$table->{self.field.type}({', '.join(args)})"

        for option in self.field.options:
            if option.key:
                syntax += f"->{option.key}({_literal(option.value)})"

        return syntax + ";"


@dataclass
class ColumnDrop:
    """A column removal. Only the field name matters."""

    field: FieldSpec

    def render(self) -> str:
        return f"$table->dropColumn('{self.field.name}');"


@dataclass
class ForeignKey:
    """A foreign-key constraint.

    Example:
        ForeignKey(ForeignKeySpec(column="user_id", references="id", on="users",
                                  on_delete="cascade")).render()
        # "$table->foreign('user_id')->references('id')->on('users')->onDelete('cascade');"
    """

    key: ForeignKeySpec

    def render(self) -> str:
        syntax = (
            f"$table->foreign('{self.key.column}')"
            f"->references('{self.key.references}')"
            f"->on('{self.key.on}')"
        )
        if self.key.on_delete:
            syntax += f"->onDelete('{self.key.on_delete}')"
        if self.key.on_update:
            syntax += f"->onUpdate('{self.key.on_update}')"
        return syntax + ";"


@dataclass
class DropTable:
    """Drop the whole table (down method of a create migration)."""

    table: str

    def render(self) -> str:
        return f"Schema::dropIfExists('{self.table}');"


@dataclass
class RelationshipMethod:
    """An Eloquent relationship accessor.

    Arguments are trimmed and single-quoted; blank arguments are dropped
    rather than passed as empty strings. Unknown relationship kinds are
    rendered as given, with a warning.
    """

    relationship: RelationshipSpec
    indent: str = TAB

    @property
    def arguments(self) -> list[str]:
        return [arg.strip() for arg in self.relationship.arguments if arg.strip()]

    def render(self) -> str:
        rel = self.relationship
        if rel.type not in RELATIONSHIP_TYPES:
            logger.warning(
                "Relationship %r uses unknown type %r; rendering it verbatim",
                rel.name,
                rel.type,
            )

        args = [f"{rel.class_name}::class"]
        args.extend(f"'{arg}'" for arg in self.arguments)

        return (
            f"public function {rel.name}()\n"
            f"{self.indent}{{\n"
            f"{self.indent * 2}return $this->{rel.type}({', '.join(args)});\n"
            f"{self.indent}}}"
        )


_COLUMN_STATEMENTS = {
    Direction.ADD: ColumnAdd,
    Direction.DROP: ColumnDrop,
}


# ------------------------------------------------------------------
# Blocks
# ------------------------------------------------------------------


def render_add_column(field: FieldSpec) -> str:
    return ColumnAdd(field).render()


def render_drop_column(field: FieldSpec) -> str:
    return ColumnDrop(field).render()


def render_column_block(
    fields: list[FieldSpec],
    direction: Direction = Direction.ADD,
    indent: int = DEFAULT_COLUMN_INDENT,
) -> str:
    """Render every field in *direction*, one statement per line.

    Lines after the first are prefixed with *indent* spaces so the block
    lines up under the stub placeholder it replaces.
    """
    statement = _COLUMN_STATEMENTS[Direction(direction)]
    return ("\n" + " " * indent).join(statement(field).render() for field in fields)


def render_foreign_keys(
    keys: list[ForeignKeySpec],
    indent: int = DEFAULT_COLUMN_INDENT,
    policy: ForeignKeyPolicy = "all",
) -> str:
    """Render foreign-key constraints; empty string when there are none.

    Each statement is followed by a newline and *indent* spaces so the next
    wrapper statement keeps its alignment. With ``policy="first"`` only the
    first key is rendered, matching the historical output of the generator.
    """
    if policy not in ("all", "first"):
        raise GenerationError(f"Unknown foreign key policy: {policy!r}")

    selected = keys[:1] if policy == "first" else keys
    if policy == "first" and len(keys) > 1:
        logger.warning(
            "Foreign key policy 'first': ignoring %d additional foreign key(s)",
            len(keys) - 1,
        )

    return "".join(ForeignKey(key).render() + "\n" + " " * indent for key in selected)


def render_relationship_method(relationship: RelationshipSpec) -> str:
    return RelationshipMethod(relationship).render()


def render_fillable_list(fillable: list[str]) -> str:
    """Quoted, bracketed list of the non-blank entries; "" if none remain.

    Examples:
        >>> render_fillable_list(["title", " body ", ""])
        "['title', 'body']"
        >>> render_fillable_list(["  "])
        ''
    """
    entries = [entry.strip() for entry in fillable if entry.strip()]
    if not entries:
        return ""
    return "[" + ", ".join(f"'{entry}'" for entry in entries) + "]"


# ------------------------------------------------------------------
# Assembly
# ------------------------------------------------------------------


@dataclass
class SchemaSyntax:
    """The bodies of a migration's ``up`` and ``down`` methods."""

    up: str
    down: str


class SyntaxBuilder:
    """Assemble migration bodies for a table schema.

    Args:
        loader: Source of the ``create-schema`` and ``schema-change`` wrapper
            stubs (packaged defaults when omitted).
        indent: Column indentation inside the wrappers.
        foreign_key_policy: ``"all"`` or ``"first"``.
    """

    def __init__(
        self,
        loader: StubLoader | None = None,
        indent: int = DEFAULT_COLUMN_INDENT,
        foreign_key_policy: ForeignKeyPolicy = "all",
    ) -> None:
        self.loader = loader or StubLoader()
        self.indent = indent
        self.foreign_key_policy = foreign_key_policy

    def build(self, table: TableSchema, action: Action | str = Action.CREATE) -> SchemaSyntax:
        """Build the ``up`` and ``down`` bodies for *action*.

        Raises:
            GenerationError: If *action* is not a known action token.
        """
        try:
            action = Action(action)
        except ValueError:
            raise GenerationError(f"Unknown migration action: {action!r}") from None

        return SchemaSyntax(up=self._up(table, action), down=self._down(table, action))

    def _up(self, table: TableSchema, action: Action) -> str:
        if action is Action.CREATE:
            return self._create_wrapper(table)
        if action is Action.ADD:
            return self._change_wrapper(table, Direction.ADD)
        return self._change_wrapper(table, Direction.DROP)

    def _down(self, table: TableSchema, action: Action) -> str:
        if action is Action.CREATE:
            return DropTable(table.table_name).render()
        if action is Action.ADD:
            return self._change_wrapper(table, Direction.DROP)
        return self._change_wrapper(table, Direction.ADD)

    def _create_wrapper(self, table: TableSchema) -> str:
        soft_deletes = ""
        if table.soft_delete:
            soft_deletes = "$table->softDeletes();\n" + " " * self.indent

        return render(
            self.loader.load("create-schema"),
            {
                "table": table.table_name,
                "columns": render_column_block(table.fields, Direction.ADD, self.indent),
                "foreign_keys": render_foreign_keys(
                    table.foreign_keys, self.indent, self.foreign_key_policy
                ),
                "soft_deletes": soft_deletes,
            },
        )

    def _change_wrapper(self, table: TableSchema, direction: Direction) -> str:
        return render(
            self.loader.load("schema-change"),
            {
                "table": table.table_name,
                "columns": render_column_block(table.fields, direction, self.indent),
            },
        )
