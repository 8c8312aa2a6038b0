"""Schema parser: JSON file -> validated ``SchemaFile``.

Loading is all-or-nothing. Every record is checked before any record is
turned into a ``TableSchema``, and nothing is written by this module, so a
bad file never produces partial output.

Usage:
    from larifriqiya.schema.parser import load_schema_file

    schema_file = load_schema_file("schema.json")
    for table in schema_file.tables:
        print(table.table_name)
"""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from larifriqiya.errors import InvalidFormatError, NotFoundError, ParseError
from larifriqiya.schema.models import SchemaFile, TableSchema

logger = logging.getLogger(__name__)

REQUIRED_KEYS = ("name", "namespace", "fields")


def parse(path: str | Path) -> list[Any]:
    """Read and decode a JSON schema file.

    Args:
        path: Path to the JSON file.

    Returns:
        The decoded JSON document (expected to be a list of records).

    Raises:
        NotFoundError: If the path does not exist.
        ParseError: If the file is not syntactically valid JSON.
    """
    schema_path = Path(path)
    if not schema_path.exists():
        raise NotFoundError(
            f"{schema_path} not found. Make sure the filename is correct."
        )

    try:
        return json.loads(schema_path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ParseError(f"{schema_path} is not valid JSON: {e}") from e


def validate(records: Any) -> bool:
    """Presence-of-keys check over every record.

    Returns ``False`` if the document is not a list of objects, or if any
    object lacks ``name``, ``namespace`` or ``fields``. One bad record
    invalidates the whole file.

    Examples:
        >>> validate([{"name": "post", "namespace": "App", "fields": []}])
        True
        >>> validate([{"name": "post", "fields": []}])
        False
    """
    if not isinstance(records, list):
        return False

    for record in records:
        if not isinstance(record, dict):
            return False
        if any(key not in record for key in REQUIRED_KEYS):
            return False
    return True


def load_schema_file(path: str | Path) -> SchemaFile:
    """Parse, validate and model a schema file.

    The derived ``table`` name is attached to every record here, once,
    before any rendering happens.

    Raises:
        NotFoundError: If the path does not exist.
        InvalidFormatError: If the extension is not ``.json`` or the
            records do not have the expected shape.
        ParseError: If the file is not valid JSON.
    """
    schema_path = Path(path)
    if not schema_path.exists():
        raise NotFoundError(
            f"{schema_path} not found. Make sure the filename is correct."
        )
    if schema_path.suffix.lower() != ".json":
        raise InvalidFormatError(
            f"{schema_path} is not a valid file. Only json files are accepted."
        )

    records = parse(schema_path)
    if not validate(records):
        raise InvalidFormatError("The format of the json file is invalid")

    tables: list[TableSchema] = []
    for index, record in enumerate(records):
        try:
            table = TableSchema.model_validate(record)
        except ValidationError as e:
            raise InvalidFormatError(
                f"The format of the json file is invalid (record {index}, "
                f"{record.get('name')!r}): {e.error_count()} error(s)\n{e}"
            ) from e
        table.table = table.table_name
        tables.append(table)

    logger.debug("Loaded %d table schema(s) from %s", len(tables), schema_path)
    return SchemaFile(path=schema_path, tables=tables)
