"""Migration orchestrator: one create-table migration per table schema.

After all migrations are written, any model that does not exist yet is
generated through the model orchestrator; existing models are left alone.

Usage:
    from larifriqiya.generators.migration import MigrationGenerator

    generator = MigrationGenerator(base_path, host)
    written = generator.generate_all(schema_file)
"""

import logging
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

from larifriqiya.config.models import GeneratorConfig
from larifriqiya.errors import GenerationError
from larifriqiya.generators.host import HostFramework
from larifriqiya.generators.model import ModelGenerator
from larifriqiya.generators.models import GeneratedFile
from larifriqiya.migrations.syntax import SyntaxBuilder
from larifriqiya.schema.models import SchemaFile, TableSchema
from larifriqiya.stubs.engine import StubLoader, render, tidy

logger = logging.getLogger(__name__)


class MigrationGenerator:
    """Write timestamped migration files.

    Args:
        base_path: Project root.
        host: Host framework collaborator; its autoload is refreshed after
            every migration written.
        config: Generator settings (defaults when omitted).
        loader: Stub loader (built from ``config.stubs_dir`` when omitted).
        models: Model orchestrator used for missing models.
        clock: Returns the time embedded in file names.
    """

    def __init__(
        self,
        base_path: Path,
        host: HostFramework,
        config: GeneratorConfig | None = None,
        loader: StubLoader | None = None,
        models: ModelGenerator | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.base_path = Path(base_path)
        self.host = host
        self.config = config or GeneratorConfig()
        self.loader = loader or StubLoader(self.config.stubs_dir)
        self.models = models or ModelGenerator(self.base_path, host, self.config, self.loader)
        self.clock = clock
        self.syntax = SyntaxBuilder(
            loader=self.loader,
            indent=self.config.column_indent,
            foreign_key_policy=self.config.foreign_keys,
        )

    def migration_path(self, table: TableSchema, when: datetime) -> Path:
        """``<base>/<migrations_dir>/<timestamp>_create_<table>_table.<ext>``."""
        filename = (
            f"{when.strftime(self.config.timestamp_format)}"
            f"_create_{table.table_name}_table.{self.config.extension}"
        )
        return self.base_path / self.config.migrations_dir / filename

    def compile(self, table: TableSchema) -> str:
        """Render the migration stub for *table*."""
        syntax = self.syntax.build(table)
        stub = render(
            self.loader.load("migration"),
            {
                "class": table.migration_class_name,
                "schema_up": syntax.up,
                "schema_down": syntax.down,
            },
        )
        return tidy(stub)

    def generate(self, table: TableSchema) -> GeneratedFile:
        """Write the migration for *table*, then refresh the host autoload.

        Raises:
            GenerationError: If the file or its directory cannot be written.
            HostError: If the autoload refresh fails.
        """
        path = self.migration_path(table, self.clock())
        content = self.compile(table)

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise GenerationError(f"Cannot write {path}: {e}") from e
        logger.debug("Wrote migration %s to %s", table.migration_class_name, path)

        self.host.refresh_autoload()
        return GeneratedFile(kind="migration", name=table.name, path=path)

    def generate_all(self, schema_file: SchemaFile) -> list[GeneratedFile]:
        """Write every migration, then every model that is still missing."""
        written = [self.generate(table) for table in schema_file.tables]
        written.extend(self.models.generate_missing(table) for table in schema_file.tables)
        return written
