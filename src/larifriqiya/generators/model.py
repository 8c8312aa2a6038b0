"""Model orchestrator: one Eloquent model class per table schema.

Usage:
    from larifriqiya.generators.model import ModelGenerator

    generator = ModelGenerator(base_path, host)
    for generated in generator.generate_all(schema_file):
        print(generated.path)
"""

import logging
from pathlib import Path

from larifriqiya.config.models import GeneratorConfig
from larifriqiya.errors import GenerationError
from larifriqiya.generators.host import HostFramework
from larifriqiya.generators.models import GeneratedFile
from larifriqiya.migrations.syntax import RelationshipMethod, TAB, render_fillable_list
from larifriqiya.schema.models import SchemaFile, TableSchema
from larifriqiya.stubs.engine import (
    StubLoader,
    insert_before,
    render,
    strip_placeholder,
    tidy,
)

logger = logging.getLogger(__name__)

RELATIONSHIPS_TOKEN = "relationships"

FILLABLE_BLOCK = (
    "/**\n"
    f"{TAB} * The attributes that are mass assignable.\n"
    f"{TAB} *\n"
    f"{TAB} * @var array\n"
    f"{TAB} */\n"
    f"{TAB}protected $fillable = {{fillable}};\n\n{TAB}"
)
SOFT_DELETES_TRAIT = f"use SoftDeletes;\n\n{TAB}"
SOFT_DELETES_IMPORT = "use Illuminate\\Database\\Eloquent\\SoftDeletes;\n"


class ModelGenerator:
    """Write model class files under the application directory.

    Args:
        base_path: Project root.
        host: Host framework collaborator (application namespace).
        config: Generator settings (defaults when omitted).
        loader: Stub loader (built from ``config.stubs_dir`` when omitted).
    """

    def __init__(
        self,
        base_path: Path,
        host: HostFramework,
        config: GeneratorConfig | None = None,
        loader: StubLoader | None = None,
    ) -> None:
        self.base_path = Path(base_path)
        self.host = host
        self.config = config or GeneratorConfig()
        self.loader = loader or StubLoader(self.config.stubs_dir)

    def model_path(self, table: TableSchema) -> Path:
        """Destination of the model class for *table*.

        The leading segment of the namespace that equals the application
        namespace maps onto the application directory:
        ``App\\Models`` + ``post`` -> ``<base>/app/Models/Post.php``.
        """
        segments = [s for s in table.namespace.strip("\\").split("\\") if s]
        if segments and segments[0] == self.host.app_namespace():
            segments[0] = self.config.app_dir

        directory = self.base_path.joinpath(*segments)
        return directory / f"{table.model_class_name}.{self.config.extension}"

    def compile(self, table: TableSchema) -> str:
        """Render the model stub for *table*."""
        fillable = render_fillable_list(table.fillable)

        stub = render(
            self.loader.load("model"),
            {
                "namespace": table.namespace.strip("\\"),
                "ClassName": table.model_class_name,
                "fillable": FILLABLE_BLOCK.format(fillable=fillable) if fillable else "",
                "softDeletes": SOFT_DELETES_TRAIT if table.soft_delete else "",
                "useSoftDeletes": SOFT_DELETES_IMPORT if table.soft_delete else "",
            },
            keep=(RELATIONSHIPS_TOKEN,),
        )

        for relationship in table.relationships:
            method = RelationshipMethod(relationship).render()
            stub = insert_before(stub, RELATIONSHIPS_TOKEN, method + "\n\n" + TAB)

        return tidy(strip_placeholder(stub, RELATIONSHIPS_TOKEN))

    def generate(self, table: TableSchema) -> GeneratedFile:
        """Write (or overwrite) the model file for *table*.

        Raises:
            GenerationError: If the file or its directory cannot be written.
        """
        path = self.model_path(table)
        content = self.compile(table)

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise GenerationError(f"Cannot write {path}: {e}") from e
        logger.debug("Wrote model %s to %s", table.model_class_name, path)
        return GeneratedFile(kind="model", name=table.name, path=path)

    def generate_missing(self, table: TableSchema) -> GeneratedFile:
        """Write the model file only if it does not exist yet."""
        path = self.model_path(table)
        if path.exists():
            logger.debug("Model %s already exists at %s; skipping", table.model_class_name, path)
            return GeneratedFile(kind="model", name=table.name, path=path, skipped=True)
        return self.generate(table)

    def generate_all(self, schema_file: SchemaFile) -> list[GeneratedFile]:
        return [self.generate(table) for table in schema_file.tables]
