"""Tests for the migration and model orchestrators."""

import copy
import textwrap
from pathlib import Path

import pytest

from conftest import COMMENT_RECORD, FIXED_TIME, POST_RECORD, FakeHost, all_files
from larifriqiya.config.models import GeneratorConfig
from larifriqiya.errors import GenerationError
from larifriqiya.generators.migration import MigrationGenerator
from larifriqiya.generators.model import ModelGenerator
from larifriqiya.schema.models import SchemaFile, TableSchema
from larifriqiya.stubs.engine import StubLoader, find_placeholders

POST_MIGRATION = textwrap.dedent("""\
    <?php

    use Illuminate\\Database\\Migrations\\Migration;
    use Illuminate\\Database\\Schema\\Blueprint;
    use Illuminate\\Support\\Facades\\Schema;

    class CreatePostsTable extends Migration
    {
        /**
         * Run the migrations.
         *
         * @return void
         */
        public function up()
        {
            Schema::create('posts', function (Blueprint $table) {
                $table->increments('id');
                $table->string('title');
                $table->timestamps();
            });
        }

        /**
         * Reverse the migrations.
         *
         * @return void
         */
        public function down()
        {
            Schema::dropIfExists('posts');
        }
    }
""")

POST_MODEL = textwrap.dedent("""\
    <?php

    namespace App;

    use Illuminate\\Database\\Eloquent\\Model;

    class Post extends Model
    {
        /**
         * The attributes that are mass assignable.
         *
         * @var array
         */
        protected $fillable = ['title'];
    }
""")

COMMENT_MODEL = textwrap.dedent("""\
    <?php

    namespace App\\Models;

    use Illuminate\\Database\\Eloquent\\Model;
    use Illuminate\\Database\\Eloquent\\SoftDeletes;

    class Comment extends Model
    {
        use SoftDeletes;

        /**
         * The attributes that are mass assignable.
         *
         * @var array
         */
        protected $fillable = ['body', 'status'];

        public function post()
        {
            return $this->belongsTo(Post::class, 'post_id');
        }
    }
""")


def _schema_file(*records: dict) -> SchemaFile:
    tables = []
    for record in records:
        table = TableSchema.model_validate(record)
        table.table = table.table_name
        tables.append(table)
    return SchemaFile(tables=tables)


# ------------------------------------------------------------------
# Model orchestrator
# ------------------------------------------------------------------


class TestModelGenerator:
    """ModelGenerator compiles and writes model classes."""

    def test_compile_post(self, project: Path, host: FakeHost) -> None:
        """The post record compiles to the exact model class."""
        table = _schema_file(POST_RECORD).tables[0]
        assert ModelGenerator(project, host).compile(table) == POST_MODEL

    def test_compile_comment(self, project: Path, host: FakeHost) -> None:
        """Soft deletes, fillable and a relationship compile in place."""
        table = _schema_file(COMMENT_RECORD).tables[0]
        assert ModelGenerator(project, host).compile(table) == COMMENT_MODEL

    def test_relationships_keep_order(self, project: Path, host: FakeHost) -> None:
        """Relationship methods appear in schema order, one blank line apart."""
        record = copy.deepcopy(POST_RECORD)
        record["relationships"] = [
            {"name": "comments", "type": "hasMany", "class": "Comment", "arguments": []},
            {"name": "author", "type": "belongsTo", "class": "User", "arguments": ["user_id"]},
        ]
        text = ModelGenerator(project, host).compile(_schema_file(record).tables[0])

        assert text.index("function comments()") < text.index("function author()")
        assert "return $this->hasMany(Comment::class);" in text
        assert "return $this->belongsTo(User::class, 'user_id');" in text
        assert "    }\n\n    public function author()" in text
        assert find_placeholders(text) == []

    def test_without_fillable_or_relationships(self, project: Path, host: FakeHost) -> None:
        """An empty fillable list and no relationships leave an empty class body."""
        record = copy.deepcopy(POST_RECORD)
        record["fillable"] = ["", " "]
        text = ModelGenerator(project, host).compile(_schema_file(record).tables[0])

        assert "$fillable" not in text
        assert "SoftDeletes" not in text
        assert text.endswith("class Post extends Model\n{\n}\n")

    def test_model_path_app_namespace(self, project: Path, host: FakeHost) -> None:
        """The App prefix maps to app/ and the rest to subdirectories."""
        generator = ModelGenerator(project, host)
        post, comment = _schema_file(POST_RECORD, COMMENT_RECORD).tables

        assert generator.model_path(post) == project / "app" / "Post.php"
        assert generator.model_path(comment) == project / "app" / "Models" / "Comment.php"

    def test_model_path_custom_app_namespace(self, project: Path) -> None:
        """The host namespace, not a literal App, maps to app/."""
        record = copy.deepcopy(POST_RECORD)
        record["namespace"] = "Blog\\Models"
        table = _schema_file(record).tables[0]

        path = ModelGenerator(project, FakeHost(namespace="Blog")).model_path(table)
        assert path == project / "app" / "Models" / "Post.php"

    def test_model_path_foreign_namespace(self, project: Path, host: FakeHost) -> None:
        """Namespaces outside the app map to their own directories."""
        record = copy.deepcopy(POST_RECORD)
        record["namespace"] = "Domain\\Blog"
        table = _schema_file(record).tables[0]

        assert ModelGenerator(project, host).model_path(table) == project / "Domain" / "Blog" / "Post.php"

    def test_generate_all_overwrites(self, project: Path, host: FakeHost) -> None:
        """The model command overwrites existing files without refreshing autoload."""
        existing = project / "app" / "Post.php"
        existing.parent.mkdir(parents=True)
        existing.write_text("old")

        files = ModelGenerator(project, host).generate_all(_schema_file(POST_RECORD, COMMENT_RECORD))

        assert [f.path for f in files] == [existing, project / "app" / "Models" / "Comment.php"]
        assert not any(f.skipped for f in files)
        assert existing.read_text() == POST_MODEL
        assert host.refresh_count == 0

    def test_generate_missing_skips_existing(self, project: Path, host: FakeHost) -> None:
        """generate_missing leaves an existing model alone."""
        existing = project / "app" / "Post.php"
        existing.parent.mkdir(parents=True)
        existing.write_text("keep me")

        result = ModelGenerator(project, host).generate_missing(_schema_file(POST_RECORD).tables[0])

        assert result.skipped is True
        assert existing.read_text() == "keep me"

    def test_skip_logged_at_debug(
        self, project: Path, host: FakeHost, caplog: pytest.LogCaptureFixture
    ) -> None:
        """A skipped model is logged at DEBUG, never as a warning."""
        existing = project / "app" / "Post.php"
        existing.parent.mkdir(parents=True)
        existing.write_text("keep me")

        with caplog.at_level("DEBUG", logger="larifriqiya.generators.model"):
            ModelGenerator(project, host).generate_missing(_schema_file(POST_RECORD).tables[0])

        skips = [r for r in caplog.records if "already exists" in r.getMessage()]
        assert [r.levelname for r in skips] == ["DEBUG"]

    def test_unwritable_directory(self, project: Path, host: FakeHost) -> None:
        """A file where app/ should be raises GenerationError naming the path."""
        (project / "app").write_text("not a directory")

        with pytest.raises(GenerationError, match="Cannot write"):
            ModelGenerator(project, host).generate(_schema_file(POST_RECORD).tables[0])


# ------------------------------------------------------------------
# Migration orchestrator
# ------------------------------------------------------------------


class TestMigrationGenerator:
    """MigrationGenerator writes migrations then missing models."""

    def test_post_scenario(self, project: Path, host: FakeHost, clock) -> None:
        """A one-table schema writes the migration and the model."""
        files = MigrationGenerator(project, host, clock=clock).generate_all(_schema_file(POST_RECORD))

        migration = project / "database" / "migrations" / "2024_03_09_140530_create_posts_table.php"
        model = project / "app" / "Post.php"
        assert [(f.kind, f.path) for f in files] == [("migration", migration), ("model", model)]

        text = migration.read_text()
        assert text == POST_MIGRATION
        assert text.count("'title'") == 1
        assert "Schema::dropIfExists('posts');" in text
        assert model.read_text() == POST_MODEL

    def test_autoload_refreshed_after_each_migration(self, project: Path, host: FakeHost, clock) -> None:
        """Autoload is refreshed once per migration."""
        MigrationGenerator(project, host, clock=clock).generate_all(
            _schema_file(POST_RECORD, COMMENT_RECORD)
        )
        assert host.refresh_count == 2

    def test_unwritable_migrations_directory(self, project: Path, host: FakeHost, clock) -> None:
        """A file blocking database/ raises GenerationError before any refresh."""
        (project / "database").write_text("not a directory")

        with pytest.raises(GenerationError, match="Cannot write"):
            MigrationGenerator(project, host, clock=clock).generate(_schema_file(POST_RECORD).tables[0])
        assert host.refresh_count == 0

    def test_existing_model_untouched(self, project: Path, host: FakeHost, clock) -> None:
        """Migrations never overwrite an existing model."""
        model = project / "app" / "Post.php"
        model.parent.mkdir(parents=True)
        model.write_text("hand written")

        files = MigrationGenerator(project, host, clock=clock).generate_all(_schema_file(POST_RECORD))

        assert model.read_text() == "hand written"
        assert files[-1].kind == "model"
        assert files[-1].skipped is True

    def test_all_outputs_free_of_placeholders(self, project: Path, host: FakeHost, clock) -> None:
        """No written file contains a leftover token."""
        MigrationGenerator(project, host, clock=clock).generate_all(
            _schema_file(POST_RECORD, COMMENT_RECORD)
        )
        outputs = all_files(project)
        assert len(outputs) == 4
        for path in outputs:
            assert find_placeholders(path.read_text()) == [], path

    def test_migration_class_and_path(self, project: Path, host: FakeHost, clock) -> None:
        """Compound names give plural snake tables and Create<Plural>Table classes."""
        record = copy.deepcopy(POST_RECORD)
        record["name"] = "BlogCategory"
        generator = MigrationGenerator(project, host, clock=clock)
        table = _schema_file(record).tables[0]

        assert generator.migration_path(table, FIXED_TIME).name == (
            "2024_03_09_140530_create_blog_categories_table.php"
        )
        text = generator.compile(table)
        assert "class CreateBlogCategoriesTable extends Migration" in text
        assert "Schema::create('blog_categories'" in text

    def test_two_foreign_keys_all_policy(self, project: Path, host: FakeHost, clock) -> None:
        """The default policy writes every foreign key."""
        record = copy.deepcopy(COMMENT_RECORD)
        record["foreign_keys"].append({"column": "user_id", "references": "id", "on": "users"})
        text = MigrationGenerator(project, host, clock=clock).compile(_schema_file(record).tables[0])

        assert "$table->foreign('post_id')" in text
        assert "$table->foreign('user_id')->references('id')->on('users');" in text

    def test_two_foreign_keys_first_policy(self, project: Path, host: FakeHost, clock) -> None:
        """The first policy writes only the first foreign key."""
        record = copy.deepcopy(COMMENT_RECORD)
        record["foreign_keys"].append({"column": "user_id", "references": "id", "on": "users"})
        config = GeneratorConfig(foreign_keys="first")
        text = MigrationGenerator(project, host, config, clock=clock).compile(
            _schema_file(record).tables[0]
        )

        assert "$table->foreign('post_id')" in text
        assert "$table->foreign('user_id')" not in text

    def test_config_directories_and_extension(self, project: Path, host: FakeHost, clock) -> None:
        """Configured directories and extension shape the output paths."""
        config = GeneratorConfig(migrations_dir="db/migrate", app_dir="src", extension="php8")
        files = MigrationGenerator(project, host, config, clock=clock).generate_all(
            _schema_file(POST_RECORD)
        )

        assert files[0].path == project / "db" / "migrate" / "2024_03_09_140530_create_posts_table.php8"
        assert files[1].path == project / "src" / "Post.php8"

    def test_custom_stubs(self, project: Path, host: FakeHost, clock, tmp_path: Path) -> None:
        """A custom migration stub replaces the packaged one."""
        stubs = tmp_path / "stubs"
        stubs.mkdir()
        (stubs / "migration.stub").write_text("// {{class}}\n{{schema_up}}\n{{schema_down}}\n")

        generator = MigrationGenerator(project, host, loader=StubLoader(stubs), clock=clock)
        text = generator.compile(_schema_file(POST_RECORD).tables[0])

        assert text.startswith("// CreatePostsTable\nSchema::create('posts'")
        assert text.endswith("Schema::dropIfExists('posts');\n")
