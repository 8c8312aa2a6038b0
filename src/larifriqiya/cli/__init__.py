"""CLI for generating Laravel migrations and models from a JSON schema.

Usage:
    larifriqiya migration schema.json
    larifriqiya model schema.json
    larifriqiya --base-path ~/code/blog --config larifriqiya.toml migration schema.json
    larifriqiya -v model database/schema.json

Commands:
    migration - Generate migrations, then any models that don't exist yet
    model     - Generate (overwrite) models only
"""

import argparse
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from larifriqiya.config.loader import load_generator_config
from larifriqiya.config.models import GeneratorConfig
from larifriqiya.errors import LarifriqiyaError
from larifriqiya.generators.host import LaravelHost
from larifriqiya.generators.migration import MigrationGenerator
from larifriqiya.generators.model import ModelGenerator
from larifriqiya.generators.models import GeneratedFile
from larifriqiya.schema.parser import load_schema_file

console = Console()


# ============================================================================
# Helpers
# ============================================================================


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _load(args: argparse.Namespace) -> tuple[Path, GeneratorConfig, LaravelHost]:
    """Resolve the project root, configuration and host for a command."""
    base_path = Path(args.base_path).resolve()
    config_path = Path(args.config) if args.config else None
    config = load_generator_config(config_path=config_path, base_path=base_path)
    if args.no_autoload:
        config.refresh_autoload = False

    host = LaravelHost(
        base_path,
        app_dir=config.app_dir,
        composer_binary=config.composer_binary,
        refresh=config.refresh_autoload,
    )
    return base_path, config, host


def _report(files: list[GeneratedFile], base_path: Path) -> None:
    for generated in files:
        try:
            shown = escape(str(generated.path.relative_to(base_path)))
        except ValueError:
            shown = escape(str(generated.path))
        label = generated.kind.capitalize()

        if generated.skipped:
            console.print(
                f"[dim]{label} for {generated.name} already exists:[/dim] {shown}"
            )
        else:
            console.print(
                f"[bold green]v[/bold green] {label} for [bold cyan]{generated.name}"
                f"[/bold cyan] created successfully. [dim]{shown}[/dim]"
            )


# ============================================================================
# Commands
# ============================================================================


def cmd_migration(args: argparse.Namespace) -> int:
    """Generate migrations (and missing models) from a schema file.

    Args:
        args: Parsed CLI arguments with filename, base_path, config,
            no_autoload.

    Returns:
        0 on success, 1 on failure.
    """
    try:
        base_path, config, host = _load(args)
        schema_file = load_schema_file(base_path / args.filename)
        generator = MigrationGenerator(base_path, host, config)
        files = generator.generate_all(schema_file)
    except LarifriqiyaError as e:
        console.print(f"[bold red]x[/bold red] [red]Error: {escape(str(e))}[/red]")
        return 1

    _report(files, base_path)
    return 0


def cmd_model(args: argparse.Namespace) -> int:
    """Generate models from a schema file.

    Args:
        args: Parsed CLI arguments with filename, base_path, config.

    Returns:
        0 on success, 1 on failure.
    """
    try:
        base_path, config, host = _load(args)
        schema_file = load_schema_file(base_path / args.filename)
        generator = ModelGenerator(base_path, host, config)
        files = generator.generate_all(schema_file)
    except LarifriqiyaError as e:
        console.print(f"[bold red]x[/bold red] [red]Error: {escape(str(e))}[/red]")
        return 1

    _report(files, base_path)
    return 0


# ============================================================================
# Main entry point
# ============================================================================


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point.

    Parses command line arguments and dispatches to appropriate handler.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    parser = argparse.ArgumentParser(
        prog="larifriqiya",
        description="Generate Laravel migrations and models from a JSON schema",
    )
    parser.add_argument(
        "--base-path",
        default=".",
        help="Project root; filename and outputs are relative to it (default: .)",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to a larifriqiya.toml (default: <base-path>/larifriqiya.toml if present)",
    )
    parser.add_argument(
        "--no-autoload",
        action="store_true",
        help="Do not run 'composer dump-autoload' after writing migrations",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # migration command
    p_migration = subparsers.add_parser(
        "migration",
        help="Generate migrations and missing models from a json file",
    )
    p_migration.add_argument("filename", help="JSON schema file, relative to --base-path")
    p_migration.set_defaults(func=cmd_migration)

    # model command
    p_model = subparsers.add_parser(
        "model",
        help="Generate models from a json file",
    )
    p_model.add_argument("filename", help="JSON schema file, relative to --base-path")
    p_model.set_defaults(func=cmd_model)

    args = parser.parse_args(argv)
    _configure_logging(args.verbose)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
