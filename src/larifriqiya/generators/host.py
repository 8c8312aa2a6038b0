"""Host framework collaborator.

Generators never reach into global framework state. Whatever they need
from the surrounding Laravel application goes through a ``HostFramework``
object handed to them explicitly.
"""

import json
import logging
import subprocess
from pathlib import Path
from typing import Protocol, runtime_checkable

from larifriqiya.errors import HostError, ParseError

logger = logging.getLogger(__name__)

DEFAULT_APP_NAMESPACE = "App"


@runtime_checkable
class HostFramework(Protocol):
    """What the generators need from the host application."""

    def refresh_autoload(self) -> None:
        """Rebuild the class map after a new class file was written."""
        ...

    def app_namespace(self) -> str:
        """Root PHP namespace of the application (usually ``App``)."""
        ...


class LaravelHost:
    """A Laravel project on disk, driven through composer.

    Args:
        base_path: Project root (where ``composer.json`` lives).
        app_dir: Directory backing the application namespace.
        composer_binary: Executable used for ``dump-autoload``.
        refresh: When False, ``refresh_autoload`` does nothing.
    """

    def __init__(
        self,
        base_path: Path,
        app_dir: str = "app",
        composer_binary: str = "composer",
        refresh: bool = True,
    ) -> None:
        self.base_path = Path(base_path)
        self.app_dir = app_dir
        self.composer_binary = composer_binary
        self.refresh = refresh
        self._namespace: str | None = None

    def refresh_autoload(self) -> None:
        """Run ``composer dump-autoload`` in the project root.

        Raises:
            HostError: If composer cannot be started or exits non-zero.
        """
        if not self.refresh:
            logger.debug("Autoload refresh disabled")
            return

        command = [self.composer_binary, "dump-autoload", "--quiet"]
        logger.debug("Running %s in %s", " ".join(command), self.base_path)
        try:
            subprocess.run(
                command,
                cwd=self.base_path,
                check=True,
                capture_output=True,
                text=True,
            )
        except FileNotFoundError as e:
            raise HostError(
                f"Composer executable not found: {self.composer_binary}"
            ) from e
        except subprocess.CalledProcessError as e:
            raise HostError(
                f"composer dump-autoload failed (exit {e.returncode}): "
                f"{(e.stderr or '').strip()}"
            ) from e

    def app_namespace(self) -> str:
        """Namespace mapped onto ``app_dir`` in composer.json's PSR-4 autoload.

        Falls back to ``App`` when the project has no composer.json or no
        matching PSR-4 entry.

        Raises:
            ParseError: If composer.json exists but is not valid JSON.
        """
        if self._namespace is not None:
            return self._namespace

        composer_file = self.base_path / "composer.json"
        namespace = DEFAULT_APP_NAMESPACE
        if composer_file.exists():
            try:
                composer = json.loads(composer_file.read_text(encoding="utf-8"))
            except (json.JSONDecodeError, UnicodeDecodeError) as e:
                raise ParseError(f"{composer_file} is not valid JSON: {e}") from e

            psr4 = composer.get("autoload", {}).get("psr-4", {})
            for prefix, paths in psr4.items():
                if isinstance(paths, str):
                    paths = [paths]
                if any(p.strip("/") == self.app_dir.strip("/") for p in paths):
                    namespace = prefix.strip("\\")
                    break
            else:
                logger.debug(
                    "No PSR-4 entry for %s in %s; using %s",
                    self.app_dir,
                    composer_file,
                    DEFAULT_APP_NAMESPACE,
                )

        self._namespace = namespace
        return namespace
