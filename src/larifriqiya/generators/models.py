"""Result records reported by the generators."""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel


class GeneratedFile(BaseModel):
    """One output file of a generation run.

    Example:
        >>> f = GeneratedFile(kind="model", name="post", path=Path("app/Post.php"))
        >>> f.skipped
        False
    """

    kind: Literal["migration", "model"]
    name: str  # schema record name
    path: Path
    skipped: bool = False  # True when an existing file was left untouched
