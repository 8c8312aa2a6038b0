"""Stub template engine: literal ``{{token}}`` substitution.

Stubs carry no logic. Anything conditional (soft-delete trait, fillable
block, relationship methods) is decided by the caller and handed in as
ready-made text, the empty string meaning "omit".

Usage:
    from larifriqiya.stubs.engine import StubLoader, render

    stub = StubLoader().load("migration")
    text = render(stub, {"class": "CreatePostsTable", "schema_up": up, "schema_down": down})
"""

import logging
import re
from collections.abc import Iterable, Mapping
from pathlib import Path

from larifriqiya.errors import NotFoundError, StubError

logger = logging.getLogger(__name__)

DEFAULT_STUBS_DIR = Path(__file__).parent / "templates"
STUB_SUFFIX = ".stub"

PLACEHOLDER_PATTERN = re.compile(r"\{\{\s*([A-Za-z_][A-Za-z0-9_]*)\s*\}\}")


def placeholder(token: str) -> str:
    """The literal anchor text for *token* (``schema_up`` -> ``{{schema_up}}``)."""
    return "{{" + token + "}}"


def find_placeholders(text: str) -> list[str]:
    """Tokens still present in *text*, in order of first appearance.

    Examples:
        >>> find_placeholders("class {{class}} { {{body}} {{class}} }")
        ['class', 'body']
        >>> find_placeholders("no tokens here")
        []
    """
    seen: dict[str, None] = {}
    for match in PLACEHOLDER_PATTERN.finditer(text):
        seen.setdefault(match.group(1), None)
    return list(seen)


def render(
    template: str,
    mapping: Mapping[str, object],
    strict: bool = True,
    keep: Iterable[str] = (),
) -> str:
    """Substitute every ``{{token}}`` of *template* from *mapping*.

    Substitution is a single pass over the template, so replacement text is
    never scanned again for tokens.

    Args:
        template: Stub text.
        mapping: Token -> replacement. Values are converted with ``str()``.
        strict: Raise if the template holds a token absent from *mapping*.
        keep: Tokens deliberately left in place for a later step.

    Raises:
        StubError: In strict mode, when a token has no replacement.
    """
    kept = set(keep)
    if strict:
        missing = [
            token
            for token in find_placeholders(template)
            if token not in mapping and token not in kept
        ]
        if missing:
            raise StubError(
                f"No replacement supplied for placeholder(s): {', '.join(missing)}"
            )

    def _substitute(match: re.Match[str]) -> str:
        token = match.group(1)
        if token in kept or token not in mapping:
            return match.group(0)
        return str(mapping[token])

    return PLACEHOLDER_PATTERN.sub(_substitute, template)


def insert_before(text: str, token: str, snippet: str) -> str:
    """Insert *snippet* right before the ``{{token}}`` anchor, keeping the anchor.

    Repeated calls append in order, since the anchor always follows the
    last insertion.

    Raises:
        StubError: If the anchor is not present.
    """
    anchor = placeholder(token)
    if anchor not in text:
        raise StubError(f"Anchor {anchor} not found in stub")
    return text.replace(anchor, snippet + anchor)


def strip_placeholder(text: str, token: str) -> str:
    """Remove the ``{{token}}`` anchor together with the whitespace before it."""
    return re.sub(r"\s*\{\{\s*" + re.escape(token) + r"\s*\}\}", "", text)


def tidy(text: str) -> str:
    """Strip trailing whitespace from every line; end with a single newline."""
    lines = [line.rstrip() for line in text.splitlines()]
    return "\n".join(lines).rstrip("\n") + "\n"


class StubLoader:
    """Load ``<name>.stub`` files.

    A user stub directory (published, customised stubs) takes precedence;
    any stub it does not provide comes from the packaged defaults.
    """

    def __init__(self, stubs_dir: str | Path | None = None) -> None:
        self.stubs_dir = Path(stubs_dir) if stubs_dir is not None else None

    def path_for(self, name: str) -> Path:
        """Resolve the file backing stub *name*.

        Raises:
            NotFoundError: If neither directory provides the stub.
        """
        filename = name + STUB_SUFFIX
        if self.stubs_dir is not None:
            custom = self.stubs_dir / filename
            if custom.is_file():
                return custom

        default = DEFAULT_STUBS_DIR / filename
        if not default.is_file():
            raise NotFoundError(f"Stub not found: {filename}")
        return default

    def load(self, name: str) -> str:
        path = self.path_for(name)
        logger.debug("Loading stub %s from %s", name, path)
        try:
            return path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise StubError(f"Stub {path} is not valid UTF-8: {e}") from e
