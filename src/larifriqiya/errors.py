"""Error taxonomy for schema-driven code generation.

Every error raised by the library derives from ``LarifriqiyaError`` so the
CLI can report it and stop without a traceback. Library code never catches
these itself.
"""


class LarifriqiyaError(Exception):
    """Base class for all generator errors."""

    pass


class NotFoundError(LarifriqiyaError):
    """Raised when an input path (schema file, config, stub) does not exist."""

    pass


class InvalidFormatError(LarifriqiyaError):
    """Raised for a wrong file extension or a malformed schema shape."""

    pass


class ParseError(LarifriqiyaError):
    """Raised when a file is not valid UTF-8 JSON or TOML."""

    pass


class GenerationError(LarifriqiyaError):
    """Raised on an internal generation failure (unknown action token, etc.)."""

    pass


class StubError(GenerationError):
    """Raised when a stub cannot be decoded or still holds unsupplied placeholders."""

    pass


class HostError(LarifriqiyaError):
    """Raised when the host framework collaborator fails (e.g. composer)."""

    pass
