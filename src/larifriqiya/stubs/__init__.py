"""Stub templates and the placeholder substitution engine."""

from larifriqiya.stubs.engine import (
    StubLoader,
    find_placeholders,
    insert_before,
    render,
    strip_placeholder,
)

__all__ = [
    "StubLoader",
    "find_placeholders",
    "insert_before",
    "render",
    "strip_placeholder",
]
