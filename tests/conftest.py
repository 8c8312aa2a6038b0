"""Shared fixtures: sample schema records, a recording host, a fixed clock."""

import json
from datetime import datetime
from pathlib import Path

import pytest

FIXED_TIME = datetime(2024, 3, 9, 14, 5, 30)

POST_RECORD = {
    "name": "post",
    "namespace": "App",
    "fields": [{"type": "string", "name": "title", "arguments": [], "options": []}],
    "fillable": ["title"],
    "softDelete": False,
    "relationships": [],
    "foreign_keys": [],
}

COMMENT_RECORD = {
    "name": "comment",
    "namespace": "App\\Models",
    "fields": [
        {"type": "text", "name": "body", "arguments": [], "options": []},
        {"type": "integer", "name": "post_id", "arguments": [], "options": [{"key": "unsigned", "value": None}]},
        {"type": "enum", "name": "status", "arguments": ["'draft'", "'published'"], "options": [{"key": "default", "value": "'draft'"}]},
    ],
    "fillable": ["body", " ", "status"],
    "softDelete": True,
    "relationships": [
        {"name": "post", "type": "belongsTo", "class": "Post", "arguments": ["post_id", " "]},
    ],
    "foreign_keys": [
        {"column": "post_id", "references": "id", "on": "posts", "onDelete": "cascade"},
    ],
}


class FakeHost:
    """Host collaborator that records autoload refreshes."""

    def __init__(self, namespace: str = "App") -> None:
        self.namespace = namespace
        self.refresh_count = 0

    def refresh_autoload(self) -> None:
        self.refresh_count += 1

    def app_namespace(self) -> str:
        return self.namespace


def write_schema(directory: Path, records, filename: str = "schema.json") -> Path:
    """Write *records* as JSON into *directory* and return the path."""
    path = directory / filename
    path.write_text(json.dumps(records))
    return path


def all_files(directory: Path) -> list[Path]:
    return sorted(p for p in directory.rglob("*") if p.is_file())


@pytest.fixture
def host() -> FakeHost:
    return FakeHost()


@pytest.fixture
def clock():
    return lambda: FIXED_TIME


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """An empty Laravel project root."""
    root = tmp_path / "project"
    root.mkdir()
    return root
