"""
Shared test fixtures for the cmdtree test suite.
"""

import json
from pathlib import Path

import pytest

from cmdtree.core.provider import StaticProvider
from cmdtree.document import CommandDocument
from cmdtree.resolution.scope import ScopeContext


@pytest.fixture
def home(tmp_path: Path) -> Path:
    """Synthetic home directory, so tests never touch the real one."""
    path = tmp_path / "home"
    path.mkdir()
    return path


@pytest.fixture
def provider(tmp_path: Path, home: Path) -> StaticProvider:
    return StaticProvider(current_dir=tmp_path, home=home)


@pytest.fixture
def context(provider: StaticProvider) -> ScopeContext:
    return ScopeContext.from_provider(provider)


@pytest.fixture
def write_document(tmp_path: Path):
    """Write a command document as JSON and return its path.

    Usage:
        def test_something(write_document):
            path = write_document({"commands": {"build": "make"}})
    """

    def write(data: dict, name: str = "cmdtree.json", directory: Path | None = None) -> Path:
        directory = directory or tmp_path
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return write


@pytest.fixture
def load_document(write_document, home: Path):
    """Write a command document and load it."""

    def load(data: dict, **kwargs) -> CommandDocument:
        return CommandDocument.from_file(write_document(data, **kwargs), home)

    return load
