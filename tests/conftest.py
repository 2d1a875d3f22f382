"""Shared pytest fixtures for grocify tests."""

import shutil
from decimal import Decimal
from pathlib import Path

import pytest

from grocify.domain.codec import ItemCodec
from grocify.domain.document import Document
from grocify.domain.entities import Item
from grocify.domain.errors import StorageError
from grocify.domain.session import SessionManager
from grocify.storage.factories import create_local_storage
from grocify.storage.local import LocalStorage


class FailingWriteStorage(LocalStorage):
    """Local storage whose writes always fail."""

    def write_bytes(self, path, data):
        raise StorageError(f"Could not write '{path}': disk full")


@pytest.fixture
def storage():
    """Create a local filesystem storage."""
    return create_local_storage()


@pytest.fixture
def failing_storage():
    """Create a storage that refuses every write."""
    return FailingWriteStorage()


@pytest.fixture
def codec():
    """Create an ItemCodec."""
    return ItemCodec()


@pytest.fixture
def session(storage):
    """Create an empty SessionManager on local storage."""
    return SessionManager(storage)


@pytest.fixture
def sample_items():
    """Return a few items covering present and absent fields."""
    return [
        Item("Milk", 2, Decimal("1.50")),
        Item("Rye bread", 1, Decimal("2.35")),
        Item("Bananas"),
    ]


@pytest.fixture
def sample_document(sample_items):
    """Create a clean, unsaved document with sample items."""
    return Document("groceries", sample_items)


@pytest.fixture
def fixtures_dir():
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def list_file(tmp_path, fixtures_dir):
    """Copy the sample grocery list into a temporary directory."""
    path = tmp_path / "groceries.json"
    shutil.copy(fixtures_dir / "groceries.json", path)
    return path


@pytest.fixture
def write_list(tmp_path, codec):
    """Return a helper writing items to a list file in tmp_path."""

    def _write(name: str, items: list[Item]) -> Path:
        path = tmp_path / f"{name}.json"
        path.write_bytes(codec.encode(items))
        return path

    return _write


@pytest.fixture
def session_path(tmp_path):
    """Return a session manifest location inside tmp_path."""
    return tmp_path / "appdata" / "session.json"


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
