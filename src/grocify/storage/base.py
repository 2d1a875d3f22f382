"""Abstract storage interface."""

from abc import ABC, abstractmethod
from pathlib import Path


class Storage(ABC):
    """Abstract byte storage used to load and save documents.

    Implementations raise StorageError for any underlying I/O failure.
    """

    @abstractmethod
    def read_bytes(self, path: Path) -> bytes:
        """Read the whole file at path."""
        pass

    @abstractmethod
    def write_bytes(self, path: Path, data: bytes) -> None:
        """Replace the file at path with data."""
        pass

    @abstractmethod
    def exists(self, path: Path) -> bool:
        """Check whether a file exists at path."""
        pass
