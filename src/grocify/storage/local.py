"""Local filesystem storage."""

from pathlib import Path

from grocify.domain.errors import StorageError
from grocify.storage.base import Storage
from grocify.utils.logging_config import get_logger

logger = get_logger(__name__)


def _reason(error: Exception) -> str:
    # ValueError (e.g. an embedded NUL byte in the path) carries no strerror
    return getattr(error, "strerror", None) or str(error)


class LocalStorage(Storage):
    """Storage backed by the local filesystem."""

    def read_bytes(self, path: Path) -> bytes:
        try:
            return Path(path).read_bytes()
        except (OSError, ValueError) as e:
            raise StorageError(f"Could not read '{path}': {_reason(e)}") from e

    def write_bytes(self, path: Path, data: bytes) -> None:
        path = Path(path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except (OSError, ValueError) as e:
            raise StorageError(f"Could not write '{path}': {_reason(e)}") from e
        logger.debug("Wrote %d bytes to %s", len(data), path)

    def exists(self, path: Path) -> bool:
        try:
            return Path(path).is_file()
        except (OSError, ValueError):
            return False
