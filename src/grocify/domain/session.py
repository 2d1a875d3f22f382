"""Session domain service: the set of open documents and the active one."""

from pathlib import Path
from typing import Optional

from grocify.domain.codec import ItemCodec, decode_manifest, encode_manifest
from grocify.domain.document import DEFAULT_NAME, Document
from grocify.domain.errors import (
    DomainError,
    MissingDestinationError,
    StorageError,
    ValidationError,
    document_index_out_of_range,
    no_active_document,
    no_destination,
)
from grocify.storage.base import Storage
from grocify.utils.logging_config import get_logger

logger = get_logger(__name__)


def name_for_path(path: Path) -> str:
    """Derive a document name from a file path by dropping the final extension.

    Example: "lists/groceries.json" -> "groceries"
    """
    stem = Path(path).stem
    return stem if stem.strip() else DEFAULT_NAME


def _absolute(path: Path) -> Path:
    try:
        return Path(path).expanduser().resolve()
    except (OSError, ValueError, RuntimeError) as e:
        raise StorageError(f"Invalid path {path!r}: {e}") from e


class SessionManager:
    """Service owning the open documents of one editor session.

    Exactly one document is active whenever at least one is open. Only the
    paths of open documents are persisted between runs, never their contents.
    """

    def __init__(self, storage: Storage, codec: Optional[ItemCodec] = None):
        """Initialize session manager.

        Args:
            storage: Storage used for documents and the manifest
            codec: Document codec (defaults to ItemCodec)
        """
        self.storage = storage
        self.codec = codec or ItemCodec()
        self._documents: list[Document] = []
        self._active_index: Optional[int] = None

    @property
    def documents(self) -> tuple[Document, ...]:
        return tuple(self._documents)

    @property
    def active_index(self) -> Optional[int]:
        return self._active_index

    @property
    def active_document(self) -> Optional[Document]:
        if self._active_index is None:
            return None
        return self._documents[self._active_index]

    def _check_index(self, index: int) -> None:
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < len(self._documents):
            raise ValidationError(document_index_out_of_range(index, len(self._documents)))

    def _require_active(self) -> Document:
        document = self.active_document
        if document is None:
            raise ValidationError(no_active_document())
        return document

    def _append(self, document: Document) -> Document:
        self._documents.append(document)
        self._active_index = len(self._documents) - 1
        return document

    def find_by_file(self, path: Path) -> Optional[int]:
        """Return the index of the open document backed by path, if any."""
        target = _absolute(path)
        for index, document in enumerate(self._documents):
            if document.file is not None and _absolute(document.file) == target:
                return index
        return None

    def set_active(self, index: int) -> Document:
        """Make the document at index the active one.

        Raises:
            ValidationError: If index is out of range
        """
        self._check_index(index)
        self._active_index = index
        return self._documents[index]

    def new_document(self) -> Document:
        """Create an empty untitled document and make it active.

        Several documents may share the name "Untitled".
        """
        document = self._append(Document(DEFAULT_NAME))
        logger.debug("Created new document at index %d", self._active_index)
        return document

    def open_document(self, path: Path) -> Document:
        """Open the document stored at path and make it active.

        A file that is already open is activated rather than loaded twice.

        Args:
            path: Path to a document JSON file

        Returns:
            The opened (or already open) document

        Raises:
            StorageError: If the file cannot be read
            DecodeError: If the file is not valid JSON
            ShapeError: If the JSON does not describe a list of items
        """
        path = _absolute(path)
        existing = self.find_by_file(path)
        if existing is not None:
            logger.debug("%s is already open at index %d", path, existing)
            return self.set_active(existing)

        document = Document(name_for_path(path))
        document.load(path, self.storage, self.codec)
        return self._append(document)

    def close_document(self, index: int) -> Document:
        """Close the document at index.

        Resolving unsaved changes is the caller's responsibility. If the active
        document is closed, the neighbour that takes its place becomes active.

        Returns:
            The closed document

        Raises:
            ValidationError: If index is out of range
        """
        self._check_index(index)
        document = self._documents.pop(index)

        if not self._documents:
            self._active_index = None
        elif index < self._active_index:
            self._active_index -= 1
        elif index == self._active_index:
            self._active_index = min(index, len(self._documents) - 1)

        logger.info("Closed '%s'", document.name)
        return document

    def save_active_document(self) -> Path:
        """Save the active document to its existing file.

        Returns:
            Path the document was written to

        Raises:
            ValidationError: If no document is open
            MissingDestinationError: If the document has never been saved
            StorageError: If the write fails
        """
        document = self._require_active()
        if document.file is None:
            raise MissingDestinationError(no_destination(document.name))
        document.save(document.file, self.storage, self.codec)
        return document.file

    def save_active_document_as(self, path: Path) -> Path:
        """Save the active document to path and name it after the file.

        Raises:
            ValidationError: If no document is open
            StorageError: If the write fails
        """
        document = self._require_active()
        path = _absolute(path)
        document.save(path, self.storage, self.codec)
        document.set_name(name_for_path(path))
        return path

    def unsaved_documents(self) -> list[Document]:
        """List documents with changes that have not been saved."""
        return [document for document in self._documents if document.dirty]

    def restore_session(self, manifest_path: Path) -> int:
        """Reopen the documents listed in a session manifest.

        Problems with the manifest or with individual documents are logged and
        skipped; restoring never fails. If nothing could be opened, a new
        untitled document is created.

        Returns:
            Number of documents restored from disk
        """
        manifest_path = Path(manifest_path)
        paths: list[Path] = []
        if not self.storage.exists(manifest_path):
            logger.debug("No session manifest at %s", manifest_path)
        else:
            try:
                paths = decode_manifest(self.storage.read_bytes(manifest_path))
            except DomainError as e:
                logger.warning("Ignoring session manifest %s: %s", manifest_path, e)

        first_restored: Optional[int] = None
        restored = 0
        for path in paths:
            before = len(self._documents)
            try:
                self.open_document(path)
            except DomainError as e:
                logger.warning("Skipping %s from previous session: %s", path, e)
                continue
            if len(self._documents) == before:
                continue
            restored += 1
            if first_restored is None:
                first_restored = self._active_index

        if first_restored is not None:
            self._active_index = first_restored
        if not self._documents:
            self.new_document()

        logger.info("Restored %d of %d document(s) from %s", restored, len(paths), manifest_path)
        return restored

    def persist_session(self, manifest_path: Path) -> list[Path]:
        """Write the manifest of open documents that have a file.

        Returns:
            The paths written, in tab order

        Raises:
            StorageError: If the manifest cannot be written
        """
        paths = [document.file for document in self._documents if document.file is not None]
        self.storage.write_bytes(Path(manifest_path), encode_manifest(paths))
        logger.debug("Persisted %d path(s) to %s", len(paths), manifest_path)
        return paths
