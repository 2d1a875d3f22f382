"""Storage factory functions and default locations."""

import os
from pathlib import Path
from typing import Optional

from grocify.storage.local import LocalStorage

SESSION_PATH_ENV = "GROCIFY_SESSION_PATH"


def create_local_storage() -> LocalStorage:
    """Create a storage instance for the local filesystem."""
    return LocalStorage()


def default_session_path(session_path: Optional[str] = None) -> Path:
    """Resolve where the session manifest lives.

    Args:
        session_path: Explicit manifest path. If None, checks GROCIFY_SESSION_PATH
            environment variable, then defaults to ~/.grocify/session.json

    Returns:
        Path to the session manifest (the file itself may not exist yet)
    """
    if session_path is None:
        session_path = os.environ.get(SESSION_PATH_ENV)

    if session_path is None:
        # Default to ~/.grocify/session.json; the directory is created on first write
        return Path.home() / ".grocify" / "session.json"

    return Path(session_path).expanduser()
