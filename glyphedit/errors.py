"""Exceptions raised by the document storage layer."""

from typing import Optional


class EditorError(Exception):
    """Base class for recoverable editor errors.

    ``message`` is short enough to be shown in the status line.
    """

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.path = path


class LoadError(EditorError):
    """The document could not be read."""


class DocumentNotFoundError(LoadError):
    """The document does not exist yet."""


class SaveError(EditorError):
    """The document could not be written."""
