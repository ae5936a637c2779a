"""Reading and writing documents as plain UTF-8 text."""

import errno
import logging
import os
import tempfile

from .constants import EditorConstants
from .errors import DocumentNotFoundError, LoadError, SaveError

logger = logging.getLogger(__name__)


def load_text(filename: str) -> str:
    """Read the whole document.

    Raises:
        DocumentNotFoundError: if the file does not exist.
        LoadError: if it exists but cannot be read or decoded.
    """
    try:
        with open(filename, 'r', encoding=EditorConstants.ENCODING, newline='') as f:
            return f.read()
    except FileNotFoundError:
        raise DocumentNotFoundError(f"No such file: {filename}", filename)
    except PermissionError:
        logger.warning(f"Permission denied reading {filename}")
        raise LoadError(f"Error: Permission denied reading {filename}", filename)
    except UnicodeDecodeError as e:
        logger.warning(f"Could not decode {filename}: {e}")
        raise LoadError(f"Error: {filename} is not valid UTF-8", filename)
    except OSError as e:
        logger.warning(f"Could not read {filename}: {e}")
        raise LoadError(f"Error: Cannot read {filename}", filename)


def _remove_quietly(path: str) -> None:
    try:
        os.remove(path)
    except OSError:
        pass


def save_text(filename: str, content: str) -> None:
    """Write ``content`` to ``filename`` atomically.

    The text goes to a temporary file in the target directory, which is then
    renamed over the target, so a failed save never truncates the original.

    Raises:
        SaveError: with a status-line friendly message.
    """
    dir_name = os.path.dirname(filename) or '.'
    base_name = os.path.basename(filename)
    temp_filename = None
    try:
        with tempfile.NamedTemporaryFile(
            mode='w',
            encoding=EditorConstants.ENCODING,
            newline='',
            dir=dir_name,
            prefix=EditorConstants.ATOMIC_SAVE_PREFIX + base_name,
            suffix=EditorConstants.ATOMIC_SAVE_SUFFIX,
            delete=False,
        ) as temp_file:
            temp_filename = temp_file.name
            temp_file.write(content)
            temp_file.flush()
            os.fsync(temp_file.fileno())

        os.replace(temp_filename, filename)
    except PermissionError:
        logger.warning(f"Permission denied saving {filename}")
        if temp_filename:
            _remove_quietly(temp_filename)
        raise SaveError(f"Error: Permission denied saving {filename}", filename)
    except OSError as e:
        logger.warning(f"Could not save {filename}: {e}")
        if temp_filename:
            _remove_quietly(temp_filename)
        if e.errno == errno.ENOSPC:
            raise SaveError("Error: No space left on device", filename)
        raise SaveError(f"Error: Cannot save to {filename}", filename)
