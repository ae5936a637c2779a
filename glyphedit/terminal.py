"""Terminal interface using Blessed for display and Curtsies for input."""

import logging
import select
import sys
from typing import Optional

import blessed

from .constants import EditorConstants

logger = logging.getLogger(__name__)


class TerminalInterface:
    """Handles terminal I/O using Blessed."""

    def __init__(self, terminal: Optional[blessed.Terminal] = None):
        """Initialize with a terminal instance (or create one)."""
        self.term = terminal or blessed.Terminal()
        self.is_fullscreen = False
        self._curtsies_input: Optional[object] = None
        self._last_status: Optional[str] = None

    def setup(self):
        """Enter fullscreen mode and prepare terminal."""
        print(self.term.enter_fullscreen, end='')
        print(self.term.hide_cursor, end='')
        print(self.term.home + self.term.clear, end='', flush=True)
        self.is_fullscreen = True
        if self._curtsies_input is None:
            from curtsies import Input
            # Enter raw mode immediately so reads work; Ctrl-S and Ctrl-Q
            # must reach the editor instead of the tty's flow control
            self._curtsies_input = Input(keynames='curtsies', disable_terminal_start_stop=True)
            self._curtsies_input.__enter__()

    def cleanup(self):
        """Exit fullscreen mode and restore terminal."""
        if self.is_fullscreen:
            print(self.term.exit_fullscreen, end='')
            print(self.term.normal_cursor, end='', flush=True)
            self.is_fullscreen = False
        if self._curtsies_input is not None:
            try:
                self._curtsies_input.__exit__(None, None, None)
            except (OSError, ValueError) as e:
                # Teardown continues; the shell restores the tty on exit anyway
                logger.warning(f"Could not restore terminal input mode: {e}")
            finally:
                self._curtsies_input = None

    def invalidate_frame(self) -> None:
        """Forget the drawn status line so the next update repaints it."""
        self._last_status = None

    def draw_row(self, y: int, text: str):
        """Draw ``text`` on screen row ``y`` and clear the rest of the row."""
        print(self.term.move(y, 0) + text + self.term.clear_eol, end='')

    def draw_status(self, status_override: Optional[str] = None):
        """Draw the status line on the bottom row when it changed."""
        width = self.term.width
        if status_override:
            status_text = status_override[:width].ljust(width)
        else:
            help_text = EditorConstants.HELP_TEXT
            status_text = (" " * max(0, width - len(help_text) - 1)) + help_text
        if status_text != self._last_status:
            print(self.term.move(self.term.height - 1, 0) + self.term.reverse
                  + status_text + self.term.normal, end='')
            self._last_status = status_text

    def move_cursor(self, y: int, x: int):
        """Place the caret and flush all queued output."""
        print(self.term.move(y, x) + self.term.normal_cursor, end='', flush=True)

    def get_key(self, timeout=None):
        """Get a single keypress from the user.

        Args:
            timeout: Timeout in seconds (None for blocking, 0 for non-blocking)

        Returns:
            The curtsies key token as a string, or None on timeout.
        """
        if self._curtsies_input is None:
            return None
        if timeout is not None:
            r, _, _ = select.select([sys.stdin], [], [], float(timeout))
            if not r:
                return None
        evt = next(self._curtsies_input)
        return str(evt)

    @property
    def width(self):
        """Terminal width in columns."""
        return self.term.width

    @property
    def height(self):
        """Terminal height in rows (excluding status line)."""
        return max(0, self.term.height - EditorConstants.STATUS_ROWS)
