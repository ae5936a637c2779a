"""Main editor controller: run loop, file handling and prompts."""

import logging
import os
import select
import signal
import sys
import termios
from typing import Optional

from .commands import CommandRegistry, ResizeCommand
from .constants import EditorConstants
from .errors import DocumentNotFoundError, LoadError, SaveError
from .keyboard import KeyboardHandler, KeyEvent, KeyType
from .position import Size
from .settings_persistence import SettingsPersistence, get_persistence
from .terminal import TerminalInterface
from .view import View

logger = logging.getLogger(__name__)


class Editor:
    """Terminal text editor application controller."""

    def __init__(self, terminal: Optional[TerminalInterface] = None,
                 persistence: Optional[SettingsPersistence] = None):
        """Initialize the editor components."""
        self.terminal = terminal or TerminalInterface()
        self.keyboard = KeyboardHandler(self.terminal)
        self.view = View(size=Size(self.terminal.height, self.terminal.width))
        self.command_registry = CommandRegistry()
        self.persistence = persistence or get_persistence()
        self.running = False
        # Create pipe for resize signaling
        self._resize_pipe_r, self._resize_pipe_w = os.pipe()
        # File handling
        self.filename: Optional[str] = None
        self.modified = False
        self.status_message: Optional[str] = None
        self.prompt_mode: Optional[str] = None  # None or 'quit_confirm'

    def _handle_resize(self, signum, frame):
        """Handle terminal resize signal."""
        del signum, frame  # Unused
        # Write to pipe to wake up select()
        os.write(self._resize_pipe_w, EditorConstants.RESIZE_PIPE_MARKER)

    def run(self):
        """Run the main editor loop."""
        self.terminal.setup()
        self.running = True
        original_winch_handler = signal.signal(signal.SIGWINCH, self._handle_resize)

        try:
            with self.terminal.term.cbreak():
                # Disable flow control AFTER entering cbreak mode
                old_settings = self._disable_flow_control()
                try:
                    self._resize_view()
                    while self.running:
                        self._draw()

                        # Wait for input on stdin or resize pipe
                        ready, _, _ = select.select([0, self._resize_pipe_r], [], [])

                        if self._resize_pipe_r in ready:
                            os.read(self._resize_pipe_r, 1024)
                            self._resize_view()
                        elif 0 in ready:
                            # Non-blocking since select says it's ready
                            key_event = self.keyboard.get_key_event(timeout=0)
                            if key_event:
                                self._handle_key_event(key_event)
                finally:
                    if old_settings is not None:
                        self._restore_tty(old_settings)
        finally:
            signal.signal(signal.SIGWINCH, original_winch_handler)
            os.close(self._resize_pipe_r)
            os.close(self._resize_pipe_w)
            self.terminal.cleanup()

    def _disable_flow_control(self) -> Optional[list]:
        """Clear IXON/IXOFF so Ctrl-S and Ctrl-Q arrive as keys.

        Returns:
            The previous tty attributes, or None if stdin is not a tty.
        """
        try:
            old_settings = termios.tcgetattr(sys.stdin)
            new_settings = list(old_settings)
            new_settings[0] &= ~(termios.IXON | termios.IXOFF)
            termios.tcsetattr(sys.stdin, termios.TCSANOW, new_settings)
        except (termios.error, OSError, ValueError) as e:
            logger.debug(f"Leaving flow control alone: {e}")
            return None
        return old_settings

    def _restore_tty(self, old_settings: list):
        try:
            termios.tcsetattr(sys.stdin, termios.TCSANOW, old_settings)
        except (termios.error, OSError, ValueError) as e:
            logger.warning(f"Could not restore terminal settings: {e}")

    def _resize_view(self):
        ResizeCommand(Size(self.terminal.height, self.terminal.width)).execute(self)
        self.terminal.invalidate_frame()

    def _status_text(self) -> Optional[str]:
        if self.prompt_mode == 'quit_confirm':
            return EditorConstants.QUIT_CONFIRM_PROMPT
        if self.status_message:
            return f" {self.status_message}"
        return None

    def _draw(self):
        """Draw whatever changed since the last frame and place the caret."""
        self.view.render(self.terminal.draw_row)
        status = self._status_text()
        self.terminal.draw_status(status)
        if self.prompt_mode:
            self.terminal.move_cursor(self.terminal.term.height - 1, len(status))
        else:
            cursor = self.view.cursor_position()
            self.terminal.move_cursor(cursor.row, cursor.col)

    def _handle_key_event(self, key_event: KeyEvent):
        """Handle a keyboard event."""
        # Clear status message on any keypress (except in prompt mode)
        if self.status_message and not self.prompt_mode:
            self.status_message = None

        if self.prompt_mode == 'quit_confirm':
            self._handle_quit_confirm(key_event)
            return

        if key_event.key_type == KeyType.SPECIAL and key_event.value == 'escape':
            return

        if self.command_registry.execute(self, key_event):
            self.modified = True

    def _handle_quit_confirm(self, key_event: KeyEvent):
        """Handle keypress during quit confirmation."""
        self.prompt_mode = None
        if key_event.key_type != KeyType.REGULAR:
            return
        char = key_event.value.lower()
        if char == 'y':
            if self.filename is None:
                self.status_message = EditorConstants.NO_FILENAME_MESSAGE
            elif self.save_file(self.filename):
                self.running = False
        elif char == 'n':
            self.running = False

    def _handle_save(self):
        """Handle Ctrl-S save command."""
        if self.filename is None:
            self.status_message = EditorConstants.NO_FILENAME_MESSAGE
        elif self.save_file(self.filename):
            self.status_message = EditorConstants.SAVED_MESSAGE.format(self.filename)

    def load_file(self, filename: str) -> bool:
        """Load a file into the editor.

        A missing file starts a new document that will be saved under
        ``filename``. Any other failure keeps the current document and
        leaves the editor without a file name.

        Returns:
            True if the file was read.
        """
        try:
            self.view.load(filename)
        except DocumentNotFoundError:
            self.filename = filename
            self.modified = False
            self.status_message = EditorConstants.NEW_FILE_MESSAGE.format(filename)
            return False
        except LoadError as e:
            logger.warning(f"Keeping current document: {e.message}")
            self.status_message = e.message
            return False

        self.filename = filename
        self.modified = False
        location = self.persistence.load_location(filename)
        if location is not None:
            self.view.set_location(location)
        return True

    def save_file(self, filename: str) -> bool:
        """Save the current document to a file atomically.

        Returns:
            True if save succeeded, False otherwise.
        """
        try:
            self.view.buffer.save(filename)
        except SaveError as e:
            self.status_message = e.message
            return False

        self.filename = filename
        self.modified = False
        self.persistence.save_location(filename, self.view.location)
        return True
