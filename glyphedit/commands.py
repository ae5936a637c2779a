"""Command pattern implementation for editor actions."""

import logging
from abc import ABC, abstractmethod
from typing import Dict, Tuple, Optional, TYPE_CHECKING

from .keyboard import KeyType
from .movement import Direction
from .position import Size

if TYPE_CHECKING:
    from .editor import Editor
    from .keyboard import KeyEvent

logger = logging.getLogger(__name__)


class EditorCommand(ABC):
    """Base class for editor commands."""

    @abstractmethod
    def execute(self, editor: 'Editor') -> bool:
        """Execute the command.

        Args:
            editor: Editor instance

        Returns:
            True if the command modified the document
        """


class MoveCommand(EditorCommand):
    """Moves the cursor one step in a direction."""

    def __init__(self, direction: Direction):
        self.direction = direction

    def execute(self, editor: 'Editor') -> bool:
        editor.view.move_text_location(self.direction)
        return False

    def __repr__(self):
        return f"MoveCommand({self.direction})"


class ResizeCommand(EditorCommand):
    def __init__(self, size: Size):
        self.size = size

    def execute(self, editor: 'Editor') -> bool:
        editor.view.resize(self.size)
        return False


class EditCommand(EditorCommand):
    """Base class for editing commands."""

    def execute(self, editor: 'Editor') -> bool:
        """Perform the edit; report whether the document actually changed."""
        buffer = editor.view.buffer
        before = (buffer.height, buffer.to_text())
        self._edit(editor)
        return (buffer.height, buffer.to_text()) != before

    @abstractmethod
    def _edit(self, editor: 'Editor'):
        """Perform the edit."""


class InsertCharCommand(EditCommand):
    def __init__(self, character: str):
        self.character = character

    def _edit(self, editor):
        editor.view.insert_character(self.character)


class BackspaceCommand(EditCommand):
    def _edit(self, editor):
        editor.view.backspace()


class DeleteCommand(EditCommand):
    def _edit(self, editor):
        editor.view.delete()


class TabCommand(EditCommand):
    def _edit(self, editor):
        editor.view.insert_tab()


class EnterCommand(EditCommand):
    def _edit(self, editor):
        editor.view.insert_newline()


class SystemCommand(EditorCommand):
    """Base class for system commands like save and quit."""

    def execute(self, editor: 'Editor') -> bool:
        """System commands don't modify document content directly."""
        self._execute_system(editor)
        return False

    @abstractmethod
    def _execute_system(self, editor: 'Editor'):
        """Perform the system action."""


class QuitCommand(SystemCommand):
    def _execute_system(self, editor):
        if editor.modified:
            editor.prompt_mode = 'quit_confirm'
        else:
            editor.running = False


class SaveCommand(SystemCommand):
    def _execute_system(self, editor):
        editor._handle_save()


class CommandRegistry:
    """Registry for mapping key combinations to commands."""

    def __init__(self):
        self._commands: Dict[Tuple[KeyType, str], EditorCommand] = {}
        self._setup_default_commands()

    def _setup_default_commands(self):
        """Set up the default command mappings."""
        # Movement commands
        self.register((KeyType.SPECIAL, 'up'), MoveCommand(Direction.UP))
        self.register((KeyType.SPECIAL, 'down'), MoveCommand(Direction.DOWN))
        self.register((KeyType.SPECIAL, 'left'), MoveCommand(Direction.LEFT))
        self.register((KeyType.SPECIAL, 'right'), MoveCommand(Direction.RIGHT))
        self.register((KeyType.SPECIAL, 'page_up'), MoveCommand(Direction.PAGE_UP))
        self.register((KeyType.SPECIAL, 'page_down'), MoveCommand(Direction.PAGE_DOWN))
        self.register((KeyType.SPECIAL, 'home'), MoveCommand(Direction.HOME))
        self.register((KeyType.SPECIAL, 'end'), MoveCommand(Direction.END))
        self.register((KeyType.CTRL, 'a'), MoveCommand(Direction.HOME))
        self.register((KeyType.CTRL, 'e'), MoveCommand(Direction.END))

        # Editing commands
        self.register((KeyType.SPECIAL, 'backspace'), BackspaceCommand())
        self.register((KeyType.SPECIAL, 'delete'), DeleteCommand())
        self.register((KeyType.CTRL, 'd'), DeleteCommand())
        self.register((KeyType.SPECIAL, 'tab'), TabCommand())
        self.register((KeyType.SPECIAL, 'enter'), EnterCommand())

        # System commands
        self.register((KeyType.CTRL, 'q'), QuitCommand())
        self.register((KeyType.CTRL, 's'), SaveCommand())

    def register(self, key: Tuple[KeyType, str], command: EditorCommand):
        """Register a command for a key combination."""
        self._commands[key] = command

    def get_command(self, key_type: KeyType, value: str) -> Optional[EditorCommand]:
        """Get the command for a key combination."""
        return self._commands.get((key_type, value))

    def command_for(self, key_event: 'KeyEvent') -> Optional[EditorCommand]:
        """Translate a key event into a command, or None if it means nothing."""
        command = self.get_command(key_event.key_type, key_event.value)
        if command:
            return command
        if key_event.key_type == KeyType.REGULAR and key_event.value and key_event.value.isprintable():
            return InsertCharCommand(key_event.value)
        return None

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Execute the command for the given key event.

        Returns:
            True if the document was modified
        """
        command = self.command_for(key_event)
        if command is None:
            logger.debug(f"Ignoring unmapped key {key_event.raw!r}")
            return False
        return command.execute(editor)
