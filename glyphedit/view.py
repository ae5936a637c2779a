"""Viewport over the document: cursor mapping, scrolling and rendering."""

import logging
from dataclasses import dataclass, field
from typing import Callable, Optional

from .buffer import Buffer
from .constants import EditorConstants
from .movement import Direction, move, snap_to_valid_grapheme, snap_to_valid_line
from .position import Location, Position, Size

logger = logging.getLogger(__name__)


@dataclass
class ViewState:
    """Everything the view knows besides the document itself."""
    location: Location = field(default_factory=Location)
    scroll_offset: Position = field(default_factory=Position)
    size: Size = field(default_factory=Size)
    needs_redraw: bool = True


class View:
    """Maps buffer locations to screen cells and keeps the cursor visible.

    Scrolling follows a hysteresis rule: the offset only moves when the
    cursor would leave the visible rectangle, and then only far enough to
    bring it back to the nearest edge.
    """

    def __init__(self, buffer: Optional[Buffer] = None, size: Optional[Size] = None):
        self.buffer = buffer if buffer is not None else Buffer()
        self.state = ViewState(size=size or Size())

    @property
    def location(self) -> Location:
        return self.state.location

    @property
    def size(self) -> Size:
        return self.state.size

    @property
    def needs_redraw(self) -> bool:
        return self.state.needs_redraw

    def load(self, filename: str) -> None:
        """Replace the buffer with the contents of ``filename``.

        Raises:
            LoadError: the current buffer is kept as it was.
        """
        buffer = Buffer.load(filename)
        self.buffer = buffer
        self.state = ViewState(size=self.state.size)
        logger.debug(f"Loaded {filename}: {buffer.height} lines")

    def set_location(self, location: Location) -> None:
        """Move the cursor to ``location``, clamped to the document."""
        location = Location(max(0, location.line_index), max(0, location.grapheme_index))
        location = snap_to_valid_line(self.buffer, location)
        self.state.location = snap_to_valid_grapheme(self.buffer, location)
        self.scroll_location_into_view()

    # Mapping

    def text_location_to_position(self, location: Optional[Location] = None) -> Position:
        if location is None:
            location = self.state.location
        line = self.buffer.get_line(location.line_index)
        col = line.width_until(location.grapheme_index) if line is not None else 0
        return Position(row=location.line_index, col=col)

    def cursor_position(self) -> Position:
        """Caret cell relative to the top-left corner of the viewport."""
        return self.text_location_to_position().saturating_sub(self.state.scroll_offset)

    # Scrolling

    def scroll_vertically(self, to: int) -> None:
        height = self.state.size.height
        offset = self.state.scroll_offset
        if to < offset.row:
            self.state.scroll_offset = Position(to, offset.col)
            self.state.needs_redraw = True
        elif to >= offset.row + height:
            self.state.scroll_offset = Position(max(0, to - height + 1), offset.col)
            self.state.needs_redraw = True

    def scroll_horizontally(self, to: int) -> None:
        width = self.state.size.width
        offset = self.state.scroll_offset
        if to < offset.col:
            self.state.scroll_offset = Position(offset.row, to)
            self.state.needs_redraw = True
        elif to >= offset.col + width:
            self.state.scroll_offset = Position(offset.row, max(0, to - width + 1))
            self.state.needs_redraw = True

    def scroll_location_into_view(self) -> None:
        position = self.text_location_to_position()
        self.scroll_vertically(position.row)
        self.scroll_horizontally(position.col)

    def resize(self, size: Size) -> None:
        self.state.size = size
        self.scroll_location_into_view()
        self.state.needs_redraw = True

    # Rendering

    def render(self, draw_row: Callable[[int, str], None]) -> bool:
        """Hand every visible row to ``draw_row(row, text)``.

        Does nothing unless a redraw is pending. Returns True if rows were
        drawn.
        """
        if not self.state.needs_redraw:
            return False
        height, width = self.state.size.height, self.state.size.width
        top, left = self.state.scroll_offset.row, self.state.scroll_offset.col

        for current_row in range(height):
            line = self.buffer.get_line(top + current_row)
            if line is not None:
                draw_row(current_row, line.get_visible_graphemes(left, left + width))
            else:
                draw_row(current_row, EditorConstants.EMPTY_ROW_MARKER)

        self.state.needs_redraw = False
        return True

    # Movement

    def move_text_location(self, direction: Direction) -> None:
        self.state.location = move(self.buffer, self.state.location, direction, self.state.size.height)
        self.scroll_location_into_view()

    # Editing

    def insert_character(self, character: str) -> None:
        line_index = self.state.location.line_index
        old_len = self.buffer.line_length(line_index)
        self.buffer.insert_char(character, self.state.location)
        new_len = self.buffer.line_length(line_index)

        # A combining mark can merge into the previous cluster; only step
        # over the input when it produced a new grapheme.
        if new_len > old_len:
            self.move_text_location(Direction.RIGHT)
        self.state.needs_redraw = True

    def backspace(self) -> None:
        location = self.state.location
        if location.line_index == 0 and location.grapheme_index == 0:
            return
        self.move_text_location(Direction.LEFT)
        self.delete()

    def delete(self) -> None:
        self.buffer.delete_char(self.state.location)
        self.state.needs_redraw = True

    def insert_tab(self) -> None:
        for _ in range(EditorConstants.TAB_SIZE):
            self.insert_character(' ')

    def insert_newline(self) -> None:
        self.buffer.insert_newline(self.state.location)
        self.move_text_location(Direction.RIGHT)
        self.state.needs_redraw = True
