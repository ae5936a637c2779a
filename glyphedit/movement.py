"""Cursor movement as a pure function of buffer, location and direction."""

from enum import Enum

from .buffer import Buffer
from .position import Location


class Direction(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"
    HOME = "home"
    END = "end"


def snap_to_valid_grapheme(buffer: Buffer, location: Location) -> Location:
    """Pull the grapheme index back to the end of its line if it is past it."""
    grapheme_index = min(location.grapheme_index, buffer.line_length(location.line_index))
    return Location(location.line_index, grapheme_index)


def snap_to_valid_line(buffer: Buffer, location: Location) -> Location:
    """Keep the line index at most one row past the last line."""
    return Location(min(location.line_index, buffer.height), location.grapheme_index)


def move_up(buffer: Buffer, location: Location, step: int = 1) -> Location:
    moved = Location(max(0, location.line_index - step), location.grapheme_index)
    return snap_to_valid_grapheme(buffer, moved)


def move_down(buffer: Buffer, location: Location, step: int = 1) -> Location:
    moved = Location(location.line_index + step, location.grapheme_index)
    return snap_to_valid_line(buffer, snap_to_valid_grapheme(buffer, moved))


def move_left(buffer: Buffer, location: Location) -> Location:
    if location.grapheme_index > 0:
        return Location(location.line_index, location.grapheme_index - 1)
    if location.line_index > 0:
        previous = location.line_index - 1
        return Location(previous, buffer.line_length(previous))
    return location


def move_right(buffer: Buffer, location: Location) -> Location:
    if location.grapheme_index < buffer.line_length(location.line_index):
        return Location(location.line_index, location.grapheme_index + 1)
    # The row just past the last line is reachable, as with move_down
    if location.line_index < buffer.height:
        return Location(location.line_index + 1, 0)
    return location


def move(buffer: Buffer, location: Location, direction: Direction, page_height: int) -> Location:
    """Return the location reached by moving once in ``direction``.

    ``page_height`` is the displacement used by PageUp and PageDown.
    """
    if direction is Direction.UP:
        return move_up(buffer, location)
    if direction is Direction.DOWN:
        return move_down(buffer, location)
    if direction is Direction.PAGE_UP:
        return move_up(buffer, location, page_height)
    if direction is Direction.PAGE_DOWN:
        return move_down(buffer, location, page_height)
    if direction is Direction.LEFT:
        return move_left(buffer, location)
    if direction is Direction.RIGHT:
        return move_right(buffer, location)
    if direction is Direction.HOME:
        return Location(location.line_index, 0)
    if direction is Direction.END:
        return Location(location.line_index, buffer.line_length(location.line_index))
    return location
