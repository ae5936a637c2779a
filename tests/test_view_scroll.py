"""Test cursor mapping and the scrolling hysteresis of the view."""

import random

from glyphedit.buffer import Buffer
from glyphedit.movement import Direction
from glyphedit.position import Location, Position, Size
from glyphedit.view import View


def make_view(text, height=5, width=20):
    return View(Buffer.from_text(text), Size(height, width))


def numbered_lines(count):
    return "\n".join(f"Line {i}" for i in range(count))


def test_position_uses_rendered_width():
    view = make_view("日本語")
    assert view.text_location_to_position(Location(0, 2)) == Position(0, 4)


def test_position_past_last_line_has_column_zero():
    view = make_view("abc")
    assert view.text_location_to_position(Location(1, 3)) == Position(1, 0)


def test_no_scroll_while_inside_view():
    view = make_view(numbered_lines(10), height=3)
    view.move_text_location(Direction.DOWN)
    view.move_text_location(Direction.DOWN)
    assert view.state.scroll_offset == Position(0, 0)
    assert view.cursor_position() == Position(2, 0)


def test_scroll_down_keeps_cursor_on_last_row():
    view = make_view(numbered_lines(10), height=3)
    for _ in range(3):
        view.move_text_location(Direction.DOWN)
    assert view.location.line_index == 3
    assert view.state.scroll_offset.row == 1
    assert view.cursor_position() == Position(2, 0)


def test_scroll_up_only_when_leaving_view():
    view = make_view(numbered_lines(10), height=3)
    for _ in range(5):
        view.move_text_location(Direction.DOWN)
    assert view.state.scroll_offset.row == 3

    view.move_text_location(Direction.UP)
    view.move_text_location(Direction.UP)
    assert view.state.scroll_offset.row == 3
    assert view.cursor_position() == Position(0, 0)

    view.move_text_location(Direction.UP)
    assert view.state.scroll_offset.row == 2
    assert view.cursor_position() == Position(0, 0)


def test_horizontal_scroll():
    view = make_view("abcdefghij", height=2, width=4)
    view.move_text_location(Direction.END)
    assert view.state.scroll_offset.col == 7
    assert view.cursor_position() == Position(0, 3)

    view.move_text_location(Direction.HOME)
    assert view.state.scroll_offset.col == 0
    assert view.cursor_position() == Position(0, 0)


def test_horizontal_scroll_with_wide_characters():
    view = make_view("日本語テキスト", height=2, width=5)
    for _ in range(3):
        view.move_text_location(Direction.RIGHT)
    # Column 6 is past the last visible column 4
    assert view.state.scroll_offset.col == 2
    assert view.cursor_position() == Position(0, 4)


def test_scrolling_requests_redraw():
    view = make_view(numbered_lines(10), height=3)
    view.state.needs_redraw = False
    view.move_text_location(Direction.DOWN)
    assert not view.needs_redraw
    for _ in range(2):
        view.move_text_location(Direction.DOWN)
    assert view.needs_redraw


def test_page_down_then_page_up():
    view = make_view(numbered_lines(30), height=10)
    view.move_text_location(Direction.PAGE_DOWN)
    assert view.location == Location(10, 0)
    assert view.state.scroll_offset.row == 1
    view.move_text_location(Direction.PAGE_UP)
    assert view.location == Location(0, 0)
    assert view.state.scroll_offset.row == 0


def test_resize_scrolls_cursor_into_view():
    view = make_view(numbered_lines(20), height=10)
    for _ in range(9):
        view.move_text_location(Direction.DOWN)
    view.state.needs_redraw = False

    view.resize(Size(5, 20))
    assert view.state.scroll_offset.row == 5
    assert view.cursor_position() == Position(4, 0)
    assert view.needs_redraw


def test_set_location_clamps_to_document():
    view = make_view("ab\ncd", height=5)
    view.set_location(Location(50, 50))
    assert view.location == Location(2, 0)
    view.set_location(Location(0, 50))
    assert view.location == Location(0, 2)


def test_cursor_stays_inside_viewport():
    """Whatever the movement sequence, the caret is drawn inside the view."""
    text = "\n".join([
        "short",
        "日本語のテキストがここにあります",
        "",
        "a\tb\tc with some more words in it",
        "x" * 60,
    ] * 6)
    view = make_view(text, height=4, width=7)
    directions = list(Direction)
    rng = random.Random(1234)
    for _ in range(500):
        view.move_text_location(rng.choice(directions))
        position = view.cursor_position()
        assert 0 <= position.row < 4
        assert 0 <= position.col < 7


def test_zero_size_view_does_not_fail():
    view = make_view("abc\ndef", height=0, width=0)
    view.move_text_location(Direction.DOWN)
    view.move_text_location(Direction.END)
    assert view.cursor_position() == Position(0, 0)
