"""Test loading and saving through the editor, including the quit prompt."""

import pytest

from glyphedit.buffer import Buffer
from glyphedit.constants import EditorConstants
from glyphedit.editor import Editor
from glyphedit.keyboard import KeyEvent, KeyType
from glyphedit.position import Location
from glyphedit.settings_persistence import SettingsPersistence


@pytest.fixture
def editor(tmp_path):
    return Editor(persistence=SettingsPersistence(tmp_path / "config"))


def regular(char):
    return KeyEvent(key_type=KeyType.REGULAR, value=char, raw=char)


def ctrl(char):
    return KeyEvent(key_type=KeyType.CTRL, value=char, raw=chr(ord(char) - 96))


def test_save_file_creates_file(editor, tmp_path):
    path = tmp_path / "doc.txt"
    editor.view.buffer = Buffer.from_text("First line\nSecond line\nThird line")
    editor.modified = True

    assert editor.save_file(str(path)) is True
    assert path.read_text(encoding="utf-8") == "First line\nSecond line\nThird line"
    assert editor.filename == str(path)
    assert editor.modified is False


def test_load_file(editor, tmp_path):
    path = tmp_path / "doc.txt"
    path.write_text("alpha\nbeta\n", encoding="utf-8")

    assert editor.load_file(str(path)) is True
    assert [str(line) for line in editor.view.buffer.lines] == ["alpha", "beta"]
    assert editor.filename == str(path)
    assert editor.modified is False
    assert editor.view.location == Location(0, 0)


def test_missing_file_starts_new_document(editor, tmp_path):
    path = tmp_path / "new.txt"
    assert editor.load_file(str(path)) is False
    assert editor.filename == str(path)
    assert editor.view.buffer.height == 0
    assert editor.status_message == EditorConstants.NEW_FILE_MESSAGE.format(path)

    # Typing and saving creates it
    editor._handle_key_event(regular("x"))
    assert editor.modified
    editor._handle_key_event(ctrl("s"))
    assert path.read_text(encoding="utf-8") == "x"
    assert editor.modified is False
    assert editor.status_message == EditorConstants.SAVED_MESSAGE.format(path)


def test_failed_load_keeps_current_document(editor, tmp_path):
    editor.view.buffer = Buffer.from_text("keep me")
    path = tmp_path / "binary.txt"
    path.write_bytes(b"\xff\xfe\x00")

    assert editor.load_file(str(path)) is False
    assert editor.view.buffer.to_text() == "keep me"
    assert editor.filename is None
    assert "not valid UTF-8" in editor.status_message


def test_failed_save_reports_error(editor, tmp_path):
    path = tmp_path / "missing_dir" / "doc.txt"
    editor.modified = True
    assert editor.save_file(str(path)) is False
    assert editor.modified is True
    assert editor.status_message == f"Error: Cannot save to {path}"


def test_cursor_location_restored_on_reopen(tmp_path):
    path = tmp_path / "doc.txt"
    path.write_text("one\ntwo\nthree", encoding="utf-8")
    persistence = SettingsPersistence(tmp_path / "config")

    first = Editor(persistence=persistence)
    first.load_file(str(path))
    first.view.set_location(Location(2, 3))
    first.save_file(str(path))

    second = Editor(persistence=SettingsPersistence(tmp_path / "config"))
    second.load_file(str(path))
    assert second.view.location == Location(2, 3)


def test_restored_location_is_clamped(tmp_path):
    path = tmp_path / "doc.txt"
    path.write_text("one\ntwo", encoding="utf-8")
    persistence = SettingsPersistence(tmp_path / "config")
    persistence.save_location(str(path), Location(1, 40))

    editor = Editor(persistence=persistence)
    editor.load_file(str(path))
    assert editor.view.location == Location(1, 3)


def test_ctrl_s_without_filename(editor):
    editor._handle_key_event(regular("a"))
    editor._handle_key_event(ctrl("s"))
    assert editor.status_message == EditorConstants.NO_FILENAME_MESSAGE
    assert editor.modified is True


def test_status_message_cleared_by_next_key(editor):
    editor.status_message = "Saved to somewhere"
    editor._handle_key_event(KeyEvent(key_type=KeyType.SPECIAL, value='right', raw='<RIGHT>'))
    assert editor.status_message is None


def test_quit_unmodified_stops(editor):
    editor.running = True
    editor._handle_key_event(ctrl("q"))
    assert editor.running is False


def test_quit_confirm_yes_saves(editor, tmp_path):
    path = tmp_path / "doc.txt"
    editor.load_file(str(path))
    editor.running = True
    editor._handle_key_event(regular("z"))

    editor._handle_key_event(ctrl("q"))
    assert editor.prompt_mode == 'quit_confirm'
    assert editor.running is True

    editor._handle_key_event(regular("y"))
    assert editor.running is False
    assert path.read_text(encoding="utf-8") == "z"


def test_quit_confirm_no_discards(editor, tmp_path):
    path = tmp_path / "doc.txt"
    editor.load_file(str(path))
    editor.running = True
    editor._handle_key_event(regular("z"))
    editor._handle_key_event(ctrl("q"))

    editor._handle_key_event(regular("N"))
    assert editor.running is False
    assert not path.exists()


def test_quit_confirm_other_key_cancels(editor):
    editor.running = True
    editor._handle_key_event(regular("z"))
    editor._handle_key_event(ctrl("q"))

    editor._handle_key_event(KeyEvent(key_type=KeyType.SPECIAL, value='escape', raw='\x1b'))
    assert editor.prompt_mode is None
    assert editor.running is True
    assert editor.view.buffer.to_text() == "z"


def test_quit_confirm_yes_without_filename_stays(editor):
    editor.running = True
    editor._handle_key_event(regular("z"))
    editor._handle_key_event(ctrl("q"))
    editor._handle_key_event(regular("y"))
    assert editor.running is True
    assert editor.status_message == EditorConstants.NO_FILENAME_MESSAGE


def test_escape_is_ignored(editor):
    editor._handle_key_event(KeyEvent(key_type=KeyType.SPECIAL, value='escape', raw='\x1b'))
    assert editor.modified is False
    assert editor.view.buffer.height == 0


def test_noop_backspace_leaves_document_unmodified(editor, tmp_path):
    path = tmp_path / "doc.txt"
    path.write_text("abc", encoding="utf-8")
    editor.load_file(str(path))
    editor.running = True

    editor._handle_key_event(KeyEvent(key_type=KeyType.SPECIAL, value='backspace', raw='\x7f'))
    assert editor.modified is False

    # Nothing to save, so quitting does not prompt
    editor._handle_key_event(ctrl("q"))
    assert editor.prompt_mode is None
    assert editor.running is False
