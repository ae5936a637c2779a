"""The document: an ordered list of grapheme lines."""

from typing import Optional

from . import storage
from .line import Line
from .position import Location


def split_lines(text: str) -> list[str]:
    """Split on line breaks, dropping a ``\\r`` before each ``\\n``.

    A trailing line break does not start another (empty) line, and empty
    text has no lines at all.
    """
    if not text:
        return []
    rows = text.split('\n')
    if text.endswith('\n'):
        rows.pop()
    return [row[:-1] if row.endswith('\r') else row for row in rows]


class Buffer:
    """Owns the document lines and performs structural edits on them.

    Locations that point outside the document are ignored instead of
    rejected; keeping the cursor valid is the movement code's job.
    """

    def __init__(self, lines: Optional[list[Line]] = None):
        self.lines: list[Line] = lines if lines is not None else []

    @classmethod
    def from_text(cls, text: str) -> "Buffer":
        return cls([Line.from_text(row) for row in split_lines(text)])

    @classmethod
    def load(cls, filename: str) -> "Buffer":
        """Build a buffer from a file.

        Raises:
            LoadError: if the file cannot be read. Nothing is replaced, so
                the caller still has its previous buffer.
        """
        return cls.from_text(storage.load_text(filename))

    def save(self, filename: str) -> None:
        """Write the document to ``filename``.

        Raises:
            SaveError: if the file cannot be written.
        """
        storage.save_text(filename, self.to_text())

    def to_text(self) -> str:
        return '\n'.join(str(line) for line in self.lines)

    @property
    def height(self) -> int:
        return len(self.lines)

    def get_line(self, line_index: int) -> Optional[Line]:
        if 0 <= line_index < len(self.lines):
            return self.lines[line_index]
        return None

    def line_length(self, line_index: int) -> int:
        """Grapheme count of a line, 0 for rows past the end."""
        line = self.get_line(line_index)
        return line.grapheme_count() if line is not None else 0

    def insert_char(self, character: str, location: Location) -> None:
        if location.line_index > self.height:
            return
        if location.line_index == self.height:
            self.lines.append(Line.from_text(character))
        else:
            self.lines[location.line_index].insert_char(character, location.grapheme_index)

    def delete_char(self, location: Location) -> None:
        """Delete the grapheme at ``location``.

        At the end of a line the next line is joined onto it instead.
        """
        line = self.get_line(location.line_index)
        if line is None:
            return
        has_next = location.line_index + 1 < self.height
        if location.grapheme_index >= line.grapheme_count() and has_next:
            next_line = self.lines.pop(location.line_index + 1)
            line.append(next_line)
        elif location.grapheme_index < line.grapheme_count():
            line.delete(location.grapheme_index)

    def insert_newline(self, location: Location) -> None:
        if location.line_index > self.height:
            return
        if location.line_index == self.height:
            self.lines.append(Line())
            return
        remainder = self.lines[location.line_index].split(location.grapheme_index)
        self.lines.insert(location.line_index + 1, remainder)
