"""A single document row split into grapheme clusters.

Every cluster becomes a :class:`TextFragment` that knows how many terminal
columns it occupies and, for clusters that would be invisible or confusing
on screen, which placeholder glyph to draw instead.
"""

import unicodedata
from dataclasses import dataclass
from enum import Enum
from typing import Optional

import grapheme
from wcwidth import wcswidth

from .constants import EditorConstants


class GraphemeWidth(Enum):
    """Rendered width of a fragment in terminal columns."""
    HALF = 1
    FULL = 2


@dataclass(frozen=True)
class TextFragment:
    text: str
    rendered_width: GraphemeWidth
    replacement: Optional[str] = None

    @property
    def glyph(self) -> str:
        """What to draw for this fragment."""
        return self.replacement if self.replacement is not None else self.text


def _cluster_width(cluster: str) -> int:
    # wcswidth reports -1 for strings containing control characters
    return max(wcswidth(cluster), 0)


def replacement_glyph(cluster: str) -> Optional[str]:
    """Return the placeholder glyph for ``cluster``, or None to draw it as is."""
    if cluster == " ":
        return None
    if cluster == "\t":
        return EditorConstants.TAB_GLYPH
    width = _cluster_width(cluster)
    if width > 0 and not cluster.strip():
        return EditorConstants.WHITESPACE_GLYPH
    if width == 0:
        if len(cluster) == 1 and unicodedata.category(cluster) == "Cc":
            return EditorConstants.CONTROL_GLYPH
        return EditorConstants.ZERO_WIDTH_GLYPH
    return None


def text_to_fragments(text: str) -> list[TextFragment]:
    fragments = []
    for cluster in grapheme.graphemes(text):
        replacement = replacement_glyph(cluster)
        if replacement is not None:
            # Placeholders are always drawn one column wide
            width = GraphemeWidth.HALF
        elif _cluster_width(cluster) <= 1:
            width = GraphemeWidth.HALF
        else:
            width = GraphemeWidth.FULL
        fragments.append(TextFragment(cluster, width, replacement))
    return fragments


class Line:
    """One row of the document as a sequence of grapheme fragments.

    Edits rebuild the fragment list from the edited text rather than patching
    it, since inserting or removing a code point can merge or split clusters
    next to it.
    """

    def __init__(self, fragments: Optional[list[TextFragment]] = None):
        self.fragments: list[TextFragment] = fragments if fragments is not None else []

    @classmethod
    def from_text(cls, text: str) -> "Line":
        return cls(text_to_fragments(text))

    def __str__(self) -> str:
        return "".join(fragment.text for fragment in self.fragments)

    def __repr__(self) -> str:
        return f"Line({str(self)!r})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, Line):
            return NotImplemented
        return self.fragments == other.fragments

    def __len__(self) -> int:
        return len(self.fragments)

    def grapheme_count(self) -> int:
        """Number of fragments; valid grapheme indices are 0..grapheme_count()."""
        return len(self.fragments)

    def width_until(self, grapheme_index: int) -> int:
        """Rendered width of all fragments before ``grapheme_index``."""
        return sum(
            fragment.rendered_width.value
            for fragment in self.fragments[:max(0, grapheme_index)]
        )

    def get_visible_graphemes(self, start_col: int, end_col: int) -> str:
        """Render the columns ``[start_col, end_col)`` of this line.

        A fragment cut by either edge of the range is drawn as a single
        clipping marker so the truncation is visible.
        """
        if start_col >= end_col:
            return ""

        result = []
        current_pos = 0
        for fragment in self.fragments:
            if current_pos >= end_col:
                break
            fragment_end = current_pos + fragment.rendered_width.value
            if fragment_end > start_col:
                if fragment_end > end_col or current_pos < start_col:
                    result.append(EditorConstants.CLIP_MARKER)
                else:
                    result.append(fragment.glyph)
            current_pos = fragment_end
        return "".join(result)

    def insert_char(self, character: str, grapheme_index: int) -> None:
        """Insert ``character`` before the fragment at ``grapheme_index``.

        Appends when the index is at or past the end of the line.
        """
        texts = [fragment.text for fragment in self.fragments]
        index = min(max(0, grapheme_index), len(texts))
        texts.insert(index, character)
        self.fragments = text_to_fragments("".join(texts))

    def delete(self, grapheme_index: int) -> None:
        if not 0 <= grapheme_index < len(self.fragments):
            return
        texts = [
            fragment.text
            for index, fragment in enumerate(self.fragments)
            if index != grapheme_index
        ]
        self.fragments = text_to_fragments("".join(texts))

    def append(self, other: "Line") -> None:
        self.fragments = text_to_fragments(str(self) + str(other))

    def split(self, grapheme_index: int) -> "Line":
        """Cut the line at ``grapheme_index`` and return the right-hand part."""
        if grapheme_index >= len(self.fragments):
            return Line()
        index = max(0, grapheme_index)
        remainder = self.fragments[index:]
        self.fragments = self.fragments[:index]
        return Line(remainder)
