from dataclasses import dataclass


@dataclass
class Location:
    """A cursor location in buffer space."""
    line_index: int = 0
    grapheme_index: int = 0


@dataclass(frozen=True)
class Position:
    """A cell on screen, counted in rendered columns."""
    row: int = 0
    col: int = 0

    def saturating_sub(self, other: "Position") -> "Position":
        return Position(
            row=max(0, self.row - other.row),
            col=max(0, self.col - other.col),
        )


@dataclass(frozen=True)
class Size:
    """Extent of the text area in rows and columns."""
    height: int = 0
    width: int = 0
