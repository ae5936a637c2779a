"""glyphedit - A grapheme-aware terminal text editor."""

from .buffer import Buffer
from .line import Line, TextFragment, GraphemeWidth
from .movement import Direction, move
from .position import Location, Position, Size
from .view import View, ViewState

__version__ = "0.1.0"

__all__ = [
    'Buffer',
    'Line',
    'TextFragment',
    'GraphemeWidth',
    'Direction',
    'move',
    'Location',
    'Position',
    'Size',
    'View',
    'ViewState',
]
