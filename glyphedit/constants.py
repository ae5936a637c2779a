"""Constants and configuration for the glyphedit editor."""

class EditorConstants:
    """Central configuration constants for the editor."""

    # Editing
    TAB_SIZE = 4  # Spaces inserted by the Tab key

    # Placeholder glyphs for clusters that are invisible or ambiguous
    TAB_GLYPH = "→"
    WHITESPACE_GLYPH = "␣"  # Width-bearing whitespace other than a plain space
    CONTROL_GLYPH = "▯"  # A lone control character
    ZERO_WIDTH_GLYPH = "·"  # Any other zero-width cluster

    # Rendering
    CLIP_MARKER = "⋯"  # Drawn in place of a fragment cut by the viewport edge
    EMPTY_ROW_MARKER = "~"  # Drawn on screen rows past the end of the document
    STATUS_ROWS = 1  # Rows reserved at the bottom for the status line

    # File operations
    ATOMIC_SAVE_PREFIX = "."  # Prefix for temporary save files
    ATOMIC_SAVE_SUFFIX = ".tmp"  # Suffix for temporary save files
    ENCODING = "utf-8"

    # Resize handling
    RESIZE_PIPE_MARKER = b'R'  # Byte written to pipe to signal resize

    # Status messages
    SAVED_MESSAGE = "Saved to {}"
    NEW_FILE_MESSAGE = "New file: {}"
    NO_FILENAME_MESSAGE = "No file name; start glyphedit with a file path"
    QUIT_CONFIRM_PROMPT = " Save changes before quitting? (y, n) "
    HELP_TEXT = "Ctrl-S save | Ctrl-Q quit"
