#!/usr/bin/env python3
"""glyphedit - A grapheme-aware terminal text editor.

Usage:
    python main.py [filename]

Controls:
    Arrow keys, PageUp/PageDown, Home/End: Move the cursor
    Ctrl-S: Save file
    Ctrl-Q: Quit (prompts to save if modified)
    Type to insert text
    Backspace / Delete: Delete character
    Tab: Insert four spaces
    Enter: Split the line
"""

import sys
from glyphedit.__main__ import main


if __name__ == "__main__":
    sys.exit(main())
