"""glyphedit CLI entry point.

Allows running via `python -m glyphedit` and provides the console script
defined in `pyproject.toml`.
"""

from __future__ import annotations

import logging
import sys

from . import __version__

USAGE = "usage: glyphedit [--version] [--log FILE] [FILE]"


def configure_logging(log_file: str | None) -> None:
    """Send log records to ``log_file``, or nowhere.

    The editor owns the whole screen, so records must never reach stderr.
    """
    if log_file:
        logging.basicConfig(
            filename=log_file,
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
    else:
        logging.basicConfig(handlers=[logging.NullHandler()])


def main(argv: list[str] | None = None) -> int:
    # Very small arg parsing: version, log file and optional filename
    args = list(sys.argv[1:] if argv is None else argv)
    if args and args[0] in ("--version", "-V"):
        print(f"glyphedit {__version__}")
        return 0

    log_file = None
    if args and args[0] == "--log":
        if len(args) < 2:
            print(USAGE, file=sys.stderr)
            return 2
        log_file = args[1]
        args = args[2:]
    if len(args) > 1:
        print(USAGE, file=sys.stderr)
        return 2
    configure_logging(log_file)

    # Lazy import to avoid importing UI deps for --version
    from .editor import Editor
    editor = Editor()
    if args:
        editor.load_file(args[0])
    editor.run()
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
