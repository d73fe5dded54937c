"""keyviz CLI entry point.

Allows running via `python -m keyviz` and provides the console script
defined in `pyproject.toml`.
"""

from __future__ import annotations

import logging
import sys
import termios
from pathlib import Path
from typing import Optional

import platformdirs

from .constants import VisualizerConstants
from .version import get_version_string

logger = logging.getLogger("keyviz")

USAGE = "usage: keyviz [--version] [--keytest] [--debug] [--log-file PATH]"


def default_log_path() -> Path:
    """Where --debug writes its log."""
    log_dir = platformdirs.user_log_dir(VisualizerConstants.APP_NAME, VisualizerConstants.APP_AUTHOR)
    return Path(log_dir) / VisualizerConstants.LOG_FILE_NAME


def configure_logging(log_file: Optional[Path], debug: bool) -> None:
    """Send log records to a file; the screen belongs to the keyboard."""
    if log_file is None and not debug:
        return
    path = log_file or default_log_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setFormatter(logging.Formatter("%(asctime)s %(name)s %(levelname)s %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if debug else logging.INFO)


def _escape_bytes(s: str) -> str:
    """Return a printable representation of raw key string."""
    return s.encode('unicode_escape').decode('ascii')


def run_keyboard_test() -> None:
    """Print every decoded key event and its classification. Quit with ESC.

    Uses the same TerminalInterface + KeyboardHandler stack as the
    visualizer, without drawing the keyboard.
    """
    from .classifier import classify
    from .keyboard import KeyboardHandler, KeyCode
    from .terminal import TerminalInterface, keyboard_passthrough

    print("Keyboard test mode - press keys to see parsed events.")
    print("Quit with ESC.")

    term = TerminalInterface()
    kb = KeyboardHandler(term)
    try:
        term.setup()
        with keyboard_passthrough():
            while True:
                ev = kb.get_key_event(timeout=None)
                if not ev:
                    continue
                if ev.code == KeyCode.ESCAPE and not ev.modifiers:
                    print("Exiting keyboard test.")
                    break
                c = classify(ev)
                parts = [
                    f"raw='{_escape_bytes(ev.raw)}'",
                    f"code={c.code}",
                    f"label={c.label}",
                    f"mods={c.mod_summary}",
                ]
                if c.modifiers:
                    parts.append(f"lights={'+'.join(sorted(c.modifiers))}")
                if c.caps_lock:
                    parts.append("capslock?")
                if c.exit_key:
                    parts.append(f"exit={c.exit_key.value}")
                print(" ".join(parts))
    finally:
        term.cleanup()


def main(argv: Optional[list[str]] = None) -> int:
    # Very small arg parsing: version, keyboard test mode and logging switches
    args = list(sys.argv[1:] if argv is None else argv)
    if args and args[0] in ("--version", "-V"):
        print(get_version_string())
        return 0

    debug = False
    log_file: Optional[Path] = None
    keytest = False
    while args:
        arg = args.pop(0)
        if arg == "--debug":
            debug = True
        elif arg == "--log-file" and args:
            log_file = Path(args.pop(0))
        elif arg in ("--keytest", "--keyboard-test"):
            keytest = True
        else:
            print(USAGE, file=sys.stderr)
            return 2

    configure_logging(log_file, debug)

    # Lazy import to avoid importing UI deps for --version
    from .visualizer import Visualizer
    try:
        if keytest:
            run_keyboard_test()
        else:
            Visualizer().run()
    except (termios.error, OSError) as e:
        logger.exception("Could not initialize the terminal")
        print(f"keyviz: cannot use this terminal: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
