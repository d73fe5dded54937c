#!/usr/bin/env python3
"""keyviz - a keyboard visualizer for the terminal.

Usage:
    python main.py [--debug] [--log-file PATH]

Every key you press lights up on the on-screen keyboard and is added to
the log below it. Press Esc, Enter or Space five times to quit.
"""

import sys

from keyviz.__main__ import main


if __name__ == "__main__":
    sys.exit(main())
