#!/usr/bin/env python3
# netprompt/__main__.py
from __future__ import annotations
"""Interactive entry point: `python -m netprompt`."""

import sys

from netprompt.boot import boot_sequence
from netprompt.interface import make_cli
from netprompt.ui import print_line


def main() -> int:
    state = boot_sequence()
    engine = state.engine
    with make_cli(engine, state.config) as cli:
        while True:
            try:
                line = cli.get_line()
            except KeyboardInterrupt:
                # drop the current line, keep the prompt
                print_line()
                continue
            except EOFError:
                print_line()
                return 0
            try:
                engine.evaluate(line)
            except SystemExit as exc:
                return exc.code if isinstance(exc.code, int) else 0
            except KeyboardInterrupt:
                print_line("^C")


if __name__ == "__main__":
    sys.exit(main())
