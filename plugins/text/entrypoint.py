#!/usr/bin/env python3
# plugins/text/entrypoint.py
from __future__ import annotations

"""
Text filters for command output.

    show log | grep -i error
    show log | grep -v debug > errors.txt
"""

import re
from typing import Iterable, TextIO


def grep(source: Iterable[str], sink: TextIO, args: list[str]) -> None:
    """
    A very simple grep.

    Options: -i (ignore case), -v (keep non-matching lines). The last other
    argument is the regular expression. With no arguments input is copied
    through unchanged.
    """
    if not args:
        for line in source:
            sink.write(line)
        return

    flags = 0
    invert = False
    pattern = ""
    for arg in args:
        if arg == "-i":
            flags |= re.IGNORECASE
        elif arg == "-v":
            invert = True
        else:
            pattern = arg

    try:
        regex = re.compile(pattern, flags)
    except re.error as exc:
        sink.write(f"error compiling regexp: {exc}\n")
        return

    for line in source:
        text = line.rstrip("\n")
        if (regex.search(text) is not None) == invert:
            continue
        sink.write(text + "\n")


def setup(engine) -> None:
    engine.register_filter("grep", grep)
