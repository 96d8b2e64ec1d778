#!/usr/bin/env python3
# plugins/fs/entrypoint.py
from __future__ import annotations

"""
Browse the local file system.

Registers the `fileOrDir` completer and the `list-files-set` menu, entered
with `list-files` from the root command set.
"""

import os
from pathlib import Path
from typing import TextIO

from netprompt.commands import pop_command_set, push_command_set

COMMAND_SET = "list-files-set"


# -------------------------- helpers --------------------------

def _fmt_size(n: int) -> str:
    units = ["B", "KB", "MB", "GB", "TB"]
    i = 0
    f = float(n)
    while f >= 1024 and i < len(units) - 1:
        f /= 1024.0
        i += 1
    return f"{f:.1f} {units[i]}"


def complete_file_or_dir(seed: str) -> list[str]:
    """
    Complete a file or directory name.

    An empty seed completes inside the working directory, a directory seed
    completes inside that directory, anything else completes entries of the
    parent whose names start with the seed's basename. Directories get a
    trailing separator.
    """
    if seed == "":
        try:
            seed = os.getcwd()
        except OSError:
            return [""]

    directory, prefix = os.path.split(os.path.normpath(seed))
    # seed names a directory, so complete inside of it
    if os.path.isdir(seed):
        directory, prefix = seed, ""

    try:
        names = sorted(os.listdir(directory or "."))
    except OSError:
        return []

    matches: list[str] = []
    for name in names:
        if not name.startswith(prefix):
            continue
        candidate = os.path.join(directory, name)
        if os.path.isdir(candidate):
            candidate += os.sep
        matches.append(candidate)
    return matches


# ----------------------- commands (callables) -----------------------

def ls_cmd(out: TextIO, args: list[str]) -> None:
    """
    List a directory (directories first, then files with their size),
    or describe a single file.
    """
    target = Path(args[0])
    try:
        if not target.is_dir():
            out.write(f"{target.name} is {_fmt_size(target.stat().st_size)}\n")
            return
        entries = sorted(target.iterdir(), key=lambda x: (not x.is_dir(), x.name.lower()))
        for entry in entries:
            if entry.is_dir():
                out.write(f"<{entry.name}>\n")
            else:
                out.write(f"{entry.name} is {_fmt_size(entry.stat().st_size)}\n")
    except OSError as exc:
        out.write(f"error listing {args[0]}: {exc}\n")


def cat_cmd(out: TextIO, args: list[str]) -> None:
    """Print a text file."""
    path = Path(args[0])
    if not path.is_file():
        out.write(f"File not found: {args[0]}\n")
        return
    with path.open("r", encoding="utf-8", errors="replace") as handle:
        for line in handle:
            out.write(line)


def setup(engine) -> None:
    engine.register_completer("fileOrDir", complete_file_or_dir)

    files = engine.new_command_set(COMMAND_SET)
    files.register("ls $1:fileOrDir", ls_cmd)
    files.register("cat $1:fileOrDir", cat_cmd)
    files.register("exit", pop_command_set(engine))

    root = engine.root_command_set()
    if root is not None:
        root.register("list-files", push_command_set(engine, COMMAND_SET))
