#!/usr/bin/env python3
# plugins/names/entrypoint.py
from __future__ import annotations

"""
Greeting demo: `names` enters a menu where `hello` completes known names.
"""

from typing import TextIO

from netprompt.commands import pop_command_set, push_command_set

COMMAND_SET = "names-set"
ROSTER = ("Todd", "Elizabeth", "Ellen", "Eleanore")


def complete_name(seed: str) -> list[str]:
    return [name for name in ROSTER if name.startswith(seed)]


def format_greeting(names: list[str]) -> str:
    """Hello A, B and C!"""
    if len(names) > 1:
        listed = ", ".join(names[:-1]) + " and " + names[-1]
    else:
        listed = "".join(names)
    return f"Hello {listed}!"


def hello_cmd(out: TextIO, args: list[str]) -> None:
    out.write(format_greeting(args) + "\n")


def setup(engine) -> None:
    engine.register_completer("name", complete_name)

    names = engine.new_command_set(COMMAND_SET)
    names.register("hello $*:name", hello_cmd)
    names.register("exit", pop_command_set(engine))

    root = engine.root_command_set()
    if root is not None:
        root.register("names", push_command_set(engine, COMMAND_SET))
