#!/usr/bin/env python3
# netprompt/boot/__init__.py
from __future__ import annotations
"""
Boot sequence package.

Exports:
- boot_sequence: Orchestrated startup pipeline with Linux-style [ OK ] / [FAILED] lines.
- BootState: Dataclass containing engine, config, logger and command count.
"""


from .boot import BootState, boot_sequence

__all__ = ["boot_sequence", "BootState"]
