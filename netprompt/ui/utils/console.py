#!/usr/bin/env python3
# netprompt/ui/utils/console.py
from __future__ import annotations

import sys
import threading
from typing import Optional, TextIO

# Single shared print mutex for all UI output (outcome messages and logging).
PRINT_MUTEX = threading.Lock()


def print_line(text: str = "", *, file: Optional[TextIO] = None, flush: bool = False) -> None:
    """Thread-safe single-line print; `file` defaults to the current sys.stdout."""
    stream = file if file is not None else sys.stdout
    with PRINT_MUTEX:
        stream.write(f"{text}\n")
        if flush:
            stream.flush()
