#!/usr/bin/env python3
# netprompt/interface/pipeline.py
from __future__ import annotations

"""
Filter pipeline execution.

A statement such as

    ls /tmp | grep foo | grep -v bar > out.txt

runs the `ls` handler and both filters concurrently. Stages are connected by
relays: unbuffered text channels holding at most one pending write, so a slow
filter stalls the writer upstream of it.

Wiring happens from the last declared filter to the first; the handler then
writes into the first filter's relay (or straight into the sink when there are
no filters). Every relay is closed by its writer when that writer finishes,
which is how end-of-stream travels down the chain.
"""

import io
import logging
import queue
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional, Sequence, TextIO

from netprompt.commands import Filter
from netprompt.errors import PipelineError
from netprompt.grammar import FilterInvocation
from netprompt.ui import PRINT_MUTEX, print_line

logger = logging.getLogger(__name__)

_END_OF_STREAM = object()


# ---------------------------------------------------------------------------
# Relay
# ---------------------------------------------------------------------------


class Relay:
    """Single-producer/single-consumer text channel with one slot."""

    def __init__(self) -> None:
        self._slot: queue.Queue[Any] = queue.Queue(maxsize=1)
        self._reader_gone = threading.Event()
        self.reader = RelayReader(self)
        self.writer = RelayWriter(self)

    def _put(self, item: Any) -> None:
        if self._reader_gone.is_set():
            raise BrokenPipeError("relay reader is closed")
        self._slot.put(item)

    def _get(self) -> Any:
        return self._slot.get()

    def _discard(self) -> None:
        self._reader_gone.set()
        # unblock a writer waiting on the slot
        while True:
            try:
                self._slot.get_nowait()
            except queue.Empty:
                return


class RelayWriter(io.TextIOBase):
    """Producer end of a relay."""

    def __init__(self, relay: Relay) -> None:
        super().__init__()
        self._relay = relay

    def writable(self) -> bool:
        return True

    def write(self, text: str) -> int:
        if self.closed:
            raise ValueError("write to closed relay")
        if text:
            self._relay._put(str(text))
        return len(text)

    def close(self) -> None:
        if self.closed:
            return
        try:
            self._relay._put(_END_OF_STREAM)
        except BrokenPipeError:
            pass
        finally:
            super().close()


class RelayReader(io.TextIOBase):
    """Consumer end of a relay; iterating yields lines."""

    def __init__(self, relay: Relay) -> None:
        super().__init__()
        self._relay = relay
        self._pending = ""
        self._eof = False

    def readable(self) -> bool:
        return True

    def _fill(self) -> bool:
        if self._eof:
            return False
        item = self._relay._get()
        if item is _END_OF_STREAM:
            self._eof = True
            return False
        self._pending += item
        return True

    def _take(self, size: int) -> str:
        chunk, self._pending = self._pending[:size], self._pending[size:]
        return chunk

    def read(self, size: Optional[int] = -1) -> str:
        if self.closed:
            raise ValueError("read from closed relay")
        if size is None or size < 0:
            while self._fill():
                pass
            return self._take(len(self._pending))
        while len(self._pending) < size and self._fill():
            pass
        return self._take(size)

    def readline(self, size: Optional[int] = -1) -> str:
        if self.closed:
            raise ValueError("read from closed relay")
        while "\n" not in self._pending and self._fill():
            if size is not None and 0 <= size <= len(self._pending):
                break
        newline = self._pending.find("\n")
        end = len(self._pending) if newline < 0 else newline + 1
        if size is not None and size >= 0:
            end = min(end, size)
        return self._take(end)

    def __iter__(self) -> "RelayReader":
        return self

    def __next__(self) -> str:
        line = self.readline()
        if not line:
            raise StopIteration
        return line

    def close(self) -> None:
        if self.closed:
            return
        self._relay._discard()
        super().close()


class _LockedSink(io.TextIOBase):
    """Writes to a shared stream while holding PRINT_MUTEX."""

    def __init__(self, stream: TextIO) -> None:
        super().__init__()
        self._stream = stream

    def writable(self) -> bool:
        return True

    def write(self, text: str) -> int:
        with PRINT_MUTEX:
            self._stream.write(text)
        return len(text)

    def flush(self) -> None:
        # nothing is buffered here
        pass


# ---------------------------------------------------------------------------
# Execution
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class _Stage:
    invocation: FilterInvocation
    transform: Filter
    source: RelayReader
    sink: TextIO
    owns_sink: bool
    errors: TextIO


def _run_stage(stage: _Stage) -> None:
    try:
        stage.transform(stage.source, stage.sink, list(stage.invocation.args))
    except BrokenPipeError:
        logger.debug("filter %s: downstream closed", stage.invocation.name)
    except Exception as exc:
        logger.exception("filter %s failed", stage.invocation.name)
        print_line(f"[error] {stage.invocation.name}: {type(exc).__name__}: {exc}", file=stage.errors)
    finally:
        # let the upstream writer fail fast instead of blocking forever
        stage.source.close()
        if stage.owns_sink:
            stage.sink.close()


def resolve_filters(
    invocations: Sequence[FilterInvocation],
    filters: Mapping[str, Filter],
) -> list[tuple[FilterInvocation, Filter]]:
    """Look up every filter of a chain before anything is started."""
    resolved = []
    for invocation in invocations:
        transform = filters.get(invocation.name)
        if transform is None:
            raise PipelineError(f"{invocation.name} is not a valid filter")
        resolved.append((invocation, transform))
    return resolved


def execute(
    run: Callable[[TextIO], Any],
    invocations: Sequence[FilterInvocation],
    filters: Mapping[str, Filter],
    output_target: Optional[str],
    default_sink: TextIO,
) -> None:
    """
    Run `run(out)` with its output flowing through the filter chain.

    Raises:
        PipelineError: a filter name is not registered (nothing has run).
    """
    chain = resolve_filters(invocations, filters)

    opened: list[TextIO] = []
    sink: TextIO = default_sink
    if output_target:
        try:
            file_handle = open(output_target, "w", encoding="utf-8", newline="")
        except OSError as exc:
            logger.warning("cannot create %s: %s", output_target, exc)
            print_line(f"error writing: {exc}", file=default_sink)
        else:
            opened.append(file_handle)
            sink = file_handle

    try:
        if not chain:
            run(sink)
            return

        if sink is default_sink:
            # stage errors go to the same stream
            sink = _LockedSink(sink)

        with ThreadPoolExecutor(max_workers=len(chain), thread_name_prefix="netprompt-filter") as pool:
            for invocation, transform in reversed(chain):
                relay = Relay()
                opened.append(relay.reader)
                stage = _Stage(
                    invocation, transform, relay.reader, sink,
                    owns_sink=isinstance(sink, RelayWriter), errors=default_sink,
                )
                pool.submit(_run_stage, stage)
                sink = relay.writer
            try:
                run(sink)
            except BrokenPipeError:
                logger.debug("handler output closed by downstream filter")
            finally:
                sink.close()
    finally:
        for resource in opened:
            resource.close()
