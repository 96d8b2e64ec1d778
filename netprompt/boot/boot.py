#!/usr/bin/env python3
# netprompt/boot/boot.py
from __future__ import annotations
"""
Boot sequence for netprompt.

Runs each start-up step with a Linux-style status line and returns everything
the interactive loop needs in a BootState.
"""

from dataclasses import dataclass
from logging import Logger
from typing import Any, Callable, Optional, TextIO
import platform

from netprompt.config import AppConfig, load_config
from netprompt.engine import Engine
from netprompt.interface.loader import load_plugins
from netprompt.ui import (
    colorize,
    enable_windows_vt,
    init_logger,
    print_line,
)


@dataclass(slots=True)
class BootState:
    engine: Engine
    config: AppConfig
    logger: Logger
    loaded_count: int


def _step(label: str, fn: Callable[[], Any], *, quiet: bool = False) -> Any:
    """Run a boot step with status output."""
    try:
        out = fn()
    except Exception as exc:
        print_line(
            colorize(f"[FAILED] {label} ({type(exc).__name__}: {exc})", "red")
        )
        raise
    if not quiet:
        print_line(colorize(f"[  OK  ] {label}", "green"))
    return out


def _exit_handler(out: TextIO, args: list[str]) -> None:
    out.write("exiting...\n")
    raise SystemExit(0)


def _create_engine(config: AppConfig, output: Optional[TextIO]) -> Engine:
    engine = Engine(output=output)
    root = engine.new_command_set(config.root_command_set)
    root.register("exit", _exit_handler)
    root.register("quit", _exit_handler)
    return engine


def boot_sequence(
    config: Optional[AppConfig] = None,
    *,
    quiet: bool = False,
    output: Optional[TextIO] = None,
) -> BootState:
    # ---------- console + env ----------
    _step("Enable ANSI sequences", enable_windows_vt, quiet=quiet)
    _step(
        f"Detect environment: {platform.system()} {platform.release()} / Python {platform.python_version()}",
        lambda: None,
        quiet=quiet,
    )

    # ---------- config ----------
    if config is None:
        config = _step("Load configuration", load_config, quiet=quiet)

    # ---------- logging ----------
    logfile = str(config.log_file_path) if config.log_file_path else None
    logger = _step(
        "Initialize logger",
        lambda: init_logger("netprompt", level=config.log_level or "WARNING", logfile=logfile),
        quiet=quiet,
    )

    # ---------- engine + plugins ----------
    engine = _step(
        f"Create root command set '{config.root_command_set}'",
        lambda: _create_engine(config, output),
        quiet=quiet,
    )
    pkg_name = config.plugin_package
    _step(f"Locate plugins package '{pkg_name}'", lambda: __import__(pkg_name), quiet=quiet)
    modules = _step("Load plugins", lambda: load_plugins(engine, pkg_name), quiet=quiet)
    loaded_count = _step(
        "Count command definitions",
        lambda: sum(len(cs) for cs in engine.registry.all()),
        quiet=quiet,
    )
    logger.info("%d plugin modules, %d commands in %d command sets",
                modules, loaded_count, len(engine.registry))
    _step("Boot complete", lambda: None, quiet=quiet)

    return BootState(
        engine=engine,
        config=config,
        logger=logger,
        loaded_count=loaded_count,
    )
