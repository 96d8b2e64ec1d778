#!/usr/bin/env python3
# netprompt/interface/loader.py
from __future__ import annotations

"""
Dynamic plugin loader.

Features:
- Imports all modules under a given package (default: 'plugins').
- Supports 'entrypoint.py' inside a subpackage.
- Every imported module exposing a callable `setup(engine)` gets it called, so
  plugins register command sets, completers and filters on the engine they
  are given instead of on module-level globals.
"""

import importlib
import logging
import pkgutil
from pathlib import Path
from types import ModuleType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from netprompt.engine import Engine

logger = logging.getLogger(__name__)


def _setup_from_module(engine: "Engine", module: ModuleType) -> bool:
    """Call `setup(engine)` exported by a plugin module, if present."""
    setup = getattr(module, "setup", None)
    if not callable(setup):
        logger.debug("plugin module %s has no setup()", module.__name__)
        return False
    setup(engine)
    logger.debug("plugin module %s set up", module.__name__)
    return True


def load_plugins(engine: "Engine", plugins_package: str = "plugins") -> int:
    """
    Import all modules under the given package and set them up on `engine`.

    Supported layouts:
      1) Plain modules: plugins/foo.py  -> import plugins.foo
      2) Packages with an entrypoint: plugins/bar/entrypoint.py
         -> import plugins.bar.entrypoint

    Modules are visited in name order, so plugins that extend a command set
    created by another plugin should be named accordingly.

    Returns the number of modules whose `setup` was called.
    """
    package = importlib.import_module(plugins_package)
    package_paths = [str(p) for p in getattr(package, "__path__", [])]

    if not package_paths:
        raise RuntimeError(
            f"'{plugins_package}' must be a package (folder) with modules."
        )

    module_names: list[str] = []
    for base_path in package_paths:
        for modinfo in pkgutil.iter_modules([base_path]):
            module_name = modinfo.name
            if module_name.startswith("_"):
                # Ignore private modules
                continue
            if modinfo.ispkg and (Path(base_path) / module_name / "entrypoint.py").exists():
                module_names.append(f"{plugins_package}.{module_name}.entrypoint")
            else:
                module_names.append(f"{plugins_package}.{module_name}")

    loaded_count = 0
    for qualified in sorted(module_names):
        module = importlib.import_module(qualified)
        if _setup_from_module(engine, module):
            loaded_count += 1
    return loaded_count
