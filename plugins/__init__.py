#!/usr/bin/env python3
# plugins/__init__.py
"""
Bundled plugins.

Each subpackage exposes an `entrypoint.py` with a `setup(engine)` function
that registers its command sets, completers and filters.
"""
