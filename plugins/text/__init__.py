# plugins/text/__init__.py
"""Output filters (grep)."""
