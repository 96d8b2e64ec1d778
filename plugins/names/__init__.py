# plugins/names/__init__.py
"""Greeting demo menu with name completion."""
