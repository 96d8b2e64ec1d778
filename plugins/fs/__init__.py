# plugins/fs/__init__.py
"""File system browsing: fileOrDir completion, ls and cat."""
