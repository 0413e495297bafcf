"""Skillbuilder — generate Claude Code skills and share them in a library."""

__version__ = "0.1.0"
