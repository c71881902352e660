"""Utility modules for ax-audit."""

from .atomic import atomic_write_text

__all__ = ["atomic_write_text"]
