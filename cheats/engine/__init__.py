"""Shell engine."""

from .shell import Shell

__all__ = ["Shell"]
