"""
cheats developer console

An interactive, rich-formatted REPL over a Shell with tab completion of
code names.

Usage:
    python -m cheats.console
    cheats console --load my_game.codes

Copyright 2025 Firefly Software Solutions Inc
Licensed under the Apache License, Version 2.0
"""

from .formatter import ConsoleFormatter
from .repl import DeveloperConsole

__all__ = ["DeveloperConsole", "ConsoleFormatter"]
