"""
Configuration module for cheats.

Copyright (c) 2025 Firefly Software Solutions Inc.
Licensed under the Apache License, Version 2.0 (the "License");
"""

from .shell_config import (
    ConfigurationManager,
    LoggingConfig,
    ParserConfig,
    ShellConfig,
)

__all__ = [
    "ShellConfig",
    "ParserConfig",
    "LoggingConfig",
    "ConfigurationManager",
]
