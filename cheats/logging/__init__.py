"""
Logging utilities and configuration for cheats.

Provides JSON or text logging for the shell, with centralized setup.
"""

from .json_formatter import CheatsJSONFormatter, create_json_handler
from .manager import (
    CheatsLoggingManager,
    get_cheats_logger,
    get_logging_manager,
    setup_cheats_logging,
    shutdown_cheats_logging,
)

__all__ = [
    "CheatsJSONFormatter",
    "create_json_handler",
    "CheatsLoggingManager",
    "get_logging_manager",
    "setup_cheats_logging",
    "get_cheats_logger",
    "shutdown_cheats_logging",
]
