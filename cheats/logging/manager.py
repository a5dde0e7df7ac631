"""
Centralized logging manager for cheats.

The library only logs through module loggers under the ``cheats`` namespace.
Handlers are installed here, on request of the host or the CLI.
"""

"""
Copyright (c) 2025 Firefly Software Solutions Inc.

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at:

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import List, Optional

from .json_formatter import TEXT_FORMAT, CheatsJSONFormatter

ROOT_LOGGER = "cheats"


class CheatsLoggingManager:
    """
    Central manager for cheats logging.

    Installs console and rotating file handlers on the ``cheats`` logger
    according to a ShellConfig.
    """

    def __init__(self, config=None, stream=None):
        """
        Initialize the logging manager.

        Args:
            config: Shell configuration containing logging settings
            stream: Console stream (defaults to sys.stderr)
        """
        self.config = config
        self.stream = stream
        self.configured = False
        self._handlers: List[logging.Handler] = []

        self.log_level = logging.WARNING
        self.format_type = "text"
        self.output_file: Optional[str] = None
        self.max_file_size_mb = 10
        self.backup_count = 3

        if config and hasattr(config, "logging"):
            logging_config = config.logging
            self.log_level = getattr(logging, logging_config.level)
            self.format_type = logging_config.format
            self.output_file = logging_config.output_file
            self.max_file_size_mb = logging_config.max_file_size_mb
            self.backup_count = logging_config.backup_count

    def _formatter(self) -> logging.Formatter:
        if self.format_type == "json":
            return CheatsJSONFormatter()
        return logging.Formatter(TEXT_FORMAT)

    def setup_logging(self) -> None:
        """Install handlers on the cheats logger."""
        if self.configured:
            return

        root = logging.getLogger(ROOT_LOGGER)
        root.setLevel(self.log_level)

        console_handler = logging.StreamHandler(self.stream or sys.stderr)
        console_handler.setFormatter(self._formatter())
        console_handler.setLevel(self.log_level)
        self._add_handler(root, console_handler)

        if self.output_file:
            self._setup_file_logging(root)

        # Keep console entries out of the host's root handlers
        root.propagate = False
        self.configured = True

        root.debug(
            "cheats logging initialized",
            extra={
                "log_level": logging.getLevelName(self.log_level),
                "format_type": self.format_type,
                "output_file": self.output_file,
            },
        )

    def _setup_file_logging(self, root: logging.Logger) -> None:
        output_path = Path(self.output_file)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            filename=str(output_path),
            maxBytes=self.max_file_size_mb * 1024 * 1024,
            backupCount=self.backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(self._formatter())
        file_handler.setLevel(self.log_level)
        self._add_handler(root, file_handler)

    def _add_handler(self, logger: logging.Logger, handler: logging.Handler) -> None:
        logger.addHandler(handler)
        self._handlers.append(handler)

    def get_logger(self, name: str) -> logging.Logger:
        """Get a configured logger for the given name."""
        if not self.configured:
            self.setup_logging()
        return logging.getLogger(name)

    def shutdown(self) -> None:
        """Remove and close the handlers this manager installed."""
        root = logging.getLogger(ROOT_LOGGER)
        for handler in self._handlers:
            root.removeHandler(handler)
            handler.close()
        self._handlers.clear()
        root.propagate = True
        root.setLevel(logging.NOTSET)
        self.configured = False


_logging_manager: Optional[CheatsLoggingManager] = None


def get_logging_manager(config=None) -> CheatsLoggingManager:
    """Get or create the global logging manager."""
    global _logging_manager

    if _logging_manager is None:
        _logging_manager = CheatsLoggingManager(config)

    return _logging_manager


def setup_cheats_logging(config=None, stream=None) -> CheatsLoggingManager:
    """Setup cheats logging, replacing any previous setup."""
    global _logging_manager

    if _logging_manager is not None:
        _logging_manager.shutdown()
    _logging_manager = CheatsLoggingManager(config, stream=stream)
    _logging_manager.setup_logging()
    return _logging_manager


def get_cheats_logger(name: str) -> logging.Logger:
    """Get a logger under the cheats namespace."""
    manager = get_logging_manager()
    return manager.get_logger(f"{ROOT_LOGGER}.{name}")


def shutdown_cheats_logging() -> None:
    """Shutdown cheats logging."""
    global _logging_manager

    if _logging_manager:
        _logging_manager.shutdown()
        _logging_manager = None
