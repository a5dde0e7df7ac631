"""
JSON logging formatter for cheats.

Formats log records as single-line JSON objects so game hosts can ship
console logs to the same collectors as the rest of their telemetry.
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

import json
import logging
import sys
from datetime import datetime
from typing import Any, Dict, Optional

TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Attributes every LogRecord carries; anything else arrived through ``extra=``
RECORD_ATTRIBUTES = frozenset(
    logging.LogRecord("", logging.NOTSET, "", 0, "", (), None).__dict__
) | {"message", "asctime", "taskName"}

# ``extra=`` keys the shell uses to describe the code a record is about
CODE_FIELDS = {"code": "name", "code_args": "args", "span": "span"}


class CheatsJSONFormatter(logging.Formatter):
    """
    JSON formatter for cheats log records.

    Every entry carries a ``prefix`` field (``cheats::shell::log`` by default)
    so console entries can be told apart from host entries. Records about a
    code (``extra={"code": ..., "code_args": ..., "span": ...}``) get those
    fields grouped under a ``code`` object::

        {"level": "WARNING", "message": "Could not find code: sv_foo",
         "code": {"name": "sv_foo", "args": "1", "span": [0, 8]}, ...}
    """

    def __init__(self, prefix: Optional[str] = None, include_extra: bool = True):
        """
        Initialize the JSON formatter.

        Args:
            prefix: Log prefix to use. If None, defaults to cheats::shell::log
            include_extra: Whether to include other extra fields from log records
        """
        super().__init__()
        self.prefix = prefix or "cheats::shell::log"
        self.include_extra = include_extra

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "prefix": self.prefix,
        }
        if record.funcName and record.funcName != "<module>":
            entry["function"] = record.funcName
        if record.lineno:
            entry["line"] = record.lineno

        code = self._code_fields(record)
        if code:
            entry["code"] = code
        if self.include_extra:
            for key, value in self._extra_fields(record).items():
                entry.setdefault(key, value)

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, separators=(",", ":"), default=str)

    @staticmethod
    def _code_fields(record: logging.LogRecord) -> Dict[str, Any]:
        fields = {}
        for attribute, key in CODE_FIELDS.items():
            value = getattr(record, attribute, None)
            if value is not None:
                fields[key] = value
        # A code is identified by its name; args or span alone mean nothing
        return fields if "name" in fields else {}

    @staticmethod
    def _extra_fields(record: logging.LogRecord) -> Dict[str, Any]:
        return {
            key: value
            for key, value in record.__dict__.items()
            if key not in RECORD_ATTRIBUTES
            and key not in CODE_FIELDS
            and not key.startswith("_")
            and value not in (None, "")
        }


def create_json_handler(level: int = logging.INFO, stream=None) -> logging.Handler:
    """
    Create a logging handler with JSON formatting.

    Args:
        level: Logging level
        stream: Output stream (defaults to sys.stderr)

    Returns:
        Configured logging handler
    """
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(CheatsJSONFormatter())
    return handler
