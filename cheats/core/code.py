"""
Codes: named, invokable units of behaviour.

A code pairs a validated name with an ``Invokable``. Codes are compared and
hashed by name only; the invokable is never part of their identity.
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
from abc import ABC, abstractmethod
from typing import Any, Callable

from .exceptions import WhitespaceError
from .stream import ReadWrite

logger = logging.getLogger(__name__)


class Invokable(ABC):
    """Base class for objects that can be invoked by the shell."""

    @abstractmethod
    def invoke(self, args: str, stdout: ReadWrite, stderr: ReadWrite) -> None:
        """
        Invoke the code.

        Args:
            args: Everything after the code name, an empty string if nothing is given
            stdout: Channel for normal output
            stderr: Channel for error output
        """
        pass


class FunctionInvokable(Invokable):
    """Adapts a plain ``func(args, stdout, stderr)`` callable."""

    def __init__(self, func: Callable[[str, ReadWrite, ReadWrite], Any]):
        self.func = func

    def invoke(self, args: str, stdout: ReadWrite, stderr: ReadWrite) -> None:
        self.func(args, stdout, stderr)

    def __repr__(self) -> str:
        return f"FunctionInvokable({getattr(self.func, '__qualname__', self.func)!r})"


def as_invokable(handler: Any) -> Invokable:
    """Return ``handler`` as an Invokable, wrapping plain callables."""
    if isinstance(handler, Invokable):
        return handler
    if callable(handler):
        return FunctionInvokable(handler)
    raise TypeError(f"Handler must be an Invokable or a callable, got {type(handler).__name__}")


def validate_name(name: str) -> str:
    """Raise WhitespaceError if the name contains any whitespace character."""
    if any(c.isspace() for c in name):
        raise WhitespaceError(name)
    return name


class Code:
    """A cheat code."""

    __slots__ = ("_name", "_invokable")

    def __init__(self, name: str, invokable: Invokable):
        self._name = validate_name(name)
        self._invokable = as_invokable(invokable)
        logger.debug(f"Initialized code: {name}")

    @property
    def name(self) -> str:
        return self._name

    @property
    def invokable(self) -> Invokable:
        return self._invokable

    def invoke(self, args: str, stdout: ReadWrite, stderr: ReadWrite) -> None:
        self._invokable.invoke(args, stdout, stderr)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Code):
            return NotImplemented
        return self._name == other._name

    def __hash__(self) -> int:
        return hash(self._name)

    def __repr__(self) -> str:
        return f"Code(name={self._name!r}, invokable={self._invokable!r})"
