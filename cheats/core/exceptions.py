"""
Exceptions raised by the cheats shell and its codes.
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


class CheatsError(Exception):
    """Base class for every error raised by cheats."""

    def __init__(self, message: str, name: str = ""):
        super().__init__(message)
        self.name = name


class CodeError(CheatsError):
    """Raised when a code cannot be constructed."""


class WhitespaceError(CodeError):
    """Raised when a code name contains whitespace."""

    def __init__(self, name: str):
        super().__init__(
            f"Code could not be initialized due to its name containing whitespace. Name: {name!r}",
            name=name,
        )


class ShellError(CheatsError):
    """Base class for registry and dispatch errors."""


class CodeAlreadyExists(ShellError):
    """Raised when registering a name that is already taken."""

    def __init__(self, name: str):
        super().__init__(f"Code already exists: {name}", name=name)


class CodeDoesNotExist(ShellError):
    """Raised when a name is not registered in the shell."""

    def __init__(self, name: str):
        super().__init__(f"Code does not exist: {name}", name=name)


# Short aliases for the error kinds
InvalidName = WhitespaceError
NameCollision = CodeAlreadyExists
NotFound = CodeDoesNotExist
