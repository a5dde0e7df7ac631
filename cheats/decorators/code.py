"""
Decorators for declaring codes.

A decorated function or Invokable class carries its code name, so a set of
codes can live in a module and be loaded into a shell in one call.
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

import inspect
import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterator, Optional, Tuple

from ..core.code import Invokable, as_invokable, validate_name

logger = logging.getLogger(__name__)

CODE_ATTRIBUTE = "_cheats_code"


@dataclass(frozen=True)
class CodeDefinition:
    """Metadata attached to a decorated code."""

    name: str
    description: str = ""


def code(name: str, description: str = "") -> Callable:
    """
    Decorator to mark a function or an Invokable class as a code.

    Args:
        name: Code name, must not contain whitespace
        description: Short help text

    Returns:
        The decorated object, unchanged apart from its code metadata

    Example:
        @code("cl_hello", "Greets the player")
        def cl_hello(args, stdout, stderr):
            stdout.write(f"Hello, {args or 'world'}!".encode())
    """
    validate_name(name)

    def decorator(target: Any) -> Any:
        if inspect.isclass(target):
            if not issubclass(target, Invokable):
                raise TypeError(f"@code class {target.__name__} must subclass Invokable")
        elif not callable(target):
            raise TypeError(f"@code target must be callable, got {type(target).__name__}")

        doc = (target.__doc__ or "").strip()
        setattr(
            target,
            CODE_ATTRIBUTE,
            CodeDefinition(name=name, description=description or doc.split("\n", 1)[0]),
        )
        logger.debug(f"Declared code: {name}")
        return target

    return decorator


def get_code_definition(target: Any) -> Optional[CodeDefinition]:
    """Return the code metadata of a decorated object, if any."""
    definition = getattr(target, CODE_ATTRIBUTE, None)
    if isinstance(definition, CodeDefinition):
        return definition
    return None


def _as_code(target: Any) -> Optional[Tuple[str, Invokable]]:
    definition = get_code_definition(target)
    if definition is None:
        return None
    if inspect.isclass(target):
        return definition.name, target()
    return definition.name, as_invokable(target)


def collect_codes(target: Any) -> Iterator[Tuple[str, Invokable]]:
    """
    Collect declared codes from a target.

    The target may be a decorated function, class or instance, or any object
    (typically a module) whose attributes are decorated. Classes are
    instantiated without arguments.

    Yields:
        ``(name, invokable)`` pairs
    """
    found = _as_code(target)
    if found is not None:
        yield found
        return

    # Methods of an undecorated class need an instance to bind to
    if inspect.isclass(target):
        return

    for attr_name in dir(target):
        if attr_name.startswith("__"):
            continue
        found = _as_code(getattr(target, attr_name))
        if found is not None:
            yield found
