#!/usr/bin/env python3
"""
cheats - a shell backend for games

cheats helps a game invoke code from a line of text, the way the developer
console of Valve games does::

    // this is a comment
    # this is a comment as well
    cl_hello // without arg
    cl_hello Eray # with arg

Usage:
    from cheats import Shell, drain

    def cl_hello(args, stdout, stderr):
        if not args:
            stderr.write(b"Args are empty.")
            stdout.write(b"Hello, world!")
        else:
            stdout.write(f"Hello, {args}!".encode())

    shell = Shell()
    shell.register("cl_hello", cl_hello)
    shell.run("cl_hello Eray")
    drain(shell.stdout)  # "Hello, Eray!"

Arguments are handed to codes as an unparsed string, empty when none is
given. Unregistered codes in a script are skipped; use ``Shell.execute`` to
run a single line and get ``CodeDoesNotExist`` for unknown codes.

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

__version__ = "0.1.0"
__author__ = "Firefly Software Solutions Inc"
__license__ = "Apache 2.0"

import logging

# Library logging stays silent unless the host configures handlers
logging.getLogger(__name__).addHandler(logging.NullHandler())

# Configuration
from .config.shell_config import ConfigurationManager, LoggingConfig, ParserConfig, ShellConfig

# Core types
from .core.code import Code, FunctionInvokable, Invokable
from .core.exceptions import (
    CheatsError,
    CodeAlreadyExists,
    CodeDoesNotExist,
    CodeError,
    InvalidName,
    NameCollision,
    NotFound,
    ShellError,
    WhitespaceError,
)
from .core.stream import ReadWrite, Stream, drain

# Decorators
from .decorators.code import code

# Shell
from .engine.shell import Shell

# Events
from .events.shell_events import (
    InMemoryEventPublisher,
    NoOpEventPublisher,
    ShellEvent,
    ShellEventPublisher,
    ShellEventType,
)

# Parser
from .parser.lexer import Lexer, tokenize
from .parser.tokens import Comment, Ignorable, Invocation

__all__ = [
    # Version info
    "__version__",
    "__author__",
    "__license__",
    # Shell
    "Shell",
    # Core types
    "Code",
    "Invokable",
    "FunctionInvokable",
    "ReadWrite",
    "Stream",
    "drain",
    # Decorators
    "code",
    # Parser
    "Lexer",
    "tokenize",
    "Invocation",
    "Comment",
    "Ignorable",
    # Errors
    "CheatsError",
    "CodeError",
    "WhitespaceError",
    "InvalidName",
    "ShellError",
    "CodeAlreadyExists",
    "NameCollision",
    "CodeDoesNotExist",
    "NotFound",
    # Events
    "ShellEvent",
    "ShellEventType",
    "ShellEventPublisher",
    "NoOpEventPublisher",
    "InMemoryEventPublisher",
    # Configuration
    "ShellConfig",
    "ParserConfig",
    "LoggingConfig",
    "ConfigurationManager",
]
