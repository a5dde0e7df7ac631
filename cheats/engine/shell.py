"""
The cheats shell.

Owns the code registry and the two output channels, and dispatches script
text to registered codes.
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
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Union

from ..config.shell_config import ShellConfig
from ..core.code import Code, Invokable
from ..core.exceptions import CodeAlreadyExists, CodeDoesNotExist
from ..core.stream import ReadWrite, Stream
from ..decorators.code import collect_codes
from ..events.shell_events import (
    InMemoryEventPublisher,
    NoOpEventPublisher,
    ShellEvent,
    ShellEventPublisher,
    ShellEventType,
)
from ..parser.lexer import Lexer, split_invocation
from ..parser.tokens import Comment, Invocation

logger = logging.getLogger(__name__)


class Shell:
    """
    A shell for a game.

    Codes are registered by name and invoked from script text. Each code
    receives the argument remainder and the shell's ``stdout`` and
    ``stderr`` channels, which the host drains after running.

    Usage:
        shell = Shell()
        shell.register("cl_hello", cl_hello)
        shell.run("cl_hello Eray")
        print(drain(shell.stdout))
    """

    def __init__(
        self,
        stdout: Optional[ReadWrite] = None,
        stderr: Optional[ReadWrite] = None,
        config: Optional[ShellConfig] = None,
        events: Optional[ShellEventPublisher] = None,
    ):
        """
        Initialize the shell.

        Args:
            stdout: Standard output channel, a fresh Stream if omitted
            stderr: Error output channel, a fresh Stream if omitted
            config: Shell configuration
            events: Publisher for shell events
        """
        self.config = config or ShellConfig()
        self.stdout: ReadWrite = self._check_channel("stdout", stdout)
        self.stderr: ReadWrite = self._check_channel("stderr", stderr)
        if self.stdout is self.stderr:
            raise ValueError("stdout and stderr must be distinct channels")

        if events is None:
            if self.config.record_events:
                events = InMemoryEventPublisher(max_events=self.config.max_recorded_events)
            else:
                events = NoOpEventPublisher()
        self.events = events

        self._codes: Dict[str, Code] = {}
        logger.debug("Initialized shell")

    @classmethod
    def new_with_streams(
        cls,
        stdout: Optional[ReadWrite] = None,
        stderr: Optional[ReadWrite] = None,
        **kwargs: Any,
    ) -> "Shell":
        """Initialize a shell with custom channels, falling back to Streams."""
        return cls(stdout=stdout, stderr=stderr, **kwargs)

    @staticmethod
    def _check_channel(label: str, channel: Optional[ReadWrite]) -> ReadWrite:
        if channel is None:
            return Stream()
        if not isinstance(channel, ReadWrite):
            raise TypeError(f"{label} must be readable and writable, got {type(channel).__name__}")
        return channel

    def _publish(
        self, event_type: ShellEventType, name: Optional[str], args: Optional[str] = None
    ) -> None:
        self.events.publish(ShellEvent(event_type=event_type, name=name, args=args))

    # Registry

    def register(self, name: str, handler: Union[Invokable, Any]) -> None:
        """
        Register a code.

        Args:
            name: Code name, must not contain whitespace
            handler: An Invokable or a ``func(args, stdout, stderr)`` callable

        Raises:
            CodeAlreadyExists: A code with the same name is already registered
            WhitespaceError: The name contains whitespace
        """
        logger.debug(f"Registering code: {name}")
        if name in self._codes:
            logger.error(f"Code already exists: {name}", extra={"code": name})
            raise CodeAlreadyExists(name)

        code = Code(name, handler)
        self._codes[name] = code
        self._publish(ShellEventType.CODE_REGISTERED, name)

    def unregister(self, name: str) -> None:
        """
        Unregister a code.

        Raises:
            CodeDoesNotExist: No code with that name is registered
        """
        logger.debug(f"Unregistering code: {name}")
        if name not in self._codes:
            logger.error(f"Code does not exist: {name}", extra={"code": name})
            raise CodeDoesNotExist(name)

        del self._codes[name]
        self._publish(ShellEventType.CODE_UNREGISTERED, name)

    def load(self, *targets: Any) -> List[str]:
        """
        Register every ``@code`` declared on the given targets.

        Targets may be decorated functions, classes or instances, or modules
        and objects holding them. Either every declared code is registered or,
        when any name is invalid or already taken (by the shell or by another
        code in the same call), none is.

        Returns:
            Names registered, in registration order

        Raises:
            CodeAlreadyExists: A declared name is taken or declared twice
            WhitespaceError: A declared name contains whitespace
        """
        codes = [
            Code(name, invokable)
            for target in targets
            for name, invokable in collect_codes(target)
        ]

        batch = set()
        for code in codes:
            if code.name in self._codes or code.name in batch:
                logger.error(f"Code already exists: {code.name}", extra={"code": code.name})
                raise CodeAlreadyExists(code.name)
            batch.add(code.name)

        for code in codes:
            self._codes[code.name] = code
            self._publish(ShellEventType.CODE_REGISTERED, code.name)
        logger.debug(f"Loaded {len(codes)} code(s)")
        return [code.name for code in codes]

    def get(self, name: str) -> Optional[Code]:
        """Get a registered code by name."""
        return self._codes.get(name)

    def names(self) -> List[str]:
        """Names of all registered codes, sorted."""
        return sorted(self._codes)

    def __contains__(self, name: object) -> bool:
        return name in self._codes

    def __len__(self) -> int:
        return len(self._codes)

    def filter_names(self, query: str, starts_with: bool) -> Iterator[str]:
        """
        Filter code names against a query.

        Args:
            query: The query to filter code names against
            starts_with: Match names starting with the query; if False, match
                names containing it

        Returns:
            A lazy iterator of names in no particular order
        """
        logger.debug(f"Filtering code names: query={query!r} starts_with={starts_with}")
        if starts_with:
            return (name for name in list(self._codes) if name.startswith(query))
        return (name for name in list(self._codes) if query in name)

    # Dispatch

    def _invoke(self, name: str, args: str) -> bool:
        code = self._codes.get(name)
        if code is None:
            return False

        logger.debug(f"Invoking code: {name}", extra={"code": name, "code_args": args})
        code.invoke(args, self.stdout, self.stderr)
        self._publish(ShellEventType.CODE_INVOKED, name, args)
        return True

    def run(self, script: str) -> None:
        """
        Run a script.

        Every invocation in the script is dispatched in order. Unregistered
        codes are skipped, as are comments and unmatched input.

        Args:
            script: One or many lines of script text
        """
        logger.debug("Running script")
        lexer = Lexer(script, capture_comments=self.config.parser.capture_comments)

        for token in lexer:
            if isinstance(token, Invocation):
                if not self._invoke(token.name, token.args):
                    logger.warning(
                        f"Could not find code: {token.name}",
                        extra={"code": token.name, "code_args": token.args, "span": token.span},
                    )
                    self._publish(ShellEventType.CODE_NOT_FOUND, token.name, token.args)
            elif isinstance(token, Comment):
                self._publish(ShellEventType.COMMENT_SKIPPED, None, token.body)
            else:
                logger.debug(f"Token is not a code: {token!r}")

    def execute(self, line: str) -> None:
        """
        Execute a single command line.

        The line is split once on its first space into a name and arguments.
        Comments are not recognised.

        Raises:
            CodeDoesNotExist: The name is not registered
        """
        name, args = split_invocation(line)
        if not self._invoke(name, args):
            logger.error(f"Code does not exist: {name}", extra={"code": name, "code_args": args})
            self._publish(ShellEventType.CODE_NOT_FOUND, name, args)
            raise CodeDoesNotExist(name)

    def run_file(self, path: Union[str, Path], encoding: Optional[str] = None) -> None:
        """Read a script file and run it."""
        script_path = Path(path)
        logger.debug(f"Running script file: {script_path}")
        self.run(script_path.read_text(encoding=encoding or self.config.encoding))
