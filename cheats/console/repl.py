"""
Interactive developer console.

Reads lines from the terminal, runs them through a Shell and prints what
the codes wrote to its channels. Lines starting with ``:`` are console
builtins and never reach the shell.

Copyright 2025 Firefly Software Solutions Inc
Licensed under the Apache License, Version 2.0
"""

import logging
import readline
from pathlib import Path
from typing import List, Optional

from .. import __version__
from ..core.exceptions import CheatsError
from ..core.stream import drain
from ..decorators.code import get_code_definition
from ..engine.shell import Shell
from .formatter import ConsoleFormatter

logger = logging.getLogger(__name__)

PROMPT = "] "
STRICT_PROMPT = "]! "

HELP_TEXT = """\
Type a code name followed by its arguments, e.g. [green]cl_hello Eray[/green].
Lines may hold several codes and [dim]// comments[/dim] in script mode.

  [cyan]:help[/cyan]           Show this help
  [cyan]:list[/cyan] \\[query]   List registered codes containing the query
  [cyan]:strict[/cyan]         Toggle strict mode (unknown codes are reported)
  [cyan]:quit[/cyan]           Leave the console"""


class DeveloperConsole:
    """Interactive console over a Shell."""

    def __init__(
        self,
        shell: Optional[Shell] = None,
        formatter: Optional[ConsoleFormatter] = None,
        strict: bool = False,
    ):
        """
        Initialize the console.

        Args:
            shell: Shell to dispatch to, a new one if omitted
            formatter: Output formatter
            strict: Report unknown codes instead of skipping them
        """
        self.shell = shell or Shell()
        self.formatter = formatter or ConsoleFormatter()
        self.strict = strict
        self.running = False
        self._matches: List[str] = []

    @property
    def prompt(self) -> str:
        return STRICT_PROMPT if self.strict else PROMPT

    def handle_line(self, line: str) -> bool:
        """
        Process one input line.

        Returns:
            False when the console should exit, True otherwise
        """
        line = line.strip()
        if not line:
            return True

        if line.startswith(":"):
            return self._handle_builtin(line[1:])

        try:
            if self.strict:
                self.shell.execute(line)
            else:
                self.shell.run(line)
        except CheatsError as e:
            self.formatter.print_error(str(e))
        except Exception as e:
            logger.exception(f"Code raised while running {line!r}")
            self.formatter.print_error(f"{type(e).__name__}: {e}")
        finally:
            self.flush_output()
        return True

    def flush_output(self):
        """Drain both channels and print their content."""
        encoding = self.shell.config.encoding
        self.formatter.print_output(drain(self.shell.stdout, encoding))
        self.formatter.print_error_output(drain(self.shell.stderr, encoding))

    def _handle_builtin(self, command: str) -> bool:
        name, _, arg = command.strip().partition(" ")
        if name in ("quit", "exit", "q"):
            return False
        if name in ("help", "h", "?"):
            self.formatter.print_panel(HELP_TEXT, title="cheats console", style="cyan")
        elif name in ("list", "ls"):
            self.list_codes(arg.strip())
        elif name == "strict":
            self.strict = not self.strict
            self.formatter.print_info(f"Strict mode {'on' if self.strict else 'off'}")
        else:
            self.formatter.print_warning(f"Unknown console command: :{name}")
        return True

    def list_codes(self, query: str = ""):
        """Print registered codes whose name contains the query."""
        names = sorted(self.shell.filter_names(query, starts_with=False))
        if not names:
            self.formatter.print_info("No codes found")
            return

        rows = []
        for name in names:
            invokable = self.shell.get(name).invokable
            # Decorated functions are wrapped, their metadata sits on .func
            definition = get_code_definition(invokable) or get_code_definition(
                getattr(invokable, "func", None)
            )
            rows.append([name, definition.description if definition else ""])
        self.formatter.print_table(f"Codes ({len(rows)})", ["Name", "Description"], rows)

    def complete(self, text: str, state: int) -> Optional[str]:
        """Readline completer over registered code names."""
        if state == 0:
            self._matches = sorted(self.shell.filter_names(text, starts_with=True))
        if state < len(self._matches):
            return self._matches[state]
        return None

    def _setup_readline(self, history_file: Optional[Path]):
        readline.set_completer(self.complete)
        readline.parse_and_bind("tab: complete")
        readline.set_history_length(self.shell.config.history_size)

        if history_file and history_file.exists():
            try:
                readline.read_history_file(str(history_file))
            except OSError as e:
                logger.warning(f"Could not read history file {history_file}: {e}")

    def _save_history(self, history_file: Optional[Path]):
        if not history_file:
            return
        try:
            history_file.parent.mkdir(parents=True, exist_ok=True)
            readline.write_history_file(str(history_file))
        except OSError as e:
            logger.warning(f"Could not write history file {history_file}: {e}")

    def run(self):
        """Run the interactive loop until :quit or end of input."""
        configured = self.shell.config.history_file
        history_file = Path(configured).expanduser() if configured else None
        self._setup_readline(history_file)

        self.formatter.console.print(f"cheats {__version__}", style="cyan bold")
        self.formatter.print_info("Type :help for help, :quit to leave")

        self.running = True
        try:
            while self.running:
                try:
                    line = input(self.prompt)
                except EOFError:
                    break
                except KeyboardInterrupt:
                    self.formatter.console.print()
                    continue
                self.running = self.handle_line(line)
        finally:
            self.running = False
            self._save_history(history_file)
