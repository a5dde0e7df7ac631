#!/usr/bin/env python3
"""
Tests for the interactive developer console.
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

import io

import pytest
from rich.console import Console

from cheats import ShellConfig, code
from cheats.console import ConsoleFormatter, DeveloperConsole
from cheats.console.repl import PROMPT, STRICT_PROMPT


@code("sv_foo", "Print foo")
def sv_foo(args, stdout, stderr):
    stdout.write(b"foo")


def boom(args, stdout, stderr):
    raise RuntimeError("code failed")


@pytest.fixture
def output():
    return io.StringIO()


@pytest.fixture
def console(shell, output):
    shell.load(sv_foo)
    shell.register("sv_foobar", boom)
    formatter = ConsoleFormatter(Console(file=output, width=100, color_system=None))
    return DeveloperConsole(shell, formatter=formatter)


class TestHandleLine:
    """Test line handling."""

    def test_runs_code(self, console, output):
        assert console.handle_line("cl_hello Eray") is True

        assert "Hello, Eray!" in output.getvalue()

    def test_prints_both_channels(self, console, output):
        console.handle_line("cl_hello")

        text = output.getvalue()
        assert "Hello, world!" in text
        assert "Args are empty." in text

    def test_channels_drained(self, console):
        console.handle_line("cl_hello Eray")

        assert console.shell.stdout.read() == b""
        assert console.shell.stderr.read() == b""

    def test_blank_line(self, console, output):
        assert console.handle_line("   ") is True
        assert output.getvalue() == ""

    def test_unknown_code_skipped(self, console, output):
        console.handle_line("sv_missing")

        assert "Code does not exist" not in output.getvalue()

    def test_handler_exception_reported(self, console, output):
        assert console.handle_line("cl_hello Eray\nsv_foobar") is True

        text = output.getvalue()
        assert "Hello, Eray!" in text
        assert "RuntimeError: code failed" in text


class TestStrictMode:
    """Test strict mode."""

    def test_unknown_code_reported(self, console, output):
        console.strict = True

        console.handle_line("sv_missing 1")

        assert "Code does not exist: sv_missing" in output.getvalue()

    def test_toggle(self, console, output):
        assert console.prompt == PROMPT

        console.handle_line(":strict")

        assert console.strict is True
        assert console.prompt == STRICT_PROMPT
        assert "Strict mode on" in output.getvalue()

        console.handle_line(":strict")
        assert console.strict is False


class TestBuiltins:
    """Test console builtins."""

    @pytest.mark.parametrize("line", [":quit", ":exit", ":q", "  :quit  "])
    def test_quit(self, console, line):
        assert console.handle_line(line) is False

    def test_help(self, console, output):
        console.handle_line(":help")

        assert ":list" in output.getvalue()

    def test_list(self, console, output):
        console.handle_line(":list foo")

        text = output.getvalue()
        assert "sv_foo" in text
        assert "Print foo" in text
        assert "sv_foobar" in text
        assert "cl_hello" not in text

    def test_list_nothing(self, console, output):
        console.handle_line(":ls xyz")

        assert "No codes found" in output.getvalue()

    def test_unknown_builtin(self, console, output):
        assert console.handle_line(":teleport") is True

        assert "Unknown console command: :teleport" in output.getvalue()


class TestCompletion:
    """Test readline completion."""

    def test_complete(self, console):
        assert console.complete("sv", 0) == "sv_foo"
        assert console.complete("sv", 1) == "sv_foobar"
        assert console.complete("sv", 2) is None

    def test_complete_no_match(self, console):
        assert console.complete("xyz", 0) is None


class TestRunLoop:
    """Test the interactive loop."""

    def test_run_until_quit(self, console, output, monkeypatch):
        lines = iter(["cl_hello Eray", ":quit", "cl_hello never"])
        monkeypatch.setattr("builtins.input", lambda prompt: next(lines))

        console.run()

        text = output.getvalue()
        assert "Hello, Eray!" in text
        assert "never" not in text
        assert console.running is False

    def test_run_until_eof(self, console, output, monkeypatch):
        def fake_input(prompt):
            raise EOFError

        monkeypatch.setattr("builtins.input", fake_input)

        console.run()

        assert console.running is False

    def test_history_saved(self, shell, output, monkeypatch, tmp_path):
        history = tmp_path / "history"
        shell.config = ShellConfig(history_file=str(history))
        console = DeveloperConsole(
            shell, formatter=ConsoleFormatter(Console(file=output, color_system=None))
        )
        monkeypatch.setattr("builtins.input", lambda prompt: ":quit")

        console.run()

        assert history.exists()


class TestConsoleFormatter:
    """Test ConsoleFormatter helpers."""

    @pytest.fixture
    def formatter(self, output):
        return ConsoleFormatter(Console(file=output, width=100, color_system=None))

    def test_empty_output_prints_nothing(self, formatter, output):
        formatter.print_output("")
        formatter.print_error_output("")

        assert output.getvalue() == ""

    def test_status_lines(self, formatter, output):
        formatter.print_error("failed")
        formatter.print_warning("careful")
        formatter.print_info("hint")

        lines = output.getvalue().splitlines()
        assert len(lines) == 3
        assert "failed" in lines[0]
        assert "careful" in lines[1]
        assert "hint" in lines[2]

    def test_output_not_parsed_as_markup(self, formatter, output):
        """Code output is printed verbatim, brackets included."""
        formatter.print_output("[bold]sv_cheats[/bold] 1")

        assert "[bold]sv_cheats[/bold] 1" in output.getvalue()

    def test_table(self, formatter, output):
        formatter.print_table("Codes (1)", ["Name", "Description"], [["sv_foo", "Print foo"]])

        text = output.getvalue()
        assert "Codes (1)" in text
        assert "sv_foo" in text
