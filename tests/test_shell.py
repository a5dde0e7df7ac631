#!/usr/bin/env python3
"""
Unit tests for the Shell class.
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
import types
from collections.abc import Iterator

import pytest

from cheats import (
    CodeAlreadyExists,
    CodeDoesNotExist,
    InMemoryEventPublisher,
    InvalidName,
    NameCollision,
    NoOpEventPublisher,
    NotFound,
    ShellConfig,
    ShellEventType,
    Stream,
    WhitespaceError,
    code,
    drain,
)
from cheats.config import ParserConfig
from cheats.decorators.code import CODE_ATTRIBUTE, CodeDefinition
from cheats.engine import Shell

SCRIPT = """\
// this is a comment
# this is a comment as well
cl_hello // without arg
cl_hello Eray # with arg
"""


def other(args, stdout, stderr):
    stdout.write(b"other")


def boom(args, stdout, stderr):
    raise RuntimeError("code failed")


class TestRegistry:
    """Test code registration."""

    def test_register(self, shell, hello_handler):
        shell.register("sv_hello", hello_handler)

        assert "sv_hello" in shell
        assert len(shell) == 2
        assert shell.names() == ["cl_hello", "sv_hello"]

    def test_register_collision_keeps_first(self, shell):
        """A rejected registration leaves the first code in place."""
        with pytest.raises(CodeAlreadyExists) as exc_info:
            shell.register("cl_hello", other)

        assert exc_info.value.name == "cl_hello"
        assert str(exc_info.value) == "Code already exists: cl_hello"

        shell.run("cl_hello Eray")
        assert drain(shell.stdout) == "Hello, Eray!"

    def test_collision_alias(self, shell):
        assert NameCollision is CodeAlreadyExists
        with pytest.raises(NameCollision):
            shell.register("cl_hello", other)

    @pytest.mark.parametrize("name", ["cl hello", "cl\thello", "cl_hello\n"])
    def test_register_whitespace_name(self, shell, name):
        with pytest.raises(InvalidName):
            shell.register(name, other)

        assert len(shell) == 1
        assert name not in shell

    def test_register_non_callable(self, shell):
        with pytest.raises(TypeError):
            shell.register("sv_foo", "not a handler")

        assert "sv_foo" not in shell

    def test_unregister(self, shell):
        shell.unregister("cl_hello")

        assert "cl_hello" not in shell
        assert len(shell) == 0

    def test_unregister_unknown(self, shell):
        with pytest.raises(CodeDoesNotExist) as exc_info:
            shell.unregister("sv_foo")

        assert str(exc_info.value) == "Code does not exist: sv_foo"
        assert len(shell) == 1

    def test_register_unregister_round_trip(self, shell):
        before = shell.names()

        shell.register("sv_foo", other)
        shell.unregister("sv_foo")

        assert shell.names() == before

    def test_reregister_after_unregister(self, shell):
        shell.unregister("cl_hello")
        shell.register("cl_hello", other)

        shell.run("cl_hello")
        assert drain(shell.stdout) == "other"

    def test_get(self, shell):
        assert shell.get("cl_hello").name == "cl_hello"
        assert shell.get("sv_foo") is None


class TestFilterNames:
    """Test name filtering."""

    @pytest.fixture
    def filter_shell(self):
        shell = Shell()
        for name in ("cl_hello", "sv_foo", "sv_foobar"):
            shell.register(name, other)
        return shell

    def test_starts_with(self, filter_shell):
        assert sorted(filter_shell.filter_names("sv", True)) == ["sv_foo", "sv_foobar"]

    def test_contains(self, filter_shell):
        assert sorted(filter_shell.filter_names("foo", False)) == ["sv_foo", "sv_foobar"]

    def test_no_match(self, filter_shell):
        assert list(filter_shell.filter_names("xyz", False)) == []

    def test_empty_query_matches_everything(self, filter_shell):
        assert sorted(filter_shell.filter_names("", True)) == ["cl_hello", "sv_foo", "sv_foobar"]
        assert sorted(filter_shell.filter_names("", False)) == ["cl_hello", "sv_foo", "sv_foobar"]

    def test_prefix_is_not_contains(self, filter_shell):
        assert list(filter_shell.filter_names("foo", True)) == []

    def test_lazy(self, filter_shell):
        assert isinstance(filter_shell.filter_names("sv", True), Iterator)

    def test_unaffected_by_later_registration(self, filter_shell):
        names = filter_shell.filter_names("sv", True)
        filter_shell.register("sv_late", other)

        assert sorted(names) == ["sv_foo", "sv_foobar"]


class TestRun:
    """Test script mode."""

    def test_hello_world(self, shell):
        shell.run("cl_hello")

        assert drain(shell.stdout) == "Hello, world!"
        assert drain(shell.stderr) == "Args are empty."

    def test_hello_with_args(self, shell):
        shell.run("cl_hello Eray")

        assert drain(shell.stdout) == "Hello, Eray!"
        assert drain(shell.stderr) == ""

    def test_script_accumulates_output(self, shell):
        shell.run(SCRIPT)

        assert drain(shell.stdout) == "Hello, world!Hello, Eray!"
        assert drain(shell.stderr) == "Args are empty."

    def test_multi_word_args(self, shell):
        shell.run("cl_hello Eray Erdin")

        assert drain(shell.stdout) == "Hello, Eray Erdin!"

    def test_unknown_code_skipped(self, shell, caplog):
        with caplog.at_level(logging.WARNING, logger="cheats"):
            shell.run("sv_foo\ncl_hello Eray")

        assert drain(shell.stdout) == "Hello, Eray!"
        assert "Could not find code: sv_foo" in caplog.text

    def test_unmatched_input_skipped(self, shell):
        shell.run("cl_hello; cl_hello Eray")

        assert drain(shell.stdout) == "Hello, world!Hello, Eray!"

    def test_comment_only(self, shell):
        shell.run("# cl_hello Eray")

        assert drain(shell.stdout) == ""
        assert drain(shell.stderr) == ""

    def test_handler_exception_propagates(self, shell):
        """Codes after a failing one are not run."""
        shell.register("boom", boom)

        with pytest.raises(RuntimeError, match="code failed"):
            shell.run("cl_hello Eray\nboom\ncl_hello")

        assert drain(shell.stdout) == "Hello, Eray!"

    def test_stateless_between_runs(self, shell):
        shell.run("cl_hello Eray")
        shell.run("cl_hello Eray")

        assert drain(shell.stdout) == "Hello, Eray!Hello, Eray!"

    def test_run_file(self, shell, tmp_path):
        script = tmp_path / "autoexec.cfg"
        script.write_text(SCRIPT, encoding="utf-8")

        shell.run_file(script)

        assert drain(shell.stdout) == "Hello, world!Hello, Eray!"

    def test_run_file_missing(self, shell, tmp_path):
        with pytest.raises(FileNotFoundError):
            shell.run_file(tmp_path / "missing.cfg")


class TestExecute:
    """Test strict single-line mode."""

    def test_execute(self, shell):
        shell.execute("cl_hello Eray")

        assert drain(shell.stdout) == "Hello, Eray!"

    def test_execute_no_args(self, shell):
        shell.execute("  cl_hello  ")

        assert drain(shell.stdout) == "Hello, world!"
        assert drain(shell.stderr) == "Args are empty."

    def test_execute_unknown(self, shell):
        with pytest.raises(NotFound) as exc_info:
            shell.execute("sv_foo 1")

        assert exc_info.value.name == "sv_foo"

    def test_execute_does_not_strip_comments(self, shell):
        with pytest.raises(CodeDoesNotExist):
            shell.execute("# cl_hello")


class TestChannels:
    """Test output channels."""

    def test_default_streams(self):
        shell = Shell()

        assert isinstance(shell.stdout, Stream)
        assert isinstance(shell.stderr, Stream)
        assert shell.stdout is not shell.stderr

    def test_custom_streams(self, hello_handler):
        stdout, stderr = Stream(), Stream()
        shell = Shell.new_with_streams(stdout=stdout, stderr=stderr)
        shell.register("cl_hello", hello_handler)

        shell.run("cl_hello")

        assert shell.stdout is stdout
        assert stdout.read() == b"Hello, world!"
        assert stderr.read() == b"Args are empty."

    def test_partial_custom_streams(self):
        stdout = Stream()
        shell = Shell.new_with_streams(stdout=stdout)

        assert shell.stdout is stdout
        assert isinstance(shell.stderr, Stream)

    def test_shared_channel_rejected(self):
        stream = Stream()

        with pytest.raises(ValueError, match="distinct"):
            Shell(stdout=stream, stderr=stream)

    def test_non_stream_rejected(self):
        with pytest.raises(TypeError, match="stdout must be readable and writable"):
            Shell(stdout=object())


class TestLoad:
    """Test loading decorated codes."""

    def test_load_module(self):
        @code("cl_hello", "Greet")
        def cl_hello(args, stdout, stderr):
            stdout.write(b"hi")

        @code("sv_foo")
        def sv_foo(args, stdout, stderr):
            stdout.write(b"foo")

        module = types.ModuleType("game_codes")
        module.cl_hello = cl_hello
        module.sv_foo = sv_foo
        module.helper = other

        shell = Shell()
        names = shell.load(module)

        assert sorted(names) == ["cl_hello", "sv_foo"]
        shell.run("cl_hello\nsv_foo")
        assert drain(shell.stdout) == "hifoo"

    def test_load_collision(self, shell):
        @code("cl_hello")
        def cl_hello(args, stdout, stderr):
            pass

        with pytest.raises(CodeAlreadyExists):
            shell.load(cl_hello)

    def test_failed_load_registers_nothing(self, shell):
        """A collision anywhere in the batch leaves the registry as it was."""

        @code("a_new")
        def a_new(args, stdout, stderr):
            pass

        @code("cl_hello")
        def cl_hello(args, stdout, stderr):
            pass

        module = types.ModuleType("game_codes")
        module.a_new = a_new
        module.cl_hello = cl_hello
        before = shell.names()

        with pytest.raises(CodeAlreadyExists) as exc_info:
            shell.load(module)

        assert exc_info.value.name == "cl_hello"
        assert shell.names() == before
        assert "a_new" not in shell

    def test_duplicate_within_batch(self):
        @code("sv_foo")
        def first(args, stdout, stderr):
            pass

        @code("sv_foo")
        def second(args, stdout, stderr):
            pass

        shell = Shell()

        with pytest.raises(CodeAlreadyExists):
            shell.load(first, second)

        assert len(shell) == 0

    def test_invalid_name_registers_nothing(self, shell):
        @code("sv_ok")
        def sv_ok(args, stdout, stderr):
            pass

        def sv_bad(args, stdout, stderr):
            pass

        setattr(sv_bad, CODE_ATTRIBUTE, CodeDefinition(name="sv bad"))

        with pytest.raises(WhitespaceError):
            shell.load(sv_ok, sv_bad)

        assert shell.names() == ["cl_hello"]

    def test_failed_load_publishes_nothing(self, mocker):
        @code("sv_foo")
        def sv_foo(args, stdout, stderr):
            pass

        publisher = mocker.Mock()
        shell = Shell(events=publisher)

        with pytest.raises(CodeAlreadyExists):
            shell.load(sv_foo, sv_foo)

        publisher.publish.assert_not_called()


class TestEvents:
    """Test shell event publishing."""

    def test_no_op_by_default(self):
        assert isinstance(Shell().events, NoOpEventPublisher)

    def test_recorded_events(self, hello_handler):
        shell = Shell(config=ShellConfig(record_events=True))
        shell.register("cl_hello", hello_handler)

        shell.run("cl_hello Eray\nsv_foo")
        shell.unregister("cl_hello")

        assert isinstance(shell.events, InMemoryEventPublisher)
        events = shell.events.get_published_events()
        assert [event.event_type for event in events] == [
            ShellEventType.CODE_REGISTERED,
            ShellEventType.CODE_INVOKED,
            ShellEventType.CODE_NOT_FOUND,
            ShellEventType.CODE_UNREGISTERED,
        ]
        assert events[1].args == "Eray"
        assert events[2].name == "sv_foo"

    def test_recorded_events_bounded(self, hello_handler):
        """Only the most recent events are kept."""
        shell = Shell(config=ShellConfig(record_events=True, max_recorded_events=2))
        shell.register("cl_hello", hello_handler)

        shell.run("cl_hello 1\ncl_hello 2\ncl_hello 3")

        events = shell.events.get_published_events()
        assert [event.args for event in events] == ["2", "3"]

    def test_comment_events(self):
        config = ShellConfig(record_events=True, parser=ParserConfig(capture_comments=True))
        shell = Shell(config=config)

        shell.run("// set up\n# done")

        events = shell.events.get_published_events()
        assert [event.args for event in events] == ["set up", "done"]
        assert all(event.event_type == ShellEventType.COMMENT_SKIPPED for event in events)

    def test_custom_publisher(self, mocker, hello_handler):
        publisher = mocker.Mock()
        shell = Shell(events=publisher)

        shell.register("cl_hello", hello_handler)

        publisher.publish.assert_called_once()
        event = publisher.publish.call_args[0][0]
        assert event.event_type == ShellEventType.CODE_REGISTERED
        assert event.name == "cl_hello"

    def test_invalid_name_not_published(self, mocker):
        publisher = mocker.Mock()
        shell = Shell(events=publisher)

        with pytest.raises(WhitespaceError):
            shell.register("a b", other)

        publisher.publish.assert_not_called()
