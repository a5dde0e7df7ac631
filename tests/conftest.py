"""
Shared test fixtures for the cheats test suite.
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

import pytest

from cheats import Invokable, Shell
from cheats.logging import shutdown_cheats_logging


def cl_hello(args, stdout, stderr):
    """Greet the player, or the world when no name is given."""
    if not args:
        stderr.write(b"Args are empty.")
        stdout.write(b"Hello, world!")
    else:
        stdout.write(f"Hello, {args}!".encode())


class ClHello(Invokable):
    """Invokable flavour of cl_hello."""

    def invoke(self, args, stdout, stderr):
        cl_hello(args, stdout, stderr)


@pytest.fixture
def hello_handler():
    """The reference greeting handler."""
    return cl_hello


@pytest.fixture
def shell():
    """A shell with cl_hello registered."""
    shell = Shell()
    shell.register("cl_hello", ClHello())
    return shell


@pytest.fixture(autouse=True)
def reset_logging():
    """Leave the cheats logger as found after every test."""
    yield
    shutdown_cheats_logging()
