#!/usr/bin/env python3
"""
Example codes for a game, declared with the @code decorator.

Load them with ``cheats run autoexec.cfg --load examples/game_codes.py``.
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

from cheats import Invokable, code


@code("cl_hello", "Greet the player")
def cl_hello(args, stdout, stderr):
    if not args:
        stderr.write(b"Args are empty.\n")
        stdout.write(b"Hello, world!\n")
    else:
        stdout.write(f"Hello, {args}!\n".encode())


@code("sv_gravity", "Set the world gravity")
class SvGravity(Invokable):
    def __init__(self):
        self.gravity = 800

    def invoke(self, args, stdout, stderr):
        if not args:
            stdout.write(f"sv_gravity is {self.gravity}\n".encode())
            return
        try:
            self.gravity = int(args)
        except ValueError:
            stderr.write(f"sv_gravity: not a number: {args}\n".encode())
            return
        stdout.write(f"sv_gravity set to {self.gravity}\n".encode())


@code("echo", "Print the arguments")
def echo(args, stdout, stderr):
    stdout.write(args.encode() + b"\n")
