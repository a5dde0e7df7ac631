#!/usr/bin/env python3
"""
Basic shell example: register codes, run a script and read the output.
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

from cheats import CodeDoesNotExist, Shell, ShellConfig, drain

import game_codes

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")


def main():
    shell = Shell(config=ShellConfig(record_events=True))
    print(f"Registered: {shell.load(game_codes)}")

    shell.run_file(Path(__file__).parent / "autoexec.cfg")
    print("stdout:")
    print(drain(shell.stdout))
    print("stderr:")
    print(drain(shell.stderr))

    print(f"Codes starting with 'sv': {sorted(shell.filter_names('sv', True))}")

    try:
        shell.execute("unknown_code")
    except CodeDoesNotExist as e:
        print(f"Strict mode: {e}")

    for event in shell.events.get_published_events():
        print(event.to_dict())


if __name__ == "__main__":
    main()
