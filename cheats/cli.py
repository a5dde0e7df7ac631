#!/usr/bin/env python3
"""
Command-line interface for cheats.

Runs and inspects cheats scripts, and starts the interactive console.

Copyright 2025 Firefly Software Solutions Inc
Licensed under the Apache License, Version 2.0
"""

import argparse
import importlib
import importlib.util
import json
import logging
import sys
from pathlib import Path
from types import ModuleType
from typing import List, Optional

from cheats import __version__
from cheats.config.shell_config import ConfigurationManager, ShellConfig
from cheats.core.exceptions import CheatsError
from cheats.core.stream import drain
from cheats.engine.shell import Shell
from cheats.logging import setup_cheats_logging, shutdown_cheats_logging
from cheats.parser.lexer import tokenize

logger = logging.getLogger(__name__)


def load_module(target: str) -> ModuleType:
    """Import a module by dotted name or from a ``.py`` file path."""
    path = Path(target)
    if path.suffix == ".py":
        if not path.exists():
            raise FileNotFoundError(f"Module file not found: {target}")
        spec = importlib.util.spec_from_file_location(path.stem, str(path))
        if spec is None or spec.loader is None:
            raise ImportError(f"Cannot load module from {target}")
        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)
        return module
    return importlib.import_module(target)


def build_shell(config: ShellConfig, modules: List[str]) -> Shell:
    """Create a shell and register the codes declared in the given modules."""
    shell = Shell(config=config)
    for target in modules:
        names = shell.load(load_module(target))
        logger.info(f"Loaded {len(names)} code(s) from {target}")
    return shell


def flush(shell: Shell) -> None:
    """Copy what codes wrote to the process stdout and stderr."""
    encoding = shell.config.encoding
    out = drain(shell.stdout, encoding)
    err = drain(shell.stderr, encoding)
    if out:
        sys.stdout.write(out if out.endswith("\n") else out + "\n")
    if err:
        sys.stderr.write(err if err.endswith("\n") else err + "\n")


def run_script(args, config: ShellConfig) -> int:
    shell = build_shell(config, args.load)
    try:
        if args.strict:
            text = Path(args.script).read_text(encoding=config.encoding)
            for line in text.splitlines():
                if line.strip():
                    shell.execute(line)
        else:
            shell.run_file(args.script)
    finally:
        flush(shell)
    return 0


def tokenize_script(args, config: ShellConfig) -> int:
    text = Path(args.script).read_text(encoding=config.encoding)
    capture = args.capture_comments or config.parser.capture_comments
    tokens = tokenize(text, capture_comments=capture)

    if args.format == "json":
        print(json.dumps([token.as_dict() for token in tokens], indent=2))
    else:
        for token in tokens:
            print(f"{token.span[0]:>5}:{token.span[1]:<5} {token.kind:<10} {token}")
    return 0


def list_codes(args, config: ShellConfig) -> int:
    shell = build_shell(config, args.load)
    query = args.query or ""
    for name in sorted(shell.filter_names(query, starts_with=args.prefix)):
        print(name)
    return 0


def start_console(args, config: ShellConfig) -> int:
    from cheats.console import DeveloperConsole

    shell = build_shell(config, args.load)
    DeveloperConsole(shell, strict=args.strict).run()
    return 0


def create_config(args, config: ShellConfig) -> int:
    ConfigurationManager.create_default_config_file(args.output)
    print(f"Sample configuration written to {args.output}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cheats",
        description="cheats - developer console backend for games",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  cheats run autoexec.cfg --load my_game.codes    # Run a script
  cheats run line.txt --load codes.py --strict    # Fail on unknown codes
  cheats tokenize autoexec.cfg --format json      # Dump tokens
  cheats list sv --prefix --load my_game.codes    # List code names
  cheats console --load my_game.codes             # Interactive console
  cheats init-config cheats.yaml                  # Create sample config
        """,
    )

    parser.add_argument("--version", action="version", version=f"cheats {__version__}")
    parser.add_argument("--config", help="Configuration file (yaml, json or toml)")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Set logging level",
    )
    parser.add_argument(
        "--log-format", choices=["json", "text"], default=None, help="Set log output format"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    def add_load(sub):
        sub.add_argument(
            "--load",
            action="append",
            default=[],
            metavar="MODULE",
            help="Module name or .py file declaring @code codes (repeatable)",
        )

    run_parser = subparsers.add_parser("run", help="Run a script file")
    run_parser.add_argument("script", help="Script file to run")
    run_parser.add_argument(
        "--strict",
        action="store_true",
        help="Execute line by line and fail on unknown codes",
    )
    add_load(run_parser)
    run_parser.set_defaults(handler=run_script)

    tokenize_parser = subparsers.add_parser("tokenize", help="Print the tokens of a script")
    tokenize_parser.add_argument("script", help="Script file to tokenize")
    tokenize_parser.add_argument(
        "--capture-comments", action="store_true", help="Include comment tokens"
    )
    tokenize_parser.add_argument(
        "--format", choices=["text", "json"], default="text", help="Output format"
    )
    tokenize_parser.set_defaults(handler=tokenize_script)

    list_parser = subparsers.add_parser("list", help="List registered code names")
    list_parser.add_argument("query", nargs="?", help="Filter query")
    list_parser.add_argument(
        "--prefix", action="store_true", help="Match names starting with the query"
    )
    add_load(list_parser)
    list_parser.set_defaults(handler=list_codes)

    console_parser = subparsers.add_parser("console", help="Start the interactive console")
    console_parser.add_argument(
        "--strict", action="store_true", help="Report unknown codes instead of skipping them"
    )
    add_load(console_parser)
    console_parser.set_defaults(handler=start_console)

    init_parser = subparsers.add_parser("init-config", help="Create sample configuration file")
    init_parser.add_argument("output", help="Output configuration file path")
    init_parser.set_defaults(handler=create_config)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    try:
        config = ConfigurationManager.load_config(args.config)
    except ValueError as e:
        print(f"❌ Invalid configuration: {e}", file=sys.stderr)
        return 2

    if args.log_level:
        config.logging.level = args.log_level
    if args.log_format:
        config.logging.format = args.log_format
    setup_cheats_logging(config)

    try:
        return args.handler(args, config)
    except CheatsError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1
    except (OSError, ImportError) as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1
    finally:
        shutdown_cheats_logging()


if __name__ == "__main__":
    sys.exit(main())
