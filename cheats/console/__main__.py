"""
Entry point for the cheats developer console.

Usage:
    python -m cheats.console
"""

import sys


def main():
    """Main entry point for the console."""
    from ..cli import main as cli_main

    sys.exit(cli_main(["console", *sys.argv[1:]]))


if __name__ == "__main__":
    main()
