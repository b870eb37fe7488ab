#!/usr/bin/env python3
"""
Main entry point for Showcase - Host embeddable demo widgets

Usage:
    python main.py              # Opens the TUI by default
    python main.py tui          # Explicitly opens the TUI
    python main.py list         # Any other arguments go to the CLI
"""

import sys


def main():
    """Route to the TUI when no arguments are given, otherwise to the CLI."""
    if len(sys.argv) == 1:
        sys.argv.append("tui")

    from cli.app import main as cli_main
    cli_main()


if __name__ == "__main__":
    main()
