"""
asm2host Command-Line Interface
===============================

- **asm2host**: translate 6502 assembly source into JavaScript or Python

The tool is implemented as a Click-based CLI application with
consistent error reporting and exit codes (see ``cli.errors``).
"""

__all__ = ["asm2host"]
