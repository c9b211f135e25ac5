"""
Command-Line Interface
======================

This package provides the command-line tool for the assembler:

- **m6502asm**: assemble one or more 6502 source files to flat binaries

The tool is a Click application with built-in help and consistent exit
codes (see errors.ExitCode).
"""

__all__ = ["m6502asm"]
