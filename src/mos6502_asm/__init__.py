"""
mos6502-asm - Single-Pass MOS 6502 Assembler
============================================

This package translates MOS 6502 assembly source into raw machine code.
It covers the 56 documented mnemonics in every addressing mode the
processor defines for them.

The interesting part of the job is addressing-mode disambiguation: the
same-looking operand can select different encodings depending on the
mnemonic and on the literal's width (`$3F` is zero-page, `$003F` is
absolute), and parenthesized operands select indexed-indirect or
indirect-indexed addressing by where the register sits.

Main Components
---------------
- **assembler**: Lexer, operand resolver, encoder and file driver
- **cpu**: Addressing modes and the 6502 opcode table
- **config**: Assembler settings (defaults, environment, CLI)
- **cli**: The `m6502asm` command

Quick Start
-----------
    >>> from mos6502_asm import assemble
    >>> assemble("LDA #$01\\nSTA $0200\\n").hex()
    'a9018d0002'

Or from the command line:
    $ m6502asm prog.s            # writes prog.o
    $ m6502asm --origin '$0600' -l prog.s

Source Format
-------------
One instruction per statement, whitespace-insensitive. Literals are `$`
followed by exactly 2 (byte) or 4 (word) hex digits. `;` starts a comment.
There are no labels, directives or macros.
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from mos6502_asm.assembler import (
    Assembler,
    FileResult,
    assemble,
    assemble_file,
    Encoder,
    EncodedInstruction,
    Instruction,
    Lexer,
    Resolver,
)
from mos6502_asm.config import AssemblerConfig
from mos6502_asm.cpu import AddressingMode, OPCODE_TABLE, MNEMONICS
from mos6502_asm.errors import (
    Mos6502Error,
    AssemblerError,
    AssemblySyntaxError,
    UnexpectedTokenError,
    InvalidRegisterError,
    MalformedLiteralError,
    UnknownMnemonicError,
    AddressingModeError,
    UnsupportedAddressingModeError,
    BranchRangeError,
    AssemblerIOError,
)

__all__ = [
    # Version info
    "__version__",
    # Assembler
    "Assembler",
    "FileResult",
    "assemble",
    "assemble_file",
    "Encoder",
    "EncodedInstruction",
    "Instruction",
    "Lexer",
    "Resolver",
    # Configuration
    "AssemblerConfig",
    # CPU
    "AddressingMode",
    "OPCODE_TABLE",
    "MNEMONICS",
    # Exception hierarchy
    "Mos6502Error",
    "AssemblerError",
    "AssemblySyntaxError",
    "UnexpectedTokenError",
    "InvalidRegisterError",
    "MalformedLiteralError",
    "UnknownMnemonicError",
    "AddressingModeError",
    "UnsupportedAddressingModeError",
    "BranchRangeError",
    "AssemblerIOError",
]
