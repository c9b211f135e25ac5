"""
MOS 6502 Assembler
==================

This package converts 6502 assembly source into flat binaries.

Main Components
---------------
- **Lexer**: Pulls typed tokens from source text on demand
- **Resolver**: Runs each mnemonic's operand grammar and selects its
  addressing mode
- **Encoder**: Looks up the opcode and serializes operand bytes
  (little-endian)
- **Assembler**: Drives the pipeline per file and writes the output

Assembly Process
----------------
A single pass: for each instruction the resolver pulls tokens from the
lexer, builds an Instruction, and the encoder emits 1-3 bytes. There are
no labels, so nothing needs a second pass. The first error stops the
file.

Example Usage
-------------
>>> from mos6502_asm.assembler import Assembler
>>> asm = Assembler()
>>> encoded = asm.assemble_string("LDA #$10")
>>> asm.get_code()
b'\\xa9\\x10'
"""

from mos6502_asm.assembler.assembler import Assembler, FileResult, assemble, assemble_file
from mos6502_asm.assembler.lexer import Lexer, Token, TokenType, is_hex, parse_hex
from mos6502_asm.assembler.resolver import (
    GRAMMARS,
    Instruction,
    Resolver,
    resolve_source,
)
from mos6502_asm.assembler.encoder import (
    AddressResolver,
    EncodedInstruction,
    Encoder,
    ProgramCounter,
)
from mos6502_asm.cpu import (
    AddressingMode,
    InstructionInfo,
    OPCODE_TABLE,
    MNEMONICS,
    BRANCH_INSTRUCTIONS,
)

__all__ = [
    # Main class and functions
    "Assembler",
    "FileResult",
    "assemble",
    "assemble_file",
    # Lexer
    "Lexer",
    "Token",
    "TokenType",
    "is_hex",
    "parse_hex",
    # Resolver
    "GRAMMARS",
    "Instruction",
    "Resolver",
    "resolve_source",
    # Encoder
    "AddressResolver",
    "EncodedInstruction",
    "Encoder",
    "ProgramCounter",
    # Opcodes
    "AddressingMode",
    "InstructionInfo",
    "OPCODE_TABLE",
    "MNEMONICS",
    "BRANCH_INSTRUCTIONS",
]
