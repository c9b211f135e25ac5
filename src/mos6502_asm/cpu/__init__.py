"""
CPU Package
===========

This package contains the MOS 6502 architecture definitions used by the
assembler: addressing modes, the opcode table and lookup helpers.

Modules:
    mos6502: Documented NMOS 6502 instruction set, addressing modes,
             and helper functions for instruction encoding.

Usage:
    from mos6502_asm.cpu import (
        AddressingMode,
        InstructionInfo,
        OPCODE_TABLE,
        get_instruction_info,
    )
"""

# =============================================================================
# Public API Exports
# =============================================================================

from mos6502_asm.cpu.mos6502 import (
    # Core types
    AddressingMode,
    InstructionInfo,
    # Master instruction database
    OPCODE_TABLE,
    # Instruction set reference lists
    MNEMONICS,
    BRANCH_INSTRUCTIONS,
    ACCUMULATOR_INSTRUCTIONS,
    IMPLIED_ONLY_INSTRUCTIONS,
    # Lookup functions
    get_instruction_info,
    get_valid_modes,
    is_valid_instruction,
    is_branch_instruction,
    format_operand,
)

__all__ = [
    # Core types
    "AddressingMode",
    "InstructionInfo",
    # Master instruction database
    "OPCODE_TABLE",
    # Instruction set reference lists
    "MNEMONICS",
    "BRANCH_INSTRUCTIONS",
    "ACCUMULATOR_INSTRUCTIONS",
    "IMPLIED_ONLY_INSTRUCTIONS",
    # Lookup functions
    "get_instruction_info",
    "get_valid_modes",
    "is_valid_instruction",
    "is_branch_instruction",
    "format_operand",
]
