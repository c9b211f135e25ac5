"""
MOS 6502 Instruction Set Definition
===================================

This module defines the documented NMOS 6502 instruction set: 56 mnemonics
spread over 151 (mnemonic, addressing mode) encodings. The 6502 is
little-endian, so 16-bit operands are emitted low byte first.

Addressing Modes
----------------
1. **ACCUMULATOR**: Operates on A (e.g., ASL A) - 1 byte
2. **IMPLIED**: No operand (e.g., RTS, INX) - 1 byte
3. **IMMEDIATE**: Literal byte (e.g., LDA #$41) - 2 bytes
4. **ZERO_PAGE**: Address $00-$FF (e.g., LDA $40) - 2 bytes
5. **ZERO_PAGE_X / ZERO_PAGE_Y**: Zero-page address + index, wraps
   within page zero (e.g., LDA $40,X) - 2 bytes
6. **ABSOLUTE**: Full 16-bit address (e.g., LDA $1234) - 3 bytes
7. **ABSOLUTE_X / ABSOLUTE_Y**: 16-bit address + index - 3 bytes
8. **INDEXED_INDIRECT_X**: Pointer at (zp + X) (e.g., LDA ($40,X)) - 2 bytes
9. **INDIRECT_INDEXED_Y**: Pointer at zp, then + Y (e.g., LDA ($40),Y) - 2 bytes
10. **RELATIVE**: Signed branch displacement (e.g., BNE) - 2 bytes
11. **INDIRECT**: JMP through a 16-bit pointer (JMP ($1234)) - 3 bytes

Cycle counts are the base counts; page-crossing and taken-branch
penalties are not modelled.

Reference
---------
- MOS MCS6500 Microcomputer Family Programming Manual (1976)
- http://www.6502.org/tutorials/6502opcodes.html
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional


# =============================================================================
# Addressing Mode Enumeration
# =============================================================================

class AddressingMode(Enum):
    """
    6502 addressing modes.

    Each mode fixes the operand width, and with it the instruction size.
    Legality is per mnemonic; see OPCODE_TABLE.
    """
    ACCUMULATOR = auto()         # ASL A
    IMPLIED = auto()             # RTS
    IMMEDIATE = auto()           # #$nn
    ABSOLUTE = auto()            # $nnnn
    ZERO_PAGE = auto()           # $nn
    RELATIVE = auto()            # branch displacement
    ABSOLUTE_X = auto()          # $nnnn,X
    ABSOLUTE_Y = auto()          # $nnnn,Y
    ZERO_PAGE_X = auto()         # $nn,X
    ZERO_PAGE_Y = auto()         # $nn,Y
    INDEXED_INDIRECT_X = auto()  # ($nn,X)
    INDIRECT_INDEXED_Y = auto()  # ($nn),Y
    INDIRECT = auto()            # ($nnnn), JMP only

    def __str__(self) -> str:
        """Return human-readable name for error messages."""
        return _MODE_NAMES[self]

    @property
    def operand_size(self) -> int:
        """Operand width in bytes (0, 1 or 2)."""
        return _OPERAND_SIZES[self]


_MODE_NAMES = {
    AddressingMode.ACCUMULATOR: "accumulator",
    AddressingMode.IMPLIED: "implied",
    AddressingMode.IMMEDIATE: "immediate",
    AddressingMode.ABSOLUTE: "absolute",
    AddressingMode.ZERO_PAGE: "zero-page",
    AddressingMode.RELATIVE: "relative",
    AddressingMode.ABSOLUTE_X: "absolute,X",
    AddressingMode.ABSOLUTE_Y: "absolute,Y",
    AddressingMode.ZERO_PAGE_X: "zero-page,X",
    AddressingMode.ZERO_PAGE_Y: "zero-page,Y",
    AddressingMode.INDEXED_INDIRECT_X: "(indirect,X)",
    AddressingMode.INDIRECT_INDEXED_Y: "(indirect),Y",
    AddressingMode.INDIRECT: "indirect",
}

_OPERAND_SIZES = {
    AddressingMode.ACCUMULATOR: 0,
    AddressingMode.IMPLIED: 0,
    AddressingMode.IMMEDIATE: 1,
    AddressingMode.ABSOLUTE: 2,
    AddressingMode.ZERO_PAGE: 1,
    AddressingMode.RELATIVE: 1,
    AddressingMode.ABSOLUTE_X: 2,
    AddressingMode.ABSOLUTE_Y: 2,
    AddressingMode.ZERO_PAGE_X: 1,
    AddressingMode.ZERO_PAGE_Y: 1,
    AddressingMode.INDEXED_INDIRECT_X: 1,
    AddressingMode.INDIRECT_INDEXED_Y: 1,
    AddressingMode.INDIRECT: 2,
}

# Operand text templates used by listings; {0} is the operand value
_OPERAND_FORMATS = {
    AddressingMode.ACCUMULATOR: "A",
    AddressingMode.IMPLIED: "",
    AddressingMode.IMMEDIATE: "#${0:02X}",
    AddressingMode.ABSOLUTE: "${0:04X}",
    AddressingMode.ZERO_PAGE: "${0:02X}",
    AddressingMode.RELATIVE: "${0:02X}",
    AddressingMode.ABSOLUTE_X: "${0:04X},X",
    AddressingMode.ABSOLUTE_Y: "${0:04X},Y",
    AddressingMode.ZERO_PAGE_X: "${0:02X},X",
    AddressingMode.ZERO_PAGE_Y: "${0:02X},Y",
    AddressingMode.INDEXED_INDIRECT_X: "(${0:02X},X)",
    AddressingMode.INDIRECT_INDEXED_Y: "(${0:02X}),Y",
    AddressingMode.INDIRECT: "(${0:04X})",
}


# =============================================================================
# Instruction Information
# =============================================================================

@dataclass(frozen=True)
class InstructionInfo:
    """
    Information about a specific instruction encoding.

    Attributes:
        opcode: The opcode byte
        size: Total instruction size in bytes (including operand)
        cycles: Base number of CPU cycles
        operand_size: Size of operand in bytes (0, 1, or 2)
    """
    opcode: int
    size: int
    cycles: int
    operand_size: int

    def __repr__(self) -> str:
        return f"InstructionInfo(opcode=${self.opcode:02X}, size={self.size}, cycles={self.cycles})"


# =============================================================================
# Opcode Table
# =============================================================================
# Key: (mnemonic, addressing_mode)
# Value: InstructionInfo(opcode, total_size, cycles, operand_size)
# =============================================================================

OPCODE_TABLE: dict[tuple[str, AddressingMode], InstructionInfo] = {
    # =========================================================================
    # LOAD / STORE
    # =========================================================================

    # LDA - Load Accumulator
    ("LDA", AddressingMode.IMMEDIATE): InstructionInfo(0xA9, 2, 2, 1),
    ("LDA", AddressingMode.ZERO_PAGE): InstructionInfo(0xA5, 2, 3, 1),
    ("LDA", AddressingMode.ZERO_PAGE_X): InstructionInfo(0xB5, 2, 4, 1),
    ("LDA", AddressingMode.ABSOLUTE): InstructionInfo(0xAD, 3, 4, 2),
    ("LDA", AddressingMode.ABSOLUTE_X): InstructionInfo(0xBD, 3, 4, 2),
    ("LDA", AddressingMode.ABSOLUTE_Y): InstructionInfo(0xB9, 3, 4, 2),
    ("LDA", AddressingMode.INDEXED_INDIRECT_X): InstructionInfo(0xA1, 2, 6, 1),
    ("LDA", AddressingMode.INDIRECT_INDEXED_Y): InstructionInfo(0xB1, 2, 5, 1),

    # LDX - Load X (indexes with Y)
    ("LDX", AddressingMode.IMMEDIATE): InstructionInfo(0xA2, 2, 2, 1),
    ("LDX", AddressingMode.ZERO_PAGE): InstructionInfo(0xA6, 2, 3, 1),
    ("LDX", AddressingMode.ZERO_PAGE_Y): InstructionInfo(0xB6, 2, 4, 1),
    ("LDX", AddressingMode.ABSOLUTE): InstructionInfo(0xAE, 3, 4, 2),
    ("LDX", AddressingMode.ABSOLUTE_Y): InstructionInfo(0xBE, 3, 4, 2),

    # LDY - Load Y (indexes with X)
    ("LDY", AddressingMode.IMMEDIATE): InstructionInfo(0xA0, 2, 2, 1),
    ("LDY", AddressingMode.ZERO_PAGE): InstructionInfo(0xA4, 2, 3, 1),
    ("LDY", AddressingMode.ZERO_PAGE_X): InstructionInfo(0xB4, 2, 4, 1),
    ("LDY", AddressingMode.ABSOLUTE): InstructionInfo(0xAC, 3, 4, 2),
    ("LDY", AddressingMode.ABSOLUTE_X): InstructionInfo(0xBC, 3, 4, 2),

    # STA - Store Accumulator (no immediate)
    ("STA", AddressingMode.ZERO_PAGE): InstructionInfo(0x85, 2, 3, 1),
    ("STA", AddressingMode.ZERO_PAGE_X): InstructionInfo(0x95, 2, 4, 1),
    ("STA", AddressingMode.ABSOLUTE): InstructionInfo(0x8D, 3, 4, 2),
    ("STA", AddressingMode.ABSOLUTE_X): InstructionInfo(0x9D, 3, 5, 2),
    ("STA", AddressingMode.ABSOLUTE_Y): InstructionInfo(0x99, 3, 5, 2),
    ("STA", AddressingMode.INDEXED_INDIRECT_X): InstructionInfo(0x81, 2, 6, 1),
    ("STA", AddressingMode.INDIRECT_INDEXED_Y): InstructionInfo(0x91, 2, 6, 1),

    # STX - Store X
    ("STX", AddressingMode.ZERO_PAGE): InstructionInfo(0x86, 2, 3, 1),
    ("STX", AddressingMode.ZERO_PAGE_Y): InstructionInfo(0x96, 2, 4, 1),
    ("STX", AddressingMode.ABSOLUTE): InstructionInfo(0x8E, 3, 4, 2),

    # STY - Store Y
    ("STY", AddressingMode.ZERO_PAGE): InstructionInfo(0x84, 2, 3, 1),
    ("STY", AddressingMode.ZERO_PAGE_X): InstructionInfo(0x94, 2, 4, 1),
    ("STY", AddressingMode.ABSOLUTE): InstructionInfo(0x8C, 3, 4, 2),

    # =========================================================================
    # ARITHMETIC / LOGIC (full eight-mode group)
    # =========================================================================

    # ADC - Add with Carry
    ("ADC", AddressingMode.IMMEDIATE): InstructionInfo(0x69, 2, 2, 1),
    ("ADC", AddressingMode.ZERO_PAGE): InstructionInfo(0x65, 2, 3, 1),
    ("ADC", AddressingMode.ZERO_PAGE_X): InstructionInfo(0x75, 2, 4, 1),
    ("ADC", AddressingMode.ABSOLUTE): InstructionInfo(0x6D, 3, 4, 2),
    ("ADC", AddressingMode.ABSOLUTE_X): InstructionInfo(0x7D, 3, 4, 2),
    ("ADC", AddressingMode.ABSOLUTE_Y): InstructionInfo(0x79, 3, 4, 2),
    ("ADC", AddressingMode.INDEXED_INDIRECT_X): InstructionInfo(0x61, 2, 6, 1),
    ("ADC", AddressingMode.INDIRECT_INDEXED_Y): InstructionInfo(0x71, 2, 5, 1),

    # SBC - Subtract with Carry
    ("SBC", AddressingMode.IMMEDIATE): InstructionInfo(0xE9, 2, 2, 1),
    ("SBC", AddressingMode.ZERO_PAGE): InstructionInfo(0xE5, 2, 3, 1),
    ("SBC", AddressingMode.ZERO_PAGE_X): InstructionInfo(0xF5, 2, 4, 1),
    ("SBC", AddressingMode.ABSOLUTE): InstructionInfo(0xED, 3, 4, 2),
    ("SBC", AddressingMode.ABSOLUTE_X): InstructionInfo(0xFD, 3, 4, 2),
    ("SBC", AddressingMode.ABSOLUTE_Y): InstructionInfo(0xF9, 3, 4, 2),
    ("SBC", AddressingMode.INDEXED_INDIRECT_X): InstructionInfo(0xE1, 2, 6, 1),
    ("SBC", AddressingMode.INDIRECT_INDEXED_Y): InstructionInfo(0xF1, 2, 5, 1),

    # AND - Logical AND
    ("AND", AddressingMode.IMMEDIATE): InstructionInfo(0x29, 2, 2, 1),
    ("AND", AddressingMode.ZERO_PAGE): InstructionInfo(0x25, 2, 3, 1),
    ("AND", AddressingMode.ZERO_PAGE_X): InstructionInfo(0x35, 2, 4, 1),
    ("AND", AddressingMode.ABSOLUTE): InstructionInfo(0x2D, 3, 4, 2),
    ("AND", AddressingMode.ABSOLUTE_X): InstructionInfo(0x3D, 3, 4, 2),
    ("AND", AddressingMode.ABSOLUTE_Y): InstructionInfo(0x39, 3, 4, 2),
    ("AND", AddressingMode.INDEXED_INDIRECT_X): InstructionInfo(0x21, 2, 6, 1),
    ("AND", AddressingMode.INDIRECT_INDEXED_Y): InstructionInfo(0x31, 2, 5, 1),

    # ORA - Logical OR
    ("ORA", AddressingMode.IMMEDIATE): InstructionInfo(0x09, 2, 2, 1),
    ("ORA", AddressingMode.ZERO_PAGE): InstructionInfo(0x05, 2, 3, 1),
    ("ORA", AddressingMode.ZERO_PAGE_X): InstructionInfo(0x15, 2, 4, 1),
    ("ORA", AddressingMode.ABSOLUTE): InstructionInfo(0x0D, 3, 4, 2),
    ("ORA", AddressingMode.ABSOLUTE_X): InstructionInfo(0x1D, 3, 4, 2),
    ("ORA", AddressingMode.ABSOLUTE_Y): InstructionInfo(0x19, 3, 4, 2),
    ("ORA", AddressingMode.INDEXED_INDIRECT_X): InstructionInfo(0x01, 2, 6, 1),
    ("ORA", AddressingMode.INDIRECT_INDEXED_Y): InstructionInfo(0x11, 2, 5, 1),

    # EOR - Exclusive OR
    ("EOR", AddressingMode.IMMEDIATE): InstructionInfo(0x49, 2, 2, 1),
    ("EOR", AddressingMode.ZERO_PAGE): InstructionInfo(0x45, 2, 3, 1),
    ("EOR", AddressingMode.ZERO_PAGE_X): InstructionInfo(0x55, 2, 4, 1),
    ("EOR", AddressingMode.ABSOLUTE): InstructionInfo(0x4D, 3, 4, 2),
    ("EOR", AddressingMode.ABSOLUTE_X): InstructionInfo(0x5D, 3, 4, 2),
    ("EOR", AddressingMode.ABSOLUTE_Y): InstructionInfo(0x59, 3, 4, 2),
    ("EOR", AddressingMode.INDEXED_INDIRECT_X): InstructionInfo(0x41, 2, 6, 1),
    ("EOR", AddressingMode.INDIRECT_INDEXED_Y): InstructionInfo(0x51, 2, 5, 1),

    # CMP - Compare Accumulator
    ("CMP", AddressingMode.IMMEDIATE): InstructionInfo(0xC9, 2, 2, 1),
    ("CMP", AddressingMode.ZERO_PAGE): InstructionInfo(0xC5, 2, 3, 1),
    ("CMP", AddressingMode.ZERO_PAGE_X): InstructionInfo(0xD5, 2, 4, 1),
    ("CMP", AddressingMode.ABSOLUTE): InstructionInfo(0xCD, 3, 4, 2),
    ("CMP", AddressingMode.ABSOLUTE_X): InstructionInfo(0xDD, 3, 4, 2),
    ("CMP", AddressingMode.ABSOLUTE_Y): InstructionInfo(0xD9, 3, 4, 2),
    ("CMP", AddressingMode.INDEXED_INDIRECT_X): InstructionInfo(0xC1, 2, 6, 1),
    ("CMP", AddressingMode.INDIRECT_INDEXED_Y): InstructionInfo(0xD1, 2, 5, 1),

    # CPX / CPY - Compare Index Registers
    ("CPX", AddressingMode.IMMEDIATE): InstructionInfo(0xE0, 2, 2, 1),
    ("CPX", AddressingMode.ZERO_PAGE): InstructionInfo(0xE4, 2, 3, 1),
    ("CPX", AddressingMode.ABSOLUTE): InstructionInfo(0xEC, 3, 4, 2),
    ("CPY", AddressingMode.IMMEDIATE): InstructionInfo(0xC0, 2, 2, 1),
    ("CPY", AddressingMode.ZERO_PAGE): InstructionInfo(0xC4, 2, 3, 1),
    ("CPY", AddressingMode.ABSOLUTE): InstructionInfo(0xCC, 3, 4, 2),

    # BIT - Test Bits
    ("BIT", AddressingMode.ZERO_PAGE): InstructionInfo(0x24, 2, 3, 1),
    ("BIT", AddressingMode.ABSOLUTE): InstructionInfo(0x2C, 3, 4, 2),

    # =========================================================================
    # READ-MODIFY-WRITE
    # =========================================================================

    # ASL - Arithmetic Shift Left
    ("ASL", AddressingMode.ACCUMULATOR): InstructionInfo(0x0A, 1, 2, 0),
    ("ASL", AddressingMode.ZERO_PAGE): InstructionInfo(0x06, 2, 5, 1),
    ("ASL", AddressingMode.ZERO_PAGE_X): InstructionInfo(0x16, 2, 6, 1),
    ("ASL", AddressingMode.ABSOLUTE): InstructionInfo(0x0E, 3, 6, 2),
    ("ASL", AddressingMode.ABSOLUTE_X): InstructionInfo(0x1E, 3, 7, 2),

    # LSR - Logical Shift Right
    ("LSR", AddressingMode.ACCUMULATOR): InstructionInfo(0x4A, 1, 2, 0),
    ("LSR", AddressingMode.ZERO_PAGE): InstructionInfo(0x46, 2, 5, 1),
    ("LSR", AddressingMode.ZERO_PAGE_X): InstructionInfo(0x56, 2, 6, 1),
    ("LSR", AddressingMode.ABSOLUTE): InstructionInfo(0x4E, 3, 6, 2),
    ("LSR", AddressingMode.ABSOLUTE_X): InstructionInfo(0x5E, 3, 7, 2),

    # ROL - Rotate Left
    ("ROL", AddressingMode.ACCUMULATOR): InstructionInfo(0x2A, 1, 2, 0),
    ("ROL", AddressingMode.ZERO_PAGE): InstructionInfo(0x26, 2, 5, 1),
    ("ROL", AddressingMode.ZERO_PAGE_X): InstructionInfo(0x36, 2, 6, 1),
    ("ROL", AddressingMode.ABSOLUTE): InstructionInfo(0x2E, 3, 6, 2),
    ("ROL", AddressingMode.ABSOLUTE_X): InstructionInfo(0x3E, 3, 7, 2),

    # ROR - Rotate Right
    ("ROR", AddressingMode.ACCUMULATOR): InstructionInfo(0x6A, 1, 2, 0),
    ("ROR", AddressingMode.ZERO_PAGE): InstructionInfo(0x66, 2, 5, 1),
    ("ROR", AddressingMode.ZERO_PAGE_X): InstructionInfo(0x76, 2, 6, 1),
    ("ROR", AddressingMode.ABSOLUTE): InstructionInfo(0x6E, 3, 6, 2),
    ("ROR", AddressingMode.ABSOLUTE_X): InstructionInfo(0x7E, 3, 7, 2),

    # INC / DEC - Memory increment and decrement
    ("INC", AddressingMode.ZERO_PAGE): InstructionInfo(0xE6, 2, 5, 1),
    ("INC", AddressingMode.ZERO_PAGE_X): InstructionInfo(0xF6, 2, 6, 1),
    ("INC", AddressingMode.ABSOLUTE): InstructionInfo(0xEE, 3, 6, 2),
    ("INC", AddressingMode.ABSOLUTE_X): InstructionInfo(0xFE, 3, 7, 2),
    ("DEC", AddressingMode.ZERO_PAGE): InstructionInfo(0xC6, 2, 5, 1),
    ("DEC", AddressingMode.ZERO_PAGE_X): InstructionInfo(0xD6, 2, 6, 1),
    ("DEC", AddressingMode.ABSOLUTE): InstructionInfo(0xCE, 3, 6, 2),
    ("DEC", AddressingMode.ABSOLUTE_X): InstructionInfo(0xDE, 3, 7, 2),

    # =========================================================================
    # JUMPS
    # =========================================================================

    ("JMP", AddressingMode.ABSOLUTE): InstructionInfo(0x4C, 3, 3, 2),
    ("JMP", AddressingMode.INDIRECT): InstructionInfo(0x6C, 3, 5, 2),
    ("JSR", AddressingMode.ABSOLUTE): InstructionInfo(0x20, 3, 6, 2),

    # =========================================================================
    # BRANCH INSTRUCTIONS (relative addressing)
    # Offset is relative to address of byte AFTER the branch instruction
    # =========================================================================

    ("BPL", AddressingMode.RELATIVE): InstructionInfo(0x10, 2, 2, 1),   # Branch if plus (N=0)
    ("BMI", AddressingMode.RELATIVE): InstructionInfo(0x30, 2, 2, 1),   # Branch if minus (N=1)
    ("BVC", AddressingMode.RELATIVE): InstructionInfo(0x50, 2, 2, 1),   # Branch if overflow clear
    ("BVS", AddressingMode.RELATIVE): InstructionInfo(0x70, 2, 2, 1),   # Branch if overflow set
    ("BCC", AddressingMode.RELATIVE): InstructionInfo(0x90, 2, 2, 1),   # Branch if carry clear
    ("BCS", AddressingMode.RELATIVE): InstructionInfo(0xB0, 2, 2, 1),   # Branch if carry set
    ("BNE", AddressingMode.RELATIVE): InstructionInfo(0xD0, 2, 2, 1),   # Branch if not equal (Z=0)
    ("BEQ", AddressingMode.RELATIVE): InstructionInfo(0xF0, 2, 2, 1),   # Branch if equal (Z=1)

    # =========================================================================
    # IMPLIED INSTRUCTIONS (no operand)
    # =========================================================================

    # Control
    ("BRK", AddressingMode.IMPLIED): InstructionInfo(0x00, 1, 7, 0),
    ("NOP", AddressingMode.IMPLIED): InstructionInfo(0xEA, 1, 2, 0),
    ("RTI", AddressingMode.IMPLIED): InstructionInfo(0x40, 1, 6, 0),
    ("RTS", AddressingMode.IMPLIED): InstructionInfo(0x60, 1, 6, 0),

    # Flags
    ("CLC", AddressingMode.IMPLIED): InstructionInfo(0x18, 1, 2, 0),
    ("SEC", AddressingMode.IMPLIED): InstructionInfo(0x38, 1, 2, 0),
    ("CLI", AddressingMode.IMPLIED): InstructionInfo(0x58, 1, 2, 0),
    ("SEI", AddressingMode.IMPLIED): InstructionInfo(0x78, 1, 2, 0),
    ("CLV", AddressingMode.IMPLIED): InstructionInfo(0xB8, 1, 2, 0),
    ("CLD", AddressingMode.IMPLIED): InstructionInfo(0xD8, 1, 2, 0),
    ("SED", AddressingMode.IMPLIED): InstructionInfo(0xF8, 1, 2, 0),

    # Register transfers and index arithmetic
    ("TAX", AddressingMode.IMPLIED): InstructionInfo(0xAA, 1, 2, 0),
    ("TXA", AddressingMode.IMPLIED): InstructionInfo(0x8A, 1, 2, 0),
    ("TAY", AddressingMode.IMPLIED): InstructionInfo(0xA8, 1, 2, 0),
    ("TYA", AddressingMode.IMPLIED): InstructionInfo(0x98, 1, 2, 0),
    ("TSX", AddressingMode.IMPLIED): InstructionInfo(0xBA, 1, 2, 0),
    ("TXS", AddressingMode.IMPLIED): InstructionInfo(0x9A, 1, 2, 0),
    ("INX", AddressingMode.IMPLIED): InstructionInfo(0xE8, 1, 2, 0),
    ("DEX", AddressingMode.IMPLIED): InstructionInfo(0xCA, 1, 2, 0),
    ("INY", AddressingMode.IMPLIED): InstructionInfo(0xC8, 1, 2, 0),
    ("DEY", AddressingMode.IMPLIED): InstructionInfo(0x88, 1, 2, 0),

    # Stack
    ("PHA", AddressingMode.IMPLIED): InstructionInfo(0x48, 1, 3, 0),
    ("PHP", AddressingMode.IMPLIED): InstructionInfo(0x08, 1, 3, 0),
    ("PLA", AddressingMode.IMPLIED): InstructionInfo(0x68, 1, 4, 0),
    ("PLP", AddressingMode.IMPLIED): InstructionInfo(0x28, 1, 4, 0),
}


# =============================================================================
# Instruction Set Reference Lists
# =============================================================================

# Set of all valid mnemonics
MNEMONICS: frozenset[str] = frozenset({
    mnemonic for mnemonic, _ in OPCODE_TABLE.keys()
})

# Branch instructions that use relative addressing
BRANCH_INSTRUCTIONS: frozenset[str] = frozenset({
    "BPL", "BMI", "BVC", "BVS", "BCC", "BCS", "BNE", "BEQ",
})

# Shift/rotate instructions that take A or a memory operand
ACCUMULATOR_INSTRUCTIONS: frozenset[str] = frozenset({
    "ASL", "LSR", "ROL", "ROR",
})

# Instructions that only have implied mode
IMPLIED_ONLY_INSTRUCTIONS: frozenset[str] = frozenset({
    mnemonic for (mnemonic, mode) in OPCODE_TABLE
    if mode is AddressingMode.IMPLIED
})


# =============================================================================
# Lookup Functions
# =============================================================================

def get_instruction_info(
    mnemonic: str,
    mode: AddressingMode
) -> Optional[InstructionInfo]:
    """
    Look up instruction information by mnemonic and addressing mode.

    Returns:
        InstructionInfo if found, None if the combination is invalid
    """
    return OPCODE_TABLE.get((mnemonic.upper(), mode))


def get_valid_modes(mnemonic: str) -> list[AddressingMode]:
    """Get all valid addressing modes for an instruction, in table order."""
    mnemonic = mnemonic.upper()
    return [
        mode for (m, mode) in OPCODE_TABLE.keys()
        if m == mnemonic
    ]


def is_valid_instruction(mnemonic: str) -> bool:
    """Check if a mnemonic is a documented 6502 instruction."""
    return mnemonic.upper() in MNEMONICS


def is_branch_instruction(mnemonic: str) -> bool:
    """Check if an instruction is a branch (uses relative addressing)."""
    return mnemonic.upper() in BRANCH_INSTRUCTIONS


def format_operand(mode: AddressingMode, value: Optional[int]) -> str:
    """
    Render an operand in canonical source syntax.

    >>> format_operand(AddressingMode.INDIRECT_INDEXED_Y, 0x44)
    '($44),Y'
    """
    template = _OPERAND_FORMATS[mode]
    if mode.operand_size == 0:
        return template
    return template.format(value or 0)
