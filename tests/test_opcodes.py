# =============================================================================
# test_opcodes.py - Instruction Set Table Tests
# =============================================================================
# Tests for the 6502 opcode table and lookup helpers.
#
# Test coverage includes:
#   - Table size: 56 mnemonics, 151 encodings, unique opcodes
#   - Sizes consistent with addressing modes
#   - Well-known opcodes
#   - Lookup helpers and operand formatting
# =============================================================================

import pytest
from mos6502_asm.cpu import (
    ACCUMULATOR_INSTRUCTIONS,
    BRANCH_INSTRUCTIONS,
    IMPLIED_ONLY_INSTRUCTIONS,
    MNEMONICS,
    OPCODE_TABLE,
    AddressingMode,
    format_operand,
    get_instruction_info,
    get_valid_modes,
    is_branch_instruction,
    is_valid_instruction,
)


# =============================================================================
# Table Shape Tests
# =============================================================================

class TestTableShape:
    """The table covers the documented instruction set exactly."""

    def test_encoding_count(self):
        assert len(OPCODE_TABLE) == 151

    def test_mnemonic_count(self):
        assert len(MNEMONICS) == 56

    def test_opcodes_unique(self):
        opcodes = [info.opcode for info in OPCODE_TABLE.values()]
        assert len(set(opcodes)) == len(opcodes)

    def test_sizes_match_modes(self):
        for (mnemonic, mode), info in OPCODE_TABLE.items():
            assert info.operand_size == mode.operand_size, mnemonic
            assert info.size == 1 + mode.operand_size, mnemonic

    def test_branches_are_relative_only(self):
        assert len(BRANCH_INSTRUCTIONS) == 8
        for mnemonic in BRANCH_INSTRUCTIONS:
            assert get_valid_modes(mnemonic) == [AddressingMode.RELATIVE]

    def test_accumulator_instructions(self):
        for mnemonic in ACCUMULATOR_INSTRUCTIONS:
            assert AddressingMode.ACCUMULATOR in get_valid_modes(mnemonic)

    def test_implied_only_instructions(self):
        assert "RTS" in IMPLIED_ONLY_INSTRUCTIONS
        assert "BRK" in IMPLIED_ONLY_INSTRUCTIONS
        assert "LDA" not in IMPLIED_ONLY_INSTRUCTIONS
        for mnemonic in IMPLIED_ONLY_INSTRUCTIONS:
            assert get_valid_modes(mnemonic) == [AddressingMode.IMPLIED]

    def test_only_jmp_has_indirect(self):
        users = {m for (m, mode) in OPCODE_TABLE if mode is AddressingMode.INDIRECT}
        assert users == {"JMP"}

    def test_zero_page_y_users(self):
        users = {m for (m, mode) in OPCODE_TABLE if mode is AddressingMode.ZERO_PAGE_Y}
        assert users == {"LDX", "STX"}


# =============================================================================
# Known Opcode Tests
# =============================================================================

class TestKnownOpcodes:
    """Spot checks against the MOS programming manual."""

    @pytest.mark.parametrize("mnemonic,mode,opcode", [
        ("LDA", AddressingMode.IMMEDIATE, 0xA9),
        ("LDA", AddressingMode.ZERO_PAGE, 0xA5),
        ("LDA", AddressingMode.ZERO_PAGE_X, 0xB5),
        ("LDA", AddressingMode.ABSOLUTE, 0xAD),
        ("LDA", AddressingMode.ABSOLUTE_X, 0xBD),
        ("LDA", AddressingMode.ABSOLUTE_Y, 0xB9),
        ("LDA", AddressingMode.INDEXED_INDIRECT_X, 0xA1),
        ("LDA", AddressingMode.INDIRECT_INDEXED_Y, 0xB1),
        ("STA", AddressingMode.ABSOLUTE, 0x8D),
        ("JMP", AddressingMode.ABSOLUTE, 0x4C),
        ("JMP", AddressingMode.INDIRECT, 0x6C),
        ("JSR", AddressingMode.ABSOLUTE, 0x20),
        ("BNE", AddressingMode.RELATIVE, 0xD0),
        ("ASL", AddressingMode.ACCUMULATOR, 0x0A),
        ("LDX", AddressingMode.ZERO_PAGE_Y, 0xB6),
        ("NOP", AddressingMode.IMPLIED, 0xEA),
        ("BRK", AddressingMode.IMPLIED, 0x00),
        ("RTS", AddressingMode.IMPLIED, 0x60),
    ])
    def test_opcode(self, mnemonic, mode, opcode):
        info = get_instruction_info(mnemonic, mode)
        assert info is not None
        assert info.opcode == opcode


# =============================================================================
# Lookup Helper Tests
# =============================================================================

class TestLookupHelpers:

    def test_unknown_combination(self):
        assert get_instruction_info("STA", AddressingMode.IMMEDIATE) is None

    def test_lookup_is_case_insensitive(self):
        assert get_instruction_info("lda", AddressingMode.IMMEDIATE).opcode == 0xA9

    def test_valid_instruction(self):
        assert is_valid_instruction("lda")
        assert not is_valid_instruction("LAD")

    def test_branch_instruction(self):
        assert is_branch_instruction("beq")
        assert not is_branch_instruction("JMP")

    def test_unknown_mnemonic_has_no_modes(self):
        assert get_valid_modes("XYZ") == []


# =============================================================================
# Operand Formatting Tests
# =============================================================================

class TestFormatOperand:

    @pytest.mark.parametrize("mode,value,text", [
        (AddressingMode.IMPLIED, None, ""),
        (AddressingMode.ACCUMULATOR, None, "A"),
        (AddressingMode.IMMEDIATE, 0x10, "#$10"),
        (AddressingMode.ZERO_PAGE, 0x3F, "$3F"),
        (AddressingMode.ABSOLUTE, 0x3F, "$003F"),
        (AddressingMode.ZERO_PAGE_Y, 0x44, "$44,Y"),
        (AddressingMode.ABSOLUTE_X, 0x4400, "$4400,X"),
        (AddressingMode.INDEXED_INDIRECT_X, 0x44, "($44,X)"),
        (AddressingMode.INDIRECT_INDEXED_Y, 0x44, "($44),Y"),
        (AddressingMode.INDIRECT, 0x1234, "($1234)"),
        (AddressingMode.RELATIVE, 0xFC, "$FC"),
    ])
    def test_format(self, mode, value, text):
        assert format_operand(mode, value) == text

    def test_mode_names(self):
        assert str(AddressingMode.ZERO_PAGE) == "zero-page"
        assert str(AddressingMode.INDIRECT_INDEXED_Y) == "(indirect),Y"
