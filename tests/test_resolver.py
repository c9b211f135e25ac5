# =============================================================================
# test_resolver.py - Operand Resolver Tests
# =============================================================================
# Tests for addressing-mode selection and grammar errors.
#
# Test coverage includes:
#   - Every operand shape and the mode it selects
#   - Width-driven zero-page versus absolute selection
#   - Register checks in indexed and indirect positions
#   - Accumulator, implied and branch grammars
#   - Error types, locations and hints
# =============================================================================

import pytest
from mos6502_asm.assembler.lexer import Lexer
from mos6502_asm.assembler.resolver import GRAMMARS, Instruction, Resolver, resolve_source
from mos6502_asm.cpu import MNEMONICS, AddressingMode
from mos6502_asm.errors import (
    AssemblySyntaxError,
    InvalidRegisterError,
    MalformedLiteralError,
    UnexpectedTokenError,
    UnknownMnemonicError,
    UnsupportedAddressingModeError,
)


# =============================================================================
# Helper Function
# =============================================================================

def resolve_one(source: str) -> Instruction:
    """Resolve a source string that holds exactly one instruction."""
    instructions = resolve_source(source, "<test>")
    assert len(instructions) == 1
    return instructions[0]


# =============================================================================
# Operand Shape Tests
# =============================================================================

class TestOperandShapes:
    """Each operand shape selects one addressing mode."""

    @pytest.mark.parametrize("source,mode,operand", [
        ("LDA #$10", AddressingMode.IMMEDIATE, 0x10),
        ("LDA $3F", AddressingMode.ZERO_PAGE, 0x3F),
        ("LDA $003F", AddressingMode.ABSOLUTE, 0x3F),
        ("LDA $44,X", AddressingMode.ZERO_PAGE_X, 0x44),
        ("LDX $44,Y", AddressingMode.ZERO_PAGE_Y, 0x44),
        ("LDA $4400,X", AddressingMode.ABSOLUTE_X, 0x4400),
        ("LDA $4400,Y", AddressingMode.ABSOLUTE_Y, 0x4400),
        ("LDA ($44,X)", AddressingMode.INDEXED_INDIRECT_X, 0x44),
        ("LDA ($44),Y", AddressingMode.INDIRECT_INDEXED_Y, 0x44),
        ("JMP ($1234)", AddressingMode.INDIRECT, 0x1234),
        ("STX $44,Y", AddressingMode.ZERO_PAGE_Y, 0x44),
    ])
    def test_shape(self, source, mode, operand):
        instr = resolve_one(source)
        assert instr.mode == mode
        assert instr.operand == operand

    def test_width_decides_not_value(self):
        """A word literal below $0100 is still absolute."""
        zp = resolve_one("STA $00")
        abs_ = resolve_one("STA $0000")
        assert zp.mode == AddressingMode.ZERO_PAGE
        assert abs_.mode == AddressingMode.ABSOLUTE
        assert zp.size == 2
        assert abs_.size == 3

    def test_whitespace_insensitive(self):
        instr = resolve_one("  LDA   (  $44 ) ,  Y  ")
        assert instr.mode == AddressingMode.INDIRECT_INDEXED_Y

    def test_lowercase_source(self):
        instr = resolve_one("lda ($44),y")
        assert instr.mnemonic == "LDA"
        assert instr.mode == AddressingMode.INDIRECT_INDEXED_Y

    def test_location_is_mnemonic(self):
        instrs = resolve_source("NOP\n   LDA #$01", "prog.s")
        loc = instrs[1].location
        assert (loc.filename, loc.line, loc.column) == ("prog.s", 2, 4)


# =============================================================================
# Register Check Tests
# =============================================================================

class TestRegisterChecks:
    """Registers are checked where they appear."""

    def test_indirect_indexed_needs_y(self):
        with pytest.raises(InvalidRegisterError) as exc_info:
            resolve_one("LDA ($44),X")
        assert exc_info.value.found == "X"
        assert exc_info.value.expected == ["Y"]
        assert "invalid register 'X', expected 'Y'" in str(exc_info.value)

    def test_indexed_indirect_needs_x(self):
        with pytest.raises(InvalidRegisterError) as exc_info:
            resolve_one("LDA ($44,Y)")
        assert exc_info.value.found == "Y"
        assert exc_info.value.expected == ["X"]

    def test_accumulator_is_not_an_index(self):
        with pytest.raises(InvalidRegisterError):
            resolve_one("LDA $44,A")

    def test_ldx_indexes_with_y_only(self):
        with pytest.raises(InvalidRegisterError) as exc_info:
            resolve_one("LDX $44,X")
        assert exc_info.value.expected == ["Y"]

    def test_register_error_location(self):
        with pytest.raises(InvalidRegisterError) as exc_info:
            resolve_source("NOP\nLDA ($44),X", "<test>")
        assert exc_info.value.location.line == 2
        assert exc_info.value.location.column == 11

    def test_no_register_legal_is_unsupported(self):
        """STX has no absolute indexed form at all."""
        with pytest.raises(UnsupportedAddressingModeError) as exc_info:
            resolve_one("STX $4400,Y")
        assert exc_info.value.mode == "absolute,Y"

    def test_index_must_be_register(self):
        with pytest.raises(UnexpectedTokenError) as exc_info:
            resolve_one("LDA $44,$10")
        assert exc_info.value.expected == "register"


# =============================================================================
# Unsupported Mode Tests
# =============================================================================

class TestUnsupportedModes:
    """Shapes that parse but have no opcode for the mnemonic."""

    def test_store_immediate(self):
        with pytest.raises(UnsupportedAddressingModeError) as exc_info:
            resolve_one("STA #$10")
        err = exc_info.value
        assert err.mnemonic == "STA"
        assert err.mode == "immediate"
        assert "zero-page" in err.valid_modes
        assert "'STA' does not support immediate addressing mode" in str(err)

    def test_indirect_outside_jmp(self):
        with pytest.raises(UnsupportedAddressingModeError):
            resolve_one("LDA ($1234)")

    def test_jmp_zero_page(self):
        with pytest.raises(UnsupportedAddressingModeError):
            resolve_one("JMP $44")

    def test_implied_with_operand(self):
        with pytest.raises(UnsupportedAddressingModeError) as exc_info:
            resolve_one("RTS $44")
        assert exc_info.value.mode == "zero-page"

    def test_accumulator_register_on_memory_mnemonic(self):
        """`LDA A` is not a shape LDA accepts."""
        with pytest.raises(UnexpectedTokenError):
            resolve_one("LDA A")


# =============================================================================
# Literal Tests
# =============================================================================

class TestLiterals:
    """Hex literal syntax."""

    def test_malformed_literal(self):
        with pytest.raises(MalformedLiteralError) as exc_info:
            resolve_source("NOP\nNOP\nLDA $G5\n", "<test>")
        err = exc_info.value
        assert err.text == "G5"
        assert err.line == 3
        assert err.location.column == 5
        assert "malformed literal '$G5'" in str(err)

    @pytest.mark.parametrize("source", ["LDA $123", "LDA $12345", "LDA $1"])
    def test_bad_width(self, source):
        with pytest.raises(MalformedLiteralError):
            resolve_one(source)

    def test_missing_dollar_gives_hint(self):
        with pytest.raises(UnexpectedTokenError) as exc_info:
            resolve_one("LDA 4400")
        assert exc_info.value.hint == "hex literals need a '$' prefix: $4400"

    def test_immediate_word_rejected(self):
        with pytest.raises(UnexpectedTokenError) as exc_info:
            resolve_one("LDA #$1234")
        assert exc_info.value.expected == "byte"
        assert exc_info.value.found == "word $1234"

    def test_word_pointer_is_jmp_indirect(self):
        """A word inside parentheses is JMP's indirect form, not a zero-page pointer."""
        with pytest.raises(UnsupportedAddressingModeError) as exc_info:
            resolve_one("LDA ($1234),Y")
        assert exc_info.value.mode == "indirect"


# =============================================================================
# Accumulator Grammar Tests
# =============================================================================

class TestAccumulatorGrammar:
    """ASL, LSR, ROL, ROR."""

    @pytest.mark.parametrize("source", ["ASL", "ASL A", "lsr a", "ROL", "ROR A"])
    def test_accumulator(self, source):
        assert resolve_one(source).mode == AddressingMode.ACCUMULATOR

    def test_implicit_accumulator_before_next_instruction(self):
        instrs = resolve_source("ASL\nLDA #$01", "<test>")
        assert [i.mode for i in instrs] == [
            AddressingMode.ACCUMULATOR,
            AddressingMode.IMMEDIATE,
        ]

    def test_memory_operand(self):
        instr = resolve_one("ROR $4400,X")
        assert instr.mode == AddressingMode.ABSOLUTE_X

    def test_wrong_register(self):
        with pytest.raises(InvalidRegisterError) as exc_info:
            resolve_one("ASL X")
        assert exc_info.value.expected == ["A"]

    def test_immediate_unsupported(self):
        with pytest.raises(UnsupportedAddressingModeError):
            resolve_one("LSR #$01")


# =============================================================================
# Branch Grammar Tests
# =============================================================================

class TestBranchGrammar:
    """Branches take a zero-page or word target address."""

    def test_byte_is_zero_page_target(self):
        instr = resolve_one("BNE $FC")
        assert instr.mode == AddressingMode.RELATIVE
        assert instr.operand is None
        assert instr.target == 0x00FC
        assert not instr.is_resolved

    def test_target(self):
        instr = resolve_one("BEQ $0600")
        assert instr.mode == AddressingMode.RELATIVE
        assert instr.operand is None
        assert instr.target == 0x0600
        assert not instr.is_resolved

    def test_with_displacement(self):
        instr = resolve_one("BEQ $0600").with_displacement(-4)
        assert instr.operand == 0xFC
        assert instr.is_resolved

    def test_immediate_rejected(self):
        with pytest.raises(UnexpectedTokenError):
            resolve_one("BNE #$10")


# =============================================================================
# Statement-Level Tests
# =============================================================================

class TestStatements:
    """Mnemonic position and instruction sequencing."""

    def test_unknown_mnemonic(self):
        with pytest.raises(UnknownMnemonicError) as exc_info:
            resolve_one("LDQ #$10")
        assert exc_info.value.mnemonic == "LDQ"
        assert "LDA" in exc_info.value.similar
        assert exc_info.value.hint.startswith("did you mean")

    def test_three_digit_run_is_unknown_mnemonic(self):
        with pytest.raises(UnknownMnemonicError):
            resolve_one("3FF")

    def test_operand_without_mnemonic(self):
        with pytest.raises(UnexpectedTokenError) as exc_info:
            resolve_one("#$10")
        assert exc_info.value.expected == "mnemonic"

    def test_trailing_garbage(self):
        with pytest.raises(AssemblySyntaxError):
            resolve_source("LDA #$10,", "<test>")

    def test_truncated_operand(self):
        with pytest.raises(UnexpectedTokenError) as exc_info:
            resolve_one("LDA $44,")
        assert exc_info.value.found == "end of input"

    def test_empty_source(self):
        assert resolve_source("", "<test>") == []
        assert resolve_source("; only a comment\n", "<test>") == []

    def test_resolve_next_pulls_one_at_a_time(self):
        resolver = Resolver(Lexer("NOP\nRTS", "<test>"))
        assert resolver.resolve_next().mnemonic == "NOP"
        assert resolver.resolve_next().mnemonic == "RTS"
        assert resolver.resolve_next() is None
        assert resolver.resolve_next() is None

    def test_error_carries_source_line(self):
        with pytest.raises(InvalidRegisterError) as exc_info:
            resolve_source("NOP\nLDA ($44),X\n", "<test>")
        assert exc_info.value.source_line == "LDA ($44),X"
        assert "<test>:2:11: error:" in str(exc_info.value)

    def test_every_mnemonic_has_a_grammar(self):
        assert set(GRAMMARS) == set(MNEMONICS)


# =============================================================================
# Instruction Data Class Tests
# =============================================================================

class TestInstruction:

    def test_operand_must_fit(self):
        with pytest.raises(ValueError):
            Instruction("LDA", AddressingMode.IMMEDIATE, 0x100)

    def test_operand_required(self):
        with pytest.raises(ValueError):
            Instruction("LDA", AddressingMode.ABSOLUTE)

    def test_implied_takes_no_operand(self):
        with pytest.raises(ValueError):
            Instruction("NOP", AddressingMode.IMPLIED, 0x01)

    def test_target_only_on_relative(self):
        with pytest.raises(ValueError):
            Instruction("JMP", AddressingMode.ABSOLUTE, target=0x1234)

    @pytest.mark.parametrize("source", [
        "LDA #$10", "STA ($44),Y", "JMP ($1234)", "ASL A", "RTS", "LDX $4400,Y",
    ])
    def test_str_is_canonical_source(self, source):
        assert str(resolve_one(source)) == source
