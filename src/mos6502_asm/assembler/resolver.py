"""
6502 Operand Resolver
=====================

This module turns the token stream into fully-resolved instructions. For
each mnemonic it runs that mnemonic's operand grammar and selects exactly
one addressing mode from the legal set for that mnemonic.

Operand Shapes
--------------
| Syntax       | Mode                 |
|--------------|----------------------|
| (none)       | implied/accumulator  |
| A            | accumulator          |
| #$nn         | immediate            |
| $nn          | zero-page            |
| $nn,X  $nn,Y | zero-page indexed    |
| $nnnn        | absolute             |
| $nnnn,X/Y    | absolute indexed     |
| ($nn,X)      | indexed indirect     |
| ($nn),Y      | indirect indexed     |
| ($nnnn)      | indirect (JMP only)  |
| $nn / $nnnn  | relative target      |

Zero-page versus absolute is decided only by the literal's width in the
source: `$3F` is zero-page, `$003F` is absolute, whatever the value.

Grammar Dispatch
----------------
Every mnemonic maps to one grammar function in GRAMMARS:

- implied: no operand (RTS, INX, ...)
- accumulator: no operand or `A` means accumulator, otherwise a memory
  operand (ASL, LSR, ROL, ROR)
- branch: a zero-page or word target address (BNE, BEQ, ...)
- memory: the general shape parser followed by a legality check

Register checks happen where the register appears: a register that is not
legal for that position and mnemonic raises InvalidRegisterError. A shape
that parses but is not defined for the mnemonic raises
UnsupportedAddressingModeError. Nothing is recovered; the first error ends
the file.
"""

from dataclasses import dataclass, replace
from typing import Callable, Iterator, Optional
import difflib
import logging

from mos6502_asm.assembler.lexer import Lexer, Token, TokenType
from mos6502_asm.cpu import (
    ACCUMULATOR_INSTRUCTIONS,
    BRANCH_INSTRUCTIONS,
    IMPLIED_ONLY_INSTRUCTIONS,
    MNEMONICS,
    OPCODE_TABLE,
    AddressingMode,
    format_operand,
    get_valid_modes,
)
from mos6502_asm.errors import (
    InvalidRegisterError,
    MalformedLiteralError,
    SourceLocation,
    UnexpectedTokenError,
    UnknownMnemonicError,
    UnsupportedAddressingModeError,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Instruction Data Class
# =============================================================================

@dataclass(frozen=True)
class Instruction:
    """
    A fully-resolved machine instruction.

    Attributes:
        mnemonic: The instruction mnemonic (uppercase)
        mode: The selected addressing mode
        operand: 8- or 16-bit operand value, None for implied/accumulator
        location: Source location of the mnemonic
        target: Branch target address for relative instructions; operand
                stays None until an address resolver turns it into a
                displacement
    """
    mnemonic: str
    mode: AddressingMode
    operand: Optional[int] = None
    location: Optional[SourceLocation] = None
    target: Optional[int] = None

    def __post_init__(self) -> None:
        if self.target is not None:
            if self.mode is not AddressingMode.RELATIVE:
                raise ValueError(f"{self.mnemonic}: branch target on {self.mode} instruction")
            if self.operand is not None:
                raise ValueError(f"{self.mnemonic}: both displacement and target given")
            if not 0 <= self.target <= 0xFFFF:
                raise ValueError(f"{self.mnemonic}: branch target ${self.target:X} out of range")
            return

        size = self.mode.operand_size
        if size == 0:
            if self.operand is not None:
                raise ValueError(f"{self.mnemonic}: {self.mode} takes no operand")
            return

        if self.operand is None:
            raise ValueError(f"{self.mnemonic}: {self.mode} requires an operand")
        limit = 0xFF if size == 1 else 0xFFFF
        if not 0 <= self.operand <= limit:
            raise ValueError(
                f"{self.mnemonic}: operand ${self.operand:X} does not fit {self.mode}"
            )

    @property
    def size(self) -> int:
        """Encoded size in bytes (opcode plus operand)."""
        return 1 + self.mode.operand_size

    @property
    def is_resolved(self) -> bool:
        """False for a branch whose target still needs a displacement."""
        return self.target is None

    def with_displacement(self, displacement: int) -> "Instruction":
        """Return a copy of a branch with its target replaced by a displacement byte."""
        return replace(self, operand=displacement & 0xFF, target=None)

    def __str__(self) -> str:
        if self.target is not None:
            return f"{self.mnemonic} ${self.target:04X}"
        operand = format_operand(self.mode, self.operand)
        return f"{self.mnemonic} {operand}" if operand else self.mnemonic


# Tokens that can begin an operand
OPERAND_START = frozenset({TokenType.HASH, TokenType.LPAREN, TokenType.DOLLAR})


# =============================================================================
# Resolver Implementation
# =============================================================================

class Resolver:
    """
    Resolves one instruction at a time from a lexer.

    The resolver keeps a single token of lookahead, which is enough
    because every instruction starts with a mnemonic and none of the
    grammars needs to look past the end of its own operand.

    Usage:
        resolver = Resolver(Lexer(source, filename))
        for instruction in resolver.resolve_all():
            ...
    """

    def __init__(self, lexer: Lexer):
        self._lexer = lexer
        self._lookahead: Optional[Token] = None

    # =========================================================================
    # Public Interface
    # =========================================================================

    def resolve_next(self) -> Optional[Instruction]:
        """
        Resolve the next instruction.

        Returns:
            The Instruction, or None at end of input

        Raises:
            AssemblySyntaxError: If the source does not match the grammar
            UnsupportedAddressingModeError: If the operand shape is not
                defined for the mnemonic
        """
        token = self._advance()
        if token.type is TokenType.EOF:
            return None
        if token.type is not TokenType.MNEMONIC:
            raise self._unexpected(TokenType.MNEMONIC.description, token)

        mnemonic = str(token.value).upper()
        grammar = GRAMMARS.get(mnemonic)
        if grammar is None:
            raise UnknownMnemonicError(
                mnemonic,
                token.location,
                source_line=self._lexer.source_line(token.line),
                similar=difflib.get_close_matches(mnemonic, sorted(MNEMONICS), n=3),
            )

        instruction = grammar(self, mnemonic, token)
        logger.debug(f"line {token.line}: {instruction} ({instruction.mode})")
        return instruction

    def resolve_all(self) -> Iterator[Instruction]:
        """Yield instructions until end of input."""
        while True:
            instruction = self.resolve_next()
            if instruction is None:
                return
            yield instruction

    # =========================================================================
    # Token Navigation
    # =========================================================================

    def _peek(self) -> Token:
        if self._lookahead is None:
            self._lookahead = self._lexer.next_token()
        return self._lookahead

    def _advance(self) -> Token:
        token = self._peek()
        self._lookahead = None
        return token

    def _check(self, *types: TokenType) -> bool:
        return self._peek().type in types

    def _match(self, token_type: TokenType) -> Optional[Token]:
        if self._check(token_type):
            return self._advance()
        return None

    def _expect(self, token_type: TokenType) -> Token:
        token = self._advance()
        if token.type is not token_type:
            raise self._unexpected(token_type.description, token)
        return token

    def _unexpected(self, expected: str, token: Token, hint: Optional[str] = None) -> UnexpectedTokenError:
        return UnexpectedTokenError(
            expected,
            token.describe(),
            token.location,
            source_line=self._lexer.source_line(token.line),
            hint=hint,
        )

    def _expect_literal(self, width: Optional[TokenType] = None) -> Token:
        """
        Consume `$` followed by a byte or word literal.

        Args:
            width: TokenType.BYTE or TokenType.WORD to require one width

        Raises:
            MalformedLiteralError: If `$` is followed by text that is not
                exactly 2 or 4 hex digits
            UnexpectedTokenError: For anything else out of place
        """
        dollar = self._advance()
        if dollar.type is not TokenType.DOLLAR:
            hint = None
            if dollar.type in (TokenType.BYTE, TokenType.WORD):
                hint = f"hex literals need a '$' prefix: ${dollar.text}"
            raise self._unexpected(TokenType.DOLLAR.description, dollar, hint)

        literal = self._advance()
        if literal.type in (TokenType.BYTE, TokenType.WORD):
            if width is not None and literal.type is not width:
                raise self._unexpected(width.description, literal)
            return literal

        if literal.type in (TokenType.MNEMONIC, TokenType.REGISTER, TokenType.INVALID):
            raise MalformedLiteralError(
                literal.text,
                dollar.location,
                source_line=self._lexer.source_line(dollar.line),
            )

        raise self._unexpected("byte or word", literal)

    # =========================================================================
    # Operand Shape Parsing
    # =========================================================================

    def _parse_operand(self, mnemonic: str) -> tuple[AddressingMode, int]:
        """
        Parse a memory or immediate operand and return (mode, value).

        Index registers are validated against what `mnemonic` allows
        at that position; the overall mode is not checked here.
        """
        token = self._peek()

        if self._match(TokenType.HASH):
            literal = self._expect_literal(TokenType.BYTE)
            return AddressingMode.IMMEDIATE, literal.value

        if self._match(TokenType.LPAREN):
            literal = self._expect_literal()

            if literal.type is TokenType.WORD:
                self._expect(TokenType.RPAREN)
                return AddressingMode.INDIRECT, literal.value

            if self._match(TokenType.RPAREN):
                self._expect(TokenType.COMMA)
                mode = self._expect_index(mnemonic, {"Y": AddressingMode.INDIRECT_INDEXED_Y})
                return mode, literal.value

            if self._match(TokenType.COMMA):
                mode = self._expect_index(mnemonic, {"X": AddressingMode.INDEXED_INDIRECT_X})
                self._expect(TokenType.RPAREN)
                return mode, literal.value

            raise self._unexpected("')' or ','", self._peek())

        if self._check(TokenType.DOLLAR):
            literal = self._expect_literal()
            is_byte = literal.type is TokenType.BYTE

            if self._match(TokenType.COMMA):
                if is_byte:
                    candidates = {"X": AddressingMode.ZERO_PAGE_X, "Y": AddressingMode.ZERO_PAGE_Y}
                else:
                    candidates = {"X": AddressingMode.ABSOLUTE_X, "Y": AddressingMode.ABSOLUTE_Y}
                return self._expect_index(mnemonic, candidates), literal.value

            if is_byte:
                return AddressingMode.ZERO_PAGE, literal.value
            return AddressingMode.ABSOLUTE, literal.value

        raise self._unexpected("'#', '(' or '$'", token)

    def _expect_index(self, mnemonic: str, candidates: dict[str, AddressingMode]) -> AddressingMode:
        """
        Consume an index register and return the mode it selects.

        Args:
            mnemonic: Instruction being resolved
            candidates: Register letter -> mode for this syntactic position
        """
        token = self._advance()
        if token.type is not TokenType.REGISTER:
            raise self._unexpected(TokenType.REGISTER.description, token)

        register = str(token.value)
        legal = [r for r, mode in candidates.items() if (mnemonic, mode) in OPCODE_TABLE]

        if register in legal:
            return candidates[register]

        if not legal and register in candidates:
            raise self._unsupported(mnemonic, candidates[register], token)

        raise InvalidRegisterError(
            register,
            legal or list(candidates),
            token.location,
            source_line=self._lexer.source_line(token.line),
            mnemonic=mnemonic,
        )

    def _unsupported(self, mnemonic: str, mode: AddressingMode, token: Token) -> UnsupportedAddressingModeError:
        return UnsupportedAddressingModeError(
            mnemonic,
            str(mode),
            token.location,
            source_line=self._lexer.source_line(token.line),
            valid_modes=[str(m) for m in get_valid_modes(mnemonic)],
        )

    def _check_mode(self, mnemonic: str, mode: AddressingMode, token: Token) -> None:
        if (mnemonic, mode) not in OPCODE_TABLE:
            raise self._unsupported(mnemonic, mode, token)

    # =========================================================================
    # Per-Mnemonic Grammars
    # =========================================================================

    def _resolve_implied(self, mnemonic: str, token: Token) -> Instruction:
        """Implied-only instructions: RTS, INX, CLC, ..."""
        if self._check(*OPERAND_START):
            # An operand here is always wrong; report which mode was attempted
            mode, _ = self._parse_operand(mnemonic)
            self._check_mode(mnemonic, mode, token)
        return Instruction(mnemonic, AddressingMode.IMPLIED, location=token.location)

    def _resolve_accumulator(self, mnemonic: str, token: Token) -> Instruction:
        """Shift and rotate: `ASL`, `ASL A` or any memory operand."""
        register = self._match(TokenType.REGISTER)
        if register is not None:
            if register.value != "A":
                raise InvalidRegisterError(
                    str(register.value),
                    ["A"],
                    register.location,
                    source_line=self._lexer.source_line(register.line),
                    mnemonic=mnemonic,
                )
            return Instruction(mnemonic, AddressingMode.ACCUMULATOR, location=token.location)

        if not self._check(*OPERAND_START):
            return Instruction(mnemonic, AddressingMode.ACCUMULATOR, location=token.location)

        return self._resolve_memory(mnemonic, token)

    def _resolve_branch(self, mnemonic: str, token: Token) -> Instruction:
        """Conditional branches: `$nn` or `$nnnn` target address."""
        literal = self._expect_literal()
        return Instruction(
            mnemonic, AddressingMode.RELATIVE, location=token.location, target=literal.value
        )

    def _resolve_memory(self, mnemonic: str, token: Token) -> Instruction:
        """Everything with an explicit operand: LDA, STA, JMP, CPX, ..."""
        mode, value = self._parse_operand(mnemonic)
        self._check_mode(mnemonic, mode, token)
        return Instruction(mnemonic, mode, value, location=token.location)


# =============================================================================
# Grammar Dispatch Table
# =============================================================================

Grammar = Callable[[Resolver, str, Token], Instruction]


def _select_grammar(mnemonic: str) -> Grammar:
    if mnemonic in IMPLIED_ONLY_INSTRUCTIONS:
        return Resolver._resolve_implied
    if mnemonic in BRANCH_INSTRUCTIONS:
        return Resolver._resolve_branch
    if mnemonic in ACCUMULATOR_INSTRUCTIONS:
        return Resolver._resolve_accumulator
    return Resolver._resolve_memory


GRAMMARS: dict[str, Grammar] = {
    mnemonic: _select_grammar(mnemonic) for mnemonic in sorted(MNEMONICS)
}


# =============================================================================
# Convenience Function
# =============================================================================

def resolve_source(source: str, filename: str = "<input>") -> list[Instruction]:
    """
    Resolve every instruction in a source string.

    Raises:
        AssemblerError: On the first malformed instruction
    """
    return list(Resolver(Lexer(source, filename)).resolve_all())
