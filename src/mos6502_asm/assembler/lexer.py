"""
6502 Assembly Language Lexer
============================

This module implements the lexer (tokenizer) for 6502 assembly language.
Tokens are produced on demand: the operand resolver pulls them one at a
time with next_token(), so the lexer only ever looks at the characters of
the token it is currently producing.

Token Types
-----------
- MNEMONIC: Any 3-character alphanumeric run (validity checked later)
- REGISTER: A single A, X or Y (either case)
- BYTE: Exactly two hex digits ($ prefix is a separate token)
- WORD: Exactly four hex digits
- Delimiters: #, $, (, ), ,
- INVALID: Anything else (carries the offending text)
- EOF: End of input

Alphanumeric runs are classified purely by length, so `3F` is a byte,
`003F` a word, `LDA` a mnemonic and `3FF` also a "mnemonic" which the
resolver later rejects.

Comments
--------
A semicolon starts a comment that runs to the end of the line.

Example
-------
>>> from mos6502_asm.assembler.lexer import Lexer
>>> lexer = Lexer("LDA #$41", "example.s")
>>> for token in lexer.tokenize():
...     print(token)
Token(MNEMONIC, 'LDA', 1:1)
Token(HASH, '#', 1:5)
Token(DOLLAR, '$', 1:6)
Token(BYTE, $41, 1:7)
Token(EOF, 1:9)
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, Optional
import string

from mos6502_asm.errors import SourceLocation


# =============================================================================
# Token Type Enumeration
# =============================================================================

class TokenType(Enum):
    """Token types for 6502 assembly language."""

    MNEMONIC = auto()   # 3-character run: LDA, STA, ...
    REGISTER = auto()   # A, X or Y
    BYTE = auto()       # 2 hex digits
    WORD = auto()       # 4 hex digits

    # Delimiters
    HASH = auto()       # # (immediate mode indicator)
    DOLLAR = auto()     # $ (hex literal prefix)
    LPAREN = auto()     # (
    RPAREN = auto()     # )
    COMMA = auto()      # ,

    EOF = auto()        # End of input
    INVALID = auto()    # Unclassifiable text

    @property
    def description(self) -> str:
        """Human-readable name used in 'expected X, found Y' messages."""
        return _TOKEN_DESCRIPTIONS[self]


_TOKEN_DESCRIPTIONS = {
    TokenType.MNEMONIC: "mnemonic",
    TokenType.REGISTER: "register",
    TokenType.BYTE: "byte",
    TokenType.WORD: "word",
    TokenType.HASH: "'#'",
    TokenType.DOLLAR: "'$'",
    TokenType.LPAREN: "'('",
    TokenType.RPAREN: "')'",
    TokenType.COMMA: "','",
    TokenType.EOF: "end of input",
    TokenType.INVALID: "invalid token",
}


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class Token:
    """
    Represents a single token from the source code.

    Attributes:
        type: The TokenType classification
        value: Parsed int for BYTE/WORD, upper-cased letter for REGISTER,
               raw text for everything else (None for EOF)
        line: Line number in source (1-indexed)
        column: Column number in source (1-indexed)
        filename: Name of the source file
    """
    type: TokenType
    value: str | int | None
    line: int
    column: int
    filename: str

    def __repr__(self) -> str:
        if self.value is not None:
            if isinstance(self.value, int):
                return f"Token({self.type.name}, ${self.value:X}, {self.line}:{self.column})"
            return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.column})"
        return f"Token({self.type.name}, {self.line}:{self.column})"

    @property
    def location(self) -> SourceLocation:
        """Return a SourceLocation for error reporting."""
        return SourceLocation(self.filename, self.line, self.column)

    @property
    def text(self) -> str:
        """Source-like text of the token, for diagnostics."""
        if self.type is TokenType.BYTE:
            return f"{self.value:02X}"
        if self.type is TokenType.WORD:
            return f"{self.value:04X}"
        if self.value is None:
            return ""
        return str(self.value)

    def describe(self) -> str:
        """Describe the token for error messages, e.g. "byte $3F"."""
        if self.type in (TokenType.BYTE, TokenType.WORD):
            return f"{self.type.description} ${self.text}"
        if self.type in (TokenType.MNEMONIC, TokenType.REGISTER, TokenType.INVALID):
            return f"{self.type.description} '{self.text}'"
        return self.type.description


# =============================================================================
# Hex Helpers
# =============================================================================

def is_hex(char: str) -> bool:
    """Return True for a single hexadecimal digit, in either case."""
    return len(char) == 1 and char in string.hexdigits


def parse_hex(text: str) -> int:
    """
    Parse a string of hex digits, most significant digit first.

    Raises:
        ValueError: If text is empty or contains a non-hex character
    """
    if not text:
        raise ValueError("empty hex string")
    result = 0
    for char in text.lower():
        if "a" <= char <= "f":
            digit = 10 + (ord(char) - ord("a"))
        elif "0" <= char <= "9":
            digit = ord(char) - ord("0")
        else:
            raise ValueError(f"invalid hex digit {char!r}")
        result = 16 * result + digit
    return result


# =============================================================================
# Lexer Implementation
# =============================================================================

class Lexer:
    """
    Tokenizes 6502 assembly source code on demand.

    The lexer never raises: anything it cannot classify becomes an
    INVALID token, and every call past the end of input returns EOF.
    Deciding whether a token is acceptable is the resolver's job.

    Usage:
        lexer = Lexer(source_text, filename)
        token = lexer.next_token()

    Attributes:
        source: The source code being tokenized
        filename: Name of the source file (for error reporting)
    """

    # Characters that form an alphanumeric run
    RUN_CHARS = frozenset(string.ascii_letters + string.digits)

    # Whitespace skipped between tokens
    WHITESPACE = frozenset(" \t\v\f\r\n")

    REGISTERS = frozenset("AXY")

    SINGLE_CHAR_TOKENS = {
        "#": TokenType.HASH,
        "$": TokenType.DOLLAR,
        "(": TokenType.LPAREN,
        ")": TokenType.RPAREN,
        ",": TokenType.COMMA,
    }

    def __init__(self, source: str, filename: str = "<input>"):
        """
        Initialize the lexer with source code.

        Args:
            source: The assembly source code to tokenize
            filename: Name of the source file (for error messages)
        """
        self.source = source
        self.filename = filename

        self._pos = 0
        self._line = 1
        self._column = 1
        self._lines: Optional[list[str]] = None

    @property
    def line(self) -> int:
        """Current line number (1-indexed)."""
        return self._line

    def tokenize(self) -> Iterator[Token]:
        """
        Generate all remaining tokens, ending with a single EOF token.
        """
        while True:
            token = self.next_token()
            yield token
            if token.type is TokenType.EOF:
                return

    def next_token(self) -> Token:
        """
        Scan and return the next token, advancing the cursor past it.

        Returns:
            The next Token; EOF once the source is exhausted
        """
        self._skip_whitespace_and_comments()

        start_line = self._line
        start_column = self._column

        if self._at_end():
            return self._make_token(TokenType.EOF, None, start_line, start_column)

        char = self._peek()

        if char in self.SINGLE_CHAR_TOKENS:
            self._advance()
            return self._make_token(self.SINGLE_CHAR_TOKENS[char], char, start_line, start_column)

        if char in self.RUN_CHARS:
            return self._scan_run(start_line, start_column)

        # Unknown character
        self._advance()
        return self._make_token(TokenType.INVALID, char, start_line, start_column)

    def source_line(self, line: int) -> Optional[str]:
        """
        Return the text of a 1-indexed source line, for error context.

        Lines are split on LF only, matching how the cursor counts lines.
        """
        if self._lines is None:
            self._lines = [text.removesuffix("\r") for text in self.source.split("\n")]
        if 1 <= line <= len(self._lines):
            return self._lines[line - 1]
        return None

    # =========================================================================
    # Character Access Methods
    # =========================================================================

    def _at_end(self) -> bool:
        """Check if we've reached the end of source."""
        return self._pos >= len(self.source)

    def _peek(self) -> str:
        """Current character, or empty string past the end."""
        if self._pos >= len(self.source):
            return ""
        return self.source[self._pos]

    def _advance(self) -> str:
        """Consume and return the current character, tracking line/column."""
        char = self.source[self._pos]
        self._pos += 1

        if char == "\n":
            self._line += 1
            self._column = 1
        else:
            self._column += 1

        return char

    def _skip_whitespace_and_comments(self) -> None:
        while not self._at_end():
            char = self._peek()
            if char in self.WHITESPACE:
                self._advance()
            elif char == ";":
                while not self._at_end() and self._peek() != "\n":
                    self._advance()
            else:
                break

    # =========================================================================
    # Token Creation
    # =========================================================================

    def _make_token(
        self,
        token_type: TokenType,
        value: str | int | None,
        line: int,
        column: int,
    ) -> Token:
        return Token(
            type=token_type,
            value=value,
            line=line,
            column=column,
            filename=self.filename,
        )

    def _scan_run(self, start_line: int, start_column: int) -> Token:
        """
        Scan an alphanumeric run and classify it by length.

        1 char: register (A/X/Y) or invalid
        2 chars: byte if both are hex digits, else invalid
        3 chars: mnemonic
        4 chars: word if all are hex digits, else invalid
        other: invalid
        """
        chars = []
        while self._peek() and self._peek() in self.RUN_CHARS:
            chars.append(self._advance())
        text = "".join(chars)
        length = len(text)

        if length == 1 and text.upper() in self.REGISTERS:
            return self._make_token(TokenType.REGISTER, text.upper(), start_line, start_column)

        if length == 2 and all(is_hex(c) for c in text):
            return self._make_token(TokenType.BYTE, parse_hex(text), start_line, start_column)

        if length == 3:
            return self._make_token(TokenType.MNEMONIC, text, start_line, start_column)

        if length == 4 and all(is_hex(c) for c in text):
            return self._make_token(TokenType.WORD, parse_hex(text), start_line, start_column)

        return self._make_token(TokenType.INVALID, text, start_line, start_column)
