"""
MOS 6502 Assembler Error Hierarchy
==================================

This module defines the exception hierarchy for the assembler. All
exceptions inherit from Mos6502Error, allowing callers to catch every
assembler-related error with a single except clause if desired.

Exception Hierarchy
-------------------
Mos6502Error (base)
├── AssemblerError (source-related)
│   ├── AssemblySyntaxError - malformed source
│   │   ├── UnexpectedTokenError - grammar expected a different token
│   │   ├── InvalidRegisterError - wrong register for an index position
│   │   ├── MalformedLiteralError - hex literal of bad width or digits
│   │   └── UnknownMnemonicError - 3-letter word that is not a 6502 opcode
│   ├── AddressingModeError
│   │   └── UnsupportedAddressingModeError - mode not defined for mnemonic
│   └── BranchRangeError - branch target too far
└── AssemblerIOError - reading or writing a file failed

Error messages follow this format:
    filename:line:column: error: description
        source_line_text
        ^
    hint: suggestion for fixing (when available)

Every syntax error is fatal to the file being assembled; there is no
resynchronization after the first malformed instruction.
"""

from dataclasses import dataclass
from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class Mos6502Error(Exception):
    """
    Base exception for all assembler errors.

        try:
            assembler.assemble_file("program.s")
        except Mos6502Error as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in source code for error reporting.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"


# =============================================================================
# Assembler Exceptions
# =============================================================================

class AssemblerError(Mos6502Error):
    """
    Base exception for errors tied to assembly source.

    Attributes:
        message: The error description
        location: Where in the source the error occurred (optional)
        hint: A suggestion for fixing the error (optional)
        source_line: The actual source text at the error location (optional)
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    @property
    def line(self) -> Optional[int]:
        """Line number of the error, if known."""
        return self.location.line if self.location else None

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

        Example output:
            demo.s:3:5: error: invalid register 'X', expected 'Y'
                LDA ($44),X
                          ^
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            if self.location.column > 0:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


class AssemblySyntaxError(AssemblerError):
    """
    Syntax error in assembly source code.

    Raised when the operand resolver meets a token sequence that does not
    fit the grammar of the instruction being parsed.
    """
    pass


class UnexpectedTokenError(AssemblySyntaxError):
    """
    A grammar step expected one kind of token and found another.

    Example:
        LDA #$10,   ; Error: expected mnemonic, found ','
    """

    def __init__(
        self,
        expected: str,
        found: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        hint: Optional[str] = None,
    ):
        self.expected = expected
        self.found = found
        super().__init__(
            f"expected {expected}, found {found}",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class InvalidRegisterError(AssemblySyntaxError):
    """
    A register appeared in an index position that requires another register.

    Example:
        LDA ($44),X  ; Error: post-indexed indirect only takes Y
    """

    def __init__(
        self,
        found: str,
        expected: list[str],
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        mnemonic: Optional[str] = None,
    ):
        self.found = found
        self.expected = list(expected)

        allowed = " or ".join(f"'{r}'" for r in self.expected)
        hint = f"{mnemonic} accepts {allowed} here" if mnemonic else None

        super().__init__(
            f"invalid register '{found}', expected {allowed}",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class MalformedLiteralError(AssemblySyntaxError):
    """
    Hex literal of invalid length or with non-hex characters.

    Literals are written as `$` followed by exactly two (byte) or four
    (word) hexadecimal digits.
    """

    def __init__(
        self,
        text: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.text = text
        super().__init__(
            f"malformed literal '${text}'",
            location=location,
            hint="literals are '$' followed by exactly 2 or 4 hex digits",
            source_line=source_line,
        )


class UnknownMnemonicError(AssemblySyntaxError):
    """
    Three-letter word in mnemonic position that is not a 6502 instruction.

    Close matches are offered as a hint to catch typos (e.g. 'LAD').
    """

    def __init__(
        self,
        mnemonic: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        similar: Optional[list[str]] = None,
    ):
        self.mnemonic = mnemonic
        self.similar = similar or []

        hint = None
        if self.similar:
            suggestions = ", ".join(f"'{s}'" for s in self.similar[:3])
            hint = f"did you mean {suggestions}?"

        super().__init__(
            f"unknown mnemonic '{mnemonic}'",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class AddressingModeError(AssemblerError):
    """Base class for errors about an instruction's addressing mode."""
    pass


class UnsupportedAddressingModeError(AddressingModeError):
    """
    Syntactically valid operand shape the instruction does not define.

    Example:
        STA #$41  ; Error: STA has no immediate mode
    """

    def __init__(
        self,
        mnemonic: str,
        mode: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        valid_modes: Optional[list[str]] = None,
        hint: Optional[str] = None,
    ):
        self.mnemonic = mnemonic
        self.mode = mode
        self.valid_modes = valid_modes or []

        if hint is None and self.valid_modes:
            modes_str = ", ".join(self.valid_modes)
            hint = f"{mnemonic} supports: {modes_str}"

        super().__init__(
            f"'{mnemonic}' does not support {mode} addressing mode",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class BranchRangeError(AssemblerError):
    """
    Branch target is out of range.

    6502 branches use a signed 8-bit displacement measured from the
    instruction following the branch, limiting the range to -128..+127.
    """

    def __init__(
        self,
        target: int,
        offset: int,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.target = target
        self.offset = offset

        direction = "forward" if offset > 0 else "backward"
        hint = (
            f"branch offset is {offset}, but range is -128 to +127; "
            f"consider using JMP for {direction} references"
        )

        super().__init__(
            f"branch target ${target:04X} is out of range (offset: {offset})",
            location=location,
            hint=hint,
            source_line=source_line,
        )


# =============================================================================
# I/O Exceptions
# =============================================================================

class AssemblerIOError(Mos6502Error):
    """
    Reading a source file or writing an output file failed.

    A failure on one input file never stops the remaining files from
    being assembled.
    """

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"cannot access '{path}': {reason}")
