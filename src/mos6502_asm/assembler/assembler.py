"""
6502 Assembler - Main Interface
===============================

This module provides the Assembler class, the primary interface for
assembling 6502 source code. It drives the lexer, operand resolver and
encoder over one file, then writes the flat binary.

Pipeline
--------
The driver works one instruction at a time: the resolver pulls tokens
from the lexer until it has a complete instruction, the encoder turns it
into bytes, and the loop repeats until end of input. The first error
aborts the file; nothing is kept from a file that failed.

Example Usage
-------------
>>> from mos6502_asm.assembler import Assembler
>>> asm = Assembler()
>>> encoded = asm.assemble_string('''
...     LDA #$01
...     LDA $0200
...     LDA $44,X
... ''')
>>> asm.get_code().hex()
'a901ad0002b544'

Several files are assembled independently; a failure in one does not
stop the others:

>>> results = Assembler().assemble_files(["a.s", "missing.s"])
>>> [r.ok for r in results]
[True, False]
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional
import logging

from mos6502_asm.assembler.encoder import EncodedInstruction, Encoder, ProgramCounter
from mos6502_asm.assembler.lexer import Lexer
from mos6502_asm.assembler.resolver import Resolver
from mos6502_asm.config import AssemblerConfig
from mos6502_asm.errors import AssemblerIOError, Mos6502Error

logger = logging.getLogger(__name__)


# =============================================================================
# Per-File Result
# =============================================================================

@dataclass
class FileResult:
    """
    Outcome of assembling one source file.

    Attributes:
        source: Input path
        output: Output path written (None if assembly failed)
        instructions: Encoded instructions in program order
        error: The error that stopped this file, if any
    """
    source: Path
    output: Optional[Path] = None
    instructions: list[EncodedInstruction] = field(default_factory=list)
    error: Optional[Mos6502Error] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def code(self) -> bytes:
        return b"".join(e.data for e in self.instructions)


# =============================================================================
# Assembler
# =============================================================================

class Assembler:
    """
    Main 6502 assembler class.

    One instance holds the result of the last assemble_* call. Use a
    separate instance (or assemble_files) per file when assembling
    concurrently.

    Attributes:
        config: AssemblerConfig in effect
    """

    def __init__(self, config: Optional[AssemblerConfig] = None, **overrides):
        """
        Initialize the assembler.

        Args:
            config: Base configuration (defaults to AssemblerConfig())
            **overrides: Individual AssemblerConfig fields to override,
                         e.g. Assembler(origin=0x0600)
        """
        if config is None:
            config = AssemblerConfig(**overrides)
        elif overrides:
            config = AssemblerConfig(**{**config.__dict__, **overrides})
        self.config = config
        self._encoded: list[EncodedInstruction] = []
        self._filename = "<input>"

    # =========================================================================
    # Assembly Methods
    # =========================================================================

    def assemble_string(self, source: str, filename: str = "<input>") -> list[EncodedInstruction]:
        """
        Assemble source code from a string.

        Args:
            source: Assembly source code
            filename: Name used in error messages

        Returns:
            Encoded instructions in program order

        Raises:
            AssemblerError: On the first malformed instruction
        """
        resolver = Resolver(Lexer(source, filename))
        address_resolver = None
        if self.config.origin is not None:
            address_resolver = ProgramCounter(self.config.origin)
        encoder = Encoder(address_resolver)

        encoded: list[EncodedInstruction] = []
        for instruction in resolver.resolve_all():
            encoded.append(encoder.encode(instruction))

        self._encoded = encoded
        self._filename = filename
        logger.debug(
            f"{filename}: {len(encoded)} instructions, {sum(len(e) for e in encoded)} bytes"
        )
        return encoded

    def assemble_file(self, filepath: str | Path) -> list[EncodedInstruction]:
        """
        Assemble source code from a file.

        Raises:
            AssemblerIOError: If the file cannot be read
            AssemblerError: On the first malformed instruction
        """
        filepath = Path(filepath)
        logger.info(f"Assembling {filepath}")

        try:
            source = filepath.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise AssemblerIOError(str(filepath), _describe_os_error(e)) from e

        return self.assemble_string(source, str(filepath))

    def assemble_files(
        self,
        filepaths: Iterable[str | Path],
        output: Optional[str | Path] = None,
        jobs: Optional[int] = None,
    ) -> list[FileResult]:
        """
        Assemble several files independently and write their outputs.

        Each file gets its own pipeline. Errors (including unreadable
        inputs) are recorded in that file's FileResult and the remaining
        files are still processed. Results are in input order.

        Args:
            filepaths: Source files
            output: Explicit output path (only valid for a single input)
            jobs: Worker threads (defaults to config.jobs)
        """
        paths = [Path(p) for p in filepaths]
        if output is not None and len(paths) != 1:
            raise ValueError("an explicit output path needs exactly one input file")

        outputs = [Path(output)] if output is not None else [self.output_path_for(p) for p in paths]
        jobs = jobs or self.config.jobs

        if jobs > 1 and len(paths) > 1:
            with ThreadPoolExecutor(max_workers=jobs) as executor:
                return list(executor.map(self._assemble_one, paths, outputs))
        return [self._assemble_one(p, o) for p, o in zip(paths, outputs)]

    def _assemble_one(self, source: Path, output: Path) -> FileResult:
        result = FileResult(source=source)
        asm = Assembler(self.config)
        listing = output.with_suffix(".lst") if self.config.listing else None
        try:
            _check_outputs(source, output, listing)
            result.instructions = asm.assemble_file(source)
            asm.write_binary(output)
            if listing is not None:
                asm.write_listing(listing)
            result.output = output
        except Mos6502Error as e:
            logger.error(f"{source}: assembly failed")
            result.instructions = []
            result.error = e
        return result

    # =========================================================================
    # Output Methods
    # =========================================================================

    def output_path_for(self, source: str | Path) -> Path:
        """
        Derive the output path by replacing the source suffix.

        >>> Assembler().output_path_for("demo/prog.s")
        PosixPath('demo/prog.o')
        """
        return Path(source).with_suffix(self.config.output_extension)

    def get_instructions(self) -> list[EncodedInstruction]:
        """Encoded instructions from the last successful assembly."""
        return list(self._encoded)

    def get_code(self) -> bytes:
        """Concatenated machine code from the last successful assembly."""
        return b"".join(e.data for e in self._encoded)

    def get_listing(self) -> str:
        """
        Get the assembly listing as a string.

        Addresses are load addresses when an origin is configured,
        otherwise offsets from the start of the output.
        """
        lines = []
        lines.append(f"6502 Assembler Listing: {self._filename}")
        lines.append("=" * 60)
        lines.append("")
        lines.append("Addr  Code       Line  Source")
        lines.append("-" * 60)

        offset = 0
        for encoded in self._encoded:
            address = encoded.address if encoded.address is not None else offset
            line = encoded.instruction.location.line if encoded.instruction.location else 0
            lines.append(f"{address:04X}  {encoded.hex():<9s}  {line:4d}  {encoded.instruction}")
            offset += len(encoded)

        lines.append("")
        lines.append(f"{len(self._encoded)} instructions, {offset} bytes")
        return "\n".join(lines)

    def write_binary(self, filepath: str | Path) -> None:
        """
        Write the raw machine code (no header).

        Raises:
            AssemblerIOError: If the file cannot be written
        """
        code = self.get_code()
        try:
            Path(filepath).write_bytes(code)
        except OSError as e:
            raise AssemblerIOError(str(filepath), _describe_os_error(e)) from e
        logger.info(f"Wrote {len(code)} bytes to {filepath}")

    def write_listing(self, filepath: str | Path) -> None:
        """
        Write the assembly listing file.

        Raises:
            AssemblerIOError: If the file cannot be written
        """
        try:
            Path(filepath).write_text(self.get_listing() + "\n", encoding="utf-8")
        except OSError as e:
            raise AssemblerIOError(str(filepath), _describe_os_error(e)) from e
        logger.info(f"Wrote listing to {filepath}")


def _check_outputs(source: Path, output: Path, listing: Optional[Path]) -> None:
    """
    Refuse output paths that would clobber the source or each other.

    Raises:
        AssemblerIOError: If the binary or listing path is the input file,
                          or the listing path is the binary path
    """
    source_path = source.resolve()
    output_path = output.resolve()
    if output_path == source_path:
        raise AssemblerIOError(str(output), "output would overwrite the input")
    if listing is not None:
        listing_path = listing.resolve()
        if listing_path == source_path:
            raise AssemblerIOError(str(listing), "listing would overwrite the input")
        if listing_path == output_path:
            raise AssemblerIOError(str(listing), "listing would overwrite the output")


def _describe_os_error(error: Exception) -> str:
    if isinstance(error, OSError) and error.strerror:
        return error.strerror
    return str(error)


# =============================================================================
# Convenience Functions
# =============================================================================

def assemble(source: str, filename: str = "<input>", origin: Optional[int] = None) -> bytes:
    """
    Convenience function to assemble source code to bytes.

    Raises:
        AssemblerError: If assembly fails
    """
    asm = Assembler(origin=origin)
    asm.assemble_string(source, filename)
    return asm.get_code()


def assemble_file(filepath: str | Path, origin: Optional[int] = None) -> bytes:
    """
    Convenience function to assemble a file to bytes.

    Raises:
        AssemblerError: If assembly fails
        AssemblerIOError: If the file cannot be read
    """
    asm = Assembler(origin=origin)
    asm.assemble_file(filepath)
    return asm.get_code()
