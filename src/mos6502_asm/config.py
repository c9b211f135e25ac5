"""
Assembler Configuration
=======================

Settings shared by the assembler driver and the command line. Values
come from, in increasing precedence:
- Default values (defined here)
- Environment variables (AssemblerConfig.from_env)
- Command-line options

Environment variables:
    M6502ASM_OUTPUT_EXT: Output file extension (default ".o")
    M6502ASM_ORIGIN: Load address for branch-target resolution ($0600, 0x600, 1536)
    M6502ASM_JOBS: Number of files assembled in parallel
"""

from dataclasses import dataclass
from typing import Optional
import logging
import os

logger = logging.getLogger(__name__)


def parse_number(text: str) -> int:
    """
    Parse a number written as $hex, 0xhex or decimal.

    Raises:
        ValueError: If the text is not a valid number
    """
    text = text.strip()
    if text.startswith("$"):
        return int(text[1:], 16)
    if text.lower().startswith("0x"):
        return int(text[2:], 16)
    return int(text)


def parse_origin(text: str) -> int:
    """Parse a load address and check it fits in 16 bits."""
    value = parse_number(text)
    if not 0 <= value <= 0xFFFF:
        raise ValueError(f"origin {text!r} outside $0000-$FFFF")
    return value


@dataclass
class AssemblerConfig:
    """
    Configuration for an assembly run.

    Attributes:
        output_extension: Suffix that replaces the source suffix for output files
        origin: Load address of the first instruction; enables branches to
                absolute targets and addresses in listings
        jobs: Number of files assembled concurrently (1 = sequential)
        listing: Write a `.lst` listing next to each output file
        verbose: Emit progress details
    """

    output_extension: str = ".o"
    origin: Optional[int] = None
    jobs: int = 1
    listing: bool = False
    verbose: bool = False

    def __post_init__(self) -> None:
        if not self.output_extension.startswith("."):
            self.output_extension = "." + self.output_extension
        if self.jobs < 1:
            raise ValueError(f"jobs must be at least 1, got {self.jobs}")
        if self.origin is not None and not 0 <= self.origin <= 0xFFFF:
            raise ValueError(f"origin ${self.origin:X} outside $0000-$FFFF")

    # =========================================================================
    # Factory Methods
    # =========================================================================

    @classmethod
    def from_env(cls) -> "AssemblerConfig":
        """
        Create an AssemblerConfig from environment variables.

        Malformed values are logged and ignored.
        """
        config = cls()

        if ext := os.environ.get("M6502ASM_OUTPUT_EXT"):
            config.output_extension = ext if ext.startswith(".") else "." + ext

        if origin := os.environ.get("M6502ASM_ORIGIN"):
            try:
                config.origin = parse_origin(origin)
            except ValueError:
                logger.warning(f"Ignoring invalid M6502ASM_ORIGIN={origin!r}")

        if jobs := os.environ.get("M6502ASM_JOBS"):
            try:
                value = int(jobs)
                if value < 1:
                    raise ValueError(jobs)
                config.jobs = value
            except ValueError:
                logger.warning(f"Ignoring invalid M6502ASM_JOBS={jobs!r}")

        return config
