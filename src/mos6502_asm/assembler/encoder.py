"""
6502 Instruction Encoder
========================

This module maps resolved instructions to machine-code bytes. The opcode
comes from the static OPCODE_TABLE; operand bytes follow in little-endian
order, sized exactly to the addressing mode:

| Mode family                                  | Bytes emitted        |
|----------------------------------------------|----------------------|
| accumulator, implied                         | opcode               |
| immediate, zero-page (all), relative         | opcode, byte         |
| absolute (all), indirect                     | opcode, low, high    |

Branch Targets
--------------
A branch operand is always a target address, whether written as a zero-page
byte (`BNE $10`) or a word (`BNE $0600`). Encoding it needs to know where
the branch itself sits in memory, which a single-pass assembler without
symbols only knows if it is told the load origin. That knowledge lives
behind the AddressResolver interface; ProgramCounter is the stock
implementation. Without one, branches are reported as unsupported.

Example
-------
>>> from mos6502_asm.assembler.encoder import Encoder
>>> from mos6502_asm.assembler.resolver import resolve_source
>>> [instr] = resolve_source("LDA $0200")
>>> Encoder().encode(instr).data.hex()
'ad0002'
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable, Optional
import logging
import struct

from mos6502_asm.assembler.resolver import Instruction
from mos6502_asm.cpu import get_instruction_info, get_valid_modes
from mos6502_asm.errors import (
    AssemblerError,
    BranchRangeError,
    UnsupportedAddressingModeError,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Encoded Output
# =============================================================================

@dataclass(frozen=True)
class EncodedInstruction:
    """
    The bytes for one instruction.

    Attributes:
        instruction: The instruction that was encoded (with any branch
                     target already turned into a displacement)
        data: Opcode followed by little-endian operand bytes (1-3 bytes)
        address: Load address of the first byte, if an origin is known
    """
    instruction: Instruction
    data: bytes
    address: Optional[int] = None

    def __len__(self) -> int:
        return len(self.data)

    def __bytes__(self) -> bytes:
        return self.data

    @property
    def opcode(self) -> int:
        return self.data[0]

    def hex(self) -> str:
        """Bytes as space-separated uppercase hex, e.g. 'AD 00 02'."""
        return " ".join(f"{b:02X}" for b in self.data)


# =============================================================================
# Address Resolution
# =============================================================================

class AddressResolver(ABC):
    """
    Abstract base class for program-counter tracking.

    The encoder consults a resolver to learn each instruction's load
    address and to turn branch targets into displacements.
    """

    @property
    @abstractmethod
    def address(self) -> int:
        """Address the next encoded byte will occupy."""
        pass

    @abstractmethod
    def advance(self, size: int) -> None:
        """Move past an encoded instruction of `size` bytes."""
        pass

    @abstractmethod
    def resolve_branch(self, instruction: Instruction) -> Instruction:
        """Return `instruction` with its target replaced by a displacement."""
        pass


class ProgramCounter(AddressResolver):
    """
    Sequential program counter starting at a fixed origin.

    Displacements are measured from the byte after the branch:
        displacement = target - (address + 2)
    and must fit in a signed byte.
    """

    def __init__(self, origin: int = 0):
        if not 0 <= origin <= 0xFFFF:
            raise ValueError(f"origin ${origin:X} outside the 16-bit address space")
        self.origin = origin
        self._address = origin

    @property
    def address(self) -> int:
        return self._address

    def reset(self) -> None:
        """Return to the origin."""
        self._address = self.origin

    def advance(self, size: int) -> None:
        if self._address + size > 0x10000:
            raise AssemblerError(
                f"program extends past $FFFF (origin ${self.origin:04X})"
            )
        self._address += size

    def resolve_branch(self, instruction: Instruction) -> Instruction:
        offset = instruction.target - (self._address + instruction.size)
        if offset < -128 or offset > 127:
            raise BranchRangeError(instruction.target, offset, instruction.location)
        return instruction.with_displacement(offset)


# =============================================================================
# Encoder
# =============================================================================

class Encoder:
    """
    Encodes resolved instructions into bytes.

    Attributes:
        address_resolver: Optional program-counter tracker; required for
                          branches written with a target address
    """

    def __init__(self, address_resolver: Optional[AddressResolver] = None):
        self.address_resolver = address_resolver

    def encode(self, instruction: Instruction) -> EncodedInstruction:
        """
        Encode a single instruction.

        Raises:
            UnsupportedAddressingModeError: If (mnemonic, mode) has no
                opcode, or a branch target cannot be resolved
            BranchRangeError: If a branch target is too far away
        """
        info = get_instruction_info(instruction.mnemonic, instruction.mode)
        if info is None:
            raise UnsupportedAddressingModeError(
                instruction.mnemonic,
                str(instruction.mode),
                instruction.location,
                valid_modes=[str(m) for m in get_valid_modes(instruction.mnemonic)],
            )

        resolver = self.address_resolver
        address = resolver.address if resolver is not None else None

        if not instruction.is_resolved:
            if resolver is None:
                raise UnsupportedAddressingModeError(
                    instruction.mnemonic,
                    "relative (target address)",
                    instruction.location,
                    hint="set an origin so branch targets can be turned into displacements",
                )
            instruction = resolver.resolve_branch(instruction)

        data = bytearray([info.opcode])
        if info.operand_size == 1:
            data.append(instruction.operand & 0xFF)
        elif info.operand_size == 2:
            data.extend(struct.pack("<H", instruction.operand))

        if resolver is not None:
            resolver.advance(len(data))

        return EncodedInstruction(instruction, bytes(data), address)

    def encode_all(self, instructions: Iterable[Instruction]) -> list[EncodedInstruction]:
        """Encode instructions in program order."""
        encoded = [self.encode(instruction) for instruction in instructions]
        logger.debug(f"Encoded {len(encoded)} instructions, {sum(len(e) for e in encoded)} bytes")
        return encoded
