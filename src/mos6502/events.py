"""
Run Events
==========

Describes why MOS6502.run() returned.

Example usage:

    >>> event = cpu.run()
    >>> if event.reason == HaltReason.NOP:
    ...     print(f"Program ended at ${event.pc:04X}")

Faults (unknown opcodes, PC overflow) are not events: they are raised as
CPUFault exceptions.

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional


class HaltReason(Enum):
    """
    Enumeration of reasons why execution stopped.

    Used in HaltEvent to indicate what triggered the halt.
    """
    NOP = auto()               # NOP executed with halt_on_nop enabled
    REQUESTED = auto()         # request_halt() called
    INSTRUCTION_HOOK = auto()  # on_instruction returned False
    MEMORY_HOOK = auto()       # on_memory_read/on_memory_write returned False
    MAX_INSTRUCTIONS = auto()  # Instruction budget exhausted


@dataclass(frozen=True)
class HaltEvent:
    """
    Information about why execution stopped.

    Attributes:
        reason: Why execution stopped
        pc: Program counter after the last executed instruction
        opcode: Last opcode fetched (None if nothing was fetched)
        instructions: Number of instructions executed by this run() call
    """
    reason: HaltReason
    pc: int
    opcode: Optional[int] = None
    instructions: int = 0

    def __str__(self) -> str:
        """Return human-readable description."""
        match self.reason:
            case HaltReason.NOP:
                return f"Halted on NOP, PC=${self.pc:04X}"
            case HaltReason.REQUESTED:
                return f"Halt requested at ${self.pc:04X}"
            case HaltReason.INSTRUCTION_HOOK:
                return f"Stopped by instruction hook at ${self.pc:04X}"
            case HaltReason.MEMORY_HOOK:
                return f"Stopped by memory hook at ${self.pc:04X}"
            case HaltReason.MAX_INSTRUCTIONS:
                return f"Instruction limit reached after {self.instructions} instructions"
            case _:
                return "Unknown"
