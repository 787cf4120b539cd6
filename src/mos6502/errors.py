"""
MOS 6502 Emulator Error Hierarchy
=================================

This module defines the exception hierarchy for the emulator core.
All exceptions inherit from EmulatorError, allowing callers to catch all
emulator-related errors with a single except clause if desired.

Exception Hierarchy
-------------------
EmulatorError (base)
├── MemoryAccessError - address outside the 64KB address space
└── CPUFault (fatal execution faults)
    ├── ProgramCounterOverflowError - fetch with PC past $FFFF
    └── UnknownOpcodeError - opcode byte not in the dispatch table

Design Philosophy
-----------------
CPU faults are fatal: the execution loop has no recovery transition, so a
fault always terminates run(). Each fault carries the program counter and a
snapshot of the CPU registers at the moment it was raised, so callers can
report exactly where the program went wrong.

Error messages follow this format:
    error: unknown opcode $FF at $8000

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .cpu import CPUState


# =============================================================================
# Base Exception Class
# =============================================================================

class EmulatorError(Exception):
    """
    Base exception for all emulator errors.

    All exceptions in the package inherit from this class, allowing callers
    to catch every emulator error with a single except clause:

        try:
            cpu.run()
        except EmulatorError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Memory Exceptions
# =============================================================================

class MemoryAccessError(EmulatorError):
    """
    Access outside the 16-bit address space.

    The CPU always wraps computed addresses at $10000, so this is only
    raised when an external caller (a loader or a test) passes an address
    that cannot exist.

    Attributes:
        address: The offending address
    """

    def __init__(self, address: int, message: Optional[str] = None):
        self.address = address
        super().__init__(message or f"error: address {address:#06x} outside memory")


# =============================================================================
# CPU Faults
# =============================================================================

class CPUFault(EmulatorError):
    """
    Base class for fatal CPU execution faults.

    Attributes:
        message: The error description
        pc: Program counter associated with the fault
        state: CPU register snapshot taken when the fault was raised (optional)
    """

    def __init__(self, message: str, pc: int, state: Optional["CPUState"] = None):
        self.message = message
        self.pc = pc
        self.state = state
        super().__init__(f"error: {message}")


class ProgramCounterOverflowError(CPUFault):
    """
    Instruction fetch with the program counter past the end of memory.

    Raised when execution runs off the top of the address space: the byte
    at $FFFF was fetched and another fetch followed.
    """

    def __init__(self, pc: int, state: Optional["CPUState"] = None):
        super().__init__(f"PC ${pc:04X} exceeds memory limit $FFFF", pc, state)


class UnknownOpcodeError(CPUFault):
    """
    Opcode byte with no entry in the dispatch table.

    Attributes:
        opcode: The unrecognised opcode byte
        pc: Address the opcode was fetched from
    """

    def __init__(self, opcode: int, pc: int, state: Optional["CPUState"] = None):
        self.opcode = opcode
        super().__init__(f"unknown opcode ${opcode:02X} at ${pc:04X}", pc, state)
