"""
MOS 6502 Execution Core
=======================

An instruction-level emulator for the MOS Technology 6502 8-bit processor.

This package provides the execution core only:

- **CPU**: register file, reset, fetch/decode/execute loop, addressing modes
- **Memory**: flat 64KB address space with little-endian word access
- **Status register**: N V B D I Z C flags with canonical bit-string form
- **Opcode table**: the implemented instruction subset and its encodings

Implemented instructions: LDA, LDX, LDY (all addressing modes), AND, ORA,
EOR, LSR, PHA, PHP, PLA, PLP, JMP (absolute and indirect), JSR, RTS,
TAX, TAY, TXA, TYA, TSX, TXS, SEC, SEI, SED, CLC, CLI, CLD, CLV and NOP.

Quick Start
-----------

    >>> from mos6502 import MOS6502, opcodes
    >>> cpu = MOS6502()
    >>> cpu.memory.load(0x0600, bytes([opcodes.LDA_IM, 0x42, opcodes.NOP]))
    >>> cpu.reset(0x0600)
    >>> event = cpu.run()
    >>> hex(cpu.a), str(cpu.status)
    ('0x42', '00000000')

Program loading, assembly, front ends and I/O mapping are left to callers:
the core only consumes raw bytes written into ``cpu.memory``.

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

__version__ = "1.0.0"
__author__ = "Hugo José Pinto & Contributors"

# CPU components
from .cpu import MOS6502, CPUState, Registers, STACK_PAGE, RESET_VECTOR
from .status import Flag, StatusRegister
from .memory import Memory

# Execution control
from .config import EmulatorConfig
from .events import HaltEvent, HaltReason

# Instruction set
from . import opcodes
from .opcodes import AddressingMode, InstructionInfo, OPCODE_TABLE

# Exception hierarchy
from .errors import (
    EmulatorError,
    MemoryAccessError,
    CPUFault,
    ProgramCounterOverflowError,
    UnknownOpcodeError,
)

__all__ = [
    # Version info
    "__version__",
    "__author__",

    # CPU
    "MOS6502",
    "CPUState",
    "Registers",
    "STACK_PAGE",
    "RESET_VECTOR",
    "Flag",
    "StatusRegister",

    # Memory
    "Memory",

    # Execution control
    "EmulatorConfig",
    "HaltEvent",
    "HaltReason",

    # Instruction set
    "opcodes",
    "AddressingMode",
    "InstructionInfo",
    "OPCODE_TABLE",

    # Errors
    "EmulatorError",
    "MemoryAccessError",
    "CPUFault",
    "ProgramCounterOverflowError",
    "UnknownOpcodeError",
]
