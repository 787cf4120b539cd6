"""
6502 Instruction Set Definition
===============================

This module defines the subset of the MOS 6502 instruction set implemented
by the execution core, with opcodes, addressing modes, and instruction sizes.
The 6502 uses little-endian byte ordering (least significant byte first).

Addressing Modes
----------------
1. **IMPLIED**: No operand (e.g., TAX, RTS, PHA)
   - 1 byte instruction

2. **ACCUMULATOR**: Operates on A (e.g., LSR A)
   - 1 byte instruction

3. **IMMEDIATE**: Literal byte follows opcode (e.g., LDA #$41)
   - Example: LDA #$41 -> $A9 $41

4. **ZERO_PAGE**: Address in $0000-$00FF
   - Example: LDA $40 -> $A5 $40

5. **ZERO_PAGE_X / ZERO_PAGE_Y**: Zero page address plus index
   - The sum wraps inside the zero page on real hardware
   - Example: LDA $40,X -> $B5 $40

6. **ABSOLUTE**: Full 16-bit address
   - Example: LDA $1234 -> $AD $34 $12

7. **ABSOLUTE_X / ABSOLUTE_Y**: 16-bit address plus index
   - Example: LDA $1234,X -> $BD $34 $12

8. **INDIRECT_X**: Pointer at (zero page + X)
   - Example: LDA ($40,X) -> $A1 $40

9. **INDIRECT_Y**: Pointer at zero page, plus Y
   - Example: LDA ($40),Y -> $B1 $40

10. **INDIRECT**: 16-bit pointer (JMP only)
    - A pointer at $xxFF reads its high byte from $xx00 (hardware bug)
    - Example: JMP ($1234) -> $6C $34 $12

Reference
---------
- MOS MCS6500 Microcomputer Family Programming Manual
- http://www.6502.org/tutorials/6502opcodes.html

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional


# =============================================================================
# Addressing Mode Enumeration
# =============================================================================

class AddressingMode(Enum):
    """
    6502 addressing modes.

    Each addressing mode determines how the operand is fetched and which
    effective address an instruction operates on.
    """
    IMPLIED = auto()      # No operand (TAX, RTS)
    ACCUMULATOR = auto()  # Operates on A (LSR A)
    IMMEDIATE = auto()    # #value
    ZERO_PAGE = auto()    # $00-$FF
    ZERO_PAGE_X = auto()  # $nn,X
    ZERO_PAGE_Y = auto()  # $nn,Y
    ABSOLUTE = auto()     # $nnnn
    ABSOLUTE_X = auto()   # $nnnn,X
    ABSOLUTE_Y = auto()   # $nnnn,Y
    INDIRECT_X = auto()   # ($nn,X)
    INDIRECT_Y = auto()   # ($nn),Y
    INDIRECT = auto()     # ($nnnn), JMP only

    @property
    def operand_size(self) -> int:
        """Number of operand bytes following the opcode."""
        return _OPERAND_SIZES[self]

    def __str__(self) -> str:
        """Return human-readable name for error messages."""
        return self.name.lower().replace("_", " ")


_OPERAND_SIZES = {
    AddressingMode.IMPLIED: 0,
    AddressingMode.ACCUMULATOR: 0,
    AddressingMode.IMMEDIATE: 1,
    AddressingMode.ZERO_PAGE: 1,
    AddressingMode.ZERO_PAGE_X: 1,
    AddressingMode.ZERO_PAGE_Y: 1,
    AddressingMode.ABSOLUTE: 2,
    AddressingMode.ABSOLUTE_X: 2,
    AddressingMode.ABSOLUTE_Y: 2,
    AddressingMode.INDIRECT_X: 1,
    AddressingMode.INDIRECT_Y: 1,
    AddressingMode.INDIRECT: 2,
}


# =============================================================================
# Instruction Information
# =============================================================================

@dataclass(frozen=True)
class InstructionInfo:
    """
    Information about a specific instruction encoding.

    This dataclass is immutable (frozen) to prevent accidental modification
    of the opcode table at runtime.

    Attributes:
        mnemonic: Instruction mnemonic (e.g., "LDA")
        mode: Addressing mode of this encoding
    """
    mnemonic: str
    mode: AddressingMode

    @property
    def size(self) -> int:
        """Total instruction size in bytes (opcode plus operand)."""
        return 1 + self.mode.operand_size

    def __repr__(self) -> str:
        return f"InstructionInfo({self.mnemonic} {self.mode}, size={self.size})"


# =============================================================================
# Opcode Constants
# =============================================================================

# Load accumulator
LDA_IM = 0xA9
LDA_ZP = 0xA5
LDA_ZP_X = 0xB5
LDA_ABS = 0xAD
LDA_ABS_X = 0xBD
LDA_ABS_Y = 0xB9
LDA_IND_X = 0xA1
LDA_IND_Y = 0xB1

# Load X
LDX_IM = 0xA2
LDX_ZP = 0xA6
LDX_ZP_Y = 0xB6
LDX_ABS = 0xAE
LDX_ABS_Y = 0xBE

# Load Y
LDY_IM = 0xA0
LDY_ZP = 0xA4
LDY_ZP_X = 0xB4
LDY_ABS = 0xAC
LDY_ABS_X = 0xBC

# Logical AND
AND_IM = 0x29
AND_ZP = 0x25
AND_ZP_X = 0x35
AND_ABS = 0x2D
AND_ABS_X = 0x3D
AND_ABS_Y = 0x39
AND_IND_X = 0x21
AND_IND_Y = 0x31

# Logical OR
ORA_IM = 0x09
ORA_ZP = 0x05
ORA_ZP_X = 0x15
ORA_ABS = 0x0D
ORA_ABS_X = 0x1D
ORA_ABS_Y = 0x19
ORA_IND_X = 0x01
ORA_IND_Y = 0x11

# Exclusive OR
EOR_IM = 0x49
EOR_ZP = 0x45
EOR_ZP_X = 0x55
EOR_ABS = 0x4D
EOR_ABS_X = 0x5D
EOR_ABS_Y = 0x59
EOR_IND_X = 0x41
EOR_IND_Y = 0x51

# Logical shift right
LSR_ACC = 0x4A
LSR_ZP = 0x46
LSR_ZP_X = 0x56
LSR_ABS = 0x4E
LSR_ABS_X = 0x5E

# Stack
PHA = 0x48
PHP = 0x08
PLA = 0x68
PLP = 0x28

# Jumps and subroutines
JMP_ABS = 0x4C
JMP_IND = 0x6C
JSR = 0x20
RTS = 0x60

# Register transfers
TAX = 0xAA
TAY = 0xA8
TXA = 0x8A
TYA = 0x98
TSX = 0xBA
TXS = 0x9A

# Flag set/clear
SEC = 0x38
SEI = 0x78
SED = 0xF8
CLC = 0x18
CLI = 0x58
CLD = 0xD8
CLV = 0xB8

# No operation (halts the core by default)
NOP = 0xEA


# =============================================================================
# Opcode Table
# =============================================================================
# Master table of implemented instructions.
# Key: opcode byte
# Value: InstructionInfo(mnemonic, addressing_mode)
#
# Read-style families (LDA, LDX, LDY, AND, ORA, EOR) and LSR share one
# handler per mnemonic, so adding an encoding is a single entry here.
# =============================================================================

_M = AddressingMode

OPCODE_TABLE: dict[int, InstructionInfo] = {
    # LDA
    LDA_IM: InstructionInfo("LDA", _M.IMMEDIATE),
    LDA_ZP: InstructionInfo("LDA", _M.ZERO_PAGE),
    LDA_ZP_X: InstructionInfo("LDA", _M.ZERO_PAGE_X),
    LDA_ABS: InstructionInfo("LDA", _M.ABSOLUTE),
    LDA_ABS_X: InstructionInfo("LDA", _M.ABSOLUTE_X),
    LDA_ABS_Y: InstructionInfo("LDA", _M.ABSOLUTE_Y),
    LDA_IND_X: InstructionInfo("LDA", _M.INDIRECT_X),
    LDA_IND_Y: InstructionInfo("LDA", _M.INDIRECT_Y),

    # LDX
    LDX_IM: InstructionInfo("LDX", _M.IMMEDIATE),
    LDX_ZP: InstructionInfo("LDX", _M.ZERO_PAGE),
    LDX_ZP_Y: InstructionInfo("LDX", _M.ZERO_PAGE_Y),
    LDX_ABS: InstructionInfo("LDX", _M.ABSOLUTE),
    LDX_ABS_Y: InstructionInfo("LDX", _M.ABSOLUTE_Y),

    # LDY
    LDY_IM: InstructionInfo("LDY", _M.IMMEDIATE),
    LDY_ZP: InstructionInfo("LDY", _M.ZERO_PAGE),
    LDY_ZP_X: InstructionInfo("LDY", _M.ZERO_PAGE_X),
    LDY_ABS: InstructionInfo("LDY", _M.ABSOLUTE),
    LDY_ABS_X: InstructionInfo("LDY", _M.ABSOLUTE_X),

    # AND
    AND_IM: InstructionInfo("AND", _M.IMMEDIATE),
    AND_ZP: InstructionInfo("AND", _M.ZERO_PAGE),
    AND_ZP_X: InstructionInfo("AND", _M.ZERO_PAGE_X),
    AND_ABS: InstructionInfo("AND", _M.ABSOLUTE),
    AND_ABS_X: InstructionInfo("AND", _M.ABSOLUTE_X),
    AND_ABS_Y: InstructionInfo("AND", _M.ABSOLUTE_Y),
    AND_IND_X: InstructionInfo("AND", _M.INDIRECT_X),
    AND_IND_Y: InstructionInfo("AND", _M.INDIRECT_Y),

    # ORA
    ORA_IM: InstructionInfo("ORA", _M.IMMEDIATE),
    ORA_ZP: InstructionInfo("ORA", _M.ZERO_PAGE),
    ORA_ZP_X: InstructionInfo("ORA", _M.ZERO_PAGE_X),
    ORA_ABS: InstructionInfo("ORA", _M.ABSOLUTE),
    ORA_ABS_X: InstructionInfo("ORA", _M.ABSOLUTE_X),
    ORA_ABS_Y: InstructionInfo("ORA", _M.ABSOLUTE_Y),
    ORA_IND_X: InstructionInfo("ORA", _M.INDIRECT_X),
    ORA_IND_Y: InstructionInfo("ORA", _M.INDIRECT_Y),

    # EOR
    EOR_IM: InstructionInfo("EOR", _M.IMMEDIATE),
    EOR_ZP: InstructionInfo("EOR", _M.ZERO_PAGE),
    EOR_ZP_X: InstructionInfo("EOR", _M.ZERO_PAGE_X),
    EOR_ABS: InstructionInfo("EOR", _M.ABSOLUTE),
    EOR_ABS_X: InstructionInfo("EOR", _M.ABSOLUTE_X),
    EOR_ABS_Y: InstructionInfo("EOR", _M.ABSOLUTE_Y),
    EOR_IND_X: InstructionInfo("EOR", _M.INDIRECT_X),
    EOR_IND_Y: InstructionInfo("EOR", _M.INDIRECT_Y),

    # LSR
    LSR_ACC: InstructionInfo("LSR", _M.ACCUMULATOR),
    LSR_ZP: InstructionInfo("LSR", _M.ZERO_PAGE),
    LSR_ZP_X: InstructionInfo("LSR", _M.ZERO_PAGE_X),
    LSR_ABS: InstructionInfo("LSR", _M.ABSOLUTE),
    LSR_ABS_X: InstructionInfo("LSR", _M.ABSOLUTE_X),

    # Stack
    PHA: InstructionInfo("PHA", _M.IMPLIED),
    PHP: InstructionInfo("PHP", _M.IMPLIED),
    PLA: InstructionInfo("PLA", _M.IMPLIED),
    PLP: InstructionInfo("PLP", _M.IMPLIED),

    # Control flow
    JMP_ABS: InstructionInfo("JMP", _M.ABSOLUTE),
    JMP_IND: InstructionInfo("JMP", _M.INDIRECT),
    JSR: InstructionInfo("JSR", _M.ABSOLUTE),
    RTS: InstructionInfo("RTS", _M.IMPLIED),

    # Transfers
    TAX: InstructionInfo("TAX", _M.IMPLIED),
    TAY: InstructionInfo("TAY", _M.IMPLIED),
    TXA: InstructionInfo("TXA", _M.IMPLIED),
    TYA: InstructionInfo("TYA", _M.IMPLIED),
    TSX: InstructionInfo("TSX", _M.IMPLIED),
    TXS: InstructionInfo("TXS", _M.IMPLIED),

    # Flags
    SEC: InstructionInfo("SEC", _M.IMPLIED),
    SEI: InstructionInfo("SEI", _M.IMPLIED),
    SED: InstructionInfo("SED", _M.IMPLIED),
    CLC: InstructionInfo("CLC", _M.IMPLIED),
    CLI: InstructionInfo("CLI", _M.IMPLIED),
    CLD: InstructionInfo("CLD", _M.IMPLIED),
    CLV: InstructionInfo("CLV", _M.IMPLIED),

    NOP: InstructionInfo("NOP", _M.IMPLIED),
}

del _M


# =============================================================================
# Lookup Functions
# =============================================================================

def get_instruction_info(opcode: int) -> Optional[InstructionInfo]:
    """Return the table entry for an opcode byte, or None if unimplemented."""
    return OPCODE_TABLE.get(opcode)


def is_valid_opcode(opcode: int) -> bool:
    return opcode in OPCODE_TABLE


def get_opcodes(mnemonic: str) -> dict[AddressingMode, int]:
    """
    Return every encoding of a mnemonic, keyed by addressing mode.

    Example:
        >>> get_opcodes("LDX")[AddressingMode.IMMEDIATE]
        162
    """
    mnemonic = mnemonic.upper()
    return {
        info.mode: opcode
        for opcode, info in OPCODE_TABLE.items()
        if info.mnemonic == mnemonic
    }


MNEMONICS: frozenset[str] = frozenset(info.mnemonic for info in OPCODE_TABLE.values())
