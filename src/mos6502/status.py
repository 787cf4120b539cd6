"""
Processor Status Register
=========================

The 6502 keeps its condition flags in a single 8-bit register (P).

Bit layout:
    7  6  5  4  3  2  1  0
    N  V  -  B  D  I  Z  C

Bit 5 is not modelled: it is never set by an instruction and only appears
in the register when a byte carrying it is pulled from the stack.

The string form of the register is the 8-bit pattern, most significant bit
first ("00000010" after loading zero into A from a cleared register).

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

from enum import IntFlag


class Flag(IntFlag):
    """Status register flag bits."""
    C = 0x01  # Carry
    Z = 0x02  # Zero
    I = 0x04  # Interrupt disable
    D = 0x08  # Decimal mode (accepted, not modelled)
    B = 0x10  # Break
    V = 0x40  # Overflow
    N = 0x80  # Negative


class StatusRegister:
    """
    Packed N V B D I Z C flags.

    Example:
        >>> status = StatusRegister()
        >>> status.set(Flag.Z, True)
        >>> str(status)
        '00000010'
    """

    __slots__ = ("_bits",)

    def __init__(self, bits: int = 0):
        self._bits = int(bits) & 0xFF

    @classmethod
    def from_bits(cls, bits: int) -> "StatusRegister":
        """Build a register carrying exactly the given bit pattern."""
        return cls(bits)

    @property
    def bits(self) -> int:
        """Raw packed byte (pushed by PHP)."""
        return self._bits

    def load(self, bits: int) -> None:
        """Replace the whole register with a raw byte (PLP)."""
        self._bits = int(bits) & 0xFF

    def set(self, flag: Flag, value: bool) -> None:
        """Set or clear the named flag, leaving every other bit untouched."""
        if value:
            self._bits |= int(flag)
        else:
            self._bits &= ~int(flag) & 0xFF

    def is_set(self, flag: Flag) -> bool:
        return (self._bits & flag) == flag

    def clear(self) -> None:
        """Clear every flag."""
        self._bits = 0

    def __eq__(self, other: object) -> bool:
        if isinstance(other, StatusRegister):
            return self._bits == other._bits
        return NotImplemented

    def __repr__(self) -> str:
        return f"StatusRegister({self._bits:#04x})"

    def __str__(self) -> str:
        return f"{self._bits:08b}"
