"""
Addressable Memory
==================

Flat 64KB memory for the 6502 execution core.

Memory Map:
    $0000-$00FF  Zero page (single-byte addressing)
    $0100-$01FF  Hardware stack
    $FFFC-$FFFD  Reset vector

There is no bank switching and no memory-mapped I/O: every address is
plain RAM, zero-initialised on construction.

Words are little-endian (low byte at the lower address).

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

from .errors import MemoryAccessError


class Memory:
    """
    64KB byte-addressable memory.

    Addresses must lie in $0000-$FFFF. The CPU wraps every computed address
    before it reaches this class, so MemoryAccessError can only come from
    external callers such as program loaders and tests.

    Example:
        >>> mem = Memory()
        >>> mem.write_word(0xFFFC, 0x8000)
        >>> mem.read_byte(0xFFFC), mem.read_byte(0xFFFD)
        (0, 128)
    """

    SIZE = 0x10000

    def __init__(self):
        self._data = bytearray(self.SIZE)

    def _check(self, address: int) -> None:
        if not 0 <= address < self.SIZE:
            raise MemoryAccessError(address)

    def read_byte(self, address: int) -> int:
        """
        Read byte from memory.

        Args:
            address: 16-bit address

        Returns:
            Byte value at address

        Raises:
            MemoryAccessError: If address is outside $0000-$FFFF
        """
        self._check(address)
        return self._data[address]

    def write_byte(self, address: int, value: int) -> None:
        """
        Write byte to memory.

        Args:
            address: 16-bit address
            value: Byte value to write (masked to 8 bits)

        Raises:
            MemoryAccessError: If address is outside $0000-$FFFF
        """
        self._check(address)
        self._data[address] = value & 0xFF

    def read_word(self, address: int) -> int:
        """Read little-endian word from address and address + 1."""
        lo = self.read_byte(address)
        hi = self.read_byte(address + 1)
        return (hi << 8) | lo

    def write_word(self, address: int, value: int) -> None:
        """Write little-endian word to address and address + 1."""
        self._check(address + 1)
        self.write_byte(address, value & 0xFF)
        self.write_byte(address + 1, (value >> 8) & 0xFF)

    def load(self, address: int, data: bytes) -> None:
        """
        Copy a program image into memory.

        Args:
            address: Start address
            data: Raw bytes to deposit

        Raises:
            MemoryAccessError: If the image does not fit below $10000
        """
        self._check(address)
        end = address + len(data)
        if end > self.SIZE:
            raise MemoryAccessError(
                end - 1,
                f"error: {len(data)} byte image at {address:#06x} overruns memory",
            )
        self._data[address:end] = data

    def dump(self, address: int, length: int) -> bytes:
        """Return a copy of length bytes starting at address."""
        self._check(address)
        if length and address + length > self.SIZE:
            raise MemoryAccessError(address + length - 1)
        return bytes(self._data[address:address + length])

    def clear(self) -> None:
        """Zero the whole address space."""
        self._data[:] = bytes(self.SIZE)

    def __len__(self) -> int:
        return self.SIZE
