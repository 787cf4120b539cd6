"""
MOS 6502 CPU Emulator
=====================

Execution core for the MOS Technology 6502 with instrumentation hooks.

The 6502 is an 8-bit processor with:
- 8-bit registers: A (accumulator), X and Y (index)
- 8-bit stack pointer addressing the fixed stack page $0100-$01FF
- 16-bit program counter
- Flags: N (negative), V (overflow), B (break), D (decimal),
  I (interrupt disable), Z (zero), C (carry)

Execution model:
- reset() loads PC from the reset vector at $FFFC-$FFFD
- run() fetches an opcode at PC, dispatches it through a 256-entry table
  and repeats until the machine halts (NOP by default) or faults
- Fetching past $FFFF and unknown opcodes are fatal CPUFault exceptions

Not modelled: cycle timing, interrupts, BCD arithmetic.

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

from dataclasses import dataclass
from functools import partial
from typing import Callable, Optional
import logging

from .config import EmulatorConfig
from .errors import ProgramCounterOverflowError, UnknownOpcodeError
from .events import HaltEvent, HaltReason
from .memory import Memory
from .opcodes import OPCODE_TABLE, AddressingMode
from .status import Flag, StatusRegister

logger = logging.getLogger(__name__)

STACK_PAGE = 0x0100
RESET_VECTOR = 0xFFFC
MAX_ADDRESS = 0xFFFF


@dataclass
class Registers:
    """
    CPU register file.

    Values are stored as Python ints but represent:
    - a, x, y, sp: 8-bit unsigned (0-255); sp is an offset into $0100-$01FF
    - pc: 16-bit unsigned, transiently $10000 after fetching the byte at $FFFF
    """
    pc: int = 0
    sp: int = 0
    a: int = 0
    x: int = 0
    y: int = 0


@dataclass(frozen=True)
class CPUState:
    """
    Immutable snapshot of the CPU registers and flags.

    Returned by MOS6502.snapshot() and carried by CPUFault exceptions.
    Independent of the engine: later execution never changes it.
    """
    pc: int = 0
    sp: int = 0
    a: int = 0
    x: int = 0
    y: int = 0
    flags: int = 0

    @property
    def flags_string(self) -> str:
        """Flags as 8 binary digits, most significant bit first."""
        return f"{self.flags:08b}"

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "pc": f"${self.pc:04X}",
            "sp": f"${self.sp:02X}",
            "a": f"${self.a:02X}",
            "x": f"${self.x:02X}",
            "y": f"${self.y:02X}",
            "flags": self.flags_string,
        }


def _flag_property(flag: Flag, doc: str) -> property:
    def getter(self) -> bool:
        return self.status.is_set(flag)

    def setter(self, value: bool) -> None:
        self.status.set(flag, value)

    return property(getter, setter, doc=doc)


class MOS6502:
    """
    MOS 6502 execution engine with instrumentation support.

    The engine owns a 64KB Memory, the register file and the status
    register for its whole lifetime. Callers deposit a program through
    ``cpu.memory``, call reset() and then run().

    Instrumentation hooks allow:
    - Inspecting every instruction before execution
    - Monitoring all memory reads/writes made by the CPU
    - Stopping execution from either hook by returning False

    Example:
        >>> cpu = MOS6502()
        >>> cpu.memory.load(0x8000, bytes([0xA9, 0x42, 0xEA]))  # LDA #$42; NOP
        >>> cpu.reset(0x8000)
        >>> event = cpu.run()
        >>> print(f"A=${cpu.a:02X} PC=${cpu.pc:04X}")
        A=$42 PC=$8003
    """

    def __init__(self, config: Optional[EmulatorConfig] = None):
        """
        Initialize CPU with zeroed memory and registers.

        Args:
            config: Behaviour switches; defaults to EmulatorConfig()
        """
        self.config = config or EmulatorConfig()
        self.memory = Memory()
        self.registers = Registers()
        self.status = StatusRegister()

        # Instrumentation hooks
        # on_instruction(pc, opcode) -> bool: return False to stop execution
        self.on_instruction: Optional[Callable[[int, int], bool]] = None
        # on_memory_read(address, value) -> bool: return False to stop execution
        self.on_memory_read: Optional[Callable[[int, int], bool]] = None
        # on_memory_write(address, value) -> bool: return False to stop execution
        self.on_memory_write: Optional[Callable[[int, int], bool]] = None

        self._memory_break_requested = False
        self._halt_requested = False
        self._halted = False
        self._halt_reason: Optional[HaltReason] = None
        self._last_opcode: Optional[int] = None
        self.instructions_executed = 0

        self._dispatch = self._build_dispatch_table()

    # ========================================
    # Register Properties
    # ========================================

    @property
    def a(self) -> int:
        """Accumulator (8-bit)."""
        return self.registers.a

    @a.setter
    def a(self, value: int) -> None:
        self.registers.a = value & 0xFF

    @property
    def x(self) -> int:
        """Index register X (8-bit)."""
        return self.registers.x

    @x.setter
    def x(self, value: int) -> None:
        self.registers.x = value & 0xFF

    @property
    def y(self) -> int:
        """Index register Y (8-bit)."""
        return self.registers.y

    @y.setter
    def y(self, value: int) -> None:
        self.registers.y = value & 0xFF

    @property
    def sp(self) -> int:
        """Stack pointer (8-bit offset into the stack page)."""
        return self.registers.sp

    @sp.setter
    def sp(self, value: int) -> None:
        self.registers.sp = value & 0xFF

    @property
    def stack_address(self) -> int:
        """Memory address the next push writes to."""
        return STACK_PAGE | self.registers.sp

    @property
    def pc(self) -> int:
        """Program counter (16-bit)."""
        return self.registers.pc

    @pc.setter
    def pc(self, value: int) -> None:
        self.registers.pc = value & 0xFFFF

    # ========================================
    # Flag Properties
    # ========================================

    flag_n = _flag_property(Flag.N, "Negative flag.")
    flag_v = _flag_property(Flag.V, "Overflow flag.")
    flag_b = _flag_property(Flag.B, "Break flag.")
    flag_d = _flag_property(Flag.D, "Decimal mode flag.")
    flag_i = _flag_property(Flag.I, "Interrupt disable flag.")
    flag_z = _flag_property(Flag.Z, "Zero flag.")
    flag_c = _flag_property(Flag.C, "Carry flag.")

    @property
    def halted(self) -> bool:
        """True once the machine has stopped (NOP or another halt reason)."""
        return self._halted

    @property
    def halt_reason(self) -> Optional[HaltReason]:
        return self._halt_reason

    # ========================================
    # Memory Access
    # ========================================

    def _read_byte(self, addr: int) -> int:
        """Read byte from memory with optional watchpoint check."""
        addr &= 0xFFFF
        value = self.memory.read_byte(addr)
        if self.on_memory_read:
            if not self.on_memory_read(addr, value):
                self._memory_break_requested = True
        return value

    def _write_byte(self, addr: int, value: int) -> None:
        """Write byte to memory with optional watchpoint check."""
        addr &= 0xFFFF
        value &= 0xFF
        if self.on_memory_write:
            if not self.on_memory_write(addr, value):
                self._memory_break_requested = True
        self.memory.write_byte(addr, value)

    def _read_word(self, addr: int) -> int:
        """Read 16-bit word (little-endian), wrapping at $FFFF."""
        lo = self._read_byte(addr)
        hi = self._read_byte(addr + 1)
        return (hi << 8) | lo

    def _read_zero_page_word(self, addr: int) -> int:
        """Read a pointer stored in the zero page."""
        lo = self._read_byte(addr)
        if self.config.zero_page_wrap:
            hi = self._read_byte((addr + 1) & 0xFF)
        else:
            hi = self._read_byte(addr + 1)
        return (hi << 8) | lo

    # ========================================
    # Stack Operations
    # ========================================

    def _push_byte(self, value: int) -> None:
        """Push byte onto stack (write, then post-decrement)."""
        self._write_byte(STACK_PAGE | self.sp, value)
        self.sp = self.sp - 1

    def _pop_byte(self) -> int:
        """Pop byte from stack (pre-increment, then read)."""
        self.sp = self.sp + 1
        return self._read_byte(STACK_PAGE | self.sp)

    def _push_word(self, value: int) -> None:
        """Push word onto stack (high byte first)."""
        self._push_byte((value >> 8) & 0xFF)
        self._push_byte(value & 0xFF)

    def _pop_word(self) -> int:
        """Pop word from stack (low byte first)."""
        lo = self._pop_byte()
        hi = self._pop_byte()
        return (hi << 8) | lo

    # ========================================
    # Program Counter Operations
    # ========================================

    def fetch_byte(self) -> int:
        """
        Fetch next byte at PC and increment PC.

        Raises:
            ProgramCounterOverflowError: If PC is already past $FFFF
        """
        pc = self.registers.pc
        if pc > MAX_ADDRESS:
            self._fault(ProgramCounterOverflowError(pc, self.snapshot()))
        value = self._read_byte(pc)
        self.registers.pc = pc + 1
        return value

    def fetch_word(self) -> int:
        """Fetch next word at PC (low byte first) and increment PC by 2."""
        lo = self.fetch_byte()
        hi = self.fetch_byte()
        return (hi << 8) | lo

    # ========================================
    # Reset
    # ========================================

    def reset(self, entry: Optional[int] = None) -> None:
        """
        Reset CPU to power-on state.

        Sets PC to the reset vector address $FFFC, SP to 0 (stack address
        $0100), clears A, X, Y and every flag.

        Args:
            entry: Optional start address. It is stored in the reset vector
                   at $FFFC-$FFFD and PC is then loaded from that vector.

        Raises:
            ValueError: If entry is not a 16-bit address
        """
        self.registers = Registers(pc=RESET_VECTOR)
        self.status.clear()
        self._halted = False
        self._halt_reason = None
        self._halt_requested = False
        self._memory_break_requested = False
        self._last_opcode = None
        self.instructions_executed = 0

        if entry is not None:
            if not 0 <= entry <= MAX_ADDRESS:
                raise ValueError(f"entry address out of range: {entry:#x}")
            self.memory.write_word(RESET_VECTOR, entry)
            self.registers.pc = self.memory.read_word(RESET_VECTOR)
            logger.debug(f"Reset with entry vector ${self.pc:04X}")
        else:
            logger.debug("Reset, PC at reset vector $FFFC")

    # ========================================
    # Main Execution Loop
    # ========================================

    def request_halt(self) -> None:
        """Ask run() to stop before the next instruction."""
        self._halt_requested = True

    def _halt(self, reason: HaltReason) -> None:
        self._halted = True
        self._halt_reason = reason

    def _fault(self, fault: Exception) -> None:
        logger.error(f"CPU fault: {fault}\n{self.debug_dump()}")
        raise fault

    def step(self) -> int:
        """
        Execute exactly one instruction.

        Returns:
            The opcode that was executed

        Raises:
            UnknownOpcodeError: If the opcode has no handler
            ProgramCounterOverflowError: If PC ran past $FFFF
        """
        pc = self.registers.pc
        opcode = self.fetch_byte()
        self._last_opcode = opcode

        handler = self._dispatch[opcode]
        if handler is None:
            self._fault(UnknownOpcodeError(opcode, pc, self.snapshot()))

        handler()
        self.instructions_executed += 1
        return opcode

    def run(self, max_instructions: Optional[int] = None) -> HaltEvent:
        """
        Execute instructions until the machine halts.

        This is the main emulation entry point.

        Args:
            max_instructions: Optional instruction budget for this call;
                              defaults to config.max_instructions

        Returns:
            HaltEvent describing why execution stopped

        Note:
            Execution stops when:
            - NOP executes (with config.halt_on_nop)
            - request_halt() was called
            - on_instruction returns False (before the instruction runs)
            - a memory hook returns False (after the instruction completes)
            - the instruction budget is exhausted

            Faults are raised, not returned.
        """
        limit = max_instructions if max_instructions is not None else self.config.max_instructions
        if limit is not None and limit <= 0:
            raise ValueError(f"max_instructions must be positive, got {limit}")

        self._halted = False
        self._halt_reason = None
        self._memory_break_requested = False
        count = 0

        while not self._halted:
            if self._halt_requested:
                self._halt_requested = False
                self._halt(HaltReason.REQUESTED)
                break

            if limit is not None and count >= limit:
                self._halt(HaltReason.MAX_INSTRUCTIONS)
                break

            # Call instruction hook if set
            pc = self.registers.pc
            if self.on_instruction and pc <= MAX_ADDRESS:
                if not self.on_instruction(pc, self.memory.read_byte(pc)):
                    self._halt(HaltReason.INSTRUCTION_HOOK)
                    break

            self.step()
            count += 1

            # Check if a memory watchpoint was triggered
            if self._memory_break_requested and not self._halted:
                self._memory_break_requested = False
                self._halt(HaltReason.MEMORY_HOOK)

        event = HaltEvent(self._halt_reason, self.registers.pc, self._last_opcode, count)
        logger.debug(f"{event}")
        return event

    # ========================================
    # Dispatch Table
    # ========================================

    def _build_dispatch_table(self) -> list[Optional[Callable[[], None]]]:
        """
        Build the 256-entry opcode -> handler table.

        Each handler is bound to its addressing mode, so the main loop
        makes a single indexed lookup per instruction.
        """
        operations: dict[str, Callable[[AddressingMode], None]] = {
            "LDA": self._lda,
            "LDX": self._ldx,
            "LDY": self._ldy,
            "AND": self._and,
            "ORA": self._ora,
            "EOR": self._eor,
            "LSR": self._lsr,
            "PHA": self._pha,
            "PHP": self._php,
            "PLA": self._pla,
            "PLP": self._plp,
            "JMP": self._jmp,
            "JSR": self._jsr,
            "RTS": self._rts,
            "TAX": self._tax,
            "TAY": self._tay,
            "TXA": self._txa,
            "TYA": self._tya,
            "TSX": self._tsx,
            "TXS": self._txs,
            "SEC": partial(self._set_flag, Flag.C, True),
            "SEI": partial(self._set_flag, Flag.I, True),
            "SED": partial(self._set_flag, Flag.D, True),
            "CLC": partial(self._set_flag, Flag.C, False),
            "CLI": partial(self._set_flag, Flag.I, False),
            "CLD": partial(self._set_flag, Flag.D, False),
            "CLV": partial(self._set_flag, Flag.V, False),
            "NOP": self._nop,
        }

        table: list[Optional[Callable[[], None]]] = [None] * 256
        for opcode, info in OPCODE_TABLE.items():
            table[opcode] = partial(operations[info.mnemonic], info.mode)
        return table

    # ========================================
    # Addressing Modes
    # ========================================

    def _zero_page_indexed(self, base: int, index: int) -> int:
        if self.config.zero_page_wrap:
            return (base + index) & 0xFF
        return base + index

    def _resolve_address(self, mode: AddressingMode) -> int:
        """
        Fetch operand bytes and compute the effective address.

        Args:
            mode: Addressing mode of the current instruction

        Returns:
            16-bit effective address
        """
        match mode:
            case AddressingMode.ZERO_PAGE:
                return self.fetch_byte()
            case AddressingMode.ZERO_PAGE_X:
                return self._zero_page_indexed(self.fetch_byte(), self.x)
            case AddressingMode.ZERO_PAGE_Y:
                return self._zero_page_indexed(self.fetch_byte(), self.y)
            case AddressingMode.ABSOLUTE:
                return self.fetch_word()
            case AddressingMode.ABSOLUTE_X:
                return (self.fetch_word() + self.x) & 0xFFFF
            case AddressingMode.ABSOLUTE_Y:
                return (self.fetch_word() + self.y) & 0xFFFF
            case AddressingMode.INDIRECT_X:
                pointer = self._zero_page_indexed(self.fetch_byte(), self.x)
                return self._read_zero_page_word(pointer)
            case AddressingMode.INDIRECT_Y:
                pointer = self.fetch_byte()
                return (self._read_zero_page_word(pointer) + self.y) & 0xFFFF
            case AddressingMode.INDIRECT:
                pointer = self.fetch_word()
                lo = self._read_byte(pointer)
                # High byte never crosses the page: ($10FF) reads $10FF and $1000
                hi = self._read_byte((pointer & 0xFF00) | ((pointer + 1) & 0x00FF))
                return (hi << 8) | lo
            case _:
                raise ValueError(f"{mode} addressing has no effective address")

    def _read_operand(self, mode: AddressingMode) -> int:
        """Fetch the 8-bit operand of a read-style instruction."""
        if mode is AddressingMode.IMMEDIATE:
            return self.fetch_byte()
        if mode is AddressingMode.ACCUMULATOR:
            return self.a
        return self._read_byte(self._resolve_address(mode))

    # ========================================
    # ALU Operations
    # ========================================

    def _ld8(self, value: int) -> int:
        """Load 8-bit value, set N,Z flags."""
        self.status.set(Flag.N, (value & 0x80) != 0)
        self.status.set(Flag.Z, value == 0)
        return value

    def _lsr8(self, value: int) -> int:
        """Logical shift right 8-bit, set C,Z flags, clear N."""
        self.status.set(Flag.C, (value & 1) != 0)
        result = value >> 1
        self.status.set(Flag.N, False)
        self.status.set(Flag.Z, result == 0)
        return result

    # ========================================
    # Instruction Handlers
    # ========================================

    def _lda(self, mode: AddressingMode) -> None:
        self.a = self._ld8(self._read_operand(mode))

    def _ldx(self, mode: AddressingMode) -> None:
        self.x = self._ld8(self._read_operand(mode))

    def _ldy(self, mode: AddressingMode) -> None:
        self.y = self._ld8(self._read_operand(mode))

    def _and(self, mode: AddressingMode) -> None:
        self.a = self._ld8(self.a & self._read_operand(mode))

    def _ora(self, mode: AddressingMode) -> None:
        self.a = self._ld8(self.a | self._read_operand(mode))

    def _eor(self, mode: AddressingMode) -> None:
        self.a = self._ld8(self.a ^ self._read_operand(mode))

    def _lsr(self, mode: AddressingMode) -> None:
        if mode is AddressingMode.ACCUMULATOR:
            self.a = self._lsr8(self.a)
            return
        address = self._resolve_address(mode)
        self._write_byte(address, self._lsr8(self._read_byte(address)))

    def _pha(self, mode: AddressingMode) -> None:
        self._push_byte(self.a)

    def _php(self, mode: AddressingMode) -> None:
        self._push_byte(self.status.bits)

    def _pla(self, mode: AddressingMode) -> None:
        self.a = self._ld8(self._pop_byte())

    def _plp(self, mode: AddressingMode) -> None:
        self.status.load(self._pop_byte())

    def _jmp(self, mode: AddressingMode) -> None:
        self.pc = self._resolve_address(mode)

    def _jsr(self, mode: AddressingMode) -> None:
        target = self.fetch_word()
        # Return address is the last byte of the JSR instruction
        self._push_word((self.registers.pc - 1) & 0xFFFF)
        self.pc = target

    def _rts(self, mode: AddressingMode) -> None:
        self.pc = self._pop_word() + 1

    def _tax(self, mode: AddressingMode) -> None:
        self.x = self._ld8(self.a)

    def _tay(self, mode: AddressingMode) -> None:
        self.y = self._ld8(self.a)

    def _txa(self, mode: AddressingMode) -> None:
        self.a = self._ld8(self.x)

    def _tya(self, mode: AddressingMode) -> None:
        self.a = self._ld8(self.y)

    def _tsx(self, mode: AddressingMode) -> None:
        self.x = self._ld8(self.sp)

    def _txs(self, mode: AddressingMode) -> None:
        self.sp = self.x

    def _set_flag(self, flag: Flag, value: bool, mode: AddressingMode) -> None:
        self.status.set(flag, value)

    def _nop(self, mode: AddressingMode) -> None:
        if self.config.halt_on_nop:
            self._halt(HaltReason.NOP)

    # ========================================
    # Snapshot and Diagnostics
    # ========================================

    def snapshot(self) -> CPUState:
        """Return an immutable copy of the registers and flags."""
        regs = self.registers
        return CPUState(
            pc=regs.pc,
            sp=regs.sp,
            a=regs.a,
            x=regs.x,
            y=regs.y,
            flags=self.status.bits,
        )

    def restore(self, state: CPUState) -> None:
        """Restore registers and flags from a snapshot (memory is untouched)."""
        self.registers = Registers(
            pc=state.pc & 0xFFFF,
            sp=state.sp & 0xFF,
            a=state.a & 0xFF,
            x=state.x & 0xFF,
            y=state.y & 0xFF,
        )
        self.status.load(state.flags)

    def debug_dump(self) -> str:
        """
        Format registers, flags and the byte at PC.

        Purely observational: reads memory directly, bypassing hooks.
        """
        pc = self.registers.pc
        opcode = f"0x{self.memory.read_byte(pc):02x}" if pc <= MAX_ADDRESS else "--"
        return "\n".join([
            f"pc: 0x{pc:04x}",
            f"sp: 0x{self.sp:02x} (0x{self.stack_address:04x})",
            f"a : 0x{self.a:02x}",
            f"x : 0x{self.x:02x}",
            f"y : 0x{self.y:02x}",
            f"ps: {self.status}",
            f"op: {opcode}",
        ])
