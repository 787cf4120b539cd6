"""
Opcode Table Tests
==================

Tests for the instruction encodings and lookup helpers.

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

import pytest
from mos6502 import MOS6502, OPCODE_TABLE, AddressingMode, InstructionInfo
from mos6502 import opcodes as op
from mos6502.opcodes import MNEMONICS, get_instruction_info, get_opcodes, is_valid_opcode


class TestEncodings:
    """Test published opcode values."""

    @pytest.mark.parametrize("opcode,mnemonic,mode", [
        (0xA9, "LDA", AddressingMode.IMMEDIATE),
        (0xA5, "LDA", AddressingMode.ZERO_PAGE),
        (0xB5, "LDA", AddressingMode.ZERO_PAGE_X),
        (0xAD, "LDA", AddressingMode.ABSOLUTE),
        (0xB6, "LDX", AddressingMode.ZERO_PAGE_Y),
        (0x4A, "LSR", AddressingMode.ACCUMULATOR),
        (0x6C, "JMP", AddressingMode.INDIRECT),
        (0x20, "JSR", AddressingMode.ABSOLUTE),
        (0xEA, "NOP", AddressingMode.IMPLIED),
    ])
    def test_table_entry(self, opcode, mnemonic, mode):
        assert OPCODE_TABLE[opcode] == InstructionInfo(mnemonic, mode)

    def test_constants_match_table(self):
        assert OPCODE_TABLE[op.LDA_IM].mnemonic == "LDA"
        assert OPCODE_TABLE[op.EOR_IND_Y].mode is AddressingMode.INDIRECT_Y
        assert OPCODE_TABLE[op.TXS].mnemonic == "TXS"


class TestLookups:
    """Test lookup helpers."""

    def test_mode_counts(self):
        assert len(get_opcodes("LDA")) == 8
        assert len(get_opcodes("LDX")) == 5
        assert len(get_opcodes("LDY")) == 5
        assert len(get_opcodes("LSR")) == 5

    def test_get_opcodes_case_insensitive(self):
        assert get_opcodes("ldx")[AddressingMode.IMMEDIATE] == 0xA2

    def test_unknown_mnemonic(self):
        assert get_opcodes("ADC") == {}

    def test_is_valid_opcode(self):
        assert is_valid_opcode(0xEA)
        assert not is_valid_opcode(0xFF)

    def test_get_instruction_info(self):
        assert get_instruction_info(0xAD).size == 3
        assert get_instruction_info(0x02) is None

    def test_mnemonics(self):
        assert {"LDA", "EOR", "CLV", "NOP"} <= MNEMONICS
        assert "ADC" not in MNEMONICS

    def test_mode_str(self):
        assert str(AddressingMode.ZERO_PAGE_X) == "zero page x"

    def test_every_table_entry_dispatches(self):
        """Every listed opcode has a handler in the CPU."""
        cpu = MOS6502()
        for opcode in OPCODE_TABLE:
            assert cpu._dispatch[opcode] is not None
        assert sum(handler is not None for handler in cpu._dispatch) == len(OPCODE_TABLE)
