"""
Synacor VM - Component Tests

Register file, operand resolver, ALU helpers, opcode table, word memory
and stack, each exercised on its own without running the engine.
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest

from synacor_vm.config import PHYSICAL_WORDS, NUM_REGISTERS
from synacor_vm.cpu.regs import Registers
from synacor_vm.cpu.operands import (
    register_index, resolve_data, resolve_write_target, WriteTarget,
)
from synacor_vm.cpu.decoder import OPCODES, MNEMONICS, decode_opcode
from synacor_vm.cpu import alu
from synacor_vm.mem.memory import Memory
from synacor_vm.mem.stack import Stack
from synacor_vm.errors import BadRegister, BadOpcode, StackUnderflow


class TestRegisters:

    def test_eight_zeroed_slots(self):
        regs = Registers()
        assert len(regs) == NUM_REGISTERS == 8
        assert regs.r == [0] * 8
        assert regs.PC == 0

    def test_write_masks_to_16_bits(self):
        regs = Registers()
        regs[3] = 0x1FFFF
        assert regs[3] == 0xFFFF

    def test_advance_wraps(self):
        regs = Registers()
        regs.PC = 0xFFFF
        assert regs.advance() == 0xFFFF
        assert regs.PC == 0

    def test_display(self):
        regs = Registers()
        regs[0] = 5
        regs.PC = 12
        text = regs.display()
        assert text.startswith("PC=00012")
        assert "R0=00005" in text

    def test_reset(self):
        regs = Registers()
        regs[1] = 9
        regs.PC = 100
        regs.steps = 7
        regs.reset()
        assert (regs.r, regs.PC, regs.steps) == ([0] * 8, 0, 0)


class TestOperandResolver:

    def test_literals_pass_through(self):
        regs = Registers()
        assert resolve_data(regs, 0) == 0
        assert resolve_data(regs, 32767) == 32767

    def test_registers(self):
        regs = Registers()
        for i in range(8):
            regs[i] = 100 + i
        for i in range(8):
            assert resolve_data(regs, 32768 + i) == 100 + i

    @pytest.mark.parametrize("raw", [32776, 40000, 65535])
    def test_invalid_range(self, raw):
        with pytest.raises(BadRegister):
            resolve_data(Registers(), raw)
        with pytest.raises(BadRegister):
            resolve_write_target(raw)

    def test_register_index(self):
        assert register_index(42) is None
        assert register_index(32768) == 0
        assert register_index(32775) == 7

    def test_write_target_register(self):
        regs = Registers()
        target = resolve_write_target(32770)
        assert target == WriteTarget(32770, 2)
        assert not target.discards
        target.store(regs, 55)
        assert regs[2] == 55

    def test_write_target_literal_discards(self):
        regs = Registers()
        target = resolve_write_target(12)
        assert target.discards
        target.store(regs, 55)
        assert regs.r == [0] * 8


class TestALU:

    def test_add15(self):
        assert alu.add15(32767, 32767) == 32766
        assert alu.add15(32758, 15) == 5
        assert alu.add15(65535, 65535) == 32766

    def test_mult15(self):
        assert alu.mult15(32767, 32767) == 1
        assert alu.mult15(300, 200) == 27232

    def test_mod15(self):
        assert alu.mod15(17, 5) == 2
        with pytest.raises(ZeroDivisionError):
            alu.mod15(1, 0)

    def test_bitwise(self):
        assert alu.and15(12, 10) == 8
        assert alu.or15(12, 10) == 14
        assert alu.not15(0) == 32767
        assert alu.not15(32767) == 0

    def test_compare(self):
        assert alu.eq(4, 4) == 1
        assert alu.eq(4, 5) == 0
        assert alu.gt(5, 4) == 1
        assert alu.gt(4, 4) == 0


class TestDecoder:

    def test_table_covers_0_to_21(self):
        assert sorted(OPCODES) == list(range(22))

    @pytest.mark.parametrize("opcode,mnem,count", [
        (0, 'HALT', 0), (1, 'SET', 2), (4, 'EQ', 3), (9, 'ADD', 3),
        (14, 'NOT', 2), (17, 'CALL', 1), (18, 'RET', 0), (20, 'IN', 1),
    ])
    def test_entries(self, opcode, mnem, count):
        assert decode_opcode(opcode, 0) == (mnem, count)
        assert MNEMONICS[mnem] == opcode

    def test_unknown(self):
        with pytest.raises(BadOpcode) as info:
            decode_opcode(22, 300)
        assert info.value.pc == 300


class TestMemory:

    def test_zero_initialised(self):
        mem = Memory()
        assert len(mem) == PHYSICAL_WORDS
        assert mem.read(0) == 0
        assert mem.read(PHYSICAL_WORDS - 1) == 0

    def test_little_endian_load(self):
        mem = Memory()
        assert mem.load_binary(bytes([0x34, 0x12, 0xFF, 0x7F])) == 2
        assert mem.words(0, 1) == [0x1234, 0x7FFF]

    def test_odd_trailing_byte_ignored(self):
        mem = Memory()
        assert mem.load_binary(b'\x01\x00\x02') == 1
        assert mem.words(0, 1) == [1, 0]

    def test_empty_image(self):
        mem = Memory()
        assert mem.load_binary(b'') == 0

    def test_load_at_base(self):
        mem = Memory()
        mem.load_binary(b'\x09\x00', base_addr=10)
        assert mem.read(10) == 9

    def test_oversized_image_rejected(self):
        mem = Memory(size=4)
        with pytest.raises(ValueError):
            mem.load_binary(bytes(10))

    def test_write_physical_top(self):
        mem = Memory()
        mem.write(0xFFFF, 123)
        assert mem.read(0xFFFF) == 123

    def test_clear(self):
        mem = Memory()
        mem.write(5, 5)
        mem.clear()
        assert mem.read(5) == 0


class TestStack:

    def test_lifo(self):
        stack = Stack()
        stack.push(1)
        stack.push(2)
        assert stack.pop() == 2
        assert stack.pop() == 1
        assert not stack

    def test_underflow(self):
        with pytest.raises(StackUnderflow) as info:
            Stack().pop('RET')
        assert info.value.mnemonic == 'RET'

    def test_snapshot_is_copy(self):
        stack = Stack()
        stack.push(7)
        snap = stack.snapshot()
        snap.append(8)
        assert len(stack) == 1
