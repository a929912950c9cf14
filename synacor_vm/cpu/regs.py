"""
Synacor VM - Register File + Program Counter

Register model:
  R0-R7  - eight 16-bit general purpose slots, addressed by the raw
           operand values 32768-32775
  PC     - word address of the next code word to fetch
  steps  - count of executed instructions

Registers are only changed by explicit writes. There are no flags.
"""

from typing import List

from ..config import NUM_REGISTERS, WORD_MASK


class Registers:
    """Register file, program counter and step counter."""

    __slots__ = ('r', 'PC', 'steps')

    def __init__(self):
        self.r: List[int] = [0] * NUM_REGISTERS
        self.PC: int = 0
        self.steps: int = 0

    def __getitem__(self, index: int) -> int:
        return self.r[index]

    def __setitem__(self, index: int, value: int):
        self.r[index] = value & WORD_MASK

    def __len__(self) -> int:
        return NUM_REGISTERS

    def advance(self) -> int:
        """Return the current PC and move it one word forward (wraps at 16 bits)."""
        pc = self.PC
        self.PC = (pc + 1) & WORD_MASK
        return pc

    def display(self) -> str:
        regs = ' '.join(f"R{i}={v:05d}" for i, v in enumerate(self.r))
        return f"PC={self.PC:05d} {regs} steps={self.steps}"

    def reset(self):
        self.r = [0] * NUM_REGISTERS
        self.PC = 0
        self.steps = 0
