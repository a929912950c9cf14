"""
Synacor VM - Operand Resolver

Every operand is a raw 16-bit code word read from the instruction stream.
One addressing rule covers all of them:

  raw < 32768            literal value (as a destination: write is dropped)
  32768 <= raw <= 32775  register raw - 32768
  raw >= 32776           BadRegister

Data operands go through resolve_data(); destinations go through
resolve_write_target() and are then written with WriteTarget.store().
rmem/wmem addresses are resolved as data and then used as raw physical
indices, so this rule is never applied to a memory address.
"""

from dataclasses import dataclass
from typing import Optional

from ..config import MODULUS, NUM_REGISTERS
from ..errors import BadRegister
from .regs import Registers


def register_index(raw: int) -> Optional[int]:
    """Map a raw operand to a register index, or None for a literal.

    Raises BadRegister above the last register.
    """
    if raw < MODULUS:
        return None
    index = raw % MODULUS
    if index >= NUM_REGISTERS:
        raise BadRegister(raw)
    return index


def resolve_data(regs: Registers, raw: int) -> int:
    """Resolve a raw operand to the word it stands for."""
    index = register_index(raw)
    if index is None:
        return raw
    return regs[index]


@dataclass(frozen=True)
class WriteTarget:
    """A resolved destination. ``register`` is None for a literal-range
    destination, which accepts and discards writes."""

    raw: int
    register: Optional[int]

    @property
    def discards(self) -> bool:
        return self.register is None

    def store(self, regs: Registers, word: int):
        if self.register is not None:
            regs[self.register] = word


def resolve_write_target(raw: int) -> WriteTarget:
    return WriteTarget(raw, register_index(raw))
