from .regs import Registers
from .operands import WriteTarget, resolve_data, resolve_write_target
from .decoder import OPCODES, MNEMONICS, decode_opcode

__all__ = [
    'Registers', 'WriteTarget', 'resolve_data', 'resolve_write_target',
    'OPCODES', 'MNEMONICS', 'decode_opcode',
]
