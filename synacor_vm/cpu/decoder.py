"""
Synacor VM - Opcode Table

Maps an opcode word to (mnemonic, operand_count). The operand count is
the number of raw code words that follow the opcode in the instruction
stream. Operand kinds:

  dst   destination (resolve_write_target)
  val   data operand (resolve_data)

Opcodes outside 0-21 raise BadOpcode.
"""

from ..errors import BadOpcode


# Format: opcode -> (mnemonic, operand_count)
OPCODES = {
    0:  ('HALT', 0),
    1:  ('SET',  2),   # dst val
    2:  ('PUSH', 1),   # val
    3:  ('POP',  1),   # dst
    4:  ('EQ',   3),   # dst val val
    5:  ('GT',   3),   # dst val val
    6:  ('JMP',  1),   # val
    7:  ('JT',   2),   # val val
    8:  ('JF',   2),   # val val
    9:  ('ADD',  3),   # dst val val
    10: ('MULT', 3),   # dst val val
    11: ('MOD',  3),   # dst val val
    12: ('AND',  3),   # dst val val
    13: ('OR',   3),   # dst val val
    14: ('NOT',  2),   # dst val
    15: ('RMEM', 2),   # dst val(address)
    16: ('WMEM', 2),   # val(address) val
    17: ('CALL', 1),   # val
    18: ('RET',  0),
    19: ('OUT',  1),   # val
    20: ('IN',   1),   # dst
    21: ('NOOP', 0),
}

MNEMONICS = {mnem: op for op, (mnem, _) in OPCODES.items()}


def decode_opcode(opcode: int, pc: int):
    """Look up an opcode fetched from address ``pc``.

    Returns: (mnemonic, operand_count)
    """
    entry = OPCODES.get(opcode)
    if entry is None:
        raise BadOpcode(opcode, pc)
    return entry
