"""
Synacor VM - Machine / Host Configuration
=========================================

Word width, register addressing and memory sizes are fixed by the
architecture. Host-side defaults (program file, serial framing) can be
overridden from the command line.

Value space of a 16-bit code word:
  0-32767       literal value
  32768-32775   register 0-7
  32776-65535   invalid (BadRegister)
"""

# =============================================================================
#  WORDS
# =============================================================================
WORD_MASK = 0xFFFF         # raw code word / physical index range
MODULUS = 32768            # arithmetic results are reduced mod 2^15
VALUE_MASK = 0x7FFF        # 15-bit value mask (used by NOT)


# =============================================================================
#  REGISTERS
# =============================================================================
REGISTER_BASE = 32768      # first raw value that names a register
NUM_REGISTERS = 8


# =============================================================================
#  MEMORY
# =============================================================================
LOGICAL_WORDS = 0x8000     # documented 15-bit address space
PHYSICAL_WORDS = 0x10000   # every index a 16-bit word can name (rmem/wmem)


# =============================================================================
#  HOST
# =============================================================================
DEFAULT_PROGRAM = "challenge.bin"

SERIAL_BAUD = 9600
SERIAL_BYTESIZE = 8
SERIAL_PARITY = "N"
SERIAL_STOPBITS = 1
SERIAL_FORMAT = "8N1"
