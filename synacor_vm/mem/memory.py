"""
Synacor VM - Word Memory + Program Loader

Memory is a flat array of 16-bit unsigned words, zero-initialised.

  0x0000-0x7FFF   logical address space (programs load here)
  0x8000-0xFFFF   physical only; reachable through rmem/wmem and by
                  running the PC off the end of logical memory

rmem/wmem index the buffer with the resolved operand value directly.
There is no region protection and no register remapping at this level.

Program image format: raw little-endian 16-bit words, no header, loaded
at address 0. A trailing odd byte is ignored.
"""

import logging
import struct
from array import array
from ..config import LOGICAL_WORDS, PHYSICAL_WORDS, WORD_MASK

log = logging.getLogger(__name__)


class Memory:
    """Flat word-addressable memory."""

    def __init__(self, size: int = PHYSICAL_WORDS):
        self.size = size
        self._mem = array('H', bytes(2 * size))

    def __len__(self) -> int:
        return self.size

    # --- Core read/write ---

    def read(self, addr: int) -> int:
        return self._mem[addr]

    def write(self, addr: int, value: int):
        self._mem[addr] = value & WORD_MASK

    # --- Bulk load ---

    def load_binary(self, data: bytes, base_addr: int = 0) -> int:
        """Install a little-endian program image starting at base_addr.

        Returns the number of words written. An odd trailing byte is dropped.
        """
        count = len(data) // 2
        if base_addr + count > self.size:
            raise ValueError(
                f"Program of {count} words does not fit at {base_addr} "
                f"(memory is {self.size} words)"
            )
        words = struct.unpack_from(f'<{count}H', data)
        self._mem[base_addr:base_addr + count] = array('H', words)
        if base_addr + count > LOGICAL_WORDS:
            log.warning(f"Program extends past the {LOGICAL_WORDS}-word logical "
                        f"address space ({base_addr + count} words)")
        if len(data) % 2:
            log.debug(f"Ignored trailing odd byte at offset {len(data) - 1}")
        return count

    def words(self, start: int, end: int) -> list:
        """Copy of memory words start..end inclusive."""
        return self._mem[start:end + 1].tolist()

    def clear(self):
        self._mem = array('H', bytes(2 * self.size))
