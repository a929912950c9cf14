"""
Synacor VM - I/O Channel Interface

The engine talks to the outside world through exactly two calls:

  out  → write_byte(low 8 bits of the operand)
  in   → read_byte(), blocking until one byte arrives

read_byte() must raise InputError when no byte can be delivered (end of
stream or device failure). It must never return a sentinel.
"""

from abc import ABC, abstractmethod


class IOPort(ABC):
    """Single-character I/O capability used by the out/in opcodes."""

    @abstractmethod
    def write_byte(self, value: int):
        """Emit one byte (0-255)."""
        pass

    @abstractmethod
    def read_byte(self) -> int:
        """Block for exactly one byte. Raise InputError if none arrives."""
        pass

    def flush(self):
        """Push out any buffered output."""
        pass

    def close(self):
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False
