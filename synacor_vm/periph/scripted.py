"""
Synacor VM - Scripted Port

In-memory I/O channel for tests and embedding. Bytes pushed with
inject_rx() are handed to the machine one per `in`; every `out` byte is
appended to tx_buffer. An empty RX queue is end of stream.

    port = ScriptedPort(b"look\\n")
    vm = SynacorVM(port=port)
    ...
    port.output   # bytes written by the program
"""

from collections import deque

from ..errors import InputError
from .base import IOPort


class ScriptedPort(IOPort):

    def __init__(self, rx: bytes = b""):
        self.tx_buffer: bytearray = bytearray()
        self._rx_queue: deque = deque()
        self.inject_rx(rx)

    def inject_rx(self, data: bytes):
        for byte in data:
            self._rx_queue.append(byte & 0xFF)

    @property
    def pending_rx(self) -> int:
        return len(self._rx_queue)

    def write_byte(self, value: int):
        self.tx_buffer.append(value & 0xFF)

    def read_byte(self) -> int:
        if not self._rx_queue:
            raise InputError("Input stream reached end of file.")
        return self._rx_queue.popleft()

    @property
    def output(self) -> bytes:
        """All bytes written by the program since creation / reset."""
        return bytes(self.tx_buffer)

    def reset(self):
        self.tx_buffer.clear()
        self._rx_queue.clear()
