"""
Synacor VM - Console Port

Binds the I/O channel to the process's standard streams (or any pair of
binary file objects). Output is buffered by the stream and flushed at
each newline, before every blocking read and when the run stops, so
prompts always appear before the machine waits for input.
"""

import logging
import sys
from typing import BinaryIO, Optional

from ..errors import InputError
from .base import IOPort

log = logging.getLogger(__name__)

NEWLINE = 0x0A


class ConsolePort(IOPort):

    def __init__(self, stdin: Optional[BinaryIO] = None,
                 stdout: Optional[BinaryIO] = None):
        self.stdin = stdin if stdin is not None else sys.stdin.buffer
        self.stdout = stdout if stdout is not None else sys.stdout.buffer

    def write_byte(self, value: int):
        self.stdout.write(bytes((value & 0xFF,)))
        if value == NEWLINE:
            self.stdout.flush()

    def read_byte(self) -> int:
        self.flush()
        try:
            data = self.stdin.read(1)
        except OSError as e:
            raise InputError(f"Failed to read from input: {e}") from e
        if not data:
            log.debug("stdin reached end of stream")
            raise InputError("Input stream reached end of file.")
        return data[0]

    def flush(self):
        self.stdout.flush()
