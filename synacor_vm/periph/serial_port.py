"""
Synacor VM - Serial Port

Runs the machine's character I/O over a serial line instead of the
console: each `out` transmits one byte, each `in` blocks for one byte
from the line.

`port` is anything pyserial's serial_for_url() accepts:
  /dev/ttyUSB0, COM3         real devices
  loop://                    loopback (what you send comes back)
  socket://host:port         raw TCP

Serial config defaults to 9600 baud, 8N1, no read timeout (a blocking
read waits forever). With read_timeout set, a read that times out is
treated as end of input.
"""

import logging
from typing import List, Optional

import serial
import serial.tools.list_ports

from ..config import (
    SERIAL_BAUD, SERIAL_BYTESIZE, SERIAL_PARITY, SERIAL_STOPBITS, SERIAL_FORMAT,
)
from ..errors import InputError
from .base import IOPort

log = logging.getLogger(__name__)


class SerialPort(IOPort):
    """
    Serial-line I/O channel.

    Usage:
        with SerialPort('/dev/ttyUSB0') as port:
            vm = SynacorVM(port=port)
            vm.run()
    """

    def __init__(self, port: Optional[str] = None, baud: int = SERIAL_BAUD,
                 read_timeout: Optional[float] = None):
        self.port = port
        self.baud = baud
        self.read_timeout = read_timeout
        self.ser: Optional[serial.SerialBase] = None

    # -------------------------------------------------------------------------
    # Port Management
    # -------------------------------------------------------------------------

    @staticmethod
    def scan_ports() -> List[str]:
        """List serial devices that can currently be opened."""
        ports = []
        for p in serial.tools.list_ports.comports():
            try:
                s = serial.Serial(p.device)
                s.close()
                ports.append(p.device)
            except (serial.SerialException, OSError):
                pass
        return ports

    def open(self) -> bool:
        """Open the port (auto-selecting the first device if none given)."""
        if self.port is None:
            available = self.scan_ports()
            if not available:
                log.error("No serial ports found")
                return False
            self.port = available[0]
            log.info(f"Auto-selected port: {self.port}")

        try:
            self.ser = serial.serial_for_url(
                self.port,
                baudrate=self.baud,
                bytesize=SERIAL_BYTESIZE,
                parity=SERIAL_PARITY,
                stopbits=SERIAL_STOPBITS,
                timeout=self.read_timeout,
                write_timeout=1.0,
            )
            log.info(f"Opened {self.port} @ {self.baud} baud ({SERIAL_FORMAT})")
            return True
        except serial.SerialException as e:
            log.error(f"Failed to open {self.port}: {e}")
            return False

    def close(self):
        if self.ser and self.ser.is_open:
            self.ser.close()
            log.info(f"Closed {self.port}")
        self.ser = None

    @property
    def is_connected(self) -> bool:
        return self.ser is not None and self.ser.is_open

    def __enter__(self):
        if not self.is_connected and not self.open():
            raise serial.SerialException(f"Could not open {self.port}")
        return self

    # -------------------------------------------------------------------------
    # Byte I/O
    # -------------------------------------------------------------------------

    def write_byte(self, value: int):
        if not self.is_connected:
            raise serial.SerialException("Serial port is not open")
        self.ser.write(bytes((value & 0xFF,)))

    def read_byte(self) -> int:
        if not self.is_connected:
            raise InputError("Serial port is not open.")
        try:
            data = self.ser.read(1)
        except serial.SerialException as e:
            raise InputError(f"Serial read failed: {e}") from e
        if not data:
            raise InputError(
                f"No input on {self.port} within {self.read_timeout}s."
            )
        return data[0]

    def flush(self):
        if self.is_connected:
            self.ser.flush()
