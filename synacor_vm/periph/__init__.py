from .base import IOPort
from .console import ConsolePort
from .scripted import ScriptedPort
from .serial_port import SerialPort

__all__ = ['IOPort', 'ConsolePort', 'ScriptedPort', 'SerialPort']
