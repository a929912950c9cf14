# Synacor VM - interpreter for the Synacor Challenge 16-bit word machine
#
# Layout:
#   cpu/     register file, opcode table, operand resolver, ALU helpers
#   mem/     word memory + program loader, call/data stack
#   periph/  I/O channel ports (console, scripted, serial)
#   emu.py   fetch/decode/execute loop
#
# Quick start:
#   from synacor_vm import SynacorVM
#   vm = SynacorVM()
#   vm.load_binary('challenge.bin')
#   vm.run()

from .emu import SynacorVM, StopReason, stop_reason_for
from .errors import (
    VMError, VMStop, VMFault, Halted, BadRegister, StackUnderflow,
    BadOpcode, InputError, DivideByZero,
)
from .periph import IOPort, ConsolePort, ScriptedPort, SerialPort

__version__ = "0.1.0"

__all__ = [
    'SynacorVM', 'StopReason', 'stop_reason_for',
    'VMError', 'VMStop', 'VMFault', 'Halted', 'BadRegister',
    'StackUnderflow', 'BadOpcode', 'InputError', 'DivideByZero',
    'IOPort', 'ConsolePort', 'ScriptedPort', 'SerialPort',
]
