"""
Synacor VM - Terminal Conditions

Every way a run can end is an exception. The engine raises on the first
one; nothing is retried or resumed.

  VMError
    VMStop          normal termination
      Halted        opcode 0
    VMFault         program error
      BadRegister   operand / destination names a register outside 0-7
      StackUnderflow  pop or ret on an empty stack
      BadOpcode     fetched word is not one of opcodes 0-21
      InputError    input channel could not supply a byte
      DivideByZero  mod with a zero divisor
"""


class VMError(Exception):
    """Base class for every terminal condition."""
    pass


class VMStop(VMError):
    pass


class VMFault(VMError):
    pass


class Halted(VMStop):
    def __init__(self, pc: int = 0):
        self.pc = pc
        super().__init__("The machine halted.")


class BadRegister(VMFault):
    def __init__(self, raw: int):
        self.raw = raw
        super().__init__(
            f"The machine accessed a bad register (operand {raw})."
        )


class StackUnderflow(VMFault):
    def __init__(self, mnemonic: str):
        self.mnemonic = mnemonic
        super().__init__(
            f"The machine's stack underflowed ({mnemonic} on empty stack)."
        )


class BadOpcode(VMFault):
    def __init__(self, opcode: int, pc: int):
        self.opcode = opcode
        self.pc = pc
        super().__init__(
            f"The machine's opcode {opcode} at {pc} is not implemented."
        )


class InputError(VMFault):
    """Input channel failure. The underlying cause is chained via
    ``raise InputError(...) from exc`` where there is one."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)


class DivideByZero(VMFault):
    def __init__(self, pc: int):
        self.pc = pc
        super().__init__(f"The machine divided by zero (mod at {pc}).")
