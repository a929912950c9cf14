"""
Synacor VM - Main Machine Class

Integrates:
  - Register file + PC (cpu/regs.py)
  - Word memory + program loader (mem/memory.py)
  - Call/data stack (mem/stack.py)
  - Opcode table (cpu/decoder.py)
  - Operand resolver (cpu/operands.py)
  - ALU operations (cpu/alu.py)
  - I/O channel (periph/)

Execution model:
  1. Fetch opcode word at PC, PC += 1
  2. Look up mnemonic + operand count (BadOpcode if unknown)
  3. Fetch raw operand words, PC += 1 each
  4. Execute handler → resolve operands, update registers/stack/memory,
     perform I/O, possibly redirect PC
  5. Repeat until a terminal condition is raised

Termination reasons:
  - HALT:             halt instruction
  - BAD_REGISTER:     operand names a register outside 0-7
  - STACK_UNDERFLOW:  pop/ret on an empty stack
  - BAD_OPCODE:       undefined opcode
  - INPUT_ERROR:      in could not get a byte
  - DIVIDE_BY_ZERO:   mod by zero
  - STEP_LIMIT:       run(max_steps=...) budget used up
"""

import logging
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, Optional, Tuple

from .cpu.regs import Registers
from .cpu.decoder import decode_opcode
from .cpu.operands import resolve_data, resolve_write_target
from .cpu import alu
from .errors import (
    VMError, Halted, BadRegister, StackUnderflow, BadOpcode,
    InputError, DivideByZero,
)
from .mem.memory import Memory
from .mem.stack import Stack
from .periph.base import IOPort
from .periph.console import ConsolePort

log = logging.getLogger(__name__)


class StopReason(Enum):
    HALT = 'HALT'
    BAD_REGISTER = 'BAD_REGISTER'
    STACK_UNDERFLOW = 'STACK_UNDERFLOW'
    BAD_OPCODE = 'BAD_OPCODE'
    INPUT_ERROR = 'INPUT_ERROR'
    DIVIDE_BY_ZERO = 'DIVIDE_BY_ZERO'
    STEP_LIMIT = 'STEP_LIMIT'


_STOP_REASONS = {
    Halted: StopReason.HALT,
    BadRegister: StopReason.BAD_REGISTER,
    StackUnderflow: StopReason.STACK_UNDERFLOW,
    BadOpcode: StopReason.BAD_OPCODE,
    InputError: StopReason.INPUT_ERROR,
    DivideByZero: StopReason.DIVIDE_BY_ZERO,
}


def stop_reason_for(error: VMError) -> StopReason:
    return _STOP_REASONS[type(error)]


class SynacorVM:
    """Synacor architecture virtual machine.

    Usage:
        vm = SynacorVM()
        vm.load_binary('challenge.bin')
        reason = vm.run()
        print(vm.last_error)   # "The machine halted."

    Tests usually swap the console for a ScriptedPort:
        vm = SynacorVM(port=ScriptedPort(b"take tablet\\n"))
    """

    def __init__(self, port: Optional[IOPort] = None, trace: bool = False):
        self.regs = Registers()
        self.mem = Memory()
        self.stack = Stack()
        self.port = port if port is not None else ConsolePort()
        self.trace = trace

        # Terminal condition of the last run()
        self.last_error: Optional[VMError] = None

        self._dispatch = self._build_dispatch()

    # ══════════════════════════════════════════════
    # Loading
    # ══════════════════════════════════════════════

    def load_binary(self, path_or_data, base_addr: int = 0) -> int:
        """Load a program image (file path or bytes) into memory.

        Returns the number of words loaded.
        """
        if isinstance(path_or_data, (str, Path)):
            data = Path(path_or_data).read_bytes()
            source = str(path_or_data)
        else:
            data = bytes(path_or_data)
            source = 'bytes'
        count = self.mem.load_binary(data, base_addr)
        log.info(f"Loaded {count} words from {source} at {base_addr}")
        return count

    def load_words(self, words, base_addr: int = 0) -> int:
        """Write a sequence of words straight into memory."""
        count = 0
        for i, word in enumerate(words):
            self.mem.write(base_addr + i, word)
            count += 1
        return count

    # ══════════════════════════════════════════════
    # Execution
    # ══════════════════════════════════════════════

    def step(self):
        """Execute one instruction. Raises a VMError subclass on any
        terminal condition (including halt)."""
        pc = self.regs.advance()
        opcode = self.mem.read(pc)
        mnem, count = decode_opcode(opcode, pc)
        ops = tuple(self._fetch() for _ in range(count))

        if self.trace:
            log.debug(f"{pc:05d}: {mnem:4s} {' '.join(map(str, ops)):18s} "
                      f"{self.regs.display()}")

        self._dispatch[mnem](pc, ops)
        self.regs.steps += 1

    def run(self, max_steps: Optional[int] = None) -> StopReason:
        """Run until a terminal condition (or the step budget runs out).

        The condition is kept in self.last_error; the return value says
        which one it was.
        """
        self.last_error = None
        budget = None if max_steps is None else self.regs.steps + max_steps
        try:
            while budget is None or self.regs.steps < budget:
                self.step()
        except VMError as e:
            self.last_error = e
            reason = stop_reason_for(e)
            if isinstance(e, Halted):
                log.info(f"Halted at {e.pc} after {self.regs.steps} steps")
            else:
                log.warning(f"{reason.value}: {e} [{self.regs.display()}]")
            return reason
        finally:
            self.port.flush()

        log.info(f"Step limit of {max_steps} reached at {self.regs.PC}")
        return StopReason.STEP_LIMIT

    # ══════════════════════════════════════════════
    # Operand access
    # ══════════════════════════════════════════════

    def _fetch(self) -> int:
        """Fetch the code word at PC, advance PC."""
        return self.mem.read(self.regs.advance())

    def _val(self, raw: int) -> int:
        return resolve_data(self.regs, raw)

    def _store(self, raw: int, word: int):
        resolve_write_target(raw).store(self.regs, word)

    # ══════════════════════════════════════════════
    # Instruction handlers
    # ══════════════════════════════════════════════
    # Handler signature: handler(pc, ops)
    #   pc   address of the opcode word
    #   ops  raw operand words, in instruction-stream order

    def _build_dispatch(self) -> Dict[str, Callable[[int, Tuple[int, ...]], None]]:
        return {
            'HALT': self._op_halt,
            'SET':  self._op_set,
            'PUSH': self._op_push,
            'POP':  self._op_pop,
            'EQ':   self._op_eq,
            'GT':   self._op_gt,
            'JMP':  self._op_jmp,
            'JT':   self._op_jt,
            'JF':   self._op_jf,
            'ADD':  self._op_add,
            'MULT': self._op_mult,
            'MOD':  self._op_mod,
            'AND':  self._op_and,
            'OR':   self._op_or,
            'NOT':  self._op_not,
            'RMEM': self._op_rmem,
            'WMEM': self._op_wmem,
            'CALL': self._op_call,
            'RET':  self._op_ret,
            'OUT':  self._op_out,
            'IN':   self._op_in,
            'NOOP': self._op_noop,
        }

    # ── Control ──

    def _op_halt(self, pc, ops):
        raise Halted(pc)

    def _op_noop(self, pc, ops):
        pass

    # ── Data movement ──

    def _op_set(self, pc, ops):
        a, b = ops
        self._store(a, self._val(b))

    def _op_push(self, pc, ops):
        self.stack.push(self._val(ops[0]))

    def _op_pop(self, pc, ops):
        target = resolve_write_target(ops[0])
        target.store(self.regs, self.stack.pop('POP'))

    def _op_rmem(self, pc, ops):
        a, b = ops
        self._store(a, self.mem.read(self._val(b)))

    def _op_wmem(self, pc, ops):
        a, b = ops
        self.mem.write(self._val(a), self._val(b))

    # ── Comparison / arithmetic / logic ──

    def _binary(self, ops, fn):
        a, b, c = ops
        self._store(a, fn(self._val(b), self._val(c)))

    def _op_eq(self, pc, ops):
        self._binary(ops, alu.eq)

    def _op_gt(self, pc, ops):
        self._binary(ops, alu.gt)

    def _op_add(self, pc, ops):
        self._binary(ops, alu.add15)

    def _op_mult(self, pc, ops):
        self._binary(ops, alu.mult15)

    def _op_mod(self, pc, ops):
        try:
            self._binary(ops, alu.mod15)
        except ZeroDivisionError:
            raise DivideByZero(pc) from None

    def _op_and(self, pc, ops):
        self._binary(ops, alu.and15)

    def _op_or(self, pc, ops):
        self._binary(ops, alu.or15)

    def _op_not(self, pc, ops):
        a, b = ops
        self._store(a, alu.not15(self._val(b)))

    # ── Jumps ──
    # The jump target of jt/jf is only resolved when the branch is taken.

    def _op_jmp(self, pc, ops):
        self.regs.PC = self._val(ops[0])

    def _op_jt(self, pc, ops):
        test, target = ops
        if self._val(test) != 0:
            self.regs.PC = self._val(target)

    def _op_jf(self, pc, ops):
        test, target = ops
        if self._val(test) == 0:
            self.regs.PC = self._val(target)

    def _op_call(self, pc, ops):
        target = self._val(ops[0])
        self.stack.push(self.regs.PC)
        self.regs.PC = target

    def _op_ret(self, pc, ops):
        self.regs.PC = self.stack.pop('RET')

    # ── I/O ──

    def _op_out(self, pc, ops):
        self.port.write_byte(self._val(ops[0]) & 0xFF)

    def _op_in(self, pc, ops):
        # Destination is checked before blocking so a bad register never
        # consumes input.
        target = resolve_write_target(ops[0])
        target.store(self.regs, self.port.read_byte())

    # ══════════════════════════════════════════════
    # Reset
    # ══════════════════════════════════════════════

    def reset(self):
        """Clear registers, PC, stack and memory."""
        self.regs.reset()
        self.stack.clear()
        self.mem.clear()
        self.last_error = None
