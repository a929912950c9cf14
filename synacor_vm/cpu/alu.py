"""
Synacor VM - ALU Operations

Every word result is reduced modulo 32768 before it is written back.

add and mult first wrap to 16 bits (as unsigned 16-bit hardware would),
then reduce. Because 65536 is a multiple of 32768 the extra wrap never
changes the final value, but it is kept explicit so the two-step
arithmetic is visible:

  add:  ((b + c) & 0xFFFF) % 32768
  mult: ((b * c) & 0xFFFF) % 32768
  mod:  (b % c) % 32768          c == 0 is the caller's problem
  not:  b ^ 0x7FFF               15-bit complement
"""

from ..config import MODULUS, VALUE_MASK, WORD_MASK


def wrap16(value: int) -> int:
    return value & WORD_MASK


def add15(b: int, c: int) -> int:
    return wrap16(b + c) % MODULUS


def mult15(b: int, c: int) -> int:
    return wrap16(b * c) % MODULUS


def mod15(b: int, c: int) -> int:
    """Remainder of b / c. Raises ZeroDivisionError when c is 0."""
    return (b % c) % MODULUS


def and15(b: int, c: int) -> int:
    return b & c


def or15(b: int, c: int) -> int:
    return b | c


def not15(b: int) -> int:
    return b ^ VALUE_MASK


def eq(b: int, c: int) -> int:
    return 1 if b == c else 0


def gt(b: int, c: int) -> int:
    return 1 if b > c else 0
