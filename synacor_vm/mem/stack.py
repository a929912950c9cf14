"""
Synacor VM - Call/Data Stack

Unbounded LIFO of words shared by push/pop and call/ret. Popping an
empty stack is fatal (StackUnderflow); there is no zero-fill.
"""

from typing import List

from ..config import WORD_MASK
from ..errors import StackUnderflow


class Stack:

    def __init__(self):
        self._items: List[int] = []

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def push(self, value: int):
        self._items.append(value & WORD_MASK)

    def pop(self, mnemonic: str = 'POP') -> int:
        if not self._items:
            raise StackUnderflow(mnemonic)
        return self._items.pop()

    def snapshot(self) -> List[int]:
        """Copy of the stack contents, bottom first."""
        return list(self._items)

    def clear(self):
        self._items.clear()
