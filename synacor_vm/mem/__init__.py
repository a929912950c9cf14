from .memory import Memory
from .stack import Stack

__all__ = ['Memory', 'Stack']
