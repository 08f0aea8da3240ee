"""
Circular byte tape.

A fixed number of unsigned 8-bit cells plus the data pointer. Moving the
pointer past either end wraps around, and cell arithmetic wraps modulo 256.
"""

import numpy as np

from bfvm.config import DEFAULT_TAPE_SIZE


class Tape:
    def __init__(self, memory_size: int = DEFAULT_TAPE_SIZE):
        self.memory = np.zeros(memory_size, dtype=np.uint8)
        self.pointer = 0

    def __len__(self):
        return len(self.memory)

    def get(self) -> int:
        return int(self.memory[self.pointer])

    def set(self, value: int) -> None:
        self.memory[self.pointer] = value % 256

    def increment(self) -> None:
        self.set(self.get() + 1)

    def decrement(self) -> None:
        self.set(self.get() - 1)

    def advance(self) -> None:
        self.pointer = (self.pointer + 1) % len(self.memory)

    def retreat(self) -> None:
        self.pointer = (self.pointer - 1) % len(self.memory)

    def reset(self) -> None:
        self.memory[:] = 0
        self.pointer = 0

    def snapshot(self) -> bytes:
        """Copy of every cell, detached from the live tape."""
        return self.memory.tobytes()

    def window(self, start: int, stop: int) -> bytes:
        """Cells in [start, stop), clipped to the tape bounds."""
        start = max(0, start)
        stop = min(len(self.memory), stop)
        return self.memory[start:stop].tobytes()
