"""Memory tape: a pointer into a growable array of unsigned 8-bit cells."""

from typing import Optional

import numpy as np

from bfengine.errors import PointerUnderflow, TapeOverflow

DEFAULT_CAPACITY = 65536


class Tape:
    """Byte cells backed by a numpy ``uint8`` array.

    The tape starts with ``capacity`` zeroed cells and grows by another
    ``capacity`` cells whenever the pointer moves right off the last one.
    It never shrinks. Setting ``max_length`` caps growth; a move that would
    need more cells raises ``TapeOverflow``. Moving left of cell 0 raises
    ``PointerUnderflow``. Cell arithmetic wraps modulo 256.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY, max_length: Optional[int] = None):
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        if max_length is not None and max_length <= 0:
            raise ValueError("max_length must be positive")
        self.capacity = capacity
        self.max_length = max_length
        initial = capacity if max_length is None else min(capacity, max_length)
        self._cells = np.zeros(initial, dtype=np.uint8)
        self.pointer = 0

    def read(self) -> int:
        return int(self._cells[self.pointer])

    def write(self, value: int):
        if not 0 <= value <= 255:
            raise ValueError(f"cell value out of range: {value}")
        self._cells[self.pointer] = value

    def move_left(self):
        if self.pointer == 0:
            raise PointerUnderflow()
        self.pointer -= 1

    def move_right(self):
        if self.pointer + 1 == len(self._cells):
            self._grow()
        self.pointer += 1

    def increment(self):
        self._cells[self.pointer] = (int(self._cells[self.pointer]) + 1) & 0xFF

    def decrement(self):
        self._cells[self.pointer] = (int(self._cells[self.pointer]) - 1) & 0xFF

    def _grow(self):
        new_length = len(self._cells) + self.capacity
        if self.max_length is not None:
            new_length = min(new_length, self.max_length)
        if new_length <= self.pointer + 1:
            raise TapeOverflow(self.max_length)
        block = np.zeros(new_length - len(self._cells), dtype=np.uint8)
        self._cells = np.concatenate((self._cells, block))

    def view(self) -> np.ndarray:
        """Read-only view of every cell."""
        cells = self._cells.view()
        cells.flags.writeable = False
        return cells

    def window(self, start: int, stop: int) -> np.ndarray:
        """Read-only slice of cells, clamped to the tape."""
        start = max(0, start)
        stop = min(len(self._cells), stop)
        return self.view()[start:max(start, stop)]

    def __len__(self):
        return len(self._cells)

    def __repr__(self):
        return f"Tape(length={len(self._cells)}, pointer={self.pointer}, cell={self.read()})"
