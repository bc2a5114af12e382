"""Loop bracket matching.

``BracketIndex`` pairs every ``[`` with its ``]`` in one pass and answers
lookups from a table. ``ScanningBrackets`` answers the same questions by
walking the instruction stream with a depth counter on every call; it is
slow on loop-heavy programs and is kept for cross-checking the index.
"""

from typing import Dict, Iterable, List, Sequence, Tuple

from bfengine.errors import UnmatchedClose, UnmatchedOpen
from bfengine.instructions import Instruction


class BracketIndex:
    """Immutable open<->close partner table."""

    __slots__ = ("_close_of", "_open_of")

    def __init__(self, close_of: Dict[int, int]):
        self._close_of = dict(close_of)
        self._open_of = {close: open_ for open_, close in self._close_of.items()}

    @classmethod
    def build(cls, instructions: Iterable) -> "BracketIndex":
        """Build the jump table, validating nesting along the way."""
        close_of: Dict[int, int] = {}
        stack: List[int] = []

        for i, ins in enumerate(instructions):
            if ins is Instruction.LOOP_OPEN:
                stack.append(i)
            elif ins is Instruction.LOOP_CLOSE:
                if not stack:
                    raise UnmatchedClose(i)
                close_of[stack.pop()] = i

        if stack:
            raise UnmatchedOpen(stack[-1])

        return cls(close_of)

    def matching_close(self, open_pos: int) -> int:
        return self._close_of[open_pos]

    def matching_open(self, close_pos: int) -> int:
        return self._open_of[close_pos]

    def pairs(self) -> List[Tuple[int, int]]:
        return sorted(self._close_of.items())

    def __len__(self):
        return len(self._close_of) + len(self._open_of)

    def __contains__(self, position):
        return position in self._close_of or position in self._open_of

    def __repr__(self):
        return f"BracketIndex({self.pairs()!r})"


class ScanningBrackets:
    """Finds partners by rescanning outward from the bracket each time."""

    def __init__(self, instructions: Sequence):
        self._ops = tuple(instructions)
        self._open = Instruction.LOOP_OPEN
        self._close = Instruction.LOOP_CLOSE

    def matching_close(self, open_pos: int) -> int:
        if self._ops[open_pos] is not self._open:
            raise KeyError(open_pos)
        depth = 0
        pos = open_pos + 1
        while pos < len(self._ops):
            op = self._ops[pos]
            if op is self._open:
                depth += 1
            elif op is self._close:
                if depth == 0:
                    return pos
                depth -= 1
            pos += 1
        raise UnmatchedOpen(open_pos)

    def matching_open(self, close_pos: int) -> int:
        if self._ops[close_pos] is not self._close:
            raise KeyError(close_pos)
        depth = 0
        pos = close_pos - 1
        while pos >= 0:
            op = self._ops[pos]
            if op is self._close:
                depth += 1
            elif op is self._open:
                if depth == 0:
                    return pos
                depth -= 1
            pos -= 1
        raise UnmatchedClose(close_pos)
