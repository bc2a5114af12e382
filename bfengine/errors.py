"""Exception hierarchy for bfengine."""

from typing import Optional


class BrainfuckError(Exception):
    """Base class for every recoverable bfengine error."""


class MalformedProgram(BrainfuckError):
    """The program's brackets do not nest."""

    def __init__(self, message: str, position: int):
        super().__init__(f"{message} at position {position}")
        self.position = position


class UnmatchedOpen(MalformedProgram):
    def __init__(self, position: int):
        super().__init__("Unmatched '['", position)


class UnmatchedClose(MalformedProgram):
    def __init__(self, position: int):
        super().__init__("Unmatched ']'", position)


class ExecutionFault(BrainfuckError):
    """A fatal condition raised while a program runs.

    The tape raises these without context; the engine fills in the
    position and instruction before reporting.
    """

    def __init__(self, message: str, position: Optional[int] = None, instruction=None):
        super().__init__(message)
        self.message = message
        self.position = position
        self.instruction = instruction

    def __str__(self):
        if self.position is None:
            return self.message
        if self.instruction is None:
            return f"{self.message} (position {self.position})"
        return f"{self.message} (position {self.position}, instruction '{self.instruction.char}')"


class PointerUnderflow(ExecutionFault):
    def __init__(self, position: Optional[int] = None, instruction=None):
        super().__init__("Pointer out of bounds (left)", position, instruction)


class TapeOverflow(ExecutionFault):
    def __init__(self, limit: int, position: Optional[int] = None, instruction=None):
        super().__init__(f"Tape length limit of {limit} cells exceeded", position, instruction)
        self.limit = limit


class IllegalInstruction(AssertionError):
    """A character outside the instruction set reached the decoder.

    Source text must go through ``clean_source`` first, so this is a
    programming error rather than a user error.
    """

    def __init__(self, char: str):
        super().__init__(f"string contains illegal characters ({char!r})")
        self.char = char
