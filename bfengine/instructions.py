"""The eight instructions of the language.

    >   Move the pointer to the right
    <   Move the pointer to the left
    +   Increment the memory cell at the pointer
    -   Decrement the memory cell at the pointer
    .   Output the byte in the cell at the pointer
    ,   Read one input byte into the cell at the pointer
    [   Jump past the matching ] if the cell at the pointer is 0
    ]   Jump back to the matching [ if the cell at the pointer is nonzero
"""

from enum import Enum

from bfengine.errors import IllegalInstruction


class Instruction(Enum):
    MOVE_LEFT = "<"
    MOVE_RIGHT = ">"
    INCREMENT = "+"
    DECREMENT = "-"
    OUTPUT = "."
    INPUT = ","
    LOOP_OPEN = "["
    LOOP_CLOSE = "]"

    @classmethod
    def from_char(cls, char: str) -> "Instruction":
        try:
            return cls(char)
        except ValueError:
            raise IllegalInstruction(char) from None

    @property
    def char(self) -> str:
        return self.value


ALLOWED_CHARS = frozenset(ins.value for ins in Instruction)
