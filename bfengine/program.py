"""Source cleaning and the validated, immutable ``Program``."""

import logging
from typing import Iterable, Optional, Tuple, Union

from bfengine.brackets import BracketIndex
from bfengine.instructions import ALLOWED_CHARS, Instruction

logger = logging.getLogger(__name__)

DEFAULT_COMMENT_MARKER = "//"


def clean_source(text: str, comment_marker: Optional[str] = DEFAULT_COMMENT_MARKER) -> str:
    """Strip comment lines, then keep only the eight instruction characters."""
    lines = text.splitlines()
    if comment_marker:
        lines = [line for line in lines if not line.startswith(comment_marker)]
    return ''.join(c for line in lines for c in line if c in ALLOWED_CHARS)


class Program:
    """An ordered, read-only sequence of instructions with balanced brackets.

    Build one with ``Program.build`` (already cleaned text) or
    ``Program.from_source`` (raw text). The bracket table is computed once
    here and shared by every engine that runs the program.
    """

    __slots__ = ("_instructions", "_brackets")

    def __init__(self, instructions: Tuple[Instruction, ...], brackets: BracketIndex):
        self._instructions = instructions
        self._brackets = brackets

    @classmethod
    def build(cls, source: Union[str, Iterable[Instruction]]) -> "Program":
        if isinstance(source, str):
            instructions = tuple(Instruction.from_char(c) for c in source)
        else:
            instructions = tuple(source)
            for ins in instructions:
                if not isinstance(ins, Instruction):
                    raise TypeError(f"expected Instruction, got {type(ins).__name__}")

        brackets = BracketIndex.build(instructions)
        logger.debug("built program: %d instructions, %d loops",
                     len(instructions), len(brackets) // 2)
        return cls(instructions, brackets)

    @classmethod
    def from_source(cls, text: str, comment_marker: Optional[str] = DEFAULT_COMMENT_MARKER) -> "Program":
        return cls.build(clean_source(text, comment_marker))

    @property
    def instructions(self) -> Tuple[Instruction, ...]:
        return self._instructions

    @property
    def brackets(self) -> BracketIndex:
        return self._brackets

    def uses_input(self) -> bool:
        return Instruction.INPUT in self._instructions

    def __len__(self):
        return len(self._instructions)

    def __getitem__(self, index):
        return self._instructions[index]

    def __iter__(self):
        return iter(self._instructions)

    def __eq__(self, other):
        if not isinstance(other, Program):
            return NotImplemented
        return self._instructions == other._instructions

    def __hash__(self):
        return hash(self._instructions)

    def __str__(self):
        return ''.join(ins.char for ins in self._instructions)

    def __repr__(self):
        text = str(self)
        if len(text) > 40:
            text = text[:37] + "..."
        return f"Program({text!r})"
