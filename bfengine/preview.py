"""
Step-by-step preview of a running program.

Shows the instructions around the current position and the memory rows
around the pointer before every step, and the output each time it grows.
"""

import sys
from typing import Optional, TextIO

import numpy as np

from bfengine.engine import Observer, StepView
from bfengine.program import Program

INSTRUCTION_RANGE = 10
CHUNK_SIZE = 16
CHUNKS_DISPLAYED = 4


class Colors:
    RED = '\033[91m'
    GREEN = '\033[92m'
    YELLOW = '\033[93m'
    BOLD = '\033[1m'
    ENDC = '\033[0m'


def _highlight(text: str, color: bool) -> str:
    return f"{Colors.RED}{text}{Colors.ENDC}" if color else text


def render_instructions(program: Program, position: int, color: bool = True,
                        span: int = INSTRUCTION_RANGE) -> str:
    """Instructions within ``span`` of ``position``, current one highlighted."""
    if len(program) == 0:
        return "op:\n"
    cut_start = position > span
    start = max(0, position - span)
    cut_end = position + span < len(program)
    end = min(position + span, len(program) - 1)

    formatted = ''.join(
        _highlight(program[i].char, color) if i == position else program[i].char
        for i in range(start, end + 1)
    )
    return "op:\n {} {} {} ".format(
        "…" if cut_start else " ",
        formatted,
        "…" if cut_end else " ",
    )


def render_memory(cells: np.ndarray, pointer: int, color: bool = True) -> str:
    """Rows of CHUNK_SIZE cells, starting two rows above the pointer's row."""
    chunk_ptr = pointer - pointer % CHUNK_SIZE
    start = max(0, chunk_ptr - 2 * CHUNK_SIZE)
    end = min(len(cells), start + CHUNKS_DISPLAYED * CHUNK_SIZE)

    lines = ["mem:"]
    for row_start in range(start, end, CHUNK_SIZE):
        current_row = row_start == chunk_ptr
        addr = f"{row_start:5}"
        row = (_highlight(addr, color) if current_row else addr) + " |"
        for i, value in enumerate(cells[row_start:min(row_start + CHUNK_SIZE, end)]):
            cell = f"{int(value):3}"
            if current_row and i == pointer % CHUNK_SIZE:
                cell = _highlight(cell, color)
            row += " " + cell
        lines.append(row)
    return "\n".join(lines)


class PreviewRenderer(Observer):
    """Observer that prints the program and memory state to a stream."""

    def __init__(self, stream: Optional[TextIO] = None, color: bool = True):
        self.stream = stream if stream is not None else sys.stdout
        self.color = color

    def before_step(self, view: StepView):
        out = self.stream
        if view.steps:
            out.write("\n")
        out.write(render_instructions(view.program, view.position, self.color) + "\n")
        out.write(render_memory(view.tape, view.pointer, self.color) + "\n")
        out.flush()
        return None

    def on_output(self, output: bytes):
        self.stream.write(f"{output[-1]}\n")
        self.stream.write(f"out: {output.decode('latin-1')}\n")
        self.stream.flush()
