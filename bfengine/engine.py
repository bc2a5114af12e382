"""
Execution engine.

Drives the fetch-decode-execute loop over a ``Program`` using a ``Tape``
and the program's bracket table. The engine never prints; hosts watch a
run through an ``Observer`` and read the ``RunSummary`` it returns.
"""

import logging
import time
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Deque, Optional, Union

import numpy as np

from bfengine.brackets import ScanningBrackets
from bfengine.config import EngineConfig
from bfengine.errors import ExecutionFault
from bfengine.instructions import Instruction
from bfengine.program import Program
from bfengine.tape import Tape

logger = logging.getLogger(__name__)


def input_bytes(text: str) -> bytes:
    """One byte per character; code points above 255 keep their low byte."""
    return bytes(ord(c) & 0xFF for c in text)


class HaltReason(Enum):
    COMPLETED = "completed"
    STEP_LIMIT_REACHED = "step_limit_reached"
    CANCELLED = "cancelled"
    FATAL = "fatal"


@dataclass(frozen=True)
class StepView:
    """What an observer sees before each step. ``tape`` is read-only."""
    position: int
    instruction: Instruction
    steps: int
    pointer: int
    tape: np.ndarray
    program: Program


class Observer:
    """Base class for execution observers; both hooks are no-ops.

    ``before_step`` may return a truthy value to ask the engine to stop
    before the step runs.
    """

    def before_step(self, view: StepView) -> Optional[bool]:
        return None

    def on_output(self, output: bytes) -> None:
        return None


@dataclass
class ExecutionState:
    position: int = 0
    steps: int = 0
    output: bytearray = field(default_factory=bytearray)
    input: Deque[int] = field(default_factory=deque)


@dataclass
class RunSummary:
    total_steps: int
    elapsed: float
    output: bytes
    halt_reason: HaltReason
    position: int
    pointer: int
    error: Optional[ExecutionFault] = None

    @property
    def completed(self) -> bool:
        return self.halt_reason is HaltReason.COMPLETED

    @property
    def fatal_kind(self) -> Optional[str]:
        return type(self.error).__name__ if self.error is not None else None

    @property
    def elapsed_ms(self) -> float:
        return self.elapsed * 1000.0

    @property
    def text(self) -> str:
        """Output with one character per byte."""
        return self.output.decode("latin-1")


class Engine:
    """Runs one program against one tape.

    Args:
        program: validated program to execute
        tape: memory tape; a fresh default ``Tape`` when omitted
        max_steps: stop with STEP_LIMIT_REACHED after this many steps
        delay: seconds to sleep after every step (presentation throttle)
        observer: receives ``before_step`` and ``on_output`` callbacks
        brackets: bracket lookup; defaults to the program's own index
        sleep: sleep function used for ``delay``
    """

    def __init__(self, program: Program, tape: Optional[Tape] = None, *,
                 max_steps: Optional[int] = None, delay: float = 0.0,
                 observer: Optional[Observer] = None, brackets=None,
                 sleep: Callable[[float], None] = time.sleep):
        if max_steps is not None and max_steps < 0:
            raise ValueError("max_steps must be None or >= 0")
        if delay < 0:
            raise ValueError("delay must be >= 0")
        self.program = program
        self.tape = tape if tape is not None else Tape()
        self.max_steps = max_steps
        self.delay = delay
        self.observer = observer
        self.brackets = brackets if brackets is not None else program.brackets
        self.state = ExecutionState()
        self._sleep = sleep

    @classmethod
    def from_config(cls, program: Program, config: EngineConfig,
                    observer: Optional[Observer] = None, **kwargs) -> "Engine":
        tape = Tape(config.tape_capacity, config.max_tape_length)
        brackets = ScanningBrackets(program) if config.bracket_strategy == "scan" else None
        return cls(program, tape,
                   max_steps=config.max_steps,
                   delay=config.delay_ms / 1000.0,
                   observer=observer,
                   brackets=brackets,
                   **kwargs)

    @property
    def halted(self) -> bool:
        return self.state.position >= len(self.program)

    def feed(self, data: Union[bytes, bytearray, str]):
        """Queue input bytes; the first byte fed is the first one read."""
        if isinstance(data, str):
            data = input_bytes(data)
        self.state.input.extend(data)

    def step(self) -> Optional[Instruction]:
        """Execute the instruction at the current position.

        Returns the instruction executed, or None if the program already
        ended. Fatal tape conditions propagate as ``ExecutionFault`` with
        the position and instruction filled in.
        """
        state = self.state
        if state.position >= len(self.program):
            return None

        position = state.position
        ins = self.program[position]
        tape = self.tape

        try:
            if ins is Instruction.MOVE_LEFT:
                tape.move_left()
            elif ins is Instruction.MOVE_RIGHT:
                tape.move_right()
            elif ins is Instruction.INCREMENT:
                tape.increment()
            elif ins is Instruction.DECREMENT:
                tape.decrement()
            elif ins is Instruction.OUTPUT:
                state.output.append(tape.read())
            elif ins is Instruction.INPUT:
                # Exhausted input leaves the cell unchanged
                if state.input:
                    tape.write(state.input.popleft())
            elif ins is Instruction.LOOP_OPEN:
                if tape.read() == 0:
                    state.position = self.brackets.matching_close(position)
            elif ins is Instruction.LOOP_CLOSE:
                if tape.read() != 0:
                    state.position = self.brackets.matching_open(position)
        except ExecutionFault as e:
            e.position = position
            e.instruction = ins
            raise

        # Jumps land on the partner bracket; this advance moves past it.
        state.position += 1
        state.steps += 1
        return ins

    def _within_budget(self) -> bool:
        return self.max_steps is None or self.state.steps < self.max_steps

    def run(self, input_data: Union[bytes, bytearray, str, None] = None) -> RunSummary:
        """Run until the program ends, the step limit hits, the observer
        cancels, or a fatal fault occurs."""
        if input_data:
            self.feed(input_data)

        state = self.state
        observer = self.observer
        program = self.program
        error = None
        reason = HaltReason.COMPLETED

        logger.debug("run start: %d instructions, max_steps=%s, delay=%ss",
                     len(program), self.max_steps, self.delay)
        start = time.perf_counter()

        while state.position < len(program):
            if not self._within_budget():
                reason = HaltReason.STEP_LIMIT_REACHED
                break

            if observer is not None:
                view = StepView(position=state.position,
                                instruction=program[state.position],
                                steps=state.steps,
                                pointer=self.tape.pointer,
                                tape=self.tape.view(),
                                program=program)
                if observer.before_step(view):
                    reason = HaltReason.CANCELLED
                    break

            try:
                ins = self.step()
            except ExecutionFault as e:
                error = e
                reason = HaltReason.FATAL
                break

            if self.delay:
                self._sleep(self.delay)

            if observer is not None and ins is Instruction.OUTPUT:
                observer.on_output(bytes(state.output))

        elapsed = time.perf_counter() - start
        summary = RunSummary(total_steps=state.steps,
                             elapsed=elapsed,
                             output=bytes(state.output),
                             halt_reason=reason,
                             position=state.position,
                             pointer=self.tape.pointer,
                             error=error)

        if error is not None:
            logger.debug("run halted: %s after %d steps: %s", reason.value, state.steps, error)
        else:
            logger.debug("run halted: %s after %d steps in %.1fms",
                         reason.value, state.steps, summary.elapsed_ms)
        return summary
