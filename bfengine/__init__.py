"""
bfengine - an interpreter for the eight-instruction tape-machine language.

    program = Program.from_source(text)
    summary = Engine(program).run(b"input")
    summary.output, summary.halt_reason, summary.total_steps
"""

__version__ = "0.1.0"

from bfengine.errors import (
    BrainfuckError,
    MalformedProgram,
    UnmatchedOpen,
    UnmatchedClose,
    ExecutionFault,
    PointerUnderflow,
    TapeOverflow,
    IllegalInstruction,
)
from bfengine.instructions import Instruction
from bfengine.brackets import BracketIndex, ScanningBrackets
from bfengine.program import Program, clean_source
from bfengine.tape import Tape
from bfengine.config import EngineConfig, load_config, config_from_env
from bfengine.engine import Engine, ExecutionState, HaltReason, Observer, RunSummary, StepView
from bfengine.session import run_source

__all__ = [
    "BrainfuckError",
    "MalformedProgram",
    "UnmatchedOpen",
    "UnmatchedClose",
    "ExecutionFault",
    "PointerUnderflow",
    "TapeOverflow",
    "IllegalInstruction",
    "Instruction",
    "BracketIndex",
    "ScanningBrackets",
    "Program",
    "clean_source",
    "Tape",
    "EngineConfig",
    "load_config",
    "config_from_env",
    "Engine",
    "ExecutionState",
    "HaltReason",
    "Observer",
    "RunSummary",
    "StepView",
    "run_source",
]
