"""Host-side helpers: load programs from disk, prepare input, build and run engines."""

import os
from typing import Optional, TextIO, Union

from bfengine.config import EngineConfig
from bfengine.engine import Engine, Observer, RunSummary, input_bytes
from bfengine.program import DEFAULT_COMMENT_MARKER, Program

DEFAULT_STEP_LIMIT = int(os.environ.get("BF_STEP_LIMIT", "1000000"))


def load_program(path: str, comment_marker: Optional[str] = DEFAULT_COMMENT_MARKER) -> Program:
    """Read a source file and build a Program from it."""
    with open(path, "r", encoding="utf-8") as f:
        text = f.read()
    return Program.from_source(text, comment_marker)


def read_program_input(program: Program, stream: TextIO) -> bytes:
    """Read one line of input, but only if the program reads input at all."""
    if not program.uses_input():
        return b""
    line = stream.readline()
    return input_bytes(line)


def build_engine(program: Program, config: EngineConfig,
                 observer: Optional[Observer] = None, **kwargs) -> Engine:
    return Engine.from_config(program, config, observer=observer, **kwargs)


def run_source(text: str, input_data: Union[bytes, str] = b"",
               config: Optional[EngineConfig] = None,
               observer: Optional[Observer] = None,
               step_limit: Optional[int] = DEFAULT_STEP_LIMIT) -> RunSummary:
    """Clean, build and run source text in one call.

    ``step_limit`` only applies when ``config`` does not set ``max_steps``.
    Raises ``MalformedProgram`` if the brackets do not nest.
    """
    config = config or EngineConfig()
    if config.max_steps is None and step_limit is not None:
        config = config.merged(max_steps=step_limit)
    program = Program.from_source(text, config.comment_marker)
    engine = build_engine(program, config, observer)
    return engine.run(input_data)
