#!/usr/bin/env python3
"""
Command-line interface.

Usage:
    bfengine helloworld.b --max-steps 1000
    bfengine e.b --max-steps 1000000 --preview --delay 50
"""

import argparse
import logging
import sys
from typing import List, Optional

from bfengine.config import BRACKET_STRATEGIES, EngineConfig, config_from_env, load_config
from bfengine.engine import HaltReason, input_bytes
from bfengine.errors import MalformedProgram
from bfengine.preview import PreviewRenderer
from bfengine.session import build_engine, load_program, read_program_input

USAGE = """Usage: bfengine [program_path] <options>

Arguments:
    [program path]          The path of the program to execute

Options:
    --max-steps <steps>     Maximum number of steps before terminating,
                            useful when the program doesn't terminate
                            on its own
    --preview               Shows a preview of the operations performed
                            and of memory while executing
    --delay <delay>         Delay (in ms) between each step
    --input <text>          Input for the program (default: one line
                            from stdin, read only if the program uses ',')
    --config <file>         YAML file with engine settings

Examples:
    bfengine helloworld.b --max-steps 1000
    bfengine e.b --max-steps 1000000 --preview --delay 50"""


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="bfengine", usage=argparse.SUPPRESS,
                                 description="Run a tape-machine (Brainfuck) program")
    ap.add_argument("program_path", nargs="?", help="Path of the program to execute")
    ap.add_argument("--max-steps", type=int, help="Maximum number of steps before terminating")
    ap.add_argument("--preview", "--show-preview", action="store_true",
                    help="Show operations and memory while executing")
    ap.add_argument("--delay", type=int, help="Delay (in ms) between each step")
    ap.add_argument("--input", help="Program input (default: one line from stdin)")
    ap.add_argument("--config", help="YAML file with engine settings")
    ap.add_argument("--no-color", action="store_true", help="Disable colored preview")
    ap.add_argument("--comment-marker", help="Lines starting with this marker are ignored")
    ap.add_argument("--bracket-strategy", choices=BRACKET_STRATEGIES,
                    help="Precomputed bracket index or per-jump rescanning")
    ap.add_argument("--max-tape-length", type=int, help="Fail instead of growing the tape past this")
    ap.add_argument("--verbose", action="store_true", help="Verbose logging")
    return ap


def resolve_config(args: argparse.Namespace) -> EngineConfig:
    """Defaults, then the YAML file, then BF_* environment, then flags."""
    config = EngineConfig()
    if args.config:
        config = load_config(args.config, config)
    config = config_from_env(config)
    return config.merged(
        max_steps=args.max_steps,
        delay_ms=args.delay,
        preview=True if args.preview else None,
        color=False if args.no_color else None,
        comment_marker=args.comment_marker,
        bracket_strategy=args.bracket_strategy,
        max_tape_length=args.max_tape_length,
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if not args.program_path:
        print(USAGE)
        return 0

    try:
        config = resolve_config(args)
    except (OSError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    if config.delay_ms and not config.preview:
        print("Warning: setting a `delay` without the preview enabled will just slow down the computation...")

    try:
        program = load_program(args.program_path, config.comment_marker)
    except (OSError, UnicodeDecodeError) as e:
        print(f"error: failed to read program file: {e}", file=sys.stderr)
        return 2
    except MalformedProgram as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    if args.input is not None:
        input_data = input_bytes(args.input)
    else:
        input_data = read_program_input(program, sys.stdin)

    observer = PreviewRenderer(color=config.color) if config.preview else None
    engine = build_engine(program, config, observer)
    summary = engine.run(input_data)

    print(f"performed {summary.total_steps} operations in {summary.elapsed_ms:.1f}ms")
    if summary.halt_reason is HaltReason.STEP_LIMIT_REACHED:
        print(f"stopped: step limit of {config.max_steps} reached")
    elif summary.halt_reason is HaltReason.CANCELLED:
        print("stopped: cancelled")
    if summary.output:
        print(f"output:\n{summary.text}")
    if summary.halt_reason is HaltReason.FATAL:
        print(f"error: {summary.error}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
