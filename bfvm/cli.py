#!/usr/bin/env python3
"""
Command-line runner.

Runs a program from a file (-f) or from piped stdin, with optional input
data (-d), writing program output to stdout and diagnostics to stderr.
With -i an interactive shell is started once the program has finished.

Settings are read from BF_* environment variables (a local .env file is
loaded first) and can be overridden with flags.
"""

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from bfvm.brainfuck import BrainfuckInterpreter
from bfvm.brainfuck_debugger import repl
from bfvm.config import CommentPolicy, EofPolicy, InterpreterConfig
from bfvm.errors import BrainfuckError, InputExhausted

logger = logging.getLogger("bfvm")


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="bfvm", description="Brainfuck interpreter")
    ap.add_argument("-f", "--file", default=None, help="Path to Brainfuck program to execute")
    ap.add_argument("-d", "--data", default=None, help="Path to file containing input data for program")
    ap.add_argument("-i", "--interactive", action="store_true", help="Launch interactive interpreter before exit")
    ap.add_argument("--strict", action="store_true", help="Reject non-command characters instead of ignoring them")
    ap.add_argument("--on-eof", choices=[p.value for p in EofPolicy], default=None,
                    help="Behaviour of ',' once input is exhausted (default: error)")
    ap.add_argument("--step-limit", type=int, default=None, help="Interpreter max steps per run, 0 for no limit")
    ap.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return ap


def _read_program(path: Optional[str]) -> Optional[bytes]:
    if path:
        return Path(path).read_bytes()
    if not sys.stdin.isatty():
        return sys.stdin.buffer.read()
    return None


def _tty_reader(tty):
    def read_line(prompt: str) -> str:
        print(prompt, end="", flush=True)
        line = tty.readline()
        if not line:
            raise EOFError
        return line.rstrip("\n")
    return read_line


def _start_repl(interpreter: BrainfuckInterpreter) -> int:
    logger.info("Starting interactive REPL ...")
    if sys.stdin.isatty():
        repl(interpreter)
        return 0
    # stdin carried the program; talk to the terminal directly
    try:
        tty = open("/dev/tty")
    except OSError as e:
        logger.error(f"Failed to open TTY for interactive mode: {e}")
        return 1
    with tty:
        repl(interpreter, read_line=_tty_reader(tty))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    load_dotenv()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = InterpreterConfig.from_env().with_overrides(
            comments=CommentPolicy.REJECT if args.strict else None,
            on_eof=EofPolicy(args.on_eof) if args.on_eof else None,
            step_limit=args.step_limit or None,
        )
        if args.step_limit == 0:
            # an explicit 0 also lifts a limit set in the environment
            config = replace(config, step_limit=None)
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        return 2

    input_data = b""
    if args.data:
        try:
            input_data = Path(args.data).read_bytes()
        except OSError as e:
            logger.error(f"Failed to read input file: {e}")
            return 1

    try:
        program = _read_program(args.file)
    except OSError as e:
        logger.error(f"Failed to read program: {e}")
        return 1

    interpreter = BrainfuckInterpreter(input_data=input_data, output=sys.stdout.buffer, config=config)
    status = 0
    if program is not None:
        try:
            interpreter.load(program)
        except InputExhausted as e:
            logger.warning(f"Execution stopped: {e}")
        except BrainfuckError as e:
            logger.error(f"Execution failed: {e}")
            status = 1

    logger.info(f"Output from execution: {list(interpreter.output)}")

    if args.interactive:
        status = _start_repl(interpreter) or status

    return status


if __name__ == "__main__":
    sys.exit(main())
