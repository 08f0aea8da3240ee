"""bfvm: a tape-machine interpreter for the eight-instruction Brainfuck language."""

from bfvm.brainfuck import BrainfuckInterpreter, Snapshot, run
from bfvm.config import CommentPolicy, EofPolicy, InterpreterConfig
from bfvm.errors import (
    BrainfuckError,
    ExecutionError,
    InputExhausted,
    InvalidInstruction,
    MismatchedBracket,
    OutputFailure,
    ParseError,
    StepLimitExceeded,
    UnclosedOpen,
    UnmatchedClose,
)

__version__ = "0.1.0"

__all__ = [
    "BrainfuckInterpreter",
    "Snapshot",
    "run",
    "CommentPolicy",
    "EofPolicy",
    "InterpreterConfig",
    "BrainfuckError",
    "ExecutionError",
    "InputExhausted",
    "InvalidInstruction",
    "MismatchedBracket",
    "OutputFailure",
    "ParseError",
    "StepLimitExceeded",
    "UnclosedOpen",
    "UnmatchedClose",
]
