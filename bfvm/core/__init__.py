from bfvm.core.tape import Tape
from bfvm.core.program import ProgramStore, ParserState, COMMANDS
from bfvm.core.evaluator import Evaluator, ByteSource, ByteSink

__all__ = [
    "Tape",
    "ProgramStore",
    "ParserState",
    "COMMANDS",
    "Evaluator",
    "ByteSource",
    "ByteSink",
]
