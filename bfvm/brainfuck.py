"""
Brainfuck Interpreter

Brainfuck is an esoteric programming language with only 8 commands:
    >   Move the pointer to the right
    <   Move the pointer to the left
    +   Increment the memory cell at the pointer
    -   Decrement the memory cell at the pointer
    .   Output the byte in the cell at the pointer
    ,   Input a byte and store it in the cell at the pointer
    [   Jump past the matching ] if the cell at the pointer is 0
    ]   Jump back to the matching [ if the cell at the pointer is nonzero

All other characters are comments: ignored by default, or rejected when
the interpreter is configured with CommentPolicy.REJECT.

An interpreter can be driven two ways. Batch: pass the whole program to
the constructor (or to load()) and it is bracket-checked before anything
runs, then call run(). Incremental: feed commands one at a time with
eval_one() or feed(); each command executes as soon as it arrives, except
that execution stops in front of a loop that is still open.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Union

from bfvm.config import InterpreterConfig
from bfvm.core.evaluator import ByteSink, ByteSource, Evaluator
from bfvm.core.program import ParserState, ProgramStore, Source, to_bytes
from bfvm.core.tape import Tape
from bfvm.errors import UnclosedOpen

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Snapshot:
    """Read-only copy of the interpreter state.

    Iterating yields (pointer, tape, instruction_pointer, program, output).
    """
    pointer: int
    tape: bytes
    instruction_pointer: int
    program: bytes
    output: bytes
    steps: int = 0
    input_reads: int = 0
    output_writes: int = 0
    pending_loops: int = 0

    def __iter__(self):
        return iter((self.pointer, self.tape, self.instruction_pointer, self.program, self.output))

    @property
    def cell(self) -> int:
        return self.tape[self.pointer]


class BrainfuckInterpreter:
    def __init__(self, program: Optional[Source] = None, input_data=b"",
                 output=None, config: Optional[InterpreterConfig] = None):
        """Create an interpreter, batch-parsing `program` when given.

        input_data: bytes/str or a readable binary stream.
        output: optional writable binary stream that every output byte is
            also written to.
        """
        self.config = config or InterpreterConfig()
        self.tape = Tape(self.config.tape_size)
        self.program = ProgramStore(self.config.comments)
        self.evaluator = Evaluator(
            self.tape,
            self.program,
            ByteSource(input_data),
            ByteSink(output),
            on_eof=self.config.on_eof,
            step_limit=self.config.step_limit,
        )
        if program is not None:
            self.program.extend(program)

    @property
    def pointer(self) -> int:
        return self.tape.pointer

    @property
    def instruction_pointer(self) -> int:
        return self.evaluator.instruction_pointer

    @property
    def output(self) -> bytes:
        return self.evaluator.output

    @property
    def awaiting_close(self) -> bool:
        return self.program.state is ParserState.AWAITING_CLOSE

    def run(self) -> bytes:
        """Run the loaded program to its end and return all output so far."""
        if self.awaiting_close:
            raise UnclosedOpen(self.program.pending[-1])
        self.evaluator.run()
        return self.evaluator.output

    def eval_one(self, cmd: Union[int, bytes, str]) -> None:
        """Feed a single command and execute whatever became runnable."""
        if not isinstance(cmd, int):
            data = to_bytes(cmd)
            if len(data) != 1:
                raise ValueError(f"eval_one expects a single byte, got {cmd!r}")
            cmd = data[0]
        if self.program.append(cmd):
            self._execute()

    def feed(self, source: Source) -> None:
        """Record every command of `source`, then execute what became runnable.

        The whole chunk is recorded before anything runs, so an execution
        error never drops the commands that follow it. A parse error stops
        recording at the offending byte; the commands before it are kept.
        """
        try:
            for cmd in to_bytes(source):
                self.program.append(cmd)
        finally:
            self._execute()

    def load(self, source: Source) -> None:
        """Append a whole, bracket-balanced program and execute it."""
        self.program.extend(source)
        self._execute()

    def _execute(self) -> None:
        # Everything before the outermost open loop is complete and may run.
        stop = self.program.pending[0] if self.awaiting_close else None
        self.evaluator.run(stop)

    def dump(self) -> Snapshot:
        return Snapshot(
            pointer=self.tape.pointer,
            tape=self.tape.snapshot(),
            instruction_pointer=self.evaluator.instruction_pointer,
            program=self.program.code,
            output=self.evaluator.output,
            steps=self.evaluator.steps,
            input_reads=self.evaluator.input_reads,
            output_writes=self.evaluator.output_writes,
            pending_loops=self.program.depth,
        )

    def reset(self) -> None:
        """Return tape, program, jump table, pointers and output to their initial state."""
        self.tape.reset()
        self.program.clear()
        self.evaluator.reset()
        logger.debug("Interpreter reset")


def run(program: Source, input_data=b"", config: Optional[InterpreterConfig] = None) -> bytes:
    """Parse and run a whole program, returning its output bytes."""
    return BrainfuckInterpreter(program, input_data, config=config).run()
