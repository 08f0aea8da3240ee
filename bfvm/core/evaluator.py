"""
Fetch-execute loop and the byte I/O adapters it reads from and writes to.
"""

import io
import logging
from typing import Optional

from bfvm.config import EofPolicy
from bfvm.core.program import ProgramStore, Source, to_bytes
from bfvm.core.tape import Tape
from bfvm.errors import InputExhausted, OutputFailure, StepLimitExceeded

logger = logging.getLogger(__name__)

POINTER_RIGHT = ord('>')
POINTER_LEFT = ord('<')
INCREMENT = ord('+')
DECREMENT = ord('-')
OUTPUT = ord('.')
INPUT = ord(',')
LOOP_OPEN = ord('[')
LOOP_CLOSE = ord(']')


class ByteSource:
    """Input bytes consumed strictly in order.

    Wraps in-memory data or any readable stream. Text streams (such as
    sys.stdin) are read a character at a time and fed as UTF-8 bytes.
    Whether a read on a live stream blocks is up to the stream.
    """

    def __init__(self, data=b""):
        if data is None:
            data = b""
        if hasattr(data, "read"):
            self.stream = data
        else:
            self.stream = io.BytesIO(to_bytes(data))
        self._pending = bytearray()  # rest of a multi-byte character

    def read_byte(self) -> Optional[int]:
        """Next input byte, or None when the source is exhausted."""
        if not self._pending:
            chunk = self.stream.read(1)
            if not chunk:
                return None
            self._pending += to_bytes(chunk)
        return self._pending.pop(0)


class ByteSink:
    """Append-only output buffer, optionally mirrored to a binary stream."""

    def __init__(self, stream=None):
        self.stream = stream
        self.buffer = bytearray()

    def write_byte(self, value: int) -> None:
        # The stream goes first so a rejected byte is never recorded.
        if self.stream is not None:
            self.stream.write(bytes([value]))
            if hasattr(self.stream, "flush"):
                self.stream.flush()
        self.buffer.append(value)

    def getvalue(self) -> bytes:
        return bytes(self.buffer)

    def clear(self) -> None:
        self.buffer = bytearray()


class Evaluator:
    """Executes instructions from a ProgramStore against a Tape.

    The caller never runs the evaluator past the outermost pending open
    loop, so every bracket it meets has a jump table entry.
    """

    def __init__(self, tape: Tape, program: ProgramStore,
                 source: ByteSource, sink: ByteSink,
                 on_eof: EofPolicy = EofPolicy.ERROR,
                 step_limit: Optional[int] = None):
        self.tape = tape
        self.program = program
        self.source = source
        self.sink = sink
        self.on_eof = on_eof
        self.step_limit = step_limit

        self.instruction_pointer = 0
        self.steps = 0
        self.input_reads = 0
        self.output_writes = 0

    @property
    def output(self) -> bytes:
        return self.sink.getvalue()

    @property
    def finished(self) -> bool:
        return self.instruction_pointer >= len(self.program)

    def run(self, stop: Optional[int] = None) -> None:
        """Execute until the end of the currently known program, or until
        the instruction pointer reaches `stop`.

        Raises an ExecutionError subclass when the run stops early. The
        instruction pointer then still points at the instruction that
        failed (or would have run next, for the step limit).
        """
        end = len(self.program) if stop is None else stop
        executed = 0
        while self.instruction_pointer < end:
            if self.step_limit is not None and executed >= self.step_limit:
                logger.debug("Step limit %d hit at %d", self.step_limit, self.instruction_pointer)
                raise StepLimitExceeded(self.instruction_pointer, self.step_limit)
            self.step()
            executed += 1

    def step(self) -> None:
        """Execute the single instruction at the instruction pointer."""
        tape = self.tape
        ip = self.instruction_pointer
        cmd = self.program[ip]

        if cmd == POINTER_RIGHT:
            tape.advance()

        elif cmd == POINTER_LEFT:
            tape.retreat()

        elif cmd == INCREMENT:
            tape.increment()

        elif cmd == DECREMENT:
            tape.decrement()

        elif cmd == OUTPUT:
            try:
                self.sink.write_byte(tape.get())
            except (OSError, ValueError) as e:
                logger.debug("Output sink rejected write at %d: %s", ip, e)
                raise OutputFailure(ip, e) from e
            self.output_writes += 1

        elif cmd == INPUT:
            value = self.source.read_byte()
            if value is not None:
                tape.set(value)
                self.input_reads += 1
            elif self.on_eof is EofPolicy.ERROR:
                raise InputExhausted(ip)
            # EofPolicy.UNCHANGED: leave the cell as it is

        elif cmd == LOOP_OPEN:
            if tape.get() == 0:
                ip = self.program.jump(ip)

        elif cmd == LOOP_CLOSE:
            if tape.get() != 0:
                ip = self.program.jump(ip)

        self.instruction_pointer = ip + 1
        self.steps += 1

    def reset(self) -> None:
        self.instruction_pointer = 0
        self.steps = 0
        self.input_reads = 0
        self.output_writes = 0
        self.sink.clear()
