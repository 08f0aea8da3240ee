"""
Error types raised by the interpreter.

Parse errors are raised while a program is being loaded or fed and leave
the interpreter untouched. Execution errors are raised from the
fetch-execute loop; the instruction pointer stays on the failing
instruction so the caller can inspect the state or resume.
"""

from typing import Optional


class BrainfuckError(Exception):
    """Base class for every error raised by bfvm."""

    def __init__(self, message: str, index: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.index = index


class ParseError(BrainfuckError, SyntaxError):
    """The program text is not a valid program."""

    def __str__(self):
        return self.message


class MismatchedBracket(ParseError):
    """Brackets do not form a balanced, properly nested sequence."""


class UnmatchedClose(MismatchedBracket):
    def __init__(self, index: int):
        super().__init__(f"Unmatched ']' at position {index}", index)


class UnclosedOpen(MismatchedBracket):
    def __init__(self, index: int):
        super().__init__(f"Unmatched '[' at position {index}", index)


class InvalidInstruction(ParseError):
    """A non-instruction byte was found while comments are rejected.

    `index` is the instruction index the byte would have taken, the same
    position scheme as the bracket errors. `offset` is the byte's offset
    in the source chunk when a whole chunk was parsed at once, and None
    when the byte was fed on its own.
    """

    def __init__(self, byte: int, index: int, offset: Optional[int] = None):
        where = f"position {index}" if offset is None else f"position {index} (source offset {offset})"
        super().__init__(f"Invalid instruction {bytes([byte])!r} at {where}", index)
        self.byte = byte
        self.offset = offset


class ExecutionError(BrainfuckError):
    """The program stopped before reaching its end."""


class InputExhausted(ExecutionError):
    def __init__(self, index: int):
        super().__init__(f"Program expects more input (',' at position {index})", index)


class OutputFailure(ExecutionError):
    def __init__(self, index: int, reason: BaseException):
        super().__init__(f"Failed to write output ('.' at position {index}): {reason}", index)
        self.reason = reason


class StepLimitExceeded(ExecutionError):
    def __init__(self, index: int, limit: int):
        super().__init__(f"Step limit of {limit} reached at position {index}", index)
        self.limit = limit
