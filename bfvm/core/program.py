"""
Program store: the instruction sequence and its bracket jump table.

Brackets are matched in a single left-to-right scan with a stack of open
indices; the top of the stack always belongs to the next close. The jump
table is a list parallel to the instructions holding the partner index of
each bracket (-1 everywhere else, and for opens still waiting for their
close).
"""

import logging
from enum import Enum
from typing import List, Optional, Tuple, Union

from bfvm.config import CommentPolicy
from bfvm.errors import InvalidInstruction, UnclosedOpen, UnmatchedClose

logger = logging.getLogger(__name__)

COMMANDS = b"><+-.,[]"
WHITESPACE = b" \t\r\n\x0b\x0c"
LOOP_OPEN = ord('[')
LOOP_CLOSE = ord(']')

Source = Union[bytes, bytearray, memoryview, str]


def to_bytes(source: Source) -> bytes:
    if isinstance(source, str):
        return source.encode("utf-8")
    return bytes(source)


class ParserState(Enum):
    READY = 'ready'
    AWAITING_CLOSE = 'awaiting-close'


class ProgramStore:
    """Validated instructions plus the bidirectional bracket jump table."""

    def __init__(self, comments: CommentPolicy = CommentPolicy.IGNORE):
        self.comments = comments
        self.instructions = bytearray()
        self.jumps: List[int] = []
        self.pending: List[int] = []  # indices of opens without a close yet

    @classmethod
    def parse(cls, source: Source, comments: CommentPolicy = CommentPolicy.IGNORE) -> 'ProgramStore':
        """Batch-parse a whole program; raises before anything is kept."""
        store = cls(comments)
        store.extend(source)
        return store

    def __len__(self):
        return len(self.instructions)

    def __getitem__(self, index: int) -> int:
        return self.instructions[index]

    @property
    def code(self) -> bytes:
        return bytes(self.instructions)

    @property
    def state(self) -> ParserState:
        return ParserState.AWAITING_CLOSE if self.pending else ParserState.READY

    @property
    def depth(self) -> int:
        """Number of loops opened but not closed yet."""
        return len(self.pending)

    def jump(self, index: int) -> int:
        return self.jumps[index]

    def extend(self, source: Source) -> None:
        """Append a chunk that must be balanced on its own.

        The chunk is validated completely before the store changes, so a
        failing chunk leaves no partial instructions or jump entries.
        """
        code, jumps = self._scan(to_bytes(source), len(self.instructions))
        self.instructions += code
        self.jumps += jumps

    def append(self, byte: int) -> bool:
        """Append a single byte in streaming mode.

        Returns True if the byte was an instruction. A close with no
        pending open raises UnmatchedClose and is not appended.
        """
        index = len(self.instructions)
        if not self._accept(byte, index):
            return False
        if byte == LOOP_CLOSE:
            if not self.pending:
                logger.debug("Rejected ']' at %d: no open loop", index)
                raise UnmatchedClose(index)
            start = self.pending.pop()
            self.jumps[start] = index
            self.jumps.append(start)
        else:
            self.jumps.append(-1)
            if byte == LOOP_OPEN:
                self.pending.append(index)
        self.instructions.append(byte)
        return True

    def clear(self) -> None:
        self.instructions = bytearray()
        self.jumps = []
        self.pending = []

    def _accept(self, byte: int, index: int, offset: Optional[int] = None) -> bool:
        if byte in COMMANDS:
            return True
        if self.comments is CommentPolicy.REJECT and byte not in WHITESPACE:
            raise InvalidInstruction(byte, index, offset)
        return False

    def _scan(self, data: bytes, base: int) -> Tuple[bytearray, List[int]]:
        code = bytearray()
        jumps: List[int] = []
        stack: List[int] = []

        for offset, byte in enumerate(data):
            if not self._accept(byte, base + len(code), offset):
                continue
            i = base + len(code)
            code.append(byte)
            jumps.append(-1)
            if byte == LOOP_OPEN:
                stack.append(i)
            elif byte == LOOP_CLOSE:
                if not stack:
                    logger.debug("Batch parse failed: unmatched ']' at %d", i)
                    raise UnmatchedClose(i)
                start = stack.pop()
                jumps[start - base] = i
                jumps[-1] = start

        if stack:
            logger.debug("Batch parse failed: unmatched '[' at %d", stack[-1])
            raise UnclosedOpen(stack[-1])

        return code, jumps
