import os
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

DEFAULT_TAPE_SIZE = 30000


class CommentPolicy(Enum):
    """What to do with bytes that are not one of the eight instructions."""
    IGNORE = 'ignore'
    REJECT = 'reject'


class EofPolicy(Enum):
    """What ',' does when the input source has no more bytes."""
    ERROR = 'error'
    UNCHANGED = 'unchanged'


@dataclass(frozen=True)
class InterpreterConfig:
    """Tunable interpreter behaviour."""
    tape_size: int = DEFAULT_TAPE_SIZE
    comments: CommentPolicy = CommentPolicy.IGNORE
    on_eof: EofPolicy = EofPolicy.ERROR
    step_limit: Optional[int] = None  # None runs without a limit

    def __post_init__(self):
        if self.tape_size <= 0:
            raise ValueError(f"tape_size must be positive, got {self.tape_size}")
        if self.step_limit is not None and self.step_limit <= 0:
            raise ValueError(f"step_limit must be positive, got {self.step_limit}")

    @classmethod
    def from_env(cls, environ=None) -> 'InterpreterConfig':
        """Build a config from BF_* environment variables.

        BF_TAPE_SIZE   number of cells (default 30000)
        BF_STRICT      1/true/yes rejects comment bytes
        BF_ON_EOF      'error' or 'unchanged'
        BF_STEP_LIMIT  maximum executed instructions per run, 0 for none
        """
        env = os.environ if environ is None else environ
        step_limit = int(env.get("BF_STEP_LIMIT", "0")) or None
        strict = env.get("BF_STRICT", "").strip().lower() in ("1", "true", "yes", "on")
        return cls(
            tape_size=int(env.get("BF_TAPE_SIZE", str(DEFAULT_TAPE_SIZE))),
            comments=CommentPolicy.REJECT if strict else CommentPolicy.IGNORE,
            on_eof=EofPolicy(env.get("BF_ON_EOF", EofPolicy.ERROR.value).strip().lower()),
            step_limit=step_limit,
        )

    def with_overrides(self, **changes) -> 'InterpreterConfig':
        """Return a copy with the non-None keyword arguments applied."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})
