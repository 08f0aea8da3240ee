import pytest

from bfvm.brainfuck import BrainfuckInterpreter

HELLO_WORLD = """
    >++++++++[<+++++++++>-]<.
    >++++[<+++++++>-]<+.
    +++++++..
    +++.
    >>++++++[<+++++++>-]<++.
    ------------.
    >++++++[<+++++++++>-]<+.
    <.
    +++.
    ------.
    --------.
    >>>++++[<++++++++>-]<+.
"""

# Reads two bytes and outputs their sum.
ADD_TWO = ",>,[<+>-]<."


@pytest.fixture
def hello_world():
    return HELLO_WORLD


@pytest.fixture
def add_two():
    return ADD_TWO


@pytest.fixture
def interpreter():
    return BrainfuckInterpreter()


@pytest.fixture(autouse=True)
def _clean_bf_env(monkeypatch):
    """Keep BF_* settings from the developer's shell out of the tests."""
    for name in ("BF_TAPE_SIZE", "BF_STRICT", "BF_ON_EOF", "BF_STEP_LIMIT"):
        monkeypatch.delenv(name, raising=False)
