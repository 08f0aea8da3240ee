"""
Brainfuck State Display and Interactive Shell

Renders an interpreter snapshot for humans (tape window around the data
pointer, program with the instruction pointer marked, output so far) and
runs the interactive read-eval-print loop on top of BrainfuckInterpreter.
"""

from typing import Callable, List

from bfvm.brainfuck import BrainfuckInterpreter, Snapshot
from bfvm.errors import BrainfuckError

PROMPT = "bfvm> "

WELCOME = """🧠 bfvm interactive interpreter
 :q[uit]   exit the shell
 :d[ump]   show interpreter state
 :r[eset]  reset interpreter state"""


def format_dump(snapshot: Snapshot, show_memory_range: int = 10) -> str:
    """Show current state of memory, pointer, program and output."""
    lines: List[str] = []
    lines.append(f"Cell:     d={snapshot.pointer} (value {snapshot.cell}, 0x{snapshot.cell:02x})")

    # Show memory tape (focused around pointer)
    start = max(0, snapshot.pointer - show_memory_range // 2)
    end = min(len(snapshot.tape), start + show_memory_range)

    # Adjust start if we're near the end
    if end - start < show_memory_range:
        start = max(0, end - show_memory_range)

    width = max(3, len(str(end - 1)))
    memory_vals = []
    memory_ptrs = []
    memory_addrs = []
    for i in range(start, end):
        memory_vals.append(f"{snapshot.tape[i]:{width}d}")
        memory_ptrs.append("^".center(width) if i == snapshot.pointer else " " * width)
        memory_addrs.append(f"{i:{width}d}")

    lines.append("Memory:   [" + "|".join(memory_vals) + "]")
    lines.append("Pointer:   " + " ".join(memory_ptrs))
    lines.append("Address:   " + " ".join(memory_addrs))

    # Show program with instruction pointer
    ip = snapshot.instruction_pointer
    program_display = ""
    for i, cmd in enumerate(snapshot.program):
        if i == ip:
            program_display += f"[{chr(cmd)}]"
        else:
            program_display += chr(cmd)
    if ip >= len(snapshot.program):
        program_display += "[END]"
    lines.append(f"Program:  {program_display} (ip={ip})")
    if snapshot.pending_loops:
        lines.append(f"Pending:  {snapshot.pending_loops} open loop(s), execution deferred")

    if snapshot.output:
        output_chars = snapshot.output.decode("latin-1")
        lines.append(f"Output:   {output_chars!r} → {list(snapshot.output)}")
    else:
        lines.append("Output:   (empty)")

    lines.append(
        f"Stats:    steps={snapshot.steps} reads={snapshot.input_reads} writes={snapshot.output_writes}"
    )
    return "\n".join(lines)


def repl(interpreter: BrainfuckInterpreter, read_line: Callable[[str], str] = input) -> None:
    """Interactive shell: every line is fed to the interpreter command by command."""
    print(WELCOME)

    while True:
        try:
            line = read_line(PROMPT)
        except EOFError:
            print()
            break

        if line.startswith(":"):
            command = line[1:2].lower()
            if command == "q":
                break
            elif command == "d":
                print(format_dump(interpreter.dump()))
            elif command == "r":
                interpreter.reset()
                print("Reset interpreter!")
            else:
                print(f"Unknown command {line.strip()!r}")
            continue

        try:
            interpreter.feed(line)
        except BrainfuckError as e:
            print(f"❌ {e}")
