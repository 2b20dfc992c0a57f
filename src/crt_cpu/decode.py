"""Program loader: turns assembly text into instruction objects.

Grammar, one instruction per line:

    noop
    addx <signed integer>

Blank lines are skipped. Opcodes are case-sensitive. The whole source is
parsed up front, so a bad line aborts loading before anything runs.
"""

import logging
from pathlib import Path
from typing import List, Union

from .registry import INSTRUCTION_SET, Instruction, InstructionError

logger = logging.getLogger(__name__)


def parse_instruction(line: str) -> Instruction:
    """Decode one source line.

    Args:
        line: Instruction text (e.g., "addx -11")

    Returns:
        A new, unexecuted instruction

    Raises:
        InstructionError: Unknown opcode or malformed arguments
    """
    name, *args = line.strip().split(" ")
    variant = INSTRUCTION_SET.get(name)
    if variant is None:
        raise InstructionError(f"Unknown opcode: {name}", line=line)

    try:
        return variant.parse(args)
    except InstructionError as e:
        raise InstructionError(str(e), line=line) from None


def parse_program(source: str) -> List[Instruction]:
    """Parse program source into an ordered instruction list.

    Args:
        source: Program text, newline separated

    Returns:
        Instructions in execution order

    Raises:
        InstructionError: On the first invalid line (with its line number)
    """
    instructions = []

    for lineno, line in enumerate(source.split("\n"), start=1):
        line = line.strip()
        if not line:
            continue
        try:
            instructions.append(parse_instruction(line))
        except InstructionError as e:
            raise InstructionError(str(e), line=line, lineno=lineno) from None

    logger.debug("Parsed %d instructions", len(instructions))
    return instructions


def load_program_file(path: Union[str, Path]) -> List[Instruction]:
    """Read and parse a program file (UTF-8).

    Raises:
        FileNotFoundError: If the file doesn't exist
        InstructionError: If any line is invalid
    """
    path = Path(path)
    logger.debug("Loading program from %s", path)
    return parse_program(path.read_text(encoding="utf-8"))
