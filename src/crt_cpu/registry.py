"""Instruction set of the handheld CPU.

Two instructions exist, each with a fixed cycle cost:

    noop        1 cycle, no effect
    addx V      2 cycles, then x += V

An instruction is stateful while it executes: it counts its remaining
cycles down and applies its effect on the cycle that brings the counter
to zero. ``cycle()`` returns True on that last cycle so the CPU knows to
move on to the next instruction.

Every variant knows how to build itself from its argument tokens via
``parse()``. The opcode table is frozen: no instructions can be added at
runtime.
"""

import re
from types import MappingProxyType
from typing import Mapping, Optional, Sequence, Tuple, Type

from .state import Registers


# Signed base-10 integer, nothing else
_INT_PATTERN = re.compile(r'[+-]?[0-9]+')


class InstructionError(ValueError):
    """Raised when a source line is not a valid instruction.

    Covers both unknown opcodes and malformed arguments.

    Attributes:
        line: Offending source line (if known)
        lineno: 1-based line number in the source (if known)
    """

    def __init__(self, message: str, line: Optional[str] = None, lineno: Optional[int] = None):
        self.line = line
        self.lineno = lineno
        if lineno is not None:
            message = f"line {lineno}: {message}"
        super().__init__(message)


class Instruction:
    """Base class for instruction variants.

    Attributes:
        name: Opcode mnemonic
        CYCLES: Total cycle cost of the instruction
        ARGC: Number of arguments the instruction takes
        cycles_remaining: Cycles left before the instruction completes
        args: Parsed arguments
    """

    name: str = ""
    CYCLES: int = 1
    ARGC: int = 0

    def __init__(self, args: Tuple[int, ...] = ()):
        args = tuple(args)
        if len(args) != self.ARGC:
            raise ValueError(f"{self.name} takes {self.ARGC} argument(s), got {len(args)}")
        self.args = args
        self.cycles_remaining = self.CYCLES

    @classmethod
    def parse(cls, args: Sequence[str]) -> "Instruction":
        raise NotImplementedError

    def cycle(self, registers: Registers) -> bool:
        """Execute one cycle of this instruction.

        Args:
            registers: Register file the effect is applied to

        Returns:
            True if the instruction has now fully executed

        Raises:
            RuntimeError: If the instruction already completed
        """
        if self.cycles_remaining <= 0:
            raise RuntimeError(f"Instruction already executed: {self}")

        self.cycles_remaining -= 1
        if self.cycles_remaining > 0:
            return False

        self.execute(registers)
        return True

    def execute(self, registers: Registers) -> None:
        """Apply the instruction effect (called on the final cycle)."""

    @property
    def completed(self) -> bool:
        return self.cycles_remaining == 0

    def reset(self) -> None:
        """Restore the cycle counter so the instruction can run again."""
        self.cycles_remaining = self.CYCLES

    def fresh(self) -> "Instruction":
        """Return an unexecuted copy of this instruction."""
        return type(self)(self.args)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Instruction):
            return NotImplemented
        return type(self) is type(other) and self.args == other.args

    def __hash__(self) -> int:
        return hash((self.name, self.args))

    def __str__(self) -> str:
        return " ".join([self.name, *(str(a) for a in self.args)])

    def __repr__(self) -> str:
        return f"{type(self).__name__}(args={self.args}, cycles_remaining={self.cycles_remaining})"


# =========================================================================
# Instruction Variants
# =========================================================================

class Noop(Instruction):
    """noop - Do nothing for one cycle."""

    name = "noop"
    CYCLES = 1

    @classmethod
    def parse(cls, args: Sequence[str]) -> "Noop":
        if args:
            raise InstructionError(f"noop takes no arguments, got: {' '.join(args)}")
        return cls()


class Addx(Instruction):
    """addx V - After two cycles, add V to register x.

    The register keeps its old value during both cycles and only
    changes once the second cycle is complete.
    """

    name = "addx"
    CYCLES = 2
    ARGC = 1

    @property
    def delta(self) -> int:
        return self.args[0]

    @classmethod
    def parse(cls, args: Sequence[str]) -> "Addx":
        if len(args) != 1 or not _INT_PATTERN.fullmatch(args[0]):
            raise InstructionError(f"Invalid arguments for addx: {' '.join(args) or '<none>'}")
        return cls((int(args[0], 10),))

    def execute(self, registers: Registers) -> None:
        registers.x += self.delta


# Opcode name -> variant. Read-only view so the set can't grow at runtime.
INSTRUCTION_SET: Mapping[str, Type[Instruction]] = MappingProxyType({
    Noop.name: Noop,
    Addx.name: Addx,
})
