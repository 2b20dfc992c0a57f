"""CPU: cycle-by-cycle stepper for the handheld CPU.

Each call to ``tick()`` is one clock cycle. The current instruction gets
one ``cycle()`` call; when it reports completion the instruction pointer
moves on. Instructions never branch, so the pointer only ever increments.

When the last instruction completes the program wraps around: every
instruction is reloaded fresh, the pointer goes back to 0 and the
registers return to their power-on values. Every pass therefore produces
the same register timeline, which lets the CRT keep scanning after the
program's natural length.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Union

from .state import Registers, create_initial_registers
from .registry import Instruction
from .decode import parse_program

logger = logging.getLogger(__name__)


@dataclass
class ExecutionTraceEntry:
    """Single entry in the execution trace.

    Attributes:
        cycle: Cycle number (1-indexed)
        instruction: Instruction that received the cycle
        pre_state: Registers before the cycle
        post_state: Registers after the cycle
        completed: Whether the instruction finished on this cycle
    """
    cycle: int
    instruction: str
    pre_state: dict
    post_state: dict
    completed: bool


class CPU:
    """Single-register CPU running a looping program.

    Attributes:
        registers: Register file
        program: Parsed source program (never executed directly)
        instructions: Working copies of the program for the current pass
        ip: Index of the current instruction
        cycle_count: Total cycles executed since reset
        passes: Number of completed passes through the program
        max_cycles: Cycle budget (None for unlimited)
        trace: Execution trace entries (only recorded when tracing)
    """

    DEFAULT_MAX_CYCLES = 10000

    def __init__(
        self,
        program: Union[str, Sequence[Instruction], None] = None,
        max_cycles: Optional[int] = DEFAULT_MAX_CYCLES,
        trace: bool = False
    ):
        """Initialize the CPU.

        Args:
            program: Program source text or parsed instructions
            max_cycles: Maximum cycles before tick() refuses to run
            trace: Record an ExecutionTraceEntry for every cycle
        """
        self.registers: Registers = create_initial_registers()
        self.program: List[Instruction] = []
        self.instructions: List[Instruction] = []
        self.ip = 0
        self.cycle_count = 0
        self.passes = 0
        self.max_cycles = max_cycles
        self.tracing = trace
        self.trace: List[ExecutionTraceEntry] = []

        if program is not None:
            self.load_program(program)

    def load_program(self, program: Union[str, Sequence[Instruction]]) -> None:
        """Load a program and reset the CPU.

        Args:
            program: Source text (parsed eagerly) or instruction list

        Raises:
            InstructionError: If source text contains an invalid line
        """
        if isinstance(program, str):
            program = parse_program(program)
        self.program = [instruction.fresh() for instruction in program]
        self.reset()
        logger.debug("Loaded program: %d instructions, %d cycles per pass",
                     len(self.program), self.cycles_per_pass())

    def reset(self) -> None:
        """Return to the power-on state, keeping the loaded program."""
        self.registers.reset()
        self._reload()
        self.cycle_count = 0
        self.passes = 0
        self.trace = []

    def _reload(self) -> None:
        self.instructions = [instruction.fresh() for instruction in self.program]
        self.ip = 0

    def tick(self) -> bool:
        """Execute a single clock cycle.

        Returns:
            True if the current instruction completed on this cycle

        Raises:
            RuntimeError: If no program loaded or cycle budget exhausted
        """
        if not self.instructions:
            raise RuntimeError("No program loaded")

        if self.max_cycles is not None and self.cycle_count >= self.max_cycles:
            raise RuntimeError(f"Max cycles ({self.max_cycles}) exceeded")

        instruction = self.instructions[self.ip]
        pre_state = self.registers.snapshot() if self.tracing else None

        completed = instruction.cycle(self.registers)
        self.cycle_count += 1

        if self.tracing:
            self.trace.append(ExecutionTraceEntry(
                cycle=self.cycle_count,
                instruction=str(instruction),
                pre_state=pre_state,
                post_state=self.registers.snapshot(),
                completed=completed
            ))

        if completed:
            self.ip += 1
            if self.ip >= len(self.instructions):
                self._wrap()

        return completed

    def _wrap(self) -> None:
        self.passes += 1
        logger.debug("Program finished pass %d at cycle %d (x=%d), wrapping around",
                     self.passes, self.cycle_count, self.registers.x)
        self.registers.reset()
        self._reload()

    def run(self, cycles: int) -> None:
        """Execute a fixed number of cycles.

        Raises:
            RuntimeError: If the cycle budget is exhausted first
        """
        for _ in range(cycles):
            self.tick()

    def cycles_per_pass(self) -> int:
        """Total cycle cost of one pass through the program."""
        return sum(instruction.CYCLES for instruction in self.program)

    def current_instruction(self) -> Optional[Instruction]:
        if not self.instructions:
            return None
        return self.instructions[self.ip]

    def get_register(self, reg: str = "x") -> int:
        """Get value of a register.

        Raises:
            KeyError: If register doesn't exist
        """
        snapshot = self.registers.snapshot()
        if reg not in snapshot:
            raise KeyError(f"Invalid register: {reg}")
        return snapshot[reg]

    def dump_registers(self) -> Dict[str, int]:
        return self.registers.snapshot()

    def print_trace(self) -> None:
        """Print execution trace in human-readable format."""
        print("=" * 70)
        print("EXECUTION TRACE")
        print("=" * 70)

        for entry in self.trace:
            status = "done" if entry.completed else "busy"
            line = f"[Cycle {entry.cycle:>4}] {entry.instruction:<10} {status}"
            pre_x = entry.pre_state["x"]
            post_x = entry.post_state["x"]
            if pre_x != post_x:
                line += f"  x: {pre_x} -> {post_x}"
            print(line)

        print("=" * 70)
        print(f"  Registers: {self.registers}")
        print(f"  IP: {self.ip}")
        print(f"  Cycles: {self.cycle_count}")
        print(f"  Passes: {self.passes}")

    def get_summary(self) -> Dict:
        """Get execution summary.

        Returns:
            Dictionary with execution statistics and current state
        """
        return {
            "cycles": self.cycle_count,
            "passes": self.passes,
            "registers": self.dump_registers(),
            "ip": self.ip,
            "program_length": len(self.program),
            "cycles_per_pass": self.cycles_per_pass(),
            "trace_length": len(self.trace),
        }
