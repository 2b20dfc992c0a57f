"""crt-cpu: Handheld CPU simulator with a scanning CRT display.

A single-register CPU runs a two-instruction program (noop, addx). The
register timeline it produces feeds two run modes:

    checksum: sum of x * cycle at cycles 20, 60, 100, 140, 180, 220
    crt:      40x6 image, pixel lit when the sprite (x-1..x+1) covers the beam

Architecture:
    SOURCE -> decode -> [Instruction] -> CPU.tick() -> Registers
                                                        |
                                          run_checksum / run_crt -> CRT

Modules:
    state: Registers dataclass
    registry: Instruction variants (Noop, Addx) and the opcode table
    decode: Program loader
    cpu: Cycle stepper with program wrap-around
    crt: Scanning-beam display
    runner: The two run modes
"""

__version__ = "0.1.0"

from .state import Registers
from .registry import Instruction, Noop, Addx, InstructionError
from .decode import parse_instruction, parse_program, load_program_file
from .cpu import CPU
from .crt import CRT, is_lit
from .runner import CHECKPOINTS, run_checksum, run_crt, render_crt, signal_strength_sum

__all__ = [
    "Registers",
    "Instruction", "Noop", "Addx", "InstructionError",
    "parse_instruction", "parse_program", "load_program_file",
    "CPU",
    "CRT", "is_lit",
    "CHECKPOINTS", "run_checksum", "run_crt", "render_crt", "signal_strength_sum",
]
