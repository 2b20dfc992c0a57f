"""Run modes: signal-strength checksum and CRT rendering.

Both modes drive a CPU one cycle at a time and sample register x during
each cycle, i.e. before that cycle's instruction effect lands. Each mode
stops at an explicit cycle budget instead of looping forever.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterator, Optional, Sequence

from .cpu import CPU
from .crt import CRT

logger = logging.getLogger(__name__)


# Cycles at which the signal strength is sampled
CHECKPOINTS = (20, 60, 100, 140, 180, 220)


@dataclass
class CheckpointReport:
    """Signal strength sample.

    Attributes:
        cycle: Cycle number the sample was taken during
        registers: Register snapshot during that cycle
        signal: registers["x"] * cycle
        total: Running sum of all signals so far
    """
    cycle: int
    registers: Dict[str, int]
    signal: int
    total: int


def run_checksum(
    cpu: CPU,
    checkpoints: Sequence[int] = CHECKPOINTS,
    max_cycles: Optional[int] = None
) -> Iterator[CheckpointReport]:
    """Sample signal strength at each checkpoint.

    Args:
        cpu: CPU to drive (cycles are counted from 1 for this run)
        checkpoints: Cycle numbers to sample
        max_cycles: Stop after this many cycles even if checkpoints remain

    Yields:
        One CheckpointReport per checkpoint, in cycle order
    """
    pending = set(checkpoints)
    last = max(pending) if pending else 0
    limit = last if max_cycles is None else min(last, max_cycles)

    total = 0
    cycle = 0
    while cycle < limit:
        cycle += 1
        report = None
        if cycle in pending:
            signal = cpu.registers.x * cycle
            total += signal
            report = CheckpointReport(cycle, cpu.registers.snapshot(), signal, total)
            logger.debug("cycle %d: x=%d signal=%d total=%d",
                         cycle, cpu.registers.x, signal, total)
        cpu.tick()
        if report is not None:
            yield report


def signal_strength_sum(cpu: CPU, checkpoints: Sequence[int] = CHECKPOINTS) -> int:
    """Sum of x * cycle over all checkpoints."""
    total = 0
    for report in run_checksum(cpu, checkpoints):
        total = report.total
    return total


def run_crt(
    cpu: CPU,
    crt: Optional[CRT] = None,
    max_cycles: Optional[int] = None
) -> Iterator[str]:
    """Drive the CRT from the CPU, one pixel per cycle.

    Args:
        cpu: CPU providing the sprite position
        crt: Display to draw on (a new one if omitted)
        max_cycles: Cycles to run (default: one full screen)

    Yields:
        Each row as it is completed
    """
    if crt is None:
        crt = CRT()
    if max_cycles is None:
        max_cycles = crt.width * crt.height

    for _ in range(max_cycles):
        row = crt.tick(cpu.registers.x)
        cpu.tick()
        if row is not None:
            yield row


def render_crt(cpu: CPU, crt: Optional[CRT] = None) -> CRT:
    """Render one full screen and return the display."""
    if crt is None:
        crt = CRT()
    for _ in run_crt(cpu, crt):
        pass
    return crt
