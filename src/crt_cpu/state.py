"""Registers: register file of the handheld CPU.

The CPU has a single integer register ``x``. It starts at 1 and is only
changed by the ``addx`` instruction once that instruction has used up
all of its cycles.

The value of ``x`` also drives the CRT: it is the horizontal centre of
the 3-pixel sprite.
"""

from dataclasses import dataclass, asdict
from typing import Dict


# Value of x at power-on and after every program wrap-around
INITIAL_X = 1


@dataclass
class Registers:
    """Mutable register file.

    Attributes:
        x: The only general-purpose register (sprite centre)
    """
    x: int = INITIAL_X

    def snapshot(self) -> Dict[str, int]:
        """Create a detached copy of the register values for tracing.

        Returns:
            Dictionary mapping register name to value
        """
        return asdict(self)

    def reset(self) -> None:
        """Restore power-on values."""
        self.x = INITIAL_X

    def __str__(self) -> str:
        """Human-readable register dump."""
        return f"{{ x: {self.x} }}"


def create_initial_registers() -> Registers:
    """Create a register file in its power-on state.

    Returns:
        Fresh Registers with x = 1
    """
    return Registers(x=INITIAL_X)
