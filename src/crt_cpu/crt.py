"""CRT: 40x6 raster display driven by the CPU's x register.

The beam draws one pixel per cycle, left to right and top to bottom.
A pixel is lit when the 3-pixel sprite, centred on register x, covers the
beam's column. Only the column is compared; the sprite has no vertical
position.

After the bottom row is finished the beam parks past the screen: further
pixels are discarded and no more rows are emitted.
"""

from typing import List, Optional

LIT = "#"
DARK = "."


def is_lit(beam_x: int, sprite_x: int) -> bool:
    """Check whether the sprite covers the beam column.

    Args:
        beam_x: Column the beam is drawing
        sprite_x: Sprite centre (register x)

    Returns:
        True if beam_x is in {sprite_x - 1, sprite_x, sprite_x + 1}
    """
    return sprite_x - 1 <= beam_x <= sprite_x + 1


class CRT:
    """Scanning-beam display.

    Attributes:
        width: Pixels per row
        height: Number of rows
        x: Beam column
        y: Beam row (equals height once the screen is full)
        screen: Rows of pixel characters
    """

    WIDTH = 40
    HEIGHT = 6

    def __init__(self, width: int = WIDTH, height: int = HEIGHT):
        self.width = width
        self.height = height
        self.reset()

    def reset(self) -> None:
        """Blank the screen and return the beam to the top-left corner."""
        self.x = 0
        self.y = 0
        self.screen: List[List[str]] = [[DARK] * self.width for _ in range(self.height)]

    @property
    def finished(self) -> bool:
        """Whether every row has been drawn."""
        return self.y >= self.height

    def tick(self, sprite_x: int) -> Optional[str]:
        """Draw the pixel under the beam and advance it.

        Args:
            sprite_x: Current sprite centre (register x)

        Returns:
            The completed row when the beam wraps to the next row, else None
        """
        if self.y < self.height:
            self.screen[self.y][self.x] = LIT if is_lit(self.x, sprite_x) else DARK

        if self.x < self.width - 1:
            self.x += 1
        elif self.y < self.height:
            self.x = 0
            self.y += 1
            return self.row(self.y - 1)

        return None

    def row(self, index: int) -> str:
        return "".join(self.screen[index])

    def rows(self) -> List[str]:
        return [self.row(i) for i in range(self.height)]

    def render(self) -> str:
        """Return the whole screen, one line per row."""
        return "\n".join(self.rows())

    def __str__(self) -> str:
        return self.render()
