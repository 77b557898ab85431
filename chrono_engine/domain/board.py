"""Board — the coordinate space fragments live in.

The board owns no fragment references.  Fragments carry their own
positions; the board only answers "is this coordinate on the grid?".
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class Board(BaseModel):
    """Immutable grid bounds."""

    width: int = Field(6, gt=0, description="Number of columns")
    height: int = Field(6, gt=0, description="Number of rows")

    model_config = {"frozen": True}

    @property
    def cell_count(self) -> int:
        return self.width * self.height

    def contains(self, x: int, y: int) -> bool:
        """Return True if (x, y) lies on the board."""
        return 0 <= x < self.width and 0 <= y < self.height

    def clamp(self, x: int, y: int) -> tuple[int, int]:
        """Pull an arbitrary coordinate onto the nearest board cell."""
        return (
            max(0, min(self.width - 1, x)),
            max(0, min(self.height - 1, y)),
        )

    def cells(self) -> list[tuple[int, int]]:
        """All coordinates in row-major order."""
        return [(x, y) for y in range(self.height) for x in range(self.width)]
