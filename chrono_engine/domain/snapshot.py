"""SessionSnapshot — an immutable point-in-time view of a puzzle session.

This is what presentation code reads.  It contains no live references.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from chrono_engine.domain.fragment import FragmentSnapshot


class SessionSnapshot(BaseModel):
    """Everything a consumer needs to draw the board and the HUD."""

    board_width: int
    board_height: int
    fragments: list[FragmentSnapshot] = Field(default_factory=list)
    energy: float = Field(..., ge=0.0)
    capacity: float = Field(..., gt=0.0)
    regen_rate: float = Field(..., description="Energy units per second at the current level")
    energy_fraction: float = Field(..., ge=0.0, le=1.0)
    low_energy: bool
    level: int = Field(..., ge=1)
    score: int = Field(..., ge=0)
    puzzles_solved: int = Field(..., ge=0)
    is_playing: bool

    model_config = {"frozen": True}

    @property
    def unsolved_count(self) -> int:
        return sum(1 for f in self.fragments if not f.solved)

    def summary(self) -> dict:
        """Lightweight dict for logging."""
        return {
            "level": self.level,
            "score": self.score,
            "puzzles_solved": self.puzzles_solved,
            "energy": round(self.energy, 2),
            "capacity": self.capacity,
            "fragments": len(self.fragments),
            "unsolved": self.unsolved_count,
            "is_playing": self.is_playing,
        }
