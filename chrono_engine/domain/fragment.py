"""TimeFragment — a typed, rotatable piece placed on the board.

Fragments are mutable while unsolved: the session moves and rotates them.
Once a fragment takes part in a solved pattern it is locked for good.
Outbound queries never hand out the live object; they get a frozen
FragmentSnapshot instead.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from chrono_engine.domain.enums import (
    ROTATIONS,
    FragmentColor,
    FragmentType,
    VisualPattern,
)


# ── Snapshot ─────────────────────────────────────────────────────────────────

class FragmentSnapshot(BaseModel):
    """Immutable view of a fragment at a point in time."""

    id: int
    x: int = Field(..., ge=0)
    y: int = Field(..., ge=0)
    rotation: int
    fragment_type: FragmentType
    visual_pattern: VisualPattern
    color: FragmentColor
    solved: bool

    model_config = {"frozen": True}

    @field_validator("rotation")
    @classmethod
    def rotation_must_be_quarter_turn(cls, v: int) -> int:
        if v not in ROTATIONS:
            raise ValueError(f"rotation must be one of {ROTATIONS}, got {v}")
        return v


# ── Fragment ─────────────────────────────────────────────────────────────────

class TimeFragment:
    """A live game piece.

    Thread-safety note:
        Fragments are mutated *only* by the PuzzleSession that owns them,
        and the SessionRunner serialises access to the session.
    """

    __slots__ = (
        "id",
        "x",
        "y",
        "rotation",
        "fragment_type",
        "visual_pattern",
        "color",
        "solved",
    )

    def __init__(
        self,
        id: int,
        x: int,
        y: int,
        fragment_type: FragmentType,
        rotation: int = 0,
        visual_pattern: VisualPattern = VisualPattern.SQUARE,
        color: FragmentColor = FragmentColor.AZURE,
        solved: bool = False,
    ) -> None:
        if rotation not in ROTATIONS:
            raise ValueError(f"rotation must be one of {ROTATIONS}, got {rotation}")
        self.id = id
        self.x = x
        self.y = y
        self.rotation = rotation
        self.fragment_type = FragmentType(fragment_type)
        self.visual_pattern = VisualPattern(visual_pattern)
        self.color = FragmentColor(color)
        self.solved = solved

    # ── Queries ──────────────────────────────────────────────────────────

    @property
    def position(self) -> tuple[int, int]:
        return (self.x, self.y)

    def occupies(self, x: int, y: int) -> bool:
        return self.x == x and self.y == y

    def snapshot(self) -> FragmentSnapshot:
        return FragmentSnapshot(
            id=self.id,
            x=self.x,
            y=self.y,
            rotation=self.rotation,
            fragment_type=self.fragment_type,
            visual_pattern=self.visual_pattern,
            color=self.color,
            solved=self.solved,
        )

    # ── Mutation ─────────────────────────────────────────────────────────

    def move_to(self, x: int, y: int) -> None:
        if self.solved:
            raise RuntimeError(f"fragment {self.id} is solved and locked in place")
        self.x = x
        self.y = y

    def rotate_by(self, delta: int) -> None:
        """Turn by *delta* degrees, normalised into [0, 360)."""
        if self.solved:
            raise RuntimeError(f"fragment {self.id} is solved and locked in place")
        self.rotation = (self.rotation + delta) % 360

    def lock(self) -> None:
        self.solved = True

    # ── Dunder ───────────────────────────────────────────────────────────

    def __repr__(self) -> str:
        return (
            f"TimeFragment(id={self.id}, "
            f"type={self.fragment_type.value}, "
            f"pos=({self.x}, {self.y}), "
            f"rot={self.rotation}, "
            f"solved={self.solved})"
        )
