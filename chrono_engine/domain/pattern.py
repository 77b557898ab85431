"""Pattern domain models — catalog entries, matches, and solve events.

A PatternDefinition is static configuration.  A PatternMatch is what the
matcher found.  A PatternSolved is what the session tells its listeners
after it has settled a match.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, model_validator

from chrono_engine.domain.enums import ROTATIONS, Arrangement, FragmentType
from chrono_engine.domain.fragment import TimeFragment


class PatternDefinition(BaseModel):
    """A winning configuration: type multiset + arrangement + rotations."""

    name: str = Field(..., min_length=1)
    required_types: tuple[FragmentType, ...] = Field(..., min_length=1)
    arrangement: Arrangement
    required_rotations: Optional[tuple[int, ...]] = Field(
        default=None,
        description="Rotations aligned positionally to required_types (None = any)",
    )
    points: int = Field(..., ge=0)

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def rotations_align_with_types(self) -> "PatternDefinition":
        if self.required_rotations is None:
            return self
        if len(self.required_rotations) != len(self.required_types):
            raise ValueError(
                f"pattern '{self.name}': {len(self.required_rotations)} rotations "
                f"for {len(self.required_types)} types"
            )
        bad = [r for r in self.required_rotations if r not in ROTATIONS]
        if bad:
            raise ValueError(f"pattern '{self.name}': invalid rotations {bad}")
        return self

    @property
    def size(self) -> int:
        return len(self.required_types)


class PatternMatch:
    """A catalog entry together with the fragments that satisfy it."""

    __slots__ = ("pattern", "fragments")

    def __init__(self, pattern: PatternDefinition, fragments: tuple[TimeFragment, ...]) -> None:
        self.pattern = pattern
        self.fragments = fragments

    @property
    def fragment_ids(self) -> list[int]:
        return [f.id for f in self.fragments]

    def __repr__(self) -> str:
        return f"PatternMatch(pattern={self.pattern.name!r}, fragments={self.fragment_ids})"


class PatternSolved(BaseModel):
    """Event emitted when a pattern has been settled on the board."""

    name: str
    points: int
    fragment_ids: tuple[int, ...]

    model_config = {"frozen": True}

    @property
    def message(self) -> str:
        """User-facing notification text."""
        return f"{self.name} Solved! +{self.points} points"
