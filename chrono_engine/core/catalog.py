"""The fixed, ordered catalog of winning patterns.

Order is match priority: when several patterns could be completed at
once, the earlier entry wins.
"""

from __future__ import annotations

from chrono_engine.domain.enums import Arrangement, FragmentType
from chrono_engine.domain.pattern import PatternDefinition

PAST = FragmentType.PAST
PRESENT = FragmentType.PRESENT
FUTURE = FragmentType.FUTURE

PATTERN_CATALOG: tuple[PatternDefinition, ...] = (
    PatternDefinition(
        name="Chronological Sequence",
        required_types=(PAST, PRESENT, FUTURE),
        arrangement=Arrangement.LINEAR,
        required_rotations=(0, 0, 0),
        points=100,
    ),
    PatternDefinition(
        name="Paradox Resolution",
        required_types=(FragmentType.PARADOX, FragmentType.CONSTANT, FragmentType.VOID),
        arrangement=Arrangement.TRIANGLE,
        required_rotations=(90, 180, 270),
        points=150,
    ),
    PatternDefinition(
        name="Temporal Balance",
        required_types=(PAST, FUTURE),
        arrangement=Arrangement.ADJACENT,
        required_rotations=(180, 180),
        points=50,
    ),
    PatternDefinition(
        name="Time Loop",
        required_types=(PAST, PRESENT, FUTURE, PAST),
        arrangement=Arrangement.SQUARE,
        required_rotations=(0, 90, 180, 270),
        points=200,
    ),
)


def pattern_by_name(name: str) -> PatternDefinition:
    """Look up a catalog entry by its display name."""
    for pattern in PATTERN_CATALOG:
        if pattern.name == name:
            return pattern
    raise KeyError(name)
