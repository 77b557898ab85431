"""Controlled enumerations for the chrono-engine domain.

Every categorical field in the domain MUST reference an enum defined here.
Free-form strings are not acceptable for classification fields.
"""

from __future__ import annotations

from enum import Enum


class FragmentType(str, Enum):
    """The temporal nature of a fragment.  Drives pattern matching."""

    PAST = "past"
    PRESENT = "present"
    FUTURE = "future"
    PARADOX = "paradox"
    VOID = "void"
    CONSTANT = "constant"


class VisualPattern(str, Enum):
    """Cosmetic shape tag.  No gameplay effect."""

    CIRCLE = "circle"
    SQUARE = "square"
    TRIANGLE = "triangle"
    DIAMOND = "diamond"
    HEXAGON = "hexagon"
    STAR = "star"


class FragmentColor(str, Enum):
    """Cosmetic palette a fragment is drawn in."""

    AZURE = "#4D96FF"
    CYAN = "#5CE1E6"
    INDIGO = "#6C4AB6"
    LAVENDER = "#8D72E1"
    CORAL = "#FF6B6B"
    GOLD = "#FFD56F"


class Arrangement(str, Enum):
    """Geometric relation a pattern's fragments must satisfy."""

    LINEAR = "linear"
    TRIANGLE = "triangle"
    SQUARE = "square"
    ADJACENT = "adjacent"


class ActionType(str, Enum):
    """Actions that carry a Chrono-Energy cost."""

    MOVE = "move"
    ROTATE = "rotate"
    SOLVE_PATTERN_PUZZLE = "solve_pattern_puzzle"
    SKIP_PUZZLE = "skip_puzzle"


class ActionError(str, Enum):
    """Reasons a session action can be rejected.  Rejections are values, not faults."""

    NOT_PLAYING = "not_playing"
    FRAGMENT_NOT_FOUND = "fragment_not_found"
    FRAGMENT_SOLVED = "fragment_solved"
    OUT_OF_BOUNDS = "out_of_bounds"
    INVALID_ROTATION = "invalid_rotation"
    CELL_OCCUPIED = "cell_occupied"
    INSUFFICIENT_ENERGY = "insufficient_energy"


# Legal fragment orientations, in degrees.
ROTATIONS: tuple[int, ...] = (0, 90, 180, 270)
