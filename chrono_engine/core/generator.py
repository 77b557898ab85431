"""FragmentGenerator — populates the board with fresh fragments for a level.

Randomness comes from an injected random.Random so tests (and replays)
can seed it.  The module-global random source is never touched.
"""

from __future__ import annotations

import logging
import math
import random
from typing import Iterable, Optional

from chrono_engine.domain.board import Board
from chrono_engine.domain.enums import (
    ROTATIONS,
    FragmentColor,
    FragmentType,
    VisualPattern,
)
from chrono_engine.domain.fragment import TimeFragment
from chrono_engine.foundation.identifiers import IdSequence

logger = logging.getLogger(__name__)

_TYPES = list(FragmentType)
_PATTERNS = list(VisualPattern)
_COLORS = list(FragmentColor)


class FragmentGenerator:
    """Creates randomised fragments on free cells of a board.

    Args:
        rng: Random source to draw from.  Takes precedence over *seed*.
        seed: Seed for a private random.Random when no *rng* is given.
    """

    def __init__(self, rng: Optional[random.Random] = None, seed: Optional[int] = None) -> None:
        self._rng = rng if rng is not None else random.Random(seed)

    @staticmethod
    def fragment_count(level: int, board: Board) -> int:
        """How many fragments a level spawns: 3 + level, at most half the board.

        Odd boards round the half up.
        """
        return min(3 + level, math.ceil(board.cell_count / 2))

    def generate(
        self,
        level: int,
        board: Board,
        ids: IdSequence,
        occupied: Iterable[tuple[int, int]] = (),
    ) -> list[TimeFragment]:
        """Build the fragment set for *level*, avoiding *occupied* cells."""
        wanted = self.fragment_count(level, board)
        taken = set(occupied)
        free = [cell for cell in board.cells() if cell not in taken]

        if len(free) < wanted:
            logger.warning(
                "Level %d wants %d fragments but only %d cells are free",
                level,
                wanted,
                len(free),
            )
            wanted = len(free)

        cells = self._rng.sample(free, wanted)
        fragments = [self._random_fragment(ids.next_id(), x, y) for x, y in cells]
        logger.debug("Generated %d fragment(s) for level %d", len(fragments), level)
        return fragments

    def _random_fragment(self, fragment_id: int, x: int, y: int) -> TimeFragment:
        rng = self._rng
        return TimeFragment(
            id=fragment_id,
            x=x,
            y=y,
            rotation=rng.choice(ROTATIONS),
            fragment_type=rng.choice(_TYPES),
            visual_pattern=rng.choice(_PATTERNS),
            color=rng.choice(_COLORS),
        )
