"""PatternMatcher — decides whether fragments on the board complete a pattern.

Matching a candidate set against one pattern runs four checks in order:

    1. size       — candidate count equals the pattern's type count
    2. types      — the type multisets are identical
    3. geometry   — the pattern's arrangement predicate holds
    4. rotations  — each required type, in catalog order, is greedily paired
                    with the first unused candidate of that type, and that
                    candidate's rotation must equal the aligned requirement

Search (find_match) walks the catalog in order and, per pattern, every
same-size combination of the unsolved pool in pool order.  The first hit
wins, so results are fully deterministic.

The search is C(n, k) per pattern.  Pools are bounded by the generator
(min(3 + level, cells / 2)); do not point this at an unbounded pool.
"""

from __future__ import annotations

import logging
from collections import Counter
from itertools import combinations
from typing import Iterable, Iterator, Optional, Sequence

from chrono_engine.core.arrangement import check_arrangement
from chrono_engine.core.catalog import PATTERN_CATALOG
from chrono_engine.domain.fragment import TimeFragment
from chrono_engine.domain.pattern import PatternDefinition, PatternMatch

logger = logging.getLogger(__name__)

# The smallest pattern in any sensible catalog pairs two fragments.
MIN_POOL_SIZE = 2


class PatternMatcher:
    """Stateless matcher over an ordered pattern catalog."""

    def __init__(self, catalog: Sequence[PatternDefinition] | None = None) -> None:
        self._catalog: tuple[PatternDefinition, ...] = tuple(
            catalog if catalog is not None else PATTERN_CATALOG
        )

    @property
    def catalog(self) -> tuple[PatternDefinition, ...]:
        return self._catalog

    # ── Single-pattern test ──────────────────────────────────────────────

    def matches(self, candidates: Sequence[TimeFragment], pattern: PatternDefinition) -> bool:
        if len(candidates) != pattern.size:
            return False

        if Counter(f.fragment_type for f in candidates) != Counter(pattern.required_types):
            return False

        if not check_arrangement(pattern.arrangement, candidates):
            return False

        if pattern.required_rotations is None:
            return True

        used: set[int] = set()
        for required_type, required_rotation in zip(
            pattern.required_types, pattern.required_rotations
        ):
            chosen = next(
                (
                    i
                    for i, f in enumerate(candidates)
                    if i not in used and f.fragment_type == required_type
                ),
                None,
            )
            if chosen is None:
                return False
            used.add(chosen)
            if candidates[chosen].rotation != required_rotation:
                return False

        return True

    # ── Search ───────────────────────────────────────────────────────────

    def find_match(self, unsolved: Iterable[TimeFragment]) -> Optional[PatternMatch]:
        """Return the first (pattern, subset) that matches, or None."""
        return next(self._iter_matches(unsolved), None)

    def find_all_matches(self, unsolved: Iterable[TimeFragment]) -> list[PatternMatch]:
        """Every matching (pattern, subset) pair, in search order.

        Subsets may overlap; this is a hint query, not a settlement plan.
        """
        return list(self._iter_matches(unsolved))

    def _iter_matches(self, unsolved: Iterable[TimeFragment]) -> Iterator[PatternMatch]:
        pool = [f for f in unsolved if not f.solved]
        if len(pool) < MIN_POOL_SIZE:
            return
        for pattern in self._catalog:
            if len(pool) < pattern.size:
                continue
            for combo in combinations(pool, pattern.size):
                if self.matches(combo, pattern):
                    logger.debug("Pattern '%s' matched fragments %s", pattern.name, [f.id for f in combo])
                    yield PatternMatch(pattern, combo)
