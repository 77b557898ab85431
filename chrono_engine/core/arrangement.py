"""Arrangement classifiers — pure geometric predicates over fragments.

Each predicate takes the candidate fragments of one pattern test and
answers whether their positions form the named shape.  Nothing else about
the fragments (type, rotation, solved flag) is looked at here.
"""

from __future__ import annotations

from typing import Callable, Protocol, Sequence

from chrono_engine.domain.enums import Arrangement


class Positioned(Protocol):
    x: int
    y: int


ArrangementCheck = Callable[[Sequence[Positioned]], bool]


def _consecutive(values: list[int]) -> bool:
    ordered = sorted(values)
    return all(b == a + 1 for a, b in zip(ordered, ordered[1:]))


def is_linear(fragments: Sequence[Positioned]) -> bool:
    """All on one row or column, with no gaps and no repeats."""
    if not fragments:
        return False
    first = fragments[0]
    if all(f.x == first.x for f in fragments):
        return _consecutive([f.y for f in fragments])
    if all(f.y == first.y for f in fragments):
        return _consecutive([f.x for f in fragments])
    return False


def is_triangle(fragments: Sequence[Positioned]) -> bool:
    """Three distinct positions that are not a straight run.

    Deliberately permissive: any three points failing the linear test
    qualify, including collinear points with gaps.
    """
    if len(fragments) != 3:
        return False
    if len({(f.x, f.y) for f in fragments}) != 3:
        return False
    return not is_linear(fragments)


def is_square(fragments: Sequence[Positioned]) -> bool:
    """Four positions sitting exactly on the corners of their bounding box."""
    if len(fragments) != 4:
        return False
    xs = [f.x for f in fragments]
    ys = [f.y for f in fragments]
    min_x, max_x, min_y, max_y = min(xs), max(xs), min(ys), max(ys)
    corners = {(min_x, min_y), (max_x, min_y), (min_x, max_y), (max_x, max_y)}
    positions = [(f.x, f.y) for f in fragments]
    # A degenerate box collapses corners, so duplicates must fail explicitly
    return len(set(positions)) == 4 and set(positions) == corners


def _touching(a: Positioned, b: Positioned) -> bool:
    dx = abs(a.x - b.x)
    dy = abs(a.y - b.y)
    return (dx == 1 and dy == 0) or (dx == 0 and dy == 1)


def is_adjacent(fragments: Sequence[Positioned]) -> bool:
    """Every fragment shares an edge with at least one other (4-connectivity).

    The fragments need not form one connected component.
    """
    if len(fragments) < 2:
        return False
    degree = [0] * len(fragments)
    for i in range(len(fragments)):
        for j in range(i + 1, len(fragments)):
            if _touching(fragments[i], fragments[j]):
                degree[i] += 1
                degree[j] += 1
    return all(d >= 1 for d in degree)


ARRANGEMENT_CHECKS: dict[Arrangement, ArrangementCheck] = {
    Arrangement.LINEAR: is_linear,
    Arrangement.TRIANGLE: is_triangle,
    Arrangement.SQUARE: is_square,
    Arrangement.ADJACENT: is_adjacent,
}


def check_arrangement(arrangement: Arrangement, fragments: Sequence[Positioned]) -> bool:
    """Dispatch to the predicate for *arrangement*."""
    return ARRANGEMENT_CHECKS[Arrangement(arrangement)](fragments)
