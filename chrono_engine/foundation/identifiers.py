"""Sequential ID generation for fragments within a session."""

from __future__ import annotations


class IdSequence:
    """Hands out increasing integer ids, starting at *start*."""

    __slots__ = ("_start", "_next")

    def __init__(self, start: int = 0) -> None:
        self._start = start
        self._next = start

    def next_id(self) -> int:
        value = self._next
        self._next += 1
        return value

    def reset(self) -> None:
        self._next = self._start
