"""PuzzleSession — the single owner and mutator of one game's state.

Design notes:
    - One session object holds the board, the fragment pool, the resource
      state and the score.  There is no module-level game state.
    - Every mutating action ends with an explicit settle step that runs
      the matcher over the full unsolved pool, so a newly completed
      pattern may include fragments that were placed long ago.
    - Rejected actions come back as ActionResult values.  Only caller
      contract violations (unknown action keys, negative elapsed time)
      raise.
    - The session is synchronous and not locked.  Hosts with more than
      one caller wrap it in a SessionRunner.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from chrono_engine.core.energy import ActionKey, EnergyModel
from chrono_engine.core.generator import FragmentGenerator
from chrono_engine.core.matcher import PatternMatcher
from chrono_engine.domain.board import Board
from chrono_engine.domain.enums import ActionError, ActionType
from chrono_engine.domain.fragment import FragmentSnapshot, TimeFragment
from chrono_engine.domain.outcome import ActionResult
from chrono_engine.domain.pattern import PatternSolved
from chrono_engine.domain.snapshot import SessionSnapshot
from chrono_engine.foundation.identifiers import IdSequence

logger = logging.getLogger(__name__)

PatternListener = Callable[[PatternSolved], None]


class PuzzleSession:
    """Game state plus the actions that change it.

    Args:
        board: Grid bounds.
        energy_model: Capacity / regen / cost calculator.
        matcher: Pattern matcher over the catalog.
        generator: Fragment generator (inject a seeded one for tests).
        initial_energy: Energy restored on construction and reset.
        initial_level: Level restored on construction and reset.
        upgrades: Upgrade count fed into every energy calculation.
        strict_contracts: Raise on caller contract violations instead of
            clamping and logging.
    """

    def __init__(
        self,
        board: Board | None = None,
        energy_model: EnergyModel | None = None,
        matcher: PatternMatcher | None = None,
        generator: FragmentGenerator | None = None,
        initial_energy: float = 50.0,
        initial_level: int = 1,
        upgrades: int = 0,
        strict_contracts: bool = True,
    ) -> None:
        if initial_level < 1:
            raise ValueError("initial_level must be at least 1")
        if initial_energy < 0:
            raise ValueError("initial_energy must be non-negative")
        if upgrades < 0:
            raise ValueError("upgrades must be non-negative")

        self._board = board or Board()
        self._energy_model = energy_model or EnergyModel()
        self._matcher = matcher or PatternMatcher()
        self._generator = generator or FragmentGenerator()
        self._initial_energy = initial_energy
        self._initial_level = initial_level
        self._upgrades = upgrades
        self._strict = strict_contracts

        self._ids = IdSequence()
        self._fragments: dict[int, TimeFragment] = {}
        self._listeners: list[PatternListener] = []
        self._restore_initial_state()

    # ── Lifecycle ────────────────────────────────────────────────────────

    def start(self) -> ActionResult:
        """Begin or resume play.  An empty board is populated first."""
        if self._is_playing:
            return ActionResult.ok()
        self._is_playing = True
        logger.info("Session started at level %d", self._level)
        if not self._fragments:
            self._spawn_for_level(self._level)
            return ActionResult.ok(self._settle())
        return ActionResult.ok()

    def pause(self) -> None:
        if self._is_playing:
            self._is_playing = False
            logger.info("Session paused")

    def reset(self) -> None:
        """Drop every fragment and return to the initial configuration."""
        self._fragments.clear()
        self._ids.reset()
        self._restore_initial_state()
        logger.info("Session reset")

    def advance_level(self) -> ActionResult:
        """Move to the next level and add its fragments to the board."""
        if not self._is_playing:
            return ActionResult.rejected(ActionError.NOT_PLAYING)
        self._level += 1
        self._energy = self._energy_model.clamp(self._energy, self._level, self._upgrades)
        logger.info("Advanced to level %d", self._level)
        self._spawn_for_level(self._level)
        return ActionResult.ok(self._settle())

    # ── Player actions ───────────────────────────────────────────────────

    def move(self, fragment_id: int, x: int, y: int) -> ActionResult:
        """Place a fragment on cell (x, y), paying the move cost."""
        fragment, error = self._actionable(fragment_id)
        if error is not None:
            return ActionResult.rejected(error)
        assert fragment is not None

        if not self._board.contains(x, y):
            return ActionResult.rejected(ActionError.OUT_OF_BOUNDS)
        if self._occupied_by_other(fragment.id, x, y):
            return ActionResult.rejected(ActionError.CELL_OCCUPIED)
        if not self.can_afford(ActionType.MOVE):
            return ActionResult.rejected(ActionError.INSUFFICIENT_ENERGY)

        fragment.move_to(x, y)
        self._pay(ActionType.MOVE)
        logger.debug("Moved fragment %d to (%d, %d)", fragment.id, x, y)
        return ActionResult.ok(self._settle())

    def nudge(self, fragment_id: int, dx: int, dy: int) -> ActionResult:
        """Shift a fragment by (dx, dy), stopping at the board edge."""
        fragment, error = self._actionable(fragment_id)
        if error is not None:
            return ActionResult.rejected(error)
        assert fragment is not None
        x, y = self._board.clamp(fragment.x + dx, fragment.y + dy)
        return self.move(fragment_id, x, y)

    def rotate(self, fragment_id: int, delta: int) -> ActionResult:
        """Turn a fragment by *delta* degrees (a multiple of 90)."""
        fragment, error = self._actionable(fragment_id)
        if error is not None:
            return ActionResult.rejected(error)
        assert fragment is not None

        if delta % 90 != 0:
            return ActionResult.rejected(ActionError.INVALID_ROTATION)
        if not self.can_afford(ActionType.ROTATE):
            return ActionResult.rejected(ActionError.INSUFFICIENT_ENERGY)

        fragment.rotate_by(delta)
        self._pay(ActionType.ROTATE)
        logger.debug("Rotated fragment %d to %d°", fragment.id, fragment.rotation)
        return ActionResult.ok(self._settle())

    # ── Passive regeneration ─────────────────────────────────────────────

    def tick(self, elapsed_seconds: float) -> float:
        """Credit regeneration for *elapsed_seconds* of play.

        Returns the energy actually gained (0 while paused or at capacity).

        Raises:
            ValueError: If *elapsed_seconds* is negative and contracts are strict.
        """
        if elapsed_seconds < 0:
            if self._strict:
                raise ValueError(f"elapsed_seconds must be non-negative, got {elapsed_seconds}")
            logger.warning("Negative elapsed time %.4fs clamped to 0", elapsed_seconds)
            elapsed_seconds = 0.0
        if not self._is_playing:
            return 0.0

        before = self._energy
        self._energy = self._energy_model.accrue(
            before, elapsed_seconds, self._level, self._upgrades
        )
        return self._energy - before

    # ── Events ───────────────────────────────────────────────────────────

    def subscribe(self, listener: PatternListener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: PatternListener) -> None:
        self._listeners.remove(listener)

    # ── Queries ──────────────────────────────────────────────────────────

    @property
    def board(self) -> Board:
        return self._board

    @property
    def energy(self) -> float:
        return self._energy

    @property
    def capacity(self) -> float:
        return self._energy_model.capacity(self._level, self._upgrades)

    @property
    def regen_rate(self) -> float:
        return self._energy_model.regen_rate(self._level, self._upgrades)

    @property
    def level(self) -> int:
        return self._level

    @property
    def upgrades(self) -> int:
        return self._upgrades

    @property
    def score(self) -> int:
        return self._score

    @property
    def puzzles_solved(self) -> int:
        return self._puzzles_solved

    @property
    def is_playing(self) -> bool:
        return self._is_playing

    def cost_of(self, action: ActionKey) -> int:
        return self._energy_model.action_cost(action, self._level, self._upgrades)

    def can_afford(self, action: ActionKey) -> bool:
        return self._energy_model.has_enough(self._energy, action, self._level, self._upgrades)

    def fragment(self, fragment_id: int) -> Optional[FragmentSnapshot]:
        fragment = self._fragments.get(fragment_id)
        return fragment.snapshot() if fragment is not None else None

    def fragments(self) -> list[FragmentSnapshot]:
        return [f.snapshot() for f in self._fragments.values()]

    def snapshot(self) -> SessionSnapshot:
        model = self._energy_model
        return SessionSnapshot(
            board_width=self._board.width,
            board_height=self._board.height,
            fragments=self.fragments(),
            energy=self._energy,
            capacity=self.capacity,
            regen_rate=self.regen_rate,
            energy_fraction=model.energy_fraction(self._energy, self._level, self._upgrades),
            low_energy=model.is_low(self._energy, self._level, self._upgrades),
            level=self._level,
            score=self._score,
            puzzles_solved=self._puzzles_solved,
            is_playing=self._is_playing,
        )

    # ── Internals ────────────────────────────────────────────────────────

    def _restore_initial_state(self) -> None:
        self._level = self._initial_level
        self._energy = self._energy_model.clamp(
            self._initial_energy, self._initial_level, self._upgrades
        )
        self._score = 0
        self._puzzles_solved = 0
        self._is_playing = False

    def _actionable(self, fragment_id: int) -> tuple[Optional[TimeFragment], Optional[ActionError]]:
        """Shared preconditions for player actions on a fragment."""
        if not self._is_playing:
            return None, ActionError.NOT_PLAYING
        fragment = self._fragments.get(fragment_id)
        if fragment is None:
            return None, ActionError.FRAGMENT_NOT_FOUND
        if fragment.solved:
            return None, ActionError.FRAGMENT_SOLVED
        return fragment, None

    def _occupied_by_other(self, fragment_id: int, x: int, y: int) -> bool:
        return any(
            f.id != fragment_id and not f.solved and f.occupies(x, y)
            for f in self._fragments.values()
        )

    def _pay(self, action: ActionType) -> None:
        self._energy = self._energy_model.debit(
            self._energy, action, self._level, self._upgrades
        )

    def _unsolved(self) -> list[TimeFragment]:
        return [f for f in self._fragments.values() if not f.solved]

    def _spawn_for_level(self, level: int) -> None:
        occupied = [f.position for f in self._fragments.values()]
        for fragment in self._generator.generate(level, self._board, self._ids, occupied):
            self._fragments[fragment.id] = fragment

    def _settle(self) -> tuple[PatternSolved, ...]:
        """Lock every pattern the unsolved pool completes, first match first."""
        events: list[PatternSolved] = []
        while True:
            match = self._matcher.find_match(self._unsolved())
            if match is None:
                break
            for fragment in match.fragments:
                fragment.lock()
            self._score += match.pattern.points
            self._puzzles_solved += 1
            event = PatternSolved(
                name=match.pattern.name,
                points=match.pattern.points,
                fragment_ids=tuple(match.fragment_ids),
            )
            logger.info("%s (fragments %s)", event.message, list(event.fragment_ids))
            events.append(event)

        # Listeners run only once the board is fully settled
        for event in events:
            self._notify(event)
        return tuple(events)

    def _notify(self, event: PatternSolved) -> None:
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception as exc:
                logger.error("Pattern listener %r failed: %s", listener, exc, exc_info=True)

    # ── Dunder ───────────────────────────────────────────────────────────

    def __repr__(self) -> str:
        return (
            f"PuzzleSession(level={self._level}, "
            f"energy={self._energy:.2f}/{self.capacity:.0f}, "
            f"score={self._score}, "
            f"fragments={len(self._fragments)}, "
            f"playing={self._is_playing})"
        )
