"""EnergyModel — Chrono-Energy capacity, regeneration and action costs.

Design principles:
    1. Pure functions of (current energy, level, upgrades).  No state.
    2. Every result is clamped: never below 0, never above capacity.
    3. No discretisation.  Any non-negative gain is applied exactly;
       batching tiny gains is the driver's business, not the model's.

Formulas (L = level, U = upgrades):
    capacity(L, U)    = base_capacity + 10·L + 20·U
    regen_rate(L, U)  = base_regen + 0.1·L + 0.5·U            (units / second)
    cost(a, L, U)     = max(1, floor(base_cost(a) · (1 − min(0.3, 0.02·L) − 0.05·U)))
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Optional, Union

from chrono_engine.domain.enums import ActionType

DEFAULT_ACTION_COSTS: dict[ActionType, int] = {
    ActionType.MOVE: 2,
    ActionType.ROTATE: 1,
    ActionType.SOLVE_PATTERN_PUZZLE: 5,
    ActionType.SKIP_PUZZLE: 25,
}


class UnknownActionError(ValueError):
    """Raised when a cost lookup is made for an action the model does not know."""

    def __init__(self, action: object) -> None:
        self.action = action
        super().__init__(f"Unknown action type: {action!r}")


@dataclass(frozen=True)
class EnergyConfig:
    """Tunable constants for the energy model."""

    base_capacity: float = 100.0
    base_regen_rate: float = 1.0

    # Per-level / per-upgrade growth
    capacity_per_level: float = 10.0
    capacity_per_upgrade: float = 20.0
    regen_per_level: float = 0.1
    regen_per_upgrade: float = 0.5

    # Cost discounts
    discount_per_level: float = 0.02
    max_level_discount: float = 0.3
    discount_per_upgrade: float = 0.05
    min_action_cost: int = 1

    # Below this fraction of capacity the HUD flags low energy
    low_energy_threshold: float = 0.2

    action_costs: dict[ActionType, int] = field(
        default_factory=lambda: dict(DEFAULT_ACTION_COSTS)
    )


ActionKey = Union[ActionType, str]


class EnergyModel:
    """Stateless calculator for everything Chrono-Energy.

    All methods accept the player's level and upgrade count explicitly so
    the model can be shared by any number of sessions.
    """

    def __init__(self, config: EnergyConfig | None = None) -> None:
        self._config = config or EnergyConfig()

    @property
    def config(self) -> EnergyConfig:
        return self._config

    # ── Scaling ──────────────────────────────────────────────────────────

    def capacity(self, level: int, upgrades: int = 0) -> float:
        c = self._config
        return c.base_capacity + level * c.capacity_per_level + upgrades * c.capacity_per_upgrade

    def regen_rate(self, level: int, upgrades: int = 0) -> float:
        c = self._config
        return c.base_regen_rate + level * c.regen_per_level + upgrades * c.regen_per_upgrade

    def action_cost(self, action: ActionKey, level: int = 1, upgrades: int = 0) -> int:
        """Energy an action costs at the given level.  Never below the floor."""
        c = self._config
        base = self._base_cost(action)
        level_discount = min(c.max_level_discount, level * c.discount_per_level)
        upgrade_discount = upgrades * c.discount_per_upgrade
        discounted = base * (1 - level_discount - upgrade_discount)
        return max(c.min_action_cost, math.floor(discounted))

    # ── Balance operations ───────────────────────────────────────────────

    def has_enough(
        self,
        current: float,
        action: ActionKey,
        level: int = 1,
        upgrades: int = 0,
    ) -> bool:
        return current >= self.action_cost(action, level, upgrades)

    def debit(
        self,
        current: float,
        action: ActionKey,
        level: int = 1,
        upgrades: int = 0,
    ) -> float:
        """Energy left after paying for *action*.  Never negative."""
        return max(0.0, current - self.action_cost(action, level, upgrades))

    def credit(
        self,
        current: float,
        amount: float,
        level: int = 1,
        upgrades: int = 0,
        capacity_override: Optional[float] = None,
    ) -> float:
        """Energy after adding *amount*.  Never above capacity."""
        cap = (
            capacity_override
            if capacity_override is not None
            else self.capacity(level, upgrades)
        )
        return max(0.0, min(cap, current + amount))

    def accrue(
        self,
        current: float,
        elapsed_seconds: float,
        level: int = 1,
        upgrades: int = 0,
        capacity_override: Optional[float] = None,
    ) -> float:
        """Apply passive regeneration for *elapsed_seconds* of play.

        Raises:
            ValueError: If *elapsed_seconds* is negative.
        """
        if elapsed_seconds < 0:
            raise ValueError(f"elapsed_seconds must be non-negative, got {elapsed_seconds}")
        gained = self.regen_rate(level, upgrades) * elapsed_seconds
        return self.credit(current, gained, level, upgrades, capacity_override)

    def clamp(self, current: float, level: int, upgrades: int = 0) -> float:
        """Force *current* into [0, capacity]."""
        return max(0.0, min(self.capacity(level, upgrades), current))

    # ── HUD helpers ──────────────────────────────────────────────────────

    def energy_fraction(self, current: float, level: int, upgrades: int = 0) -> float:
        cap = self.capacity(level, upgrades)
        if cap <= 0:
            return 0.0
        return max(0.0, min(current / cap, 1.0))

    def is_low(self, current: float, level: int, upgrades: int = 0) -> bool:
        return self.energy_fraction(current, level, upgrades) < self._config.low_energy_threshold

    # ── Helpers ──────────────────────────────────────────────────────────

    def _base_cost(self, action: ActionKey) -> int:
        try:
            key = ActionType(action)
        except ValueError:
            raise UnknownActionError(action) from None
        try:
            return self._config.action_costs[key]
        except KeyError:
            raise UnknownActionError(action) from None
