"""ActionResult — the typed outcome of a session action.

Rejections are ordinary values.  The engine never raises for a move the
player simply cannot make; the caller decides what feedback to show.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from chrono_engine.domain.enums import ActionError
from chrono_engine.domain.pattern import PatternSolved


class ActionResult(BaseModel):
    """Outcome of one action: accepted, or rejected with a reason."""

    accepted: bool
    error: Optional[ActionError] = None
    solved: tuple[PatternSolved, ...] = Field(
        default=(),
        description="Patterns settled as a consequence of this action",
    )

    model_config = {"frozen": True}

    @classmethod
    def ok(cls, solved: tuple[PatternSolved, ...] = ()) -> "ActionResult":
        return cls(accepted=True, solved=solved)

    @classmethod
    def rejected(cls, error: ActionError) -> "ActionResult":
        return cls(accepted=False, error=error)

    @property
    def points_awarded(self) -> int:
        return sum(event.points for event in self.solved)

    def __bool__(self) -> bool:
        return self.accepted
