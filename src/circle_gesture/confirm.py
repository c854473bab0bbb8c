from __future__ import annotations
from dataclasses import dataclass
from typing import Optional


@dataclass
class ConfirmationState:
    streak: int
    confirmed: bool
    progress: float
    fired: bool


class GestureConfirmer:
    """Turns noisy per-frame detections into a single gesture event.

    A single positive frame is only a hint. The streak climbs by one per
    positive frame (capped a little above the threshold so a short dropout
    does not lose confirmation) and falls by one per negative frame. Once
    confirmed, the gesture has to be held for ``hold_seconds`` before it
    fires. ``fired`` latches until reset().
    """

    def __init__(self, confirm_streak: int = 3, hold_seconds: float = 2.0):
        self.confirm_streak = confirm_streak
        self.hold_seconds = hold_seconds
        self.reset()

    def reset(self):
        self.streak = 0
        self.hold_start: Optional[float] = None
        self.fired = False

    def update(self, detected: bool, ts: float) -> ConfirmationState:
        if detected:
            self.streak = min(self.streak + 1, self.confirm_streak + 2)
        else:
            self.streak = max(0, self.streak - 1)
        confirmed = self.streak >= self.confirm_streak
        progress = 0.0
        if confirmed:
            if self.hold_start is None:
                self.hold_start = ts
            elapsed = ts - self.hold_start
            progress = min(1.0, elapsed / self.hold_seconds) if self.hold_seconds > 0 else 1.0
            if elapsed >= self.hold_seconds:
                self.fired = True
        else:
            self.hold_start = None
        return ConfirmationState(self.streak, confirmed, progress, self.fired)
