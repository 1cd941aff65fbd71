from __future__ import annotations
import math
import random
from dataclasses import dataclass

from .config import AppConfig


@dataclass
class RotationState:
    current: float = 0.0  # radians
    target: float = 0.0


class IdleRotationAnimator:
    """
    Wanders the pivot back and forth around one axis.

    Whenever the angle has (nearly) reached its target, a new target 3-16
    degrees away in a random direction is drawn; every tick then closes a
    fixed fraction of the remaining gap, so motion eases out and never
    overshoots.

    `rng` is anything with `random()` and `uniform(a, b)`; pass a seeded
    `random.Random` for reproducible motion.
    """

    def __init__(self, cfg: AppConfig | None = None, rng=None):
        self.cfg = cfg or AppConfig()
        self.rng = rng if rng is not None else random.Random(self.cfg.seed)

    def converged(self, state: RotationState) -> bool:
        return abs(state.current - state.target) < self.cfg.rotation_tolerance

    def approach_factor(self, dt: float | None = None) -> float:
        alpha = self.cfg.rotation_approach
        if dt is None:
            return alpha
        frames = max(0.0, dt) * self.cfg.reference_fps
        return 1.0 - (1.0 - alpha) ** frames

    def tick(self, state: RotationState, dt: float | None = None) -> RotationState:
        # pick first, then always approach the (possibly new) target
        if self.converged(state):
            delta = math.radians(
                self.rng.uniform(self.cfg.rotation_min_deg, self.cfg.rotation_max_deg)
            )
            sign = 1.0 if self.rng.random() > 0.5 else -1.0
            state.target = state.current + sign * delta

        state.current += (state.target - state.current) * self.approach_factor(dt)
        return state

    def apply(self, state: RotationState, node):
        node.rotation[self.cfg.rotation_axis] = state.current

    def step(self, viewer, dt: float | None = None):
        """Advance one frame for a ViewerState; idle until a pivot exists."""
        if viewer.pivot is None or not viewer.animating:
            return
        self.tick(viewer.rotation, dt)
        self.apply(viewer.rotation, viewer.pivot)
