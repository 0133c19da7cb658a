from __future__ import annotations

import math
from typing import List, Tuple

from .course import TrackGeometry
from .data_models import Line, NearestGate
from .geometry import FAR_DISTANCE, distance, intersect, midpoint

STEP_PENALTY = -0.1
GATE_BASE_REWARD = 100.0
GATE_STEP_REWARD = 10.0


class RewardGateTracker:
    """Sequential checkpoint progress and the per-tick reward derived from it."""

    def __init__(self, track: TrackGeometry) -> None:
        self.track = track
        self._progress: List[bool] = [False] * len(track.gate_data)

    def reset(self) -> None:
        self._progress = [False] * len(self.track.gate_data)

    @property
    def progress(self) -> Tuple[bool, ...]:
        return tuple(self._progress)

    @property
    def crossed_count(self) -> int:
        return sum(1 for crossed in self._progress if crossed)

    @property
    def is_complete(self) -> bool:
        return bool(self._progress) and all(self._progress)

    def nearest_gate(self, skeleton: Line) -> NearestGate:
        """Closest gate by its start point; the angle is a heading hint only."""
        front = skeleton[0]
        best = FAR_DISTANCE
        angle = 0.0

        for gate in self.track.gates:
            gap = distance(front, gate[0])
            if gap < best:
                best = gap
                mx, my = midpoint(gate)
                angle = math.atan2(front[1] - my, front[0] - mx)
        return NearestGate(distance=best, angle=angle)

    def reward(self, skeleton: Line) -> float:
        reward = STEP_PENALTY

        # Every gate is checked; when several are crossed at once the last one sets the reward.
        for index, gate in enumerate(self.track.gates):
            if index > 0 and not self._progress[index - 1]:
                continue
            if self._progress[index]:
                continue
            if intersect(skeleton, gate) is None:
                continue

            self._progress[index] = True
            reward = GATE_BASE_REWARD + GATE_STEP_REWARD * index
        return reward
