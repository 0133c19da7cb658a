from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Sequence, Tuple


@dataclass
class TelemetryFrame:
    tick: int
    position: Tuple[float, float]
    velocity: float
    acceleration: float
    rotation: float
    crashed: bool
    reward: float
    gate_progress: Tuple[bool, ...]
    nearest_gate_distance: float
    intersections: List[Tuple[float, float]] = field(default_factory=list)
    events: List[str] = field(default_factory=list)


class TelemetryCollector:
    def __init__(self) -> None:
        self.frames: List[TelemetryFrame] = []

    def record_frame(self, frame: TelemetryFrame) -> None:
        self.frames.append(frame)

    def export(self) -> Sequence[TelemetryFrame]:
        return tuple(self.frames)

    def to_dicts(self) -> List[Dict[str, Any]]:
        return [asdict(frame) for frame in self.frames]

    def clear(self) -> None:
        self.frames.clear()
