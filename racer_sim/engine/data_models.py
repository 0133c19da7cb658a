from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

import numpy as np

from racer_sim.config import BALANCE_CONFIG

Point = Tuple[float, float]
Line = Tuple[Point, Point]

SENSOR_COUNT = 8
SENTINEL_POINT: Point = (0.0, 0.0)


def _vehicle_config() -> Dict[str, Any]:
    if not isinstance(BALANCE_CONFIG, dict):
        return {}
    config = BALANCE_CONFIG.get("vehicle")
    if not isinstance(config, dict):
        return {}
    return config


@dataclass(frozen=True)
class VehicleSpec:
    """Tunable vehicle constants.

    ``max_sensor_length``, ``collision_distance``, ``width`` and ``height`` are
    fractions of the output width and are only converted to output units by the
    sensor array and body frame.
    """

    jerk: float = 0.001
    friction: float = 0.97
    turning_rate: float = 500.0
    max_sensor_length: float = 0.1
    max_forward_speed: float = 0.008
    max_reverse_speed: float = -0.003
    min_steer_speed: float = 0.0005
    collision_distance: float = 0.003
    width: float = 0.01
    height: float = 0.02

    def __post_init__(self) -> None:
        if self.max_reverse_speed > 0.0 or self.max_forward_speed < 0.0:
            raise ValueError("Speed limits must bracket zero")
        if not 0.0 < self.friction <= 1.0:
            raise ValueError(f"Friction must be within (0, 1], got {self.friction}")
        if self.width <= 0.0 or self.height <= 0.0:
            raise ValueError("Vehicle dimensions must be positive")

    @classmethod
    def from_config(cls, overrides: Optional[Dict[str, float]] = None) -> "VehicleSpec":
        config = _vehicle_config()
        values: Dict[str, float] = {}
        for name in cls.__dataclass_fields__:
            if name in config:
                values[name] = float(config[name])
        if overrides:
            values.update({key: float(value) for key, value in overrides.items()})
        return cls(**values)


@dataclass
class VehiclePose:
    position: Point = (0.0, 0.0)
    velocity: float = 0.0
    acceleration: float = 0.0
    rotation: float = 0.0


@dataclass(frozen=True)
class ControlInput:
    turn: float = 0.0
    throttle: float = 0.0

    @classmethod
    def clamped(cls, turn: float, throttle: float) -> "ControlInput":
        return cls(turn=max(-1.0, min(1.0, float(turn))), throttle=max(-1.0, min(1.0, float(throttle))))


@dataclass
class SensorReading:
    """Rays in output space plus their normalized nearest hits."""

    rays: List[Line]
    intersections: List[Point]

    @classmethod
    def empty(cls) -> "SensorReading":
        return cls(
            rays=[(SENTINEL_POINT, SENTINEL_POINT) for _ in range(SENSOR_COUNT)],
            intersections=[SENTINEL_POINT for _ in range(SENSOR_COUNT)],
        )


@dataclass(frozen=True)
class NearestGate:
    distance: float
    angle: float


@dataclass(frozen=True)
class TrackLayout:
    track_id: str
    name: str
    walls: Sequence[Line]
    gates: Sequence[Line]
    start_position: Point = (0.5, 0.5)


@dataclass(frozen=True)
class Observation:
    """Everything a policy or renderer reads after a tick."""

    intersections: Sequence[Point]
    rays: Sequence[Line]
    skeleton: Line
    position: Point
    velocity: float
    rotation: float
    crashed: bool
    reward: float
    nearest_gate: NearestGate
    gate_progress: Sequence[bool] = field(default_factory=tuple)

    def features(self) -> np.ndarray:
        flat = [coord for point in self.intersections for coord in point]
        flat.extend(
            [
                self.nearest_gate.distance,
                self.position[0],
                self.position[1],
                self.velocity,
                self.rotation,
                self.nearest_gate.angle,
            ]
        )
        return np.asarray(flat, dtype=np.float64)
