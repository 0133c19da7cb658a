from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

from racer_sim.config import BALANCE_CONFIG

from .course import TrackGeometry
from .data_models import ControlInput, Observation, TrackLayout, VehicleSpec
from .gates import RewardGateTracker
from .telemetry import TelemetryCollector, TelemetryFrame
from .vehicle import Vehicle

DEFAULT_OUTPUT_WIDTH = 1000.0
DEFAULT_ASPECT = 0.5


def _display_config() -> Dict[str, Any]:
    if not isinstance(BALANCE_CONFIG, dict):
        return {}
    config = BALANCE_CONFIG.get("display")
    if not isinstance(config, dict):
        return {}
    return config


def default_output_size() -> Tuple[float, float]:
    config = _display_config()
    width = float(config.get("output_width", DEFAULT_OUTPUT_WIDTH))
    aspect = float(config.get("aspect", DEFAULT_ASPECT))
    return (width, width * aspect)


class SimulationContext:
    """Owns the vehicle, track and gate progress for one run and drives the tick."""

    def __init__(
        self,
        layout: TrackLayout,
        spec: Optional[VehicleSpec] = None,
        output_size: Optional[Tuple[float, float]] = None,
        telemetry: Optional[TelemetryCollector] = None,
    ) -> None:
        if not layout.walls:
            raise ValueError("Track layout must provide at least one wall.")

        self.layout = layout
        self.track = TrackGeometry.from_layout(layout)
        self.gates = RewardGateTracker(self.track)
        self.vehicle = Vehicle(layout.start_position, spec)
        self.telemetry = telemetry
        self.tick_index = 0
        self.output_size: Tuple[float, float] = (1.0, 1.0)
        self.resize(*(output_size or default_output_size()))

    def resize(self, width: float, height: float) -> None:
        self.output_size = (float(width), float(height))
        self.track.rescale(width, height)
        self.vehicle.resize(self.output_size)

    def reset(self) -> None:
        self.vehicle.reset()
        self.gates.reset()

    def step(self, control: ControlInput) -> Observation:
        """Kinematics, then sensors against walls, then reward against gates."""
        self.vehicle.update(control)
        self.vehicle.sense(self.track.walls)
        reward = self.gates.reward(self.vehicle.skeleton)

        observation = self.observe(reward)
        self._record(observation)
        self.tick_index += 1
        return observation

    def observe(self, reward: float = 0.0) -> Observation:
        vehicle = self.vehicle
        pose = vehicle.pose
        return Observation(
            intersections=tuple(vehicle.intersections),
            rays=tuple(vehicle.rays),
            skeleton=vehicle.skeleton,
            position=pose.position,
            velocity=pose.velocity,
            rotation=pose.rotation,
            crashed=vehicle.crashed,
            reward=reward,
            nearest_gate=self.gates.nearest_gate(vehicle.skeleton),
            gate_progress=self.gates.progress,
        )

    def _record(self, observation: Observation) -> None:
        if self.telemetry is None:
            return
        pose = self.vehicle.pose
        self.telemetry.record_frame(
            TelemetryFrame(
                tick=self.tick_index,
                position=pose.position,
                velocity=pose.velocity,
                acceleration=pose.acceleration,
                rotation=pose.rotation,
                crashed=observation.crashed,
                reward=observation.reward,
                gate_progress=tuple(observation.gate_progress),
                nearest_gate_distance=observation.nearest_gate.distance,
                intersections=list(observation.intersections),
            )
        )
