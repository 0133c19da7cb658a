from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .data_models import ControlInput, Line, Point, VehiclePose, VehicleSpec
from .geometry import rotate


@dataclass(frozen=True)
class BodyFrame:
    """Axis-aligned body box in output units, before heading is applied."""

    x: float
    y: float
    width: float
    height: float

    @property
    def pivot(self) -> Point:
        return (self.x + self.width / 2, self.y + self.height / 4)


class VehicleKinematics:
    """Integrates the simplified jerk/friction/turn-rate model one tick at a time."""

    def __init__(self, position: Point, spec: Optional[VehicleSpec] = None) -> None:
        self.spec = spec or VehicleSpec.from_config()
        self._initial_position: Point = (float(position[0]), float(position[1]))
        self.pose = VehiclePose(position=self._initial_position)

    def reset(self) -> None:
        self.pose = VehiclePose(position=self._initial_position)

    def update(self, control: ControlInput) -> VehiclePose:
        spec = self.spec
        pose = self.pose

        pose.acceleration = spec.jerk * control.throttle if control.throttle != 0 else 0.0
        velocity = (pose.velocity + pose.acceleration) * spec.friction
        pose.velocity = max(spec.max_reverse_speed, min(spec.max_forward_speed, velocity))

        # No steering while (nearly) stationary.
        if control.turn != 0 and abs(pose.velocity) > spec.min_steer_speed:
            pose.rotation += control.turn * spec.turning_rate * abs(pose.velocity)

        heading = math.radians(pose.rotation)
        x, y = pose.position
        pose.position = (
            x + pose.velocity * math.sin(heading) / 2,
            y - pose.velocity * math.cos(heading),
        )
        return pose

    # ------------------------------------------------------------------ #
    # Output-space helpers

    def body_frame(self, output_size: Tuple[float, float]) -> BodyFrame:
        out_w, out_h = output_size
        x, y = self.pose.position
        return BodyFrame(
            x=x * out_w,
            y=y * out_h,
            width=self.spec.width * out_w,
            height=self.spec.height * out_w,
        )

    def rotate(self, points: Sequence[Point], pivot: Point, offset: float = 0.0) -> List[Point]:
        """Rotates points by the current heading plus a fixed offset."""
        return rotate(points, pivot, self.pose.rotation + offset)

    def skeleton(self, output_size: Tuple[float, float]) -> Line:
        frame = self.body_frame(output_size)
        front = (frame.x + frame.width / 2, frame.y)
        rear = (frame.x + frame.width / 2, frame.y + frame.height)
        rotated_front, rotated_rear = self.rotate([front, rear], frame.pivot)
        return (rotated_front, rotated_rear)
