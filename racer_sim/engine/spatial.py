from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .data_models import SENSOR_COUNT, SENTINEL_POINT, Line, Point, SensorReading, VehicleSpec
from .geometry import distance, intersect
from .physics import BodyFrame, VehicleKinematics


@dataclass(frozen=True)
class RaySpec:
    """One sensor ray.

    ``anchor`` is a fraction of the body box (0, 0 = front-left corner).
    Edge rays carry a fixed ``direction`` and are rotated rigidly with the body
    about its pivot. Corner rays point forward and are swung about their own
    rotated start by heading plus ``angle_deg``.
    """

    name: str
    anchor: Tuple[float, float]
    direction: Optional[Tuple[float, float]] = None
    angle_deg: float = 0.0


RAY_LAYOUT: Tuple[RaySpec, ...] = (
    RaySpec("front_center", (0.5, 0.0), direction=(0.0, -1.0)),
    RaySpec("front_right", (1.0, 0.0), angle_deg=45.0),
    RaySpec("right_center", (1.0, 0.5), direction=(1.0, 0.0)),
    RaySpec("rear_right", (1.0, 1.0), angle_deg=135.0),
    RaySpec("rear_center", (0.5, 1.0), direction=(0.0, 1.0)),
    RaySpec("rear_left", (0.0, 1.0), angle_deg=-135.0),
    RaySpec("left_center", (0.0, 0.5), direction=(-1.0, 0.0)),
    RaySpec("front_left", (0.0, 0.0), angle_deg=-45.0),
)


class SensorArray:
    """Casts the fixed ring of distance rays and resolves their nearest wall hits."""

    def __init__(self, spec: VehicleSpec) -> None:
        self.spec = spec
        self.reading = SensorReading.empty()

    def reset(self) -> None:
        self.reading = SensorReading.empty()

    @property
    def rays(self) -> List[Line]:
        return self.reading.rays

    @property
    def intersections(self) -> List[Point]:
        return self.reading.intersections

    # ------------------------------------------------------------------ #
    # Layout

    def cast(self, kinematics: VehicleKinematics, output_size: Tuple[float, float]) -> List[Line]:
        frame = kinematics.body_frame(output_size)
        length = self.spec.max_sensor_length * output_size[0]
        rays = [self._ray(spec, frame, kinematics, length) for spec in RAY_LAYOUT]
        self.reading = SensorReading(rays=rays, intersections=[SENTINEL_POINT for _ in range(SENSOR_COUNT)])
        return rays

    @staticmethod
    def _ray(spec: RaySpec, frame: BodyFrame, kinematics: VehicleKinematics, length: float) -> Line:
        pivot = frame.pivot
        anchor = (
            frame.x + spec.anchor[0] * frame.width,
            frame.y + spec.anchor[1] * frame.height,
        )
        if spec.direction is not None:
            end = (anchor[0] + spec.direction[0] * length, anchor[1] + spec.direction[1] * length)
            start, end = kinematics.rotate([anchor, end], pivot)
            return (start, end)

        start = kinematics.rotate([anchor], pivot)[0]
        end = kinematics.rotate([(start[0], start[1] - length)], start, spec.angle_deg)[0]
        return (start, end)

    # ------------------------------------------------------------------ #
    # Resolution

    def resolve(self, walls: Sequence[Line], output_size: Tuple[float, float]) -> bool:
        """Stores the nearest hit per ray and reports whether any hit is a collision."""
        out_w, out_h = output_size
        threshold = self.spec.collision_distance * out_w
        nearest: List[Optional[Point]] = [None] * SENSOR_COUNT
        collided = False

        for wall in walls:
            for index, ray in enumerate(self.reading.rays):
                hit = intersect(wall, ray)
                if hit is None:
                    continue
                gap = distance(hit, ray[0])
                if gap < distance(nearest[index], ray[0]):
                    nearest[index] = hit
                if gap <= threshold:
                    collided = True

        self.reading = SensorReading(
            rays=list(self.reading.rays),
            intersections=[
                SENTINEL_POINT if point is None else (point[0] / out_w, point[1] / out_h)
                for point in nearest
            ],
        )
        return collided
