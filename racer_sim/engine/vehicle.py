from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from .data_models import ControlInput, Line, Point, VehiclePose, VehicleSpec
from .physics import VehicleKinematics
from .spatial import SensorArray


class Vehicle:
    """The single simulated car: kinematics, sensor ring and the sticky crash flag."""

    def __init__(
        self,
        position: Point,
        spec: Optional[VehicleSpec] = None,
        output_size: Tuple[float, float] = (1.0, 1.0),
    ) -> None:
        self.spec = spec or VehicleSpec.from_config()
        self.kinematics = VehicleKinematics(position, self.spec)
        self.sensors = SensorArray(self.spec)
        self.output_size = output_size
        self.crashed = False
        self.skeleton: Line = ((0.0, 0.0), (0.0, 0.0))
        self._refresh()

    @property
    def pose(self) -> VehiclePose:
        return self.kinematics.pose

    @property
    def intersections(self) -> List[Point]:
        return self.sensors.intersections

    @property
    def rays(self) -> List[Line]:
        return self.sensors.rays

    def reset(self) -> None:
        self.kinematics.reset()
        self.sensors.reset()
        self.crashed = False
        self._refresh()

    def resize(self, output_size: Tuple[float, float]) -> None:
        # Rays and skeleton live in output units.
        self.output_size = output_size
        self._refresh()

    def update(self, control: ControlInput) -> VehiclePose:
        """Advances the pose one tick and re-lays the sensor rays and skeleton."""
        pose = self.kinematics.update(control)
        self._refresh()
        return pose

    def sense(self, walls: Sequence[Line]) -> bool:
        if self.sensors.resolve(walls, self.output_size):
            self.crashed = True
        return self.crashed

    def _refresh(self) -> None:
        self.sensors.cast(self.kinematics, self.output_size)
        self.skeleton = self.kinematics.skeleton(self.output_size)
