from __future__ import annotations

from typing import List, Sequence, Tuple

from .data_models import Line, TrackLayout
from .geometry import scale_line


class TrackGeometry:
    """
    Wall and gate segments kept in normalized space.

    ``walls`` and ``gates`` expose the output-space copies produced by the most
    recent :meth:`rescale`; until then the output space is the unit square.
    """

    def __init__(self, walls: Sequence[Line], gates: Sequence[Line]) -> None:
        self._wall_data: Tuple[Line, ...] = tuple(walls)
        self._gate_data: Tuple[Line, ...] = tuple(gates)
        self.output_size: Tuple[float, float] = (1.0, 1.0)
        self.walls: List[Line] = []
        self.gates: List[Line] = []
        self.rescale(1.0, 1.0)

    @classmethod
    def from_layout(cls, layout: TrackLayout) -> "TrackGeometry":
        return cls(layout.walls, layout.gates)

    @property
    def gate_data(self) -> Tuple[Line, ...]:
        return self._gate_data

    def rescale(self, width: float, height: float) -> None:
        self.output_size = (float(width), float(height))
        self.walls = [scale_line(line, width, height) for line in self._wall_data]
        self.gates = [scale_line(line, width, height) for line in self._gate_data]
