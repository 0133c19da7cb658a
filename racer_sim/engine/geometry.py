from __future__ import annotations

import math
from typing import List, Optional, Sequence

import numpy as np

from .data_models import Line, Point

FAR_DISTANCE = 99999.0


def intersect(p: Line, q: Line) -> Optional[Point]:
    """Returns the point where two finite segments cross, or None.

    Parallel and colinear segments never intersect. The point is interpolated
    along ``p``.
    """
    (a, b), (c, d) = p
    (w, x), (y, z) = q
    denominator = (z - x) * (c - a) - (y - w) * (d - b)
    if denominator == 0:
        return None

    ua = ((y - w) * (b - x) - (z - x) * (a - w)) / denominator
    ub = ((c - a) * (b - x) - (d - b) * (a - w)) / denominator
    if ua < 0 or ua > 1 or ub < 0 or ub > 1:
        return None

    return (a + ua * (c - a), b + ua * (d - b))


def distance(a: Optional[Point], b: Optional[Point]) -> float:
    if a is None or b is None:
        return FAR_DISTANCE
    return math.hypot(a[0] - b[0], a[1] - b[1])


def rotate(points: Sequence[Point], pivot: Point, degrees: float) -> List[Point]:
    """Rotates points about a pivot; positive angles turn clockwise on screen."""
    if not points:
        return []
    radians = math.radians(degrees)
    s = math.sin(radians)
    c = math.cos(radians)
    matrix = np.array([[c, s], [-s, c]])

    origin = np.asarray(pivot, dtype=np.float64)
    shifted = np.asarray(points, dtype=np.float64) - origin
    turned = shifted @ matrix + origin
    return [(float(x), float(y)) for x, y in turned]


def midpoint(line: Line) -> Point:
    (x1, y1), (x2, y2) = line
    return (x1 + 0.5 * (x2 - x1), y1 + 0.5 * (y2 - y1))


def scale_line(line: Line, width: float, height: float) -> Line:
    (x1, y1), (x2, y2) = line
    return ((x1 * width, y1 * height), (x2 * width, y2 * height))
