"""
Single-vehicle track engine.

The package is split into data models, geometry helpers, kinematics, sensor
perception, track and gate state, and loading utilities. ``SimulationContext``
composes these pieces into the per-tick update.
"""

from .course import TrackGeometry  # noqa: F401
from .data_models import (  # noqa: F401
    ControlInput,
    Line,
    NearestGate,
    Observation,
    Point,
    SensorReading,
    TrackLayout,
    VehiclePose,
    VehicleSpec,
)
from .gates import RewardGateTracker  # noqa: F401
from .geometry import FAR_DISTANCE, distance, intersect, rotate  # noqa: F401
from .physics import VehicleKinematics  # noqa: F401
from .spatial import SensorArray  # noqa: F401
from .telemetry import TelemetryCollector, TelemetryFrame  # noqa: F401
from .track_loader import UnsupportedTrackError, load_track_file  # noqa: F401
from .vehicle import Vehicle  # noqa: F401
from .race_loop import SimulationContext  # noqa: F401

__all__ = [
    "ControlInput",
    "FAR_DISTANCE",
    "Line",
    "NearestGate",
    "Observation",
    "Point",
    "RewardGateTracker",
    "SensorArray",
    "SensorReading",
    "SimulationContext",
    "TelemetryCollector",
    "TelemetryFrame",
    "TrackGeometry",
    "TrackLayout",
    "UnsupportedTrackError",
    "Vehicle",
    "VehicleKinematics",
    "VehiclePose",
    "VehicleSpec",
    "distance",
    "intersect",
    "load_track_file",
    "rotate",
]
