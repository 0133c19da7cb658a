from __future__ import annotations

import json
from pathlib import Path
from typing import Any, List, Optional

from .data_models import Line, Point, TrackLayout


class UnsupportedTrackError(RuntimeError):
    pass


def load_track_file(path: Path | str, *, track_id: Optional[str] = None, name: Optional[str] = None) -> TrackLayout:
    """Loads a racetrack JSON file, returning a TrackLayout dataclass."""

    track_path = Path(path)
    if not track_path.exists():
        raise FileNotFoundError(track_path)

    try:
        with open(track_path, "r", encoding="utf-8") as handle:
            document = json.load(handle)
    except json.JSONDecodeError as exc:
        raise UnsupportedTrackError(f"Track file {track_path} is not valid JSON: {exc}") from exc

    return parse_track(document, track_id=track_id or track_path.stem, name=name)


def parse_track(document: Any, *, track_id: str, name: Optional[str] = None) -> TrackLayout:
    if not isinstance(document, dict):
        raise UnsupportedTrackError("Track document must be a JSON object")

    walls = _parse_lines(document.get("walls"), "walls")
    gates = _parse_lines(document.get("gates"), "gates")
    if not walls:
        raise UnsupportedTrackError("Track must define at least one wall")
    if not gates:
        raise UnsupportedTrackError("Track must define at least one gate")

    start = _parse_point(document.get("start", (0.5, 0.5)), "start")
    return TrackLayout(
        track_id=track_id,
        name=name or str(document.get("name", track_id)),
        walls=tuple(walls),
        gates=tuple(gates),
        start_position=start,
    )


def _parse_lines(raw: Any, label: str) -> List[Line]:
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise UnsupportedTrackError(f"'{label}' must be a list of segments")

    lines: List[Line] = []
    for idx, segment in enumerate(raw):
        if not isinstance(segment, (list, tuple)) or len(segment) != 2:
            raise UnsupportedTrackError(f"{label}[{idx}] must hold exactly two points")
        start = _parse_point(segment[0], f"{label}[{idx}]")
        end = _parse_point(segment[1], f"{label}[{idx}]")
        lines.append((start, end))
    return lines


def _parse_point(raw: Any, label: str) -> Point:
    if not isinstance(raw, (list, tuple)) or len(raw) != 2:
        raise UnsupportedTrackError(f"{label} point must be an [x, y] pair")
    try:
        return (float(raw[0]), float(raw[1]))
    except (TypeError, ValueError) as exc:
        raise UnsupportedTrackError(f"{label} point has non-numeric coordinates") from exc
