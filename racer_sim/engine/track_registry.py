from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, List, Optional

from racer_sim.config import get_config

from .data_models import TrackLayout
from .track_loader import load_track_file


def _default_track_directory() -> Path:
    override = os.getenv("RACER_TRACK_DIR")
    if override:
        return Path(override)
    return Path(__file__).resolve().parents[2] / "tracks"


class TrackRegistry:
    """
    Track files in one directory, keyed by lower-cased file stem.

    Layouts are parsed on first use and cached. ``load()`` without an id picks
    the configured ``track.default``.
    """

    def __init__(self, track_directory: Optional[Path] = None) -> None:
        self.track_directory = Path(track_directory) if track_directory else _default_track_directory()
        self._paths: Dict[str, Path] = {}
        self._cache: Dict[str, TrackLayout] = {}
        if self.track_directory.exists():
            for track_file in sorted(self.track_directory.glob("*.json")):
                self._paths[track_file.stem.lower()] = track_file

    def path(self, track_id: str) -> Path:
        try:
            return self._paths[track_id.lower()]
        except KeyError:
            raise KeyError(f"Track '{track_id}' not found in {self.track_directory}") from None

    def load(self, track_id: Optional[str] = None) -> TrackLayout:
        key = (track_id or get_config("track.default", "box_loop")).lower()
        if key not in self._cache:
            self._cache[key] = load_track_file(self.path(key), track_id=key)
        return self._cache[key]

    def list_tracks(self) -> List[str]:
        return list(self._paths)
