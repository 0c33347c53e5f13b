"""Results returned by the smart wand.

TraceResult describes a single pipeline run; Variation pairs a preset with
its trace. Neither is persisted: the point-capture layer consumes the path
(usually after resampling) and drops the rest.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Optional

from .geometry import Point, TracePath
from .presets import WandPreset


@dataclass
class TraceResult:
    """Outcome of one full trace.

    Attributes:
        path: Simplified (and optionally resampled) path. Empty when no
            stroke was found at the seed.
        raw_point_count: Number of points walked before simplification.
        seed_thickness: Stroke half-width estimate at the seed.
        start: Re-centred start point, None if the seed was unusable.
        terminations: Termination reason per direction, keyed by
            'forward' and 'backward'.
    """
    path: TracePath = field(default_factory=TracePath)
    raw_point_count: int = 0
    seed_thickness: float = 0.0
    start: Optional[Point] = None
    terminations: Dict[str, str] = field(default_factory=dict)

    @property
    def found(self) -> bool:
        return not self.path.is_empty

    def to_dict(self) -> dict:
        return {
            'points': self.path.to_list(),
            'raw_point_count': self.raw_point_count,
            'seed_thickness': float(self.seed_thickness),
            'start': self.start.to_dict() if self.start else None,
            'terminations': dict(self.terminations),
        }


@dataclass
class Variation:
    """Result of running the full pipeline under one preset."""
    preset: WandPreset
    result: TraceResult

    @property
    def path(self) -> TracePath:
        return self.result.path

    def to_dict(self) -> dict:
        return {'preset': self.preset.to_dict(), 'points': self.path.to_list()}
