"""Tunable parameters for one smart wand run.

WandOptions is a frozen bundle of every numeric knob the pipeline reads.
Instances are never mutated: overrides produce a new instance through
WandOptions.merged, so presets evaluated side by side cannot interfere.

Example usage:
    Defaults with an override::

        from wand_lib.domain.options import WandOptions

        opts = WandOptions().merged({'max_gap': 30, 'gap_angle': 60})
        print(opts.to_dict())
"""

from __future__ import annotations
import math
import numbers
from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Dict, Mapping, Optional

from .. import config

_INT_FIELDS = ('threshold_window', 'min_component', 'max_points', 'max_steps')
_FLOAT_FIELDS = ('threshold_bias', 'thickness_keep_frac', 'step_size', 'momentum',
                 'max_gap', 'gap_angle', 'simplify_eps')


def _as_int(name: str, value: Any) -> int:
    """Integer option value; integral floats such as 15.0 are accepted."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    if isinstance(value, numbers.Integral):
        return int(value)
    if not math.isfinite(value) or value != int(value):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    return int(value)


def _as_float(name: str, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise ValueError(f"{name} must be a number, got {value!r}")
    value = float(value)
    if not math.isfinite(value):
        raise ValueError(f"{name} must be finite, got {value!r}")
    return value


@dataclass(frozen=True)
class WandOptions:
    """Parameters for thresholding, gating, walking and output.

    Attributes:
        threshold_window: Side of the local mean window (odd, > 0).
        threshold_bias: Multiplier of the local mean; a pixel is ink when
            strictly darker than bias * mean. Must be in (0, 1].
        thickness_keep_frac: Fraction of the seed thickness a position
            must reach to keep walking.
        min_component: Connected ink regions smaller than this are cleared.
        step_size: Distance advanced per walk step, in pixels.
        momentum: Weight of the previous heading when blending in the
            heading actually taken. Clamped to [0, 1].
        max_gap: Largest radius searched when bridging a gap, in pixels.
            Zero disables bridging.
        gap_angle: Half-angle of the bridging cone, in degrees.
        max_points: Cap on points per directional walk.
        max_steps: Cap on iterations per directional walk.
        simplify_eps: RDP tolerance in pixels.
        resample_step: Optional arc-length spacing applied after
            simplification. None keeps the simplified vertices.
    """
    threshold_window: int = config.DEFAULT_THRESHOLD_WINDOW
    threshold_bias: float = config.DEFAULT_THRESHOLD_BIAS
    thickness_keep_frac: float = config.DEFAULT_THICKNESS_KEEP_FRAC
    min_component: int = config.DEFAULT_MIN_COMPONENT
    step_size: float = config.DEFAULT_STEP_SIZE
    momentum: float = config.DEFAULT_MOMENTUM
    max_gap: float = config.DEFAULT_MAX_GAP
    gap_angle: float = config.DEFAULT_GAP_ANGLE
    max_points: int = config.DEFAULT_MAX_POINTS
    max_steps: int = config.DEFAULT_MAX_STEPS
    simplify_eps: float = config.DEFAULT_SIMPLIFY_EPS
    resample_step: Optional[float] = config.DEFAULT_RESAMPLE_STEP

    def __post_init__(self):
        # Frozen dataclass, so normalised values go through object.__setattr__
        for name in _INT_FIELDS:
            object.__setattr__(self, name, _as_int(name, getattr(self, name)))
        for name in _FLOAT_FIELDS:
            object.__setattr__(self, name, _as_float(name, getattr(self, name)))
        if self.resample_step is not None:
            object.__setattr__(self, 'resample_step', _as_float('resample_step', self.resample_step))

        if self.threshold_window <= 0 or self.threshold_window % 2 == 0:
            raise ValueError(f"threshold_window must be a positive odd integer, got {self.threshold_window}")
        if not 0 < self.threshold_bias <= 1:
            raise ValueError(f"threshold_bias must be in (0, 1], got {self.threshold_bias}")
        if self.thickness_keep_frac < 0:
            raise ValueError(f"thickness_keep_frac must be non-negative, got {self.thickness_keep_frac}")
        if self.min_component < 0:
            raise ValueError(f"min_component must be non-negative, got {self.min_component}")
        if self.step_size <= 0:
            raise ValueError(f"step_size must be positive, got {self.step_size}")
        if self.max_gap < 0:
            raise ValueError(f"max_gap must be non-negative, got {self.max_gap}")
        if self.gap_angle < 0:
            raise ValueError(f"gap_angle must be non-negative, got {self.gap_angle}")
        if self.max_points <= 0 or self.max_steps <= 0:
            raise ValueError("max_points and max_steps must be positive")
        if self.simplify_eps < 0:
            raise ValueError(f"simplify_eps must be non-negative, got {self.simplify_eps}")
        if self.resample_step is not None and self.resample_step <= 0:
            raise ValueError(f"resample_step must be positive or None, got {self.resample_step}")
        object.__setattr__(self, 'momentum', min(1.0, max(0.0, self.momentum)))

    @property
    def mask_key(self) -> tuple:
        """Parameters that determine the despeckled mask and distance field."""
        return (self.threshold_window, self.threshold_bias, self.min_component)

    def merged(self, overrides: Optional[Mapping[str, Any]] = None) -> WandOptions:
        """Return a copy with the given fields replaced.

        Raises:
            ValueError: If an override names an unknown field.
        """
        if not overrides:
            return self
        known = {f.name for f in fields(self)}
        unknown = sorted(set(overrides) - known)
        if unknown:
            raise ValueError(f"Unknown wand option(s): {', '.join(unknown)}")
        return replace(self, **dict(overrides))

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> WandOptions:
        return cls().merged(data)
