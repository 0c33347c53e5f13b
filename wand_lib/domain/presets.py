"""Named wand presets.

The catalog is a fixed, ordered list offered to the user as alternative
traces of the same click. Presets only differ in numeric overrides on top
of the default WandOptions.

Example usage:
    Enumerate the catalog::

        from wand_lib.domain.presets import WAND_PRESETS, get_preset

        for preset in WAND_PRESETS:
            print(preset.id, preset.name, preset.description)

        gap_jumper = get_preset('jumpy')
        opts = gap_jumper.options()
"""

from __future__ import annotations
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, List, Mapping, Optional, Tuple

from .options import WandOptions


@dataclass(frozen=True)
class WandPreset:
    """A named bundle of option overrides.

    Attributes:
        id: Stable identifier used by the CLI and API.
        name: Display name.
        description: One-line explanation shown next to the preview.
        overrides: Read-only mapping of WandOptions field overrides.
    """
    id: str
    name: str
    description: str
    overrides: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, 'overrides', MappingProxyType(dict(self.overrides)))

    def options(self, base: Optional[WandOptions] = None) -> WandOptions:
        """Resolve this preset against base options (defaults if None)."""
        return (base or WandOptions()).merged(self.overrides)

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'overrides': dict(self.overrides),
        }


WAND_PRESETS: Tuple[WandPreset, ...] = (
    WandPreset('balanced', 'Balanced', 'Standard adaptive trace.'),
    WandPreset('thick_only', 'Thick Only', 'Ignores medium lines, tracks main curves.',
               {'thickness_keep_frac': 0.8}),
    WandPreset('tolerant', 'Tolerant', 'Tracks thinner/worn lines.',
               {'thickness_keep_frac': 0.3, 'threshold_bias': 0.95}),
    WandPreset('jumpy', 'Gap Jumper', 'Jumps larger gaps.',
               {'max_gap': 30, 'gap_angle': 60}),
    WandPreset('strict', 'Strict', 'Stops at any break or noise.',
               {'max_gap': 0, 'threshold_bias': 0.85}),
    WandPreset('smooth', 'Smooth', 'High momentum for clean curves.',
               {'momentum': 0.95, 'step_size': 3}),
)


def preset_ids() -> List[str]:
    return [p.id for p in WAND_PRESETS]


def get_preset(preset_id: str) -> WandPreset:
    """Look up a preset by id.

    Raises:
        ValueError: If no preset has that id.
    """
    for preset in WAND_PRESETS:
        if preset.id == preset_id:
            return preset
    raise ValueError(f"Unknown wand preset '{preset_id}' (choose from {', '.join(preset_ids())})")
