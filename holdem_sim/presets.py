"""
Preset ranges for Hold'em simulation.
Named "top N%" starting-hand ranges built from the strength ranking.
"""

from dataclasses import dataclass
from typing import Optional
from enum import Enum

from .engine.starting_hands import (
    PRESET_PERCENTAGES,
    range_label,
    top_percent_by_combinations,
    top_percent_hands,
)


class Weighting(Enum):
    COMBINATIONS = "combinations"  # N% of the 1326 possible deals
    TOKENS = "tokens"              # N% of the 169 hand classes


@dataclass
class RangePreset:
    """A named percentage range."""
    name: str
    description: str
    percentage: float
    weighting: Weighting = Weighting.COMBINATIONS

    def hands(self) -> list[str]:
        """Range tokens for this preset, strongest first."""
        if self.weighting == Weighting.TOKENS:
            return top_percent_hands(self.percentage)
        return top_percent_by_combinations(self.percentage)


# Built-in presets
PRESETS = {
    "premium": RangePreset(
        name="Premium",
        description="Big pairs only",
        percentage=PRESET_PERCENTAGES["PREMIUM"],
    ),

    "ultra_tight": RangePreset(
        name="Ultra Tight",
        description="Big pairs and the best suited aces",
        percentage=PRESET_PERCENTAGES["ULTRA_TIGHT"],
    ),

    "very_tight": RangePreset(
        name="Very Tight",
        description="Early-position opening range",
        percentage=PRESET_PERCENTAGES["VERY_TIGHT"],
    ),

    "tight": RangePreset(
        name="Tight",
        description="Solid early/middle position range",
        percentage=PRESET_PERCENTAGES["TIGHT"],
    ),

    "medium_tight": RangePreset(
        name="Medium Tight",
        description="Middle position opening range",
        percentage=PRESET_PERCENTAGES["MEDIUM_TIGHT"],
    ),

    "medium": RangePreset(
        name="Medium",
        description="Cutoff-style opening range",
        percentage=PRESET_PERCENTAGES["MEDIUM"],
    ),

    "medium_loose": RangePreset(
        name="Medium Loose",
        description="Button-style opening range",
        percentage=PRESET_PERCENTAGES["MEDIUM_LOOSE"],
    ),

    "loose": RangePreset(
        name="Loose",
        description="Roughly the top half of all deals",
        percentage=PRESET_PERCENTAGES["LOOSE"],
    ),

    "very_loose": RangePreset(
        name="Very Loose",
        description="Most suited and connected hands",
        percentage=PRESET_PERCENTAGES["VERY_LOOSE"],
    ),

    "ultra_loose": RangePreset(
        name="Ultra Loose",
        description="Nearly every playable hand",
        percentage=PRESET_PERCENTAGES["ULTRA_LOOSE"],
    ),

    "any_two": RangePreset(
        name="Any Two",
        description="Every starting hand",
        percentage=100.0,
    ),
}


def get_preset(name: str) -> Optional[RangePreset]:
    """Get a preset by name."""
    return PRESETS.get(name.lower().replace(" ", "_"))


def list_presets() -> list[str]:
    """List all available preset names."""
    return list(PRESETS.keys())


def get_preset_info(name: str) -> Optional[dict]:
    """Get info about a preset."""
    preset = get_preset(name)
    if preset:
        hands = preset.hands()
        return {
            "name": preset.name,
            "description": preset.description,
            "percentage": preset.percentage,
            "label": range_label(preset.percentage),
            "weighting": preset.weighting.value,
            "hands": len(hands),
        }
    return None


def preset_range(name: str) -> list[str]:
    """Range tokens for a named preset."""
    preset = get_preset(name)
    if preset is None:
        raise ValueError(f"Unknown preset: {name}. Available: {list_presets()}")
    return preset.hands()
