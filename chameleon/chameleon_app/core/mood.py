from __future__ import annotations

from typing import TYPE_CHECKING

from chameleon_app.core import catalog

if TYPE_CHECKING:
    from chameleon_app.core.state import PetStats

SICK_HEALTH_BELOW = 25
HUNGRY_HUNGER_BELOW = 20
DIRTY_CLEANLINESS_BELOW = 20
TIRED_ENERGY_BELOW = 20
SAD_HAPPINESS_BELOW = 30
ENERGETIC_ABOVE = 85
HAPPY_ABOVE = 70

COLOR_MOOD_WEIGHT = 0.75


def classify_mood(stats: "PetStats") -> str:
    if stats.health < SICK_HEALTH_BELOW:
        return catalog.MOOD_SICK
    if stats.hunger < HUNGRY_HUNGER_BELOW:
        return catalog.MOOD_HUNGRY
    if stats.cleanliness < DIRTY_CLEANLINESS_BELOW:
        return catalog.MOOD_DIRTY
    if stats.energy < TIRED_ENERGY_BELOW:
        return catalog.MOOD_TIRED
    if stats.happiness < SAD_HAPPINESS_BELOW:
        return catalog.MOOD_SAD
    if stats.energy > ENERGETIC_ABOVE and stats.happiness > ENERGETIC_ABOVE:
        return catalog.MOOD_ENERGETIC
    if stats.hunger > HAPPY_ABOVE and stats.happiness > HAPPY_ABOVE and stats.health > HAPPY_ABOVE:
        return catalog.MOOD_HAPPY
    return catalog.MOOD_NEUTRAL


def _hex_to_rgb(value: str) -> tuple[int, int, int]:
    raw = value.lstrip("#")
    return int(raw[0:2], 16), int(raw[2:4], 16), int(raw[4:6], 16)


def derive_color(mood: str, species: str) -> str:
    mood_rgb = _hex_to_rgb(catalog.MOOD_COLORS.get(mood, catalog.MOOD_COLORS[catalog.MOOD_NEUTRAL]))
    species_info = catalog.SPECIES.get(species)
    if species_info is None:
        return "#%02X%02X%02X" % mood_rgb
    base_rgb = _hex_to_rgb(species_info.base_color)
    mixed = tuple(
        int(round(m * COLOR_MOOD_WEIGHT + b * (1.0 - COLOR_MOOD_WEIGHT))) for m, b in zip(mood_rgb, base_rgb)
    )
    return "#%02X%02X%02X" % mixed
