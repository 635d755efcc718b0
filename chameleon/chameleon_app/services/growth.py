from __future__ import annotations

import logging

from chameleon_app.core import catalog
from chameleon_app.core.state import GameState

LOGGER = logging.getLogger(__name__)


def age_for_minutes(total_play_minutes: float, minutes_per_day: int) -> int:
    return int(max(0.0, float(total_play_minutes)) // max(1, int(minutes_per_day)))


def stage_for_age(age_days: int) -> int:
    for min_age, stage in catalog.EVOLUTION_THRESHOLDS:
        if age_days >= min_age:
            return stage
    return 1


class GrowthTracker:
    def __init__(self, minutes_per_day: int = 10) -> None:
        self.minutes_per_day = max(1, int(minutes_per_day))

    def accrue(self, state: GameState, seconds: float) -> None:
        if state.is_first_time:
            return
        state.total_play_minutes += max(0.0, float(seconds)) / 60.0

    def check(self, state: GameState) -> int | None:
        """Returns the new stage when the pet evolved, otherwise None."""
        if state.is_first_time:
            return None
        pet = state.pet
        pet.age = age_for_minutes(state.total_play_minutes, self.minutes_per_day)
        stage = stage_for_age(pet.age)
        if stage <= pet.evolution_stage:
            return None
        LOGGER.info("pet evolved from=%s to=%s age=%s", pet.evolution_stage, stage, pet.age)
        pet.evolution_stage = stage
        pet.current_reaction = catalog.REACTION_CELEBRATING
        return stage
