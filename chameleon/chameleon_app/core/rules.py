from __future__ import annotations

from datetime import datetime

from chameleon_app.core import catalog
from chameleon_app.core.state import GameState

HUNGER_DECAY = 2
HAPPINESS_DECAY = 1
ENERGY_DECAY = 1
CLEANLINESS_DECAY = 1

HEALTH_DECAY_CRITICAL = 3
HEALTH_DECAY_LOW = 1
CRITICAL_BELOW = 20
LOW_BELOW = 50

TEMPERATURE_HEALTH_PENALTY = 1
TEMPERATURE_HAPPINESS_PENALTY = 1

WELL_FED_ABOVE = 80
STREAK_WELL_FED = "well_fed"
STREAK_PERFECT_HEALTH = "perfect_health"


def health_decay(hunger: int, cleanliness: int) -> int:
    if hunger < CRITICAL_BELOW or cleanliness < CRITICAL_BELOW:
        return HEALTH_DECAY_CRITICAL
    if hunger < LOW_BELOW or cleanliness < LOW_BELOW:
        return HEALTH_DECAY_LOW
    return 0


def temperature_is_optimal(temperature: int) -> bool:
    return catalog.TEMP_OPTIMAL_MIN <= temperature <= catalog.TEMP_OPTIMAL_MAX


def apply_decay(state: GameState, tick_seconds: int, now: datetime) -> GameState:
    if state.is_first_time:
        return state

    pet = state.pet
    stats = pet.stats
    deltas = {
        "hunger": -HUNGER_DECAY,
        "happiness": -HAPPINESS_DECAY,
        "energy": -ENERGY_DECAY,
        "cleanliness": -CLEANLINESS_DECAY,
        # judged on pre-tick values
        "health": -health_decay(stats.hunger, stats.cleanliness),
    }
    if not temperature_is_optimal(pet.temperature):
        deltas["health"] -= TEMPERATURE_HEALTH_PENALTY
        deltas["happiness"] -= TEMPERATURE_HAPPINESS_PENALTY

    stats.apply(deltas)
    pet.refresh_derived()

    seconds = max(0, int(tick_seconds))
    _track_streak(state, STREAK_WELL_FED, stats.hunger > WELL_FED_ABOVE, seconds)
    _track_streak(state, STREAK_PERFECT_HEALTH, stats.health == catalog.STAT_MAX, seconds)

    state.last_updated = now
    return state


def _track_streak(state: GameState, key: str, holds: bool, seconds: int) -> None:
    if holds:
        state.streak_seconds[key] = state.streak_seconds.get(key, 0) + seconds
    else:
        state.streak_seconds[key] = 0
