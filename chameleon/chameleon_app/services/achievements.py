from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from chameleon_app.core import catalog
from chameleon_app.core.rules import STREAK_PERFECT_HEALTH, STREAK_WELL_FED
from chameleon_app.core.state import Badge, GameState

LOGGER = logging.getLogger(__name__)

STREAK_BADGE_SECONDS = 300
BATHS_FOR_BADGE = 5
BALANCE_FOR_BADGE = 100
CHORES_FOR_BADGE = 10
VET_VISITS_FOR_BADGE = 5
TRICKS_FOR_BADGE = 3

Predicate = Callable[[GameState], bool]

BADGE_RULES: tuple[tuple[str, Predicate], ...] = (
    ("first_pet", lambda s: not s.is_first_time and bool(s.pet.name)),
    ("well_fed", lambda s: s.streak_seconds.get(STREAK_WELL_FED, 0) >= STREAK_BADGE_SECONDS),
    ("happy_camper", lambda s: s.pet.stats.happiness >= catalog.STAT_MAX),
    ("clean_freak", lambda s: s.care_counts.get("clean", 0) >= BATHS_FOR_BADGE),
    ("money_saver", lambda s: s.finances.balance >= BALANCE_FOR_BADGE),
    ("hard_worker", lambda s: len(s.completed_chores) >= CHORES_FOR_BADGE),
    ("healthy_pet", lambda s: s.streak_seconds.get(STREAK_PERFECT_HEALTH, 0) >= STREAK_BADGE_SECONDS),
    ("trick_master", lambda s: len(s.pet.tricks) >= TRICKS_FOR_BADGE),
    ("vet_regular", lambda s: s.care_counts.get("vet_visit", 0) >= VET_VISITS_FOR_BADGE),
    ("growing_up", lambda s: s.pet.evolution_stage >= 2),
    ("all_grown_up", lambda s: s.pet.evolution_stage >= 3),
)


def evaluate_badges(
    state: GameState,
    now: datetime,
    rules: tuple[tuple[str, Predicate], ...] = BADGE_RULES,
) -> list[Badge]:
    if state.is_first_time:
        return []

    granted: list[Badge] = []
    for badge_id, predicate in rules:
        if state.has_badge(badge_id):
            continue
        if not predicate(state):
            continue
        badge = Badge.from_catalog(badge_id, earned_at=now)
        state.badges.append(badge)
        granted.append(badge)
        LOGGER.info("badge earned id=%s", badge_id)
    return granted
