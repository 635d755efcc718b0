from __future__ import annotations

import logging
import re
from datetime import datetime

from chameleon_app.core import catalog
from chameleon_app.core.errors import PreconditionError, UnknownIntentError, ValidationError
from chameleon_app.core.state import GameState, VetRecord, new_pet
from chameleon_app.services.ledger import EconomyLedger

LOGGER = logging.getLogger(__name__)

_NAME_PATTERN = re.compile(r"^[A-Za-z0-9 ]+$")


def validate_pet_name(raw_name: str) -> str:
    name = str(raw_name or "").strip()
    if not name:
        raise ValidationError("Please enter a name for your chameleon.")
    if len(name) < catalog.NAME_MIN_LENGTH:
        raise ValidationError(f"Name must be at least {catalog.NAME_MIN_LENGTH} characters.")
    if len(name) > catalog.NAME_MAX_LENGTH:
        raise ValidationError(f"Name must be {catalog.NAME_MAX_LENGTH} characters or less.")
    if not _NAME_PATTERN.match(name):
        raise ValidationError("Name can only contain letters, numbers, and spaces.")
    return name


def _require_pet(state: GameState) -> None:
    if state.is_first_time:
        raise PreconditionError("Create a pet first.")


def initialize_pet(state: GameState, name: str, species: str, now: datetime) -> str:
    if not state.is_first_time:
        raise PreconditionError("You already have a pet. Reset the game to start over.")
    clean_name = validate_pet_name(name)
    if species not in catalog.SPECIES:
        raise ValidationError(f"Unknown chameleon type: {species}")

    state.pet = new_pet(clean_name, species, now)
    state.is_first_time = False
    state.last_updated = now
    LOGGER.info("pet created name=%s species=%s", clean_name, species)
    return f"{clean_name} is ready to be your new pet!"


def perform_action(state: GameState, action_id: str, now: datetime) -> str:
    action = catalog.CARE_ACTIONS.get(action_id)
    if action is None:
        raise UnknownIntentError(f"Unknown action: {action_id}")
    _require_pet(state)

    if action.cost > 0 and action.id != catalog.REST_ACTION_ID:
        EconomyLedger(state, now).require_charge(action.cost, action.category, action.description)

    pet = state.pet
    pet.stats.apply(action.deltas)
    pet.refresh_derived()
    pet.current_reaction = action.reaction
    state.care_counts[action.id] = state.care_counts.get(action.id, 0) + 1
    state.last_updated = now
    return action.message.format(name=pet.name)


def request_service(state: GameState, service_type: str, now: datetime) -> str:
    service = catalog.VET_SERVICES.get(service_type)
    if service is None:
        raise UnknownIntentError(f"Unknown vet service: {service_type}")
    _require_pet(state)

    EconomyLedger(state, now).require_charge(service.cost, "health", service.name)

    pet = state.pet
    pet.stats.apply({"health": service.health_boost})
    pet.refresh_derived()
    record = VetRecord(
        service_type=service.id,
        service_name=service.name,
        cost=service.cost,
        health_boost=service.health_boost,
        timestamp=now,
    )
    pet.vet_history.insert(0, record)
    del pet.vet_history[catalog.VET_HISTORY_CAP :]
    pet.last_vet_visit = now
    pet.current_reaction = catalog.REACTION_HEALING
    state.care_counts["vet_visit"] = state.care_counts.get("vet_visit", 0) + 1
    state.last_updated = now
    return f"{pet.name} received {service.name} (+{service.health_boost} HP)."


def teach_trick(state: GameState, trick_name: str, now: datetime) -> str:
    _require_pet(state)
    name = str(trick_name or "").strip()
    if not name:
        raise ValidationError("Pick a trick to teach.")

    pet = state.pet
    if pet.stats.energy < catalog.TRICK_ENERGY_THRESHOLD:
        raise PreconditionError(f"{pet.name} is too tired to learn right now.")
    if name in pet.tricks:
        raise PreconditionError(f"{pet.name} already knows this trick!")

    pet.tricks.append(name)
    pet.stats.apply({"energy": -catalog.TRICK_ENERGY_COST, "happiness": catalog.TRICK_HAPPINESS_GAIN})
    pet.refresh_derived()
    pet.current_reaction = catalog.REACTION_LEARNING
    state.last_updated = now
    return f'{pet.name} learned "{name}"!'


def set_temperature(state: GameState, value: int | float, now: datetime) -> str:
    _require_pet(state)
    try:
        requested = int(round(float(value)))
    except (TypeError, ValueError, OverflowError):
        raise ValidationError(f"Invalid temperature: {value!r}") from None
    temperature = max(catalog.TEMP_MIN, min(catalog.TEMP_MAX, requested))
    state.pet.temperature = temperature
    state.last_updated = now
    if catalog.TEMP_OPTIMAL_MIN <= temperature <= catalog.TEMP_OPTIMAL_MAX:
        return f"Tank set to {temperature}°F (optimal)."
    return f"Tank set to {temperature}°F."
