from __future__ import annotations

from chameleon_app.core import catalog
from chameleon_app.core.state import GameState

_MOOD_FACES = {
    catalog.MOOD_HAPPY: "😊",
    catalog.MOOD_SAD: "😢",
    catalog.MOOD_SICK: "🤒",
    catalog.MOOD_ENERGETIC: "⚡",
    catalog.MOOD_TIRED: "😴",
    catalog.MOOD_NEUTRAL: "😐",
    catalog.MOOD_HUNGRY: "🍽️",
    catalog.MOOD_DIRTY: "🫧",
}

_REACTION_BUBBLES = {
    catalog.REACTION_EATING: "Nom nom!",
    catalog.REACTION_PLAYING: "Wheee!",
    catalog.REACTION_SLEEPING: "Zzz...",
    catalog.REACTION_BATHING: "Splish splash!",
    catalog.REACTION_HEALING: "Feeling better!",
    catalog.REACTION_LEARNING: "Look what I can do!",
    catalog.REACTION_CELEBRATING: "I grew up!",
}


class Renderer:
    def sprite_for(self, state: GameState) -> str:
        pet = state.pet
        if state.is_first_time:
            return "🥚"
        species = catalog.SPECIES.get(pet.species)
        base = species.icon if species else "🦎"
        return f"{_MOOD_FACES.get(pet.mood, '')}{base}"

    def bubble_for(self, state: GameState) -> str | None:
        reaction = state.pet.current_reaction
        if reaction is None:
            return None
        return _REACTION_BUBBLES.get(reaction)

    def status_line(self, state: GameState) -> str:
        if state.is_first_time:
            return "No pet yet"
        pet = state.pet
        s = pet.stats
        stage = catalog.EVOLUTION_STAGES.get(pet.evolution_stage, "?")
        return (
            f"{pet.name} [{stage}, day {pet.age}] {pet.mood} "
            f"H:{s.hunger} J:{s.happiness} HP:{s.health} E:{s.energy} C:{s.cleanliness} "
            f"${state.finances.balance}"
        )
