from __future__ import annotations

from dataclasses import dataclass, field

STAT_MIN = 0
STAT_MAX = 100
STAT_NAMES = ("hunger", "happiness", "health", "energy", "cleanliness")

STARTING_STATS = {
    "hunger": 75,
    "happiness": 80,
    "health": 100,
    "energy": 85,
    "cleanliness": 95,
}
STARTING_BALANCE = 50
SAVINGS_GOAL = 100
EXPENSE_LOG_CAP = 50
VET_HISTORY_CAP = 20

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 20

TRICK_ENERGY_THRESHOLD = 30
TRICK_ENERGY_COST = 20
TRICK_HAPPINESS_GAIN = 15

TEMP_MIN = 60
TEMP_MAX = 100
TEMP_OPTIMAL_MIN = 75
TEMP_OPTIMAL_MAX = 85
TEMP_DEFAULT = 80

MOOD_HAPPY = "happy"
MOOD_SAD = "sad"
MOOD_SICK = "sick"
MOOD_ENERGETIC = "energetic"
MOOD_TIRED = "tired"
MOOD_NEUTRAL = "neutral"
MOOD_HUNGRY = "hungry"
MOOD_DIRTY = "dirty"

MOODS = (
    MOOD_HAPPY,
    MOOD_SAD,
    MOOD_SICK,
    MOOD_ENERGETIC,
    MOOD_TIRED,
    MOOD_NEUTRAL,
    MOOD_HUNGRY,
    MOOD_DIRTY,
)

MOOD_COLORS = {
    MOOD_HAPPY: "#FFD93D",
    MOOD_SAD: "#6B7FD7",
    MOOD_SICK: "#9B59B6",
    MOOD_ENERGETIC: "#FF6B35",
    MOOD_TIRED: "#74B9FF",
    MOOD_NEUTRAL: "#2ECC71",
    MOOD_HUNGRY: "#E67E22",
    MOOD_DIRTY: "#8D6E63",
}

REACTION_EATING = "eating"
REACTION_PLAYING = "playing"
REACTION_SLEEPING = "sleeping"
REACTION_BATHING = "bathing"
REACTION_HEALING = "healing"
REACTION_LEARNING = "learning"
REACTION_CELEBRATING = "celebrating"

REACTIONS = (
    REACTION_EATING,
    REACTION_PLAYING,
    REACTION_SLEEPING,
    REACTION_BATHING,
    REACTION_HEALING,
    REACTION_LEARNING,
    REACTION_CELEBRATING,
)

EXPENSE_CATEGORIES = ("food", "toy", "health", "supplies", "grooming")


@dataclass(frozen=True)
class Species:
    id: str
    name: str
    base_color: str
    pattern: str
    icon: str


SPECIES = {
    "veiled": Species("veiled", "Veiled Chameleon", "#2ECC71", "bands", "🦎"),
    "panther": Species("panther", "Panther Chameleon", "#E74C3C", "bars", "🐊"),
    "jackson": Species("jackson", "Jackson's Chameleon", "#27AE60", "horns", "🦖"),
    "pygmy": Species("pygmy", "Pygmy Chameleon", "#A1887F", "leaf", "🍂"),
}


@dataclass(frozen=True)
class CareAction:
    id: str
    cost: int
    category: str | None
    description: str
    deltas: dict[str, int] = field(default_factory=dict)
    reaction: str = REACTION_PLAYING
    message: str = "{name} enjoyed that!"


CARE_ACTIONS = {
    "feed": CareAction(
        "feed", 5, "food", "Pet food", {"hunger": 25, "energy": 5}, REACTION_EATING, "{name} enjoyed the meal!"
    ),
    "treat": CareAction(
        "treat", 8, "food", "Special treat", {"hunger": 15, "happiness": 20}, REACTION_EATING, "{name} loved the treat!"
    ),
    "play": CareAction(
        "play", 3, "toy", "Play session", {"happiness": 25, "energy": -15}, REACTION_PLAYING, "{name} had fun playing!"
    ),
    "toy": CareAction(
        "toy", 15, "toy", "New toy", {"happiness": 30}, REACTION_PLAYING, "{name} loves the new toy!"
    ),
    "rest": CareAction(
        "rest", 0, None, "Nap time", {"energy": 35, "happiness": 5}, REACTION_SLEEPING, "{name} is taking a nap!"
    ),
    "clean": CareAction(
        "clean", 8, "grooming", "Bath supplies", {"cleanliness": 40, "happiness": 5}, REACTION_BATHING,
        "{name} is squeaky clean!",
    ),
    "bedding": CareAction(
        "bedding", 10, "supplies", "Fresh bedding", {"cleanliness": 20, "energy": 10}, REACTION_BATHING,
        "{name} has a fresh bed!",
    ),
    "vet": CareAction(
        "vet", 25, "health", "Vet checkup", {"health": 50}, REACTION_HEALING, "{name} had a checkup!"
    ),
    "medicine": CareAction(
        "medicine", 12, "health", "Medicine", {"health": 30, "happiness": -10}, REACTION_HEALING,
        "{name} took medicine.",
    ),
}
REST_ACTION_ID = "rest"


@dataclass(frozen=True)
class VetService:
    id: str
    name: str
    cost: int
    health_boost: int
    icon: str


VET_SERVICES = {
    "checkup": VetService("checkup", "Checkup", 25, 20, "🩺"),
    "vaccination": VetService("vaccination", "Vaccination", 30, 15, "💉"),
    "treatment": VetService("treatment", "Treatment", 40, 40, "💊"),
    "emergency": VetService("emergency", "Emergency Care", 75, 100, "🚑"),
}


@dataclass(frozen=True)
class Chore:
    id: str
    name: str
    description: str
    reward: int
    cooldown_minutes: int
    icon: str


CHORES = {
    "clean_room": Chore("clean_room", "Clean Room", "Tidy up your space", 10, 30, "🧹"),
    "homework": Chore("homework", "Do Homework", "Complete your assignments", 15, 60, "📚"),
    "dishes": Chore("dishes", "Wash Dishes", "Clean the dishes", 8, 20, "🍽️"),
    "laundry": Chore("laundry", "Do Laundry", "Wash and fold clothes", 12, 45, "👕"),
    "yard_work": Chore("yard_work", "Yard Work", "Help with outdoor tasks", 20, 90, "🌱"),
}

# Presentation list; teach_trick accepts any non-blank name.
TRICKS = ("Wave", "Spin", "Color Flash", "Tongue Catch", "Hide")


@dataclass(frozen=True)
class BadgeInfo:
    id: str
    name: str
    description: str
    icon: str
    requirement: str


BADGES = {
    "first_pet": BadgeInfo("first_pet", "New Pet Parent", "Named your first chameleon", "🎉", "Name your pet"),
    "well_fed": BadgeInfo(
        "well_fed", "Master Chef", "Keep hunger above 80 for five minutes", "🍽️", "Maintain high hunger stat"
    ),
    "happy_camper": BadgeInfo("happy_camper", "Joy Bringer", "Reach 100% happiness", "😊", "Max out happiness"),
    "clean_freak": BadgeInfo("clean_freak", "Squeaky Clean", "Give 5 baths", "🛁", "Bath your pet 5 times"),
    "money_saver": BadgeInfo("money_saver", "Smart Saver", "Save $100 in your balance", "💰", "Accumulate $100"),
    "hard_worker": BadgeInfo("hard_worker", "Super Helper", "Complete 10 chores", "⭐", "Do 10 chores"),
    "healthy_pet": BadgeInfo(
        "healthy_pet", "Health Hero", "Keep health at 100% for 5 minutes", "❤️", "Maintain perfect health"
    ),
    "trick_master": BadgeInfo("trick_master", "Trick Trainer", "Teach your pet 3 tricks", "🎪", "Train 3 tricks"),
    "vet_regular": BadgeInfo("vet_regular", "Vet Regular", "Visit the vet 5 times", "🩺", "Book 5 vet services"),
    "growing_up": BadgeInfo("growing_up", "Growing Up", "Your chameleon became a juvenile", "🌿", "Reach stage 2"),
    "all_grown_up": BadgeInfo("all_grown_up", "All Grown Up", "Your chameleon became an adult", "🌳", "Reach stage 3"),
}

EVOLUTION_STAGES = {1: "Hatchling", 2: "Juvenile", 3: "Adult"}
# (minimum age in days, stage), highest first
EVOLUTION_THRESHOLDS = ((7, 3), (3, 2), (0, 1))
