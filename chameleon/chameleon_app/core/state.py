from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from chameleon_app.core import catalog
from chameleon_app.core.mood import classify_mood, derive_color


def utc_now() -> datetime:
    return datetime.now(tz=timezone.utc)


def new_id() -> str:
    return uuid4().hex


def dt_to_str(value: datetime | None) -> str | None:
    if value is None:
        return None
    return value.isoformat()


def dt_from_str(raw: Any) -> datetime | None:
    if raw in (None, ""):
        return None
    parsed = datetime.fromisoformat(str(raw))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def dt_required(raw: Any) -> datetime:
    parsed = dt_from_str(raw)
    if parsed is None:
        raise ValueError("missing timestamp")
    return parsed


def clamp_stat(value: int | float) -> int:
    return int(max(catalog.STAT_MIN, min(catalog.STAT_MAX, round(value))))


@dataclass
class PetStats:
    hunger: int = catalog.STARTING_STATS["hunger"]
    happiness: int = catalog.STARTING_STATS["happiness"]
    health: int = catalog.STARTING_STATS["health"]
    energy: int = catalog.STARTING_STATS["energy"]
    cleanliness: int = catalog.STARTING_STATS["cleanliness"]

    def __post_init__(self) -> None:
        for name in catalog.STAT_NAMES:
            setattr(self, name, clamp_stat(getattr(self, name)))

    def apply(self, deltas: dict[str, int]) -> None:
        for name, delta in deltas.items():
            if name not in catalog.STAT_NAMES:
                raise KeyError(f"unknown stat: {name}")
            setattr(self, name, clamp_stat(getattr(self, name) + delta))

    def to_dict(self) -> dict[str, int]:
        return {name: int(getattr(self, name)) for name in catalog.STAT_NAMES}

    @classmethod
    def from_dict(cls, data: dict) -> "PetStats":
        return cls(**{name: int(data[name]) for name in catalog.STAT_NAMES})


@dataclass(frozen=True)
class Expense:
    category: str
    description: str
    amount: int
    timestamp: datetime
    id: str = field(default_factory=new_id)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "category": self.category,
            "description": self.description,
            "amount": int(self.amount),
            "timestamp": dt_to_str(self.timestamp),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Expense":
        category = str(data["category"])
        if category not in catalog.EXPENSE_CATEGORIES:
            raise ValueError(f"unknown expense category: {category}")
        return cls(
            id=str(data["id"]),
            category=category,
            description=str(data.get("description", "")),
            amount=int(data["amount"]),
            timestamp=dt_required(data["timestamp"]),
        )


@dataclass(frozen=True)
class VetRecord:
    service_type: str
    service_name: str
    cost: int
    health_boost: int
    timestamp: datetime
    id: str = field(default_factory=new_id)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "service_type": self.service_type,
            "service_name": self.service_name,
            "cost": int(self.cost),
            "health_boost": int(self.health_boost),
            "timestamp": dt_to_str(self.timestamp),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "VetRecord":
        return cls(
            id=str(data["id"]),
            service_type=str(data["service_type"]),
            service_name=str(data.get("service_name", "")),
            cost=int(data["cost"]),
            health_boost=int(data["health_boost"]),
            timestamp=dt_required(data["timestamp"]),
        )


@dataclass(frozen=True)
class Badge:
    id: str
    name: str
    description: str
    icon: str
    requirement: str
    earned_at: datetime | None = None

    @property
    def earned(self) -> bool:
        return self.earned_at is not None

    @classmethod
    def from_catalog(cls, badge_id: str, earned_at: datetime | None = None) -> "Badge":
        info = catalog.BADGES[badge_id]
        return cls(
            id=info.id,
            name=info.name,
            description=info.description,
            icon=info.icon,
            requirement=info.requirement,
            earned_at=earned_at,
        )

    def to_dict(self) -> dict[str, Any]:
        # Static fields come back from the catalog on load.
        return {"id": self.id, "earned_at": dt_to_str(self.earned_at)}


@dataclass
class Pet:
    name: str = ""
    species: str = "veiled"
    stats: PetStats = field(default_factory=PetStats)
    mood: str = catalog.MOOD_HAPPY
    color: str = ""
    age: int = 0
    evolution_stage: int = 1
    tricks: list[str] = field(default_factory=list)
    current_reaction: str | None = None
    vet_history: list[VetRecord] = field(default_factory=list)
    last_vet_visit: datetime | None = None
    created_at: datetime = field(default_factory=utc_now)
    temperature: int = catalog.TEMP_DEFAULT

    def __post_init__(self) -> None:
        self.refresh_derived()

    def refresh_derived(self) -> None:
        self.mood = classify_mood(self.stats)
        self.color = derive_color(self.mood, self.species)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "species": self.species,
            "stats": self.stats.to_dict(),
            "mood": self.mood,
            "color": self.color,
            "age": int(self.age),
            "evolution_stage": int(self.evolution_stage),
            "tricks": list(self.tricks),
            "current_reaction": self.current_reaction,
            "vet_history": [record.to_dict() for record in self.vet_history],
            "last_vet_visit": dt_to_str(self.last_vet_visit),
            "created_at": dt_to_str(self.created_at),
            "temperature": int(self.temperature),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Pet":
        species = str(data.get("species", "veiled"))
        if species not in catalog.SPECIES:
            raise ValueError(f"unknown species: {species}")
        tricks: list[str] = []
        for trick in data.get("tricks", []):
            if str(trick) not in tricks:
                tricks.append(str(trick))
        reaction = data.get("current_reaction")
        if reaction not in catalog.REACTIONS:
            reaction = None
        return cls(
            name=str(data.get("name", "")),
            species=species,
            stats=PetStats.from_dict(data["stats"]),
            age=max(0, int(data.get("age", 0))),
            evolution_stage=min(3, max(1, int(data.get("evolution_stage", 1)))),
            tricks=tricks,
            current_reaction=reaction,
            vet_history=[VetRecord.from_dict(r) for r in data.get("vet_history", [])][: catalog.VET_HISTORY_CAP],
            last_vet_visit=dt_from_str(data.get("last_vet_visit")),
            created_at=dt_required(data["created_at"]),
            temperature=int(data.get("temperature", catalog.TEMP_DEFAULT)),
        )


@dataclass
class Finances:
    balance: int = catalog.STARTING_BALANCE
    total_earned: int = catalog.STARTING_BALANCE
    total_spent: int = 0
    expenses: list[Expense] = field(default_factory=list)
    savings_goal: int = catalog.SAVINGS_GOAL

    @property
    def savings_progress(self) -> int:
        if self.savings_goal <= 0:
            return 100
        return min(100, int(self.balance * 100 / self.savings_goal))

    def to_dict(self) -> dict[str, Any]:
        return {
            "balance": int(self.balance),
            "total_earned": int(self.total_earned),
            "total_spent": int(self.total_spent),
            "expenses": [expense.to_dict() for expense in self.expenses],
            "savings_goal": int(self.savings_goal),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Finances":
        return cls(
            balance=max(0, int(data["balance"])),
            total_earned=max(0, int(data.get("total_earned", 0))),
            total_spent=max(0, int(data.get("total_spent", 0))),
            expenses=[Expense.from_dict(e) for e in data.get("expenses", [])][: catalog.EXPENSE_LOG_CAP],
            savings_goal=max(0, int(data.get("savings_goal", catalog.SAVINGS_GOAL))),
        )


@dataclass
class GameState:
    pet: Pet = field(default_factory=Pet)
    finances: Finances = field(default_factory=Finances)
    badges: list[Badge] = field(default_factory=list)
    completed_chores: list[str] = field(default_factory=list)
    chore_last_completed: dict[str, datetime] = field(default_factory=dict)
    care_counts: dict[str, int] = field(default_factory=dict)
    streak_seconds: dict[str, int] = field(default_factory=dict)
    total_play_minutes: float = 0.0
    is_first_time: bool = True
    last_updated: datetime = field(default_factory=utc_now)

    def has_badge(self, badge_id: str) -> bool:
        return any(badge.id == badge_id for badge in self.badges)

    def to_dict(self) -> dict[str, Any]:
        return {
            "pet": self.pet.to_dict(),
            "finances": self.finances.to_dict(),
            "badges": [badge.to_dict() for badge in self.badges],
            "completed_chores": list(self.completed_chores),
            "chore_last_completed": {k: dt_to_str(v) for k, v in self.chore_last_completed.items()},
            "care_counts": {k: int(v) for k, v in self.care_counts.items()},
            "streak_seconds": {k: int(v) for k, v in self.streak_seconds.items()},
            "total_play_minutes": float(self.total_play_minutes),
            "is_first_time": bool(self.is_first_time),
            "last_updated": dt_to_str(self.last_updated),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "GameState":
        if not isinstance(data, dict):
            raise TypeError("game state payload must be an object")

        badges: list[Badge] = []
        seen: set[str] = set()
        for raw in data.get("badges", []):
            badge_id = str(raw["id"])
            if badge_id not in catalog.BADGES or badge_id in seen:
                continue
            seen.add(badge_id)
            badges.append(Badge.from_catalog(badge_id, dt_required(raw.get("earned_at"))))

        return cls(
            pet=Pet.from_dict(data["pet"]),
            finances=Finances.from_dict(data["finances"]),
            badges=badges,
            completed_chores=[str(c) for c in data.get("completed_chores", [])],
            chore_last_completed={
                str(k): dt_required(v) for k, v in dict(data.get("chore_last_completed", {})).items()
            },
            care_counts={str(k): max(0, int(v)) for k, v in dict(data.get("care_counts", {})).items()},
            streak_seconds={str(k): max(0, int(v)) for k, v in dict(data.get("streak_seconds", {})).items()},
            total_play_minutes=max(0.0, float(data.get("total_play_minutes", 0.0))),
            is_first_time=bool(data.get("is_first_time", True)),
            last_updated=dt_required(data["last_updated"]),
        )


def new_game_state(now: datetime | None = None) -> GameState:
    stamp = now or utc_now()
    return GameState(pet=Pet(created_at=stamp), last_updated=stamp)


def new_pet(name: str, species: str, now: datetime) -> Pet:
    return Pet(name=name, species=species, stats=PetStats(), created_at=now)
