from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4


def utc_now_iso() -> str:
    return datetime.now(tz=timezone.utc).isoformat()


@dataclass(frozen=True)
class GameEvent:
    event_type: str
    timestamp: str = field(default_factory=utc_now_iso)
    event_id: str = field(default_factory=lambda: uuid4().hex)
    title: str = ""
    message: str = ""
    payload: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def _stamp(now: datetime | None) -> str:
    return (now or datetime.now(tz=timezone.utc)).isoformat()


def action_event(intent: str, message: str, now: datetime | None = None, **payload: Any) -> GameEvent:
    return GameEvent(
        event_type="action_done",
        timestamp=_stamp(now),
        title="Action Complete",
        message=message,
        payload={"intent": intent, **payload},
    )


def rule_failed_event(intent: str, kind: str, message: str, now: datetime | None = None) -> GameEvent:
    return GameEvent(
        event_type="rule_failed",
        timestamp=_stamp(now),
        title=kind.replace("_", " ").title(),
        message=message,
        payload={"intent": intent, "kind": kind},
    )


def badge_event(badge_id: str, badge_name: str, now: datetime | None = None) -> GameEvent:
    return GameEvent(
        event_type="badge_earned",
        timestamp=_stamp(now),
        title="Badge Earned!",
        message=f'You earned the "{badge_name}" badge!',
        payload={"badge_id": badge_id},
    )


def evolution_event(stage: int, stage_name: str, now: datetime | None = None) -> GameEvent:
    return GameEvent(
        event_type="evolved",
        timestamp=_stamp(now),
        title="Evolution!",
        message=f"Your chameleon is now a {stage_name}!",
        payload={"stage": int(stage)},
    )


def tick_event(stats: dict[str, Any], tick_seconds: int, now: datetime | None = None) -> GameEvent:
    return GameEvent(
        event_type="decay_tick",
        timestamp=_stamp(now),
        payload={"stats": stats, "tick_seconds": int(tick_seconds)},
    )


def reset_event(now: datetime | None = None) -> GameEvent:
    return GameEvent(
        event_type="game_reset",
        timestamp=_stamp(now),
        title="Game Reset",
        message="Your game has been reset. Start fresh!",
    )
