from __future__ import annotations

import copy
import logging
from collections.abc import Callable
from datetime import datetime
from typing import TYPE_CHECKING

from chameleon_app import logging_setup
from chameleon_app.config import ChameleonConfig
from chameleon_app.core import catalog
from chameleon_app.core.errors import GameRuleError
from chameleon_app.core.event_bus import EventBus
from chameleon_app.core.events import (
    action_event,
    badge_event,
    evolution_event,
    reset_event,
    rule_failed_event,
    tick_event,
)
from chameleon_app.core.rules import apply_decay
from chameleon_app.core.state import GameState, new_game_state
from chameleon_app.persistence.storage_json import JsonStorage
from chameleon_app.services import actions
from chameleon_app.services.achievements import evaluate_badges
from chameleon_app.services.growth import GrowthTracker
from chameleon_app.services.ledger import EconomyLedger, complete_chore
from chameleon_app.services.scheduler import Scheduler, TimerHandle

if TYPE_CHECKING:
    from chameleon_app.services.scheduler_qt import QtScheduler

LOGGER = logging.getLogger(__name__)

Mutation = Callable[[GameState, datetime], "str | None"]


class GameController:
    """Owns the single GameState. Intents commit on a deep-copied draft."""

    def __init__(
        self,
        config: ChameleonConfig,
        scheduler: Scheduler,
        storage: JsonStorage | None = None,
        bus: EventBus | None = None,
    ) -> None:
        self.config = config
        self.scheduler = scheduler
        self.storage = storage or JsonStorage(config.state_path)
        self.bus = bus or EventBus()
        self.growth = GrowthTracker(minutes_per_day=config.minutes_per_day)

        self.state = self.storage.load()
        # Reactions are transient and never survive a restart.
        self.state.pet.current_reaction = None

        self.last_message = ""
        self._timers: list[TimerHandle] = []
        self._reaction_timer: TimerHandle | None = None

    # ------------------------------------------------------------------
    # timers

    @property
    def running(self) -> bool:
        return bool(self._timers)

    def start(self) -> None:
        if self._timers:
            return
        self._timers = [
            self.scheduler.schedule_every(self.config.decay_seconds, self.on_decay_tick),
            self.scheduler.schedule_every(self.config.playtime_seconds, self.on_playtime_tick),
            self.scheduler.schedule_every(self.config.growth_check_seconds, self.on_growth_check),
        ]
        LOGGER.debug("timers started count=%s", len(self._timers))

    def stop(self) -> None:
        for timer in self._timers:
            timer.cancel()
        self._timers = []
        self._cancel_reaction_timer()

    def on_decay_tick(self) -> None:
        if self.state.is_first_time:
            return
        tick_seconds = self.config.decay_seconds

        def _decay(draft: GameState, now: datetime) -> None:
            apply_decay(draft, tick_seconds, now)

        if self._commit("decay", _decay):
            self.bus.emit(tick_event(self.state.pet.stats.to_dict(), tick_seconds, now=self.scheduler.now()))

    def on_playtime_tick(self) -> None:
        if self.state.is_first_time:
            return
        seconds = self.config.playtime_seconds

        def _accrue(draft: GameState, now: datetime) -> None:
            self.growth.accrue(draft, seconds)
            draft.last_updated = now

        self._commit("playtime", _accrue)

    def on_growth_check(self) -> None:
        if self.state.is_first_time:
            return
        evolved: list[int] = []

        def _grow(draft: GameState, now: datetime) -> None:
            stage = self.growth.check(draft)
            if stage is not None:
                evolved.append(stage)
                draft.last_updated = now

        self._commit("growth", _grow)
        if evolved:
            stage = evolved[-1]
            self._schedule_reaction_clear()
            self.bus.emit(
                evolution_event(stage, catalog.EVOLUTION_STAGES.get(stage, str(stage)), now=self.scheduler.now())
            )

    # ------------------------------------------------------------------
    # reactions

    def _cancel_reaction_timer(self) -> None:
        if self._reaction_timer is not None:
            self._reaction_timer.cancel()
            self._reaction_timer = None

    def _schedule_reaction_clear(self) -> None:
        self._cancel_reaction_timer()
        self._reaction_timer = self.scheduler.call_later(self.config.reaction_seconds, self._clear_reaction)

    def _clear_reaction(self) -> None:
        self._reaction_timer = None
        if self.state.pet.current_reaction is None:
            return

        def _clear(draft: GameState, _now: datetime) -> None:
            draft.pet.current_reaction = None

        self._commit("reaction_clear", _clear, evaluate=False)

    # ------------------------------------------------------------------
    # commit

    def _persist(self) -> None:
        try:
            self.storage.save(self.state)
        except OSError as exc:
            LOGGER.error("state save failed path=%s error=%s", self.storage.path, exc)

    def _commit(self, intent: str, mutate: Mutation, reacts: bool = False, evaluate: bool = True) -> bool:
        now = self.scheduler.now()
        draft = copy.deepcopy(self.state)
        try:
            message = mutate(draft, now)
        except GameRuleError as exc:
            self.last_message = exc.message
            LOGGER.info("intent refused intent=%s kind=%s reason=%s", intent, exc.kind, exc.message)
            self.bus.emit(rule_failed_event(intent, exc.kind, exc.message, now=now))
            return False

        granted = evaluate_badges(draft, now) if evaluate else []
        self.state = draft
        self._persist()

        if message:
            self.last_message = message
            self.bus.emit(action_event(intent, message, now=now))
        if reacts:
            self._schedule_reaction_clear()
        for badge in granted:
            self.bus.emit(badge_event(badge.id, badge.name, now=now))
        return True

    # ------------------------------------------------------------------
    # intents

    def initialize_pet(self, name: str, species: str = "veiled") -> bool:
        return self._commit(
            "initialize_pet",
            lambda draft, now: actions.initialize_pet(draft, name, species, now),
        )

    def perform_action(self, action_id: str) -> bool:
        return self._commit(
            f"action:{action_id}",
            lambda draft, now: actions.perform_action(draft, action_id, now),
            reacts=True,
        )

    def request_service(self, service_type: str) -> bool:
        return self._commit(
            f"vet:{service_type}",
            lambda draft, now: actions.request_service(draft, service_type, now),
            reacts=True,
        )

    def teach_trick(self, trick_name: str) -> bool:
        return self._commit(
            "teach_trick",
            lambda draft, now: actions.teach_trick(draft, trick_name, now),
            reacts=True,
        )

    def earn_money(self, amount: int, chore_id: str) -> bool:
        def _earn(draft: GameState, now: datetime) -> str:
            credited = EconomyLedger(draft, now).credit(amount, chore_id)
            draft.last_updated = now
            return f"You earned ${credited}!"

        return self._commit("earn_money", _earn)

    def complete_chore(self, chore_id: str) -> bool:
        def _chore(draft: GameState, now: datetime) -> str:
            reward = complete_chore(draft, chore_id, now)
            draft.last_updated = now
            return f"You earned ${reward}!"

        return self._commit(f"chore:{chore_id}", _chore)

    def set_temperature(self, value: int | float) -> bool:
        return self._commit(
            "set_temperature",
            lambda draft, now: actions.set_temperature(draft, value, now),
        )

    def reset(self) -> None:
        was_running = self.running
        self.stop()
        now = self.scheduler.now()
        self.state = new_game_state(now)
        self._persist()
        self.last_message = "Your game has been reset. Start fresh!"
        LOGGER.info("game reset")
        self.bus.emit(reset_event(now=now))
        if was_running:
            self.start()


def create_default_controller(config: ChameleonConfig | None = None) -> tuple[GameController, QtScheduler]:
    from chameleon_app.services.scheduler_qt import QtScheduler

    cfg = config or ChameleonConfig.from_env()
    logging_setup.setup_logging(cfg.log_dir, level=cfg.log_level, console=cfg.debug)
    scheduler = QtScheduler()
    return GameController(config=cfg, scheduler=scheduler), scheduler


def run() -> int:
    controller, scheduler = create_default_controller()
    controller.start()
    LOGGER.info("chameleon engine online data_dir=%s", controller.config.data_dir)
    try:
        return scheduler.run()
    finally:
        controller.stop()
